"""Summary dashboard image renderer."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Union

from PIL import Image, ImageDraw, ImageFont

from lazytrack.store.models import GOAL_COUNT
from lazytrack.tracking.models import PeriodReport, PeriodSummary
from lazytrack.tracking.summary import PERIOD_DAILY

logger = logging.getLogger(__name__)

FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Helvetica.ttc",  # macOS
]


class DashboardRenderer:
    """Renders a habit summary report to a monochrome PNG."""

    def __init__(self, width: int = 800, row_height: int = 70):
        """
        Initialize renderer.

        Args:
            width: Image width in pixels
            row_height: Vertical space per habit row
        """
        self.width = width
        self.row_height = row_height
        self.fonts = self._load_fonts()

    def _load_fonts(self) -> dict:
        """Load fonts for rendering."""
        fonts = {}

        try:
            for path in FONT_PATHS:
                if Path(path).exists():
                    fonts["header"] = ImageFont.truetype(path, 24)
                    fonts["title"] = ImageFont.truetype(path, 20)
                    fonts["normal"] = ImageFont.truetype(path, 16)
                    logger.info(f"Loaded fonts from {path}")
                    break
        except OSError as e:
            logger.warning(f"Could not load TrueType fonts: {e}, using default")

        if not fonts:
            default_font = ImageFont.load_default()
            fonts["header"] = default_font
            fonts["title"] = default_font
            fonts["normal"] = default_font

        return fonts

    def render(self, report: PeriodReport, output_path: Union[str, Path]) -> Path:
        """
        Render the report.

        Args:
            report: Daily or weekly report
            output_path: Where to write the PNG

        Returns:
            Path of the written image
        """
        logger.info(f"Rendering {report.period} dashboard with {len(report.habits)} habits")

        height = 70 + max(len(report.habits), 1) * self.row_height + 50
        image = Image.new("RGB", (self.width, height), "white")
        draw = ImageDraw.Draw(image)

        self._draw_header(draw, report)
        y = 70
        for summary in report.habits:
            self._draw_habit_row(draw, summary, y)
            y += self.row_height
        self._draw_footer(draw, report, height)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.convert("1").save(output_path, "PNG")
        logger.info(f"Saved dashboard to {output_path}")

        return output_path

    def _draw_header(self, draw: ImageDraw.ImageDraw, report: PeriodReport):
        """Draw header with the window dates."""
        if report.period == PERIOD_DAILY:
            text = f"Today: {report.start.strftime('%a %b %d, %Y')}"
        else:
            last_day = report.end - timedelta(days=1)
            text = f"Week: {report.start.strftime('%b %d')} - {last_day.strftime('%b %d, %Y')}"
        draw.text((20, 15), text, fill="black", font=self.fonts["header"])

        draw.line([20, 50, self.width - 20, 50], fill="black", width=2)

    def _draw_habit_row(self, draw: ImageDraw.ImageDraw, summary: PeriodSummary, y: int):
        """Draw a single habit with progress bar and totals."""
        x_margin = 30
        draw.text((x_margin, y), summary.habit_name, fill="black", font=self.fonts["title"])

        bar_y = y + 30
        bar_width = 400
        bar_height = 20
        self._draw_progress_bar(draw, x_margin, bar_y, bar_width, bar_height, summary.goal_progress)

        if summary.goal_type == GOAL_COUNT:
            value_text = f"{summary.total_count}x"
        else:
            value_text = f"{summary.total_time:.1f}h"
        if summary.goal_progress > 0:
            value_text += f"  {summary.goal_progress:.0f}%"
        if summary.streak > 0:
            value_text += f"  {summary.streak}d"

        draw.text((x_margin + bar_width + 20, bar_y), value_text, fill="black", font=self.fonts["normal"])

    def _draw_progress_bar(
        self,
        draw: ImageDraw.ImageDraw,
        x: int,
        y: int,
        width: int,
        height: int,
        progress: float,
    ):
        """Draw an outlined bar filled up to progress percent (clamped at 100)."""
        filled_width = int(width * max(0.0, min(progress, 100.0)) / 100)

        if filled_width > 0:
            draw.rectangle([x, y, x + filled_width, y + height], fill="black", outline="black")

        draw.rectangle([x, y, x + width, y + height], outline="black", width=2)

    def _draw_footer(self, draw: ImageDraw.ImageDraw, report: PeriodReport, height: int):
        """Draw footer with totals and render time."""
        y = height - 35
        draw.line([20, y - 10, self.width - 20, y - 10], fill="black", width=2)

        summary_text = f"Total: {report.total_time:.1f} hours"
        if report.total_count:
            summary_text += f", {report.total_count} reps"
        draw.text((20, y), summary_text, fill="black", font=self.fonts["normal"])

        time_text = f"Rendered: {datetime.now().strftime('%H:%M')}"
        bbox = draw.textbbox((0, 0), time_text, font=self.fonts["normal"])
        text_width = bbox[2] - bbox[0]
        draw.text((self.width - text_width - 20, y), time_text, fill="black", font=self.fonts["normal"])


def demo_render():
    """Demo: Render this week's dashboard from local data."""
    from lazytrack.config import settings
    from lazytrack.store.database import HabitStore
    from lazytrack.tracking.summary import get_week_window, summarize_all

    store = HabitStore(settings.data_dir)
    start, end = get_week_window()
    habits = store.list_habits()
    logs_by_habit = {h.name: store.logs_for_habit(h.name, start, end) for h in habits}

    report = summarize_all(habits, logs_by_habit)
    file_path = DashboardRenderer().render(report, store.data_dir / "dashboard.png")

    print(f"\nImage saved to: {file_path}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    demo_render()
