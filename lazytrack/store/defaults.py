"""Smart defaults applied when a habit is created from its name."""

from types import MappingProxyType

from .models import GOAL_COUNT, GOAL_DURATION

FALLBACK_EMOJI = "📝"
FALLBACK_DURATION = "30m"
COUNT_DURATION = "1x"

DEFAULT_EMOJIS = MappingProxyType({
    "code": "💻",
    "read": "📖",
    "walk": "🚶",
    "run": "🏃",
    "exercise": "💪",
    "water": "💧",
    "sleep": "😴",
    "meditate": "🧘",
    "write": "✍️",
    "study": "📚",
    "work": "💼",
    "gym": "🏋️",
    "yoga": "🧘‍♀️",
    "cook": "👨‍🍳",
    "clean": "🧹",
    "paint": "🎨",
    "music": "🎵",
    "game": "🎮",
    "social": "👥",
    "family": "👨‍👩‍👧‍👦",
})

DEFAULT_GOALS = MappingProxyType({
    "water": 8,  # glasses
    "medicine": 1,
    "vitamins": 1,
    "pills": 1,
    "steps": 10000,
    "pushups": 20,
    "squats": 50,
    "pullups": 10,
})

COUNT_BASED_HABITS = frozenset(DEFAULT_GOALS)


def habit_defaults(name: str) -> dict:
    """
    Get creation defaults for a habit name.

    Returns:
        Dict with emoji, default_duration, daily_goal and goal_type
    """
    is_count = name in COUNT_BASED_HABITS
    return {
        "emoji": DEFAULT_EMOJIS.get(name, FALLBACK_EMOJI),
        "default_duration": COUNT_DURATION if is_count else FALLBACK_DURATION,
        "daily_goal": DEFAULT_GOALS.get(name, 0),
        "goal_type": GOAL_COUNT if is_count else GOAL_DURATION,
    }
