"""Default mood options offered to the user."""

from __future__ import annotations

from dataclasses import dataclass

CUSTOM_MOOD_NAME = "Custom Mood"


@dataclass(frozen=True)
class MoodOption:
    symbol: str
    name: str
    score: int


DEFAULT_MOOD_OPTIONS: tuple[MoodOption, ...] = (
    MoodOption("😊", "Happy", 5),
    MoodOption("😄", "Excited", 5),
    MoodOption("😐", "Neutral", 3),
    MoodOption("😠", "Angry", 1),
    MoodOption("😢", "Sad", 1),
    MoodOption("😴", "Tired", 2),
)

_NAMES_BY_SYMBOL = {option.symbol: option.name for option in DEFAULT_MOOD_OPTIONS}


def mood_name_for(symbol: str) -> str:
    """Display name for a mood symbol; custom symbols map to ``Custom Mood``."""
    return _NAMES_BY_SYMBOL.get(symbol, CUSTOM_MOOD_NAME)
