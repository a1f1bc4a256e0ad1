"""Mood insight engine.

Turns a snapshot of mood records into three independent, human-readable
insights: the weekly trend, the day-of-week pattern and the note keyword
theme. Pure functions only: no I/O, no state, and never an exception for small
or empty inputs.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from statistics import mean
from typing import Protocol

from moodscape.core.dates import DAY_NAMES, day_of_week_index
from moodscape.core.text import tokenize
from moodscape.schemas.insights import MoodInsights

TREND_MIN_RECORDS = 7
WEEKDAY_MIN_RECORDS = 14
TREND_DEADZONE = 0.5

POSITIVE_WORDS = frozenset({"happy", "good", "great", "love", "joy", "excited", "wonderful", "amazing", "fantastic"})
NEGATIVE_WORDS = frozenset({"sad", "bad", "terrible", "hate", "angry", "frustrated", "worried", "stressed", "anxious"})
WORK_WORDS = frozenset({"work", "job", "office", "boss", "colleague", "meeting", "deadline", "project"})
FAMILY_WORDS = frozenset({"family", "mom", "dad", "parent", "child", "kid", "spouse", "partner", "friend"})


class ScoredNote(Protocol):
    day_key: int
    score: int
    note: str


def generate_insights(records: Iterable[ScoredNote]) -> MoodInsights:
    snapshot = list(records)
    return MoodInsights(
        trend=analyze_trend(snapshot),
        day_of_week=analyze_day_of_week(snapshot),
        keyword=analyze_keywords(snapshot),
    )


def analyze_trend(records: Sequence[ScoredNote]) -> str:
    """Compare the mean score of the latest 7 records with the 7 before them."""
    if len(records) < TREND_MIN_RECORDS:
        return "Not enough data yet. Log more moods to see trends!"

    newest_first = sorted(records, key=lambda r: r.day_key, reverse=True)
    recent_week = newest_first[:7]
    prior_week = newest_first[7:14]

    if not prior_week:
        return "Keep logging to see your mood trends over time!"

    recent_avg = mean(r.score for r in recent_week)
    prior_avg = mean(r.score for r in prior_week)

    if recent_avg > prior_avg + TREND_DEADZONE:
        return "Your mood has improved this week! 🎉"
    if recent_avg < prior_avg - TREND_DEADZONE:
        return "Your mood has declined slightly this week. Take care! 💙"
    return "Your mood has been relatively stable this week."


def analyze_day_of_week(records: Sequence[ScoredNote]) -> str:
    """Name the days of the week with the highest and lowest average score."""
    if len(records) < WEEKDAY_MIN_RECORDS:
        return "Log more moods to discover your weekly patterns!"

    buckets: list[list[int]] = [[] for _ in DAY_NAMES]
    for record in records:
        buckets[day_of_week_index(record.day_key)].append(record.score)

    # Sunday..Saturday order; strict comparisons keep the earliest day on ties
    averages = [(day, mean(scores)) for day, scores in enumerate(buckets) if scores]
    if not averages:
        return "Not enough data to analyze day patterns yet."

    happiest, saddest = averages[0], averages[0]
    for day_avg in averages[1:]:
        if day_avg[1] > happiest[1]:
            happiest = day_avg
        if day_avg[1] < saddest[1]:
            saddest = day_avg

    happiest_day, saddest_day = happiest[0], saddest[0]
    if happiest_day != saddest_day:
        return (
            f"You're happiest on {DAY_NAMES[happiest_day]} "
            f"and tend to feel lower on {DAY_NAMES[saddest_day]}."
        )
    if happiest_day is not None:
        return f"You're consistently happiest on {DAY_NAMES[happiest_day]}."
    return "Your mood varies throughout the week without a clear pattern."


def analyze_keywords(records: Sequence[ScoredNote]) -> str:
    """Pick a theme from word counts in the notes. First matching rule wins."""
    noted = [r for r in records if r.note.strip()]
    if not noted:
        return "Add notes to your mood entries to discover keyword insights!"

    words = tokenize(" ".join(r.note for r in noted))

    positive_count = sum(1 for w in words if w in POSITIVE_WORDS)
    negative_count = sum(1 for w in words if w in NEGATIVE_WORDS)
    work_count = sum(1 for w in words if w in WORK_WORDS)
    family_count = sum(1 for w in words if w in FAMILY_WORDS)

    # Equal positive and negative counts fall through to the topic rules
    if positive_count > negative_count and positive_count > 0:
        return "You use more positive language in your notes. Keep focusing on what makes you happy! 😊"
    if negative_count > positive_count and negative_count > 0:
        return "You've mentioned challenges in your notes. Remember, it's okay to have difficult days. 💪"
    if work_count > 0 and family_count > 0:
        return (
            f"Your notes mention both work ({work_count} times) and family ({family_count} times). "
            "Finding balance is key!"
        )
    if work_count > 0:
        return f"Work appears frequently in your notes ({work_count} times). Consider stress management techniques."
    if family_count > 0:
        return f"Family is important to you, mentioned {family_count} times in your notes."
    return "Your notes contain diverse topics. Keep journaling to discover more patterns!"
