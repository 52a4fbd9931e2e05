"""
Summary statistics over mood records.

All functions expect records newest first (the order ``MoodStore.list_records``
returns) and only read ``mood_type``, ``intensity`` and ``created_at``.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

RECENT_WINDOW = 10
SERIES_DAYS = 7


@dataclass(frozen=True)
class MoodStats:
    """Mean intensity and most frequent mood of a set of records."""
    average: Optional[float]
    dominant_mood: str
    count: int


@dataclass(frozen=True)
class DailyPoint:
    """Mean intensity for one calendar day; average is None when no records."""
    date: str
    average: Optional[float]


def average_intensity(records: Sequence) -> Optional[float]:
    """Mean of the intensities present, rounded to 2 decimals."""
    values = [r.intensity for r in records if r.intensity is not None]
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def dominant_mood(records: Sequence) -> Optional[str]:
    """
    Most frequent mood_type.

    Ties go to the mood seen first while scanning, i.e. the most recent one.
    """
    counts: Dict[str, int] = {}
    for r in records:
        counts[r.mood_type] = counts.get(r.mood_type, 0) + 1
    if not counts:
        return None
    # max() keeps the first maximal key in insertion order
    return max(counts, key=counts.get)


def summarize(records: Sequence) -> Optional[MoodStats]:
    if not records:
        return None
    return MoodStats(
        average=average_intensity(records),
        dominant_mood=dominant_mood(records),
        count=len(records),
    )


def recent_stats(records: Sequence, window: int = RECENT_WINDOW) -> Optional[MoodStats]:
    return summarize(list(records)[:window])


def daily_series(records: Sequence, today: date, days: int = SERIES_DAYS) -> List[DailyPoint]:
    """
    Per-day mean intensity for the ``days`` calendar days ending at ``today``.

    Oldest first. Every day is present; empty days carry ``average=None``.
    """
    buckets: Dict[date, list] = {}
    for r in records:
        buckets.setdefault(r.created_at.date(), []).append(r)

    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        series.append(DailyPoint(
            date=day.isoformat(),
            average=average_intensity(buckets.get(day, [])),
        ))
    return series
