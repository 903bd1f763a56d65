"""Summary statistics for a window of mood entries."""

import statistics
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, Optional

from mindspot.core.analytics import MoodAnalyticsEngine
from mindspot.core.models import MoodEntry, MoodLevel, describe_mood_level


@dataclass
class MoodStatistics:
    total_entries: int = 0
    average_mood: float = 0.0
    most_frequent_level: Optional[int] = None
    mood_distribution: Dict[int, int] = field(default_factory=dict)
    streak: int = 0

    @property
    def most_frequent_mood(self) -> Optional[MoodLevel]:
        if self.most_frequent_level is None:
            return None
        return describe_mood_level(self.most_frequent_level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_entries": self.total_entries,
            "average_mood": self.average_mood,
            "most_frequent_level": self.most_frequent_level,
            "mood_distribution": dict(self.mood_distribution),
            "streak": self.streak,
        }


def calculate_mood_statistics(entries: Iterable[MoodEntry],
                              tz: Optional[tzinfo] = None,
                              now: Optional[datetime] = None) -> MoodStatistics:
    """
    Counts, average, level distribution and current streak.

    Ties for the most frequent level go to the level seen first.
    """
    entries = list(entries)
    if not entries:
        return MoodStatistics()

    distribution = Counter(e.mood_level for e in entries)
    most_frequent = max(distribution, key=distribution.get)

    engine = MoodAnalyticsEngine(tz=tz)
    return MoodStatistics(
        total_entries=len(entries),
        average_mood=statistics.fmean(e.mood_level for e in entries),
        most_frequent_level=most_frequent,
        mood_distribution=dict(distribution),
        streak=engine.calculate_current_streak(entries, now),
    )
