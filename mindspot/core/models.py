"""
Data model for mood journaling analytics.

Entries are immutable records produced by the mood log; the analysis
structures are value types rebuilt on every engine call.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


# ============================================================================
# ENUMS
# ============================================================================

class PatternType(Enum):
    """Kinds of recurring patterns the engine can detect."""
    DAILY_CYCLE = "daily_cycle"
    WEEKLY_CYCLE = "weekly_cycle"
    TAG_CORRELATION = "tag_correlation"
    TREND_CHANGE = "trend_change"


class CorrelationImpact(Enum):
    """Ordered impact buckets for a tag's average mood."""
    VERY_POSITIVE = "very_positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    VERY_NEGATIVE = "very_negative"


class TrendDirection(Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


# ============================================================================
# MOOD LEVEL DISPLAY TABLE
# ============================================================================

@dataclass(frozen=True)
class MoodLevel:
    """Display metadata for a mood level (presentation side only)."""
    level: int
    name: str
    emoji: str


MOOD_LEVELS: Dict[int, MoodLevel] = {
    1: MoodLevel(1, "Very Bad", "😢"),
    2: MoodLevel(2, "Bad", "😔"),
    3: MoodLevel(3, "Normal", "😐"),
    4: MoodLevel(4, "Good", "😊"),
    5: MoodLevel(5, "Great", "😄"),
}


def describe_mood_level(level: int) -> Optional[MoodLevel]:
    """Returns display metadata for a level, or None if out of range."""
    return MOOD_LEVELS.get(level)


# ============================================================================
# ENTRIES
# ============================================================================

@dataclass(frozen=True)
class MoodEntry:
    id: Any
    mood_level: int
    timestamp: int  # milliseconds since epoch
    tag: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MoodEntry':
        """
        Builds an entry from a plain mapping (JSON export row).

        Accepts both snake_case keys and the mobile export names
        ('moodId', 'optionalTag'). Tags are trimmed; blank tags become None.

        Raises:
            KeyError: If the level or timestamp is missing.
            ValueError: If the level or timestamp is not numeric.
        """
        level = data["mood_level"] if "mood_level" in data else data["moodId"]
        raw_tag = data.get("tag", data.get("optionalTag"))

        tag: Optional[str] = None
        if raw_tag is not None:
            tag = str(raw_tag).strip() or None

        return cls(
            id=data.get("id"),
            mood_level=int(level),
            timestamp=int(data["timestamp"]),
            tag=tag,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ============================================================================
# ANALYSIS RESULTS
# ============================================================================

@dataclass
class MoodPattern:
    type: PatternType
    description: str
    confidence: float
    actionable: bool
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["type"] = self.type.value
        return d


@dataclass
class TagCorrelation:
    tag: str
    average_mood: float
    entry_count: int
    impact: CorrelationImpact

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["impact"] = self.impact.value
        return d


@dataclass
class TrendAnalysis:
    direction: TrendDirection = TrendDirection.STABLE
    change_amount: float = 0.0
    confidence: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "change_amount": self.change_amount,
            "confidence": self.confidence,
        }


@dataclass
class MoodAnalysisResult:
    """Aggregate output of one engine run. Lists are never None."""
    patterns: List[MoodPattern] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)
    correlations: List[TagCorrelation] = field(default_factory=list)
    trends: TrendAnalysis = field(default_factory=TrendAnalysis)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patterns": [p.to_dict() for p in self.patterns],
            "insights": list(self.insights),
            "correlations": [c.to_dict() for c in self.correlations],
            "trends": self.trends.to_dict(),
            "recommendations": list(self.recommendations),
        }
