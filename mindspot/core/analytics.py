"""
Mood analytics engine.

Turns the raw mood log into patterns, tag correlations, a short-term trend,
textual insights and recommendations.

Analyses run:
- Daily cycle (morning vs evening, last 30 days)
- Weekly cycle (best vs worst weekday, last 28 days)
- Tag patterns and the tag correlation table
- Trend (last 7 entries vs the 7 before them)
- Insights, logging streak and recommendations

The engine is pure: it reads the entries it is given plus "now" from an
injectable clock, and builds a fresh result on every call.
"""

import logging
import statistics
from collections import defaultdict
from datetime import datetime, timedelta, timezone, tzinfo, date
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from mindspot.core.models import (
    CorrelationImpact,
    MoodAnalysisResult,
    MoodEntry,
    MoodPattern,
    PatternType,
    TagCorrelation,
    TrendAnalysis,
    TrendDirection,
)

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']


# ============================================================================
# CONFIGURATION - THRESHOLDS
# ============================================================================

class AnalyticsConfig:
    """Centralized windows, sample sizes and thresholds for the engine."""

    # DAILY CYCLE
    DAILY_WINDOW_DAYS: int = 30
    DAILY_MIN_ENTRIES: int = 7
    DAILY_MIN_BUCKET: int = 3
    MORNING_HOURS: range = range(6, 13)    # 06:00 - 12:59
    EVENING_HOURS: range = range(18, 24)   # 18:00 - 23:59
    DAILY_GAP: float = 0.5

    # WEEKLY CYCLE
    WEEKLY_WINDOW_DAYS: int = 28
    WEEKLY_MIN_ENTRIES: int = 14
    WEEKLY_GAP: float = 0.7

    # TAGS
    TAG_MIN_TAGGED: int = 5
    TAG_MIN_ENTRIES: int = 3
    TAG_HAPPY: float = 4.0
    TAG_STRESS: float = 2.5

    # CORRELATION IMPACT BUCKETS
    IMPACT_VERY_POSITIVE: float = 4.0
    IMPACT_POSITIVE: float = 3.5
    IMPACT_VERY_NEGATIVE: float = 2.0
    IMPACT_NEGATIVE: float = 2.5

    # TREND
    TREND_WINDOW: int = 7
    TREND_GAP: float = 0.3

    # INSIGHTS & RECOMMENDATIONS
    INSIGHT_MIN_ENTRIES: int = 7
    RECENT_WINDOW: int = 7
    RECENT_LOW: float = 2.5
    RECENT_HIGH: float = 4.0
    BETTER_TIMES_GAP: float = 0.5
    INACTIVE_DAYS: int = 3


# ============================================================================
# HELPERS
# ============================================================================

def calculate_confidence(sample_size: int) -> float:
    """Step function of sample size: 0.3, 0.5, 0.7 or 0.9."""
    if sample_size >= 20:
        return 0.9
    if sample_size >= 10:
        return 0.7
    if sample_size >= 5:
        return 0.5
    return 0.3


def _mean(entries: Sequence[MoodEntry]) -> float:
    return statistics.fmean(e.mood_level for e in entries)


def _has_tag(entry: MoodEntry) -> bool:
    return bool(entry.tag and entry.tag.strip())


def _group_by_tag(entries: Iterable[MoodEntry]) -> Dict[str, List[MoodEntry]]:
    groups: Dict[str, List[MoodEntry]] = defaultdict(list)
    for entry in entries:
        if _has_tag(entry):
            groups[entry.tag.strip()].append(entry)
    return groups


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# ENGINE
# ============================================================================

class MoodAnalyticsEngine:
    """Stateless analyzer; safe to share between threads."""

    def __init__(self, tz: Optional[tzinfo] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            tz: Zone used for hour-of-day, weekday and calendar-day bucketing.
                Defaults to UTC.
            clock: Zero-argument callable returning the current time.
        """
        self.tz = tz or timezone.utc
        self._clock = clock or _utc_now

    # ------------------------------------------------------------------
    # Time helpers
    # ------------------------------------------------------------------

    def _resolve_now(self, now: Optional[datetime]) -> datetime:
        current = now if now is not None else self._clock()
        if current.tzinfo is None:
            current = current.replace(tzinfo=self.tz)
        return current

    @staticmethod
    def _to_millis(moment: datetime) -> int:
        return int(moment.timestamp() * 1000)

    def _local(self, timestamp_ms: int) -> datetime:
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=self.tz)

    def _local_day(self, timestamp_ms: int) -> date:
        return self._local(timestamp_ms).date()

    def _within_days(self, entries: Sequence[MoodEntry], days: int,
                     now: datetime) -> List[MoodEntry]:
        cutoff = self._to_millis(now) - days * DAY_MS
        return [e for e in entries if e.timestamp >= cutoff]

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def analyze(self, entries: Iterable[MoodEntry],
                now: Optional[datetime] = None) -> MoodAnalysisResult:
        """
        Runs every analysis over the given entries.

        Empty input returns the default result without further work.
        """
        entries = list(entries)
        if not entries:
            logger.debug("No entries to analyze")
            return MoodAnalysisResult()

        now = self._resolve_now(now)

        return MoodAnalysisResult(
            patterns=self.detect_patterns(entries, now),
            insights=self.generate_insights(entries, now),
            correlations=self.analyze_tag_correlations(entries),
            trends=self.analyze_trends(entries),
            recommendations=self.generate_recommendations(entries, now),
        )

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def detect_patterns(self, entries: Sequence[MoodEntry],
                        now: Optional[datetime] = None) -> List[MoodPattern]:
        """Daily, then weekly, then tag-based patterns."""
        now = self._resolve_now(now)
        patterns: List[MoodPattern] = []
        patterns.extend(self._analyze_daily_patterns(entries, now))
        patterns.extend(self._analyze_weekly_patterns(entries, now))
        patterns.extend(self._analyze_tag_patterns(entries))
        return patterns

    def _analyze_daily_patterns(self, entries: Sequence[MoodEntry],
                                now: datetime) -> List[MoodPattern]:
        recent = self._within_days(entries, AnalyticsConfig.DAILY_WINDOW_DAYS, now)
        if len(recent) < AnalyticsConfig.DAILY_MIN_ENTRIES:
            logger.debug(f"Daily cycle skipped: {len(recent)} recent entries")
            return []

        morning = [e for e in recent if self._local(e.timestamp).hour in AnalyticsConfig.MORNING_HOURS]
        evening = [e for e in recent if self._local(e.timestamp).hour in AnalyticsConfig.EVENING_HOURS]

        if len(morning) < AnalyticsConfig.DAILY_MIN_BUCKET or len(evening) < AnalyticsConfig.DAILY_MIN_BUCKET:
            logger.debug(f"Daily cycle skipped: morning={len(morning)}, evening={len(evening)}")
            return []

        morning_avg = _mean(morning)
        evening_avg = _mean(evening)
        confidence = calculate_confidence(len(morning) + len(evening))

        if morning_avg > evening_avg + AnalyticsConfig.DAILY_GAP:
            return [MoodPattern(
                type=PatternType.DAILY_CYCLE,
                description="You usually feel better in the mornings",
                confidence=confidence,
                actionable=True,
                suggestion="Try to make important decisions in the morning",
            )]
        if evening_avg > morning_avg + AnalyticsConfig.DAILY_GAP:
            return [MoodPattern(
                type=PatternType.DAILY_CYCLE,
                description="You feel more energetic and positive in the evenings",
                confidence=confidence,
                actionable=True,
                suggestion="Plan your creative activities for the evening",
            )]
        return []

    def _analyze_weekly_patterns(self, entries: Sequence[MoodEntry],
                                 now: datetime) -> List[MoodPattern]:
        monthly = self._within_days(entries, AnalyticsConfig.WEEKLY_WINDOW_DAYS, now)
        if len(monthly) < AnalyticsConfig.WEEKLY_MIN_ENTRIES:
            logger.debug(f"Weekly cycle skipped: {len(monthly)} entries in window")
            return []

        by_weekday: Dict[int, List[MoodEntry]] = defaultdict(list)
        for entry in monthly:
            by_weekday[self._local(entry.timestamp).weekday()].append(entry)

        day_averages = {day: _mean(group) for day, group in by_weekday.items()}
        best_day = max(day_averages, key=day_averages.get)
        worst_day = min(day_averages, key=day_averages.get)

        if day_averages[best_day] - day_averages[worst_day] <= AnalyticsConfig.WEEKLY_GAP:
            return []

        best_name = DAY_NAMES[best_day]
        worst_name = DAY_NAMES[worst_day]
        return [MoodPattern(
            type=PatternType.WEEKLY_CYCLE,
            description=f"{best_name}s are your best days, {worst_name}s are the hardest",
            confidence=calculate_confidence(len(monthly)),
            actionable=True,
            suggestion=f"Plan self-care activities for {worst_name}s",
        )]

    def _analyze_tag_patterns(self, entries: Sequence[MoodEntry]) -> List[MoodPattern]:
        tagged = [e for e in entries if _has_tag(e)]
        if len(tagged) < AnalyticsConfig.TAG_MIN_TAGGED:
            logger.debug(f"Tag patterns skipped: {len(tagged)} tagged entries")
            return []

        patterns: List[MoodPattern] = []
        for tag, group in _group_by_tag(tagged).items():
            if len(group) < AnalyticsConfig.TAG_MIN_ENTRIES:
                continue

            avg = _mean(group)
            if avg >= AnalyticsConfig.TAG_HAPPY:
                patterns.append(MoodPattern(
                    type=PatternType.TAG_CORRELATION,
                    description=f"{tag} situations make you happy",
                    confidence=calculate_confidence(len(group)),
                    actionable=True,
                    suggestion=f"Spend more time on {tag} activities",
                ))
            elif avg <= AnalyticsConfig.TAG_STRESS:
                patterns.append(MoodPattern(
                    type=PatternType.TAG_CORRELATION,
                    description=f"{tag} situations affect your mood negatively",
                    confidence=calculate_confidence(len(group)),
                    actionable=True,
                    suggestion=f"Try ways to reduce stress around {tag}",
                ))
        return patterns

    # ------------------------------------------------------------------
    # Correlations & trends
    # ------------------------------------------------------------------

    @staticmethod
    def classify_impact(average_mood: float) -> CorrelationImpact:
        if average_mood >= AnalyticsConfig.IMPACT_VERY_POSITIVE:
            return CorrelationImpact.VERY_POSITIVE
        if average_mood >= AnalyticsConfig.IMPACT_POSITIVE:
            return CorrelationImpact.POSITIVE
        if average_mood <= AnalyticsConfig.IMPACT_VERY_NEGATIVE:
            return CorrelationImpact.VERY_NEGATIVE
        if average_mood <= AnalyticsConfig.IMPACT_NEGATIVE:
            return CorrelationImpact.NEGATIVE
        return CorrelationImpact.NEUTRAL

    def analyze_tag_correlations(self, entries: Sequence[MoodEntry]) -> List[TagCorrelation]:
        """Tags with at least 3 entries, sorted by average mood (highest first)."""
        correlations: List[TagCorrelation] = []
        for tag, group in _group_by_tag(entries).items():
            if len(group) < AnalyticsConfig.TAG_MIN_ENTRIES:
                continue
            avg = _mean(group)
            correlations.append(TagCorrelation(
                tag=tag,
                average_mood=avg,
                entry_count=len(group),
                impact=self.classify_impact(avg),
            ))
        return sorted(correlations, key=lambda c: c.average_mood, reverse=True)

    def analyze_trends(self, entries: Sequence[MoodEntry]) -> TrendAnalysis:
        """Compares the latest 7 entries with the 7 before them."""
        window = AnalyticsConfig.TREND_WINDOW
        if len(entries) < window:
            return TrendAnalysis()

        ordered = sorted(entries, key=lambda e: e.timestamp)
        recent = ordered[-window:]
        previous = ordered[:-window][-window:]
        if not previous:
            return TrendAnalysis()

        change = _mean(recent) - _mean(previous)
        if change > AnalyticsConfig.TREND_GAP:
            direction = TrendDirection.IMPROVING
        elif change < -AnalyticsConfig.TREND_GAP:
            direction = TrendDirection.DECLINING
        else:
            direction = TrendDirection.STABLE

        return TrendAnalysis(
            direction=direction,
            change_amount=change,
            confidence=calculate_confidence(len(recent) + len(previous)),
        )

    # ------------------------------------------------------------------
    # Insights, streak & recommendations
    # ------------------------------------------------------------------

    def generate_insights(self, entries: Sequence[MoodEntry],
                          now: Optional[datetime] = None) -> List[str]:
        if len(entries) < AnalyticsConfig.INSIGHT_MIN_ENTRIES:
            return ["Keep logging your mood to unlock more detailed insights."]

        now = self._resolve_now(now)
        total_days = len({self._local_day(e.timestamp) for e in entries})

        insights = [
            f"Logged {len(entries)} entries across {total_days} days",
            f"Average mood: {_mean(entries):.1f}/5",
        ]

        streak = self.calculate_current_streak(entries, now)
        if streak > 1:
            insights.append(f"You've logged your mood {streak} days in a row! Well done.")
        return insights

    def calculate_current_streak(self, entries: Sequence[MoodEntry],
                                 now: Optional[datetime] = None) -> int:
        """Consecutive local calendar days with an entry, ending today."""
        if not entries:
            return 0

        now = self._resolve_now(now)
        logged_days = {self._local_day(e.timestamp) for e in entries}

        day = now.astimezone(self.tz).date()
        streak = 0
        while day in logged_days:
            streak += 1
            day -= timedelta(days=1)
        return streak

    def generate_recommendations(self, entries: Sequence[MoodEntry],
                                 now: Optional[datetime] = None) -> List[str]:
        """
        Suggestions based on recent vs overall mood and logging frequency.

        "Recent" is the last 7 entries in the order given, so callers should
        pass the log in chronological order.
        """
        if not entries:
            return []

        now = self._resolve_now(now)
        recent_avg = _mean(entries[-AnalyticsConfig.RECENT_WINDOW:])
        overall_avg = _mean(entries)

        recommendations: List[str] = []
        if recent_avg < AnalyticsConfig.RECENT_LOW:
            recommendations.append("You seem to be struggling lately. Be gentle with yourself and reach out for support.")
            recommendations.append("Set small, achievable goals and reward yourself when you reach them.")
        elif recent_avg > AnalyticsConfig.RECENT_HIGH:
            recommendations.append("You're in a great period! Note down the activities that keep this positive energy going.")
            recommendations.append("You can repeat the habits from your good days in the future.")
        elif overall_avg > recent_avg + AnalyticsConfig.BETTER_TIMES_GAP:
            recommendations.append("You usually feel better than this. Remember the things that made you happy before.")

        days_since_last = (self._to_millis(now) - entries[-1].timestamp) // DAY_MS
        if days_since_last >= AnalyticsConfig.INACTIVE_DAYS:
            recommendations.append("Regular logging gives better insights. Turn on daily reminders.")

        return recommendations


def log_analysis(result: MoodAnalysisResult, _logger: logging.Logger) -> None:
    """Helper to log an analysis summary."""
    _logger.info("[ANALYTICS] Analysis complete")
    _logger.info(
        f"[ANALYTICS] {len(result.patterns)} patterns, "
        f"{len(result.correlations)} tag correlations, "
        f"trend {result.trends.direction.value} ({result.trends.change_amount:+.1f})"
    )
    for insight in result.insights:
        _logger.info(f"[ANALYTICS] Insight: {insight}")
