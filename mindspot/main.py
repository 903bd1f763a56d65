"""
MindSpot mood report.

Loads a mood log export and prints what the analytics engine finds:
1. Summary statistics for the full history and the last 30 days
2. Patterns, tag correlations and the short-term trend
3. Insights and recommendations

Supports:
- Text report (default) or JSON output (--json)
- Explicit timezone (--timezone) and frozen "now" (--now) for reproducible runs
- Listing the known context tags (--list-tags)
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from mindspot import config
from mindspot.adapters.preferences import JsonFileStore, PreferencesLoadError, TagCatalog
from mindspot.adapters.repositories.mood_log import MoodLog, MoodLogLoadError, load_mood_log
from mindspot.core.analytics import DAY_MS, MoodAnalyticsEngine, log_analysis
from mindspot.core.models import MoodAnalysisResult
from mindspot.core.summary import MoodStatistics, calculate_mood_statistics
from mindspot.utils.logger import setup_logger

logger = logging.getLogger(__name__)

# Constants
STATISTICS_DAYS_RANGE = 30


# ============================================================================
# ARGUMENT PARSING
# ============================================================================

def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="MindSpot: mood journal analytics report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py --input moods.json
  python run.py --input moods.json --json
  python run.py --input moods.json --timezone Europe/Istanbul --now 2025-03-01T20:00:00
  python run.py --list-tags
        """
    )

    parser.add_argument("--input", help="Path to the mood log JSON export")
    parser.add_argument("--timezone", help="IANA zone for day/hour bucketing (default: MINDSPOT_TIMEZONE or local)")
    parser.add_argument("--now", help="ISO-8601 timestamp to use as the current time")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--list-tags", action="store_true", help="Print default and custom context tags")

    args = parser.parse_args(argv)
    if not args.input and not args.list_tags:
        parser.error("--input is required unless --list-tags is given")
    return args


# ============================================================================
# REPORT
# ============================================================================

def build_report(log: MoodLog, engine: MoodAnalyticsEngine, now: datetime) -> Dict[str, Any]:
    """Runs statistics and analysis over the full history and the recent window."""
    all_entries = log.all_entries()
    now_ms = int(now.timestamp() * 1000)
    recent_entries = log.by_date_range(now_ms - STATISTICS_DAYS_RANGE * DAY_MS, now_ms)

    analysis = engine.analyze(all_entries, now=now)
    log_analysis(analysis, logger)

    return {
        "generated_at": now.isoformat(),
        "statistics": {
            "all_time": calculate_mood_statistics(all_entries, engine.tz, now),
            "last_30_days": calculate_mood_statistics(recent_entries, engine.tz, now),
        },
        "analysis": analysis,
    }


def _format_statistics(title: str, stats: MoodStatistics) -> List[str]:
    lines = [f"[{title}] {stats.total_entries} entries, average {stats.average_mood:.1f}/5, streak {stats.streak}"]
    mood = stats.most_frequent_mood
    if mood:
        lines.append(f"  Most frequent: {mood.emoji} {mood.name}")
    return lines


def _format_analysis(analysis: MoodAnalysisResult) -> List[str]:
    lines = ["", "INSIGHTS:"]
    lines += [f"  - {insight}" for insight in analysis.insights]

    if analysis.patterns:
        lines += ["", "PATTERNS:"]
        for pattern in analysis.patterns:
            lines.append(f"  - {pattern.description} (confidence {pattern.confidence:.1f})")
            if pattern.suggestion:
                lines.append(f"    > {pattern.suggestion}")

    trend = analysis.trends
    lines += ["", f"TREND: {trend.direction.value.upper()} ({trend.change_amount:+.1f}, confidence {trend.confidence:.1f})"]

    if analysis.correlations:
        lines += ["", "TAGS:"]
        for corr in analysis.correlations:
            lines.append(f"  - {corr.tag}: {corr.average_mood:.1f} over {corr.entry_count} entries [{corr.impact.value}]")

    if analysis.recommendations:
        lines += ["", "RECOMMENDATIONS:"]
        lines += [f"  * {rec}" for rec in analysis.recommendations]
    return lines


def format_report(report: Dict[str, Any]) -> str:
    lines = [
        "MOOD REPORT",
        "===========",
        f"Generated: {report['generated_at']}",
    ]
    lines += _format_statistics("ALL TIME", report["statistics"]["all_time"])
    lines += _format_statistics("LAST 30 DAYS", report["statistics"]["last_30_days"])
    lines += _format_analysis(report["analysis"])
    return "\n".join(lines)


def report_to_dict(report: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "generated_at": report["generated_at"],
        "statistics": {k: v.to_dict() for k, v in report["statistics"].items()},
        "analysis": report["analysis"].to_dict(),
    }


# ============================================================================
# MAIN EXECUTION
# ============================================================================

def _resolve_now(raw: Optional[str], engine: MoodAnalyticsEngine) -> datetime:
    if not raw:
        return datetime.now(engine.tz)
    parsed = datetime.fromisoformat(raw.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=engine.tz)
    return parsed


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logger("mindspot")

    if args.list_tags:
        catalog = TagCatalog(JsonFileStore(config.get_preferences_path()))
        try:
            tags = catalog.all_tags()
        except PreferencesLoadError as e:
            logger.error(f"Could not load preferences: {e}")
            return 1
        for tag in tags:
            print(tag)
        if not args.input:
            return 0

    tz = config.get_timezone(args.timezone)
    engine = MoodAnalyticsEngine(tz=tz)

    try:
        now = _resolve_now(args.now, engine)
    except ValueError as e:
        logger.error(f"Invalid --now value: {e}")
        return 1

    logger.info(f"--- MindSpot report starting (tz={tz}, now={now.isoformat()}) ---")

    try:
        log = load_mood_log(args.input)
    except MoodLogLoadError as e:
        logger.error(f"Could not load mood log: {e}")
        return 1

    report = build_report(log, engine, now)

    if args.json:
        print(json.dumps(report_to_dict(report), ensure_ascii=False, indent=2))
    else:
        print(format_report(report))

    logger.info("--- Report complete ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
