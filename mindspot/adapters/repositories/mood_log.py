"""
Read-only mood log provider.

This module provides:
- Loading a mood log export (JSON) into immutable entries
- Full chronological history and date-range / tag / recent queries
"""

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Sequence

from mindspot.core.models import MoodEntry

logger = logging.getLogger(__name__)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class MoodLogLoadError(Exception):
    """Raised when a mood log export cannot be read or parsed."""
    pass


# ============================================================================
# PROVIDER
# ============================================================================

class MoodLog:
    """Snapshot of mood entries with the queries the app needs."""

    def __init__(self, entries: Iterable[MoodEntry] = ()):
        self._entries: List[MoodEntry] = sorted(entries, key=lambda e: e.timestamp)

    def __len__(self) -> int:
        return len(self._entries)

    def all_entries(self) -> List[MoodEntry]:
        """Full history, oldest first."""
        return list(self._entries)

    def recent(self, limit: int) -> List[MoodEntry]:
        """Latest `limit` entries, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._entries[-limit:]))

    def by_date_range(self, start_ms: int, end_ms: int) -> List[MoodEntry]:
        """Entries with start_ms <= timestamp <= end_ms, newest first."""
        return [e for e in reversed(self._entries) if start_ms <= e.timestamp <= end_ms]

    def by_tag(self, tag: str) -> List[MoodEntry]:
        """Entries with exactly this tag, newest first."""
        return [e for e in reversed(self._entries) if e.tag == tag]


# ============================================================================
# LOADING
# ============================================================================

def _parse_rows(rows: Sequence[Dict[str, Any]]) -> List[MoodEntry]:
    entries: List[MoodEntry] = []
    for index, row in enumerate(rows):
        try:
            entries.append(MoodEntry.from_dict(row))
        except (KeyError, TypeError, ValueError) as e:
            raise MoodLogLoadError(f"Invalid entry at index {index}: {e}") from e
    return entries


def load_mood_log(path: str) -> MoodLog:
    """
    Loads a JSON export: either a list of entries or {"entries": [...]}.

    Raises:
        MoodLogLoadError: If the file is missing, unreadable or malformed.
    """
    if not os.path.exists(path):
        raise MoodLogLoadError(f"Mood log not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read mood log {path}: {e}")
        raise MoodLogLoadError(str(e)) from e

    rows = data.get("entries") if isinstance(data, dict) else data
    if not isinstance(rows, list):
        raise MoodLogLoadError("Mood log must be a list of entries or an object with 'entries'")

    log = MoodLog(_parse_rows(rows))
    logger.info(f"[OK] Loaded {len(log)} mood entries from {path}")
    return log
