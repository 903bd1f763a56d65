import logging
import pytest
import os
import sys
from unittest.mock import patch
from datetime import timedelta

# Add project root to Python Path so modules can be imported
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mindspot.core.models import MoodEntry
from tests.factories import NOW, to_millis

# ============================================================================
# 1. GLOBAL ENV
# ============================================================================

@pytest.fixture(autouse=True)
def mock_env_vars(tmp_path):
    """Keeps logs and preferences inside the test's temp dir."""
    with patch.dict(os.environ, {
        "MINDSPOT_LOG_DIR": str(tmp_path / "logs"),
        "MINDSPOT_PREFERENCES": str(tmp_path / "preferences.json"),
        "MINDSPOT_TIMEZONE": "UTC",
    }):
        yield

# ============================================================================
# 2. ENTRY FIXTURES
# ============================================================================

@pytest.fixture
def make_entry():
    """Builds an entry `days_ago` days before NOW at the given UTC hour."""
    counter = {"id": 0}

    def _make(level: int, days_ago: int = 0, hour: int = 12, tag=None) -> MoodEntry:
        counter["id"] += 1
        moment = (NOW - timedelta(days=days_ago)).replace(hour=hour, minute=0)
        return MoodEntry(id=counter["id"], mood_level=level, timestamp=to_millis(moment), tag=tag)

    return _make

@pytest.fixture
def two_week_log(make_entry):
    """Seven days at level 2 followed by seven days at level 5 (oldest first)."""
    older = [make_entry(2, days_ago=d, hour=12) for d in range(13, 6, -1)]
    newer = [make_entry(5, days_ago=d, hour=12) for d in range(6, -1, -1)]
    return older + newer


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drops handlers bound to this test's capture streams and temp dir."""
    yield
    app_logger = logging.getLogger("mindspot")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
