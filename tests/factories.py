from datetime import datetime, timezone

# Saturday evening, frozen for every time-dependent test
NOW = datetime(2025, 3, 15, 21, 0, tzinfo=timezone.utc)


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)
