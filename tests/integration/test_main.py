import json
from datetime import timedelta
from unittest.mock import patch

import pytest

from mindspot import main
from tests.factories import NOW, to_millis


@pytest.fixture
def mood_file(tmp_path):
    """Two weeks of daily entries: level 2 then level 5, tagged 'Sport' on good days."""
    rows = []
    for days_ago in range(13, -1, -1):
        moment = (NOW - timedelta(days=days_ago)).replace(hour=9)
        good = days_ago < 7
        rows.append({
            "id": len(rows) + 1,
            "moodId": 5 if good else 2,
            "timestamp": to_millis(moment),
            "optionalTag": "Sport" if good else None,
        })
    path = tmp_path / "moods.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return str(path)


class TestMainReport:
    """Test suite for the report command orchestration."""

    def test_json_report(self, mood_file, capsys):
        code = main.main(["--input", mood_file, "--json", "--timezone", "UTC", "--now", NOW.isoformat()])

        assert code == 0
        report = json.loads(capsys.readouterr().out)

        assert report["statistics"]["all_time"]["total_entries"] == 14
        assert report["statistics"]["all_time"]["streak"] == 14
        assert report["analysis"]["trends"]["direction"] == "improving"
        assert report["analysis"]["trends"]["confidence"] == 0.7
        assert report["analysis"]["correlations"][0]["tag"] == "Sport"
        assert report["analysis"]["correlations"][0]["impact"] == "very_positive"
        assert report["analysis"]["insights"][0] == "Logged 14 entries across 14 days"

    def test_text_report(self, mood_file, capsys):
        code = main.main(["--input", mood_file, "--now", "2025-03-15T21:00:00+00:00"])

        out = capsys.readouterr().out
        assert code == 0
        assert "MOOD REPORT" in out
        assert "TREND: IMPROVING" in out
        assert "Sport" in out

    def test_missing_log_returns_error(self, tmp_path):
        code = main.main(["--input", str(tmp_path / "missing.json")])
        assert code == 1

    def test_invalid_now_returns_error(self, mood_file):
        assert main.main(["--input", mood_file, "--now", "yesterday"]) == 1

    def test_list_tags(self, capsys):
        code = main.main(["--list-tags"])

        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert out[0] == "Work"
        assert "Social" in out

    def test_requires_input(self):
        with patch("sys.stderr"):
            with pytest.raises(SystemExit):
                main.main([])

    def test_undecodable_log_returns_error(self, tmp_path):
        path = tmp_path / "moods.json"
        path.write_bytes(b'[{"mood_level": 3, "timestamp": 1, "tag": "\xff\xfe"}]')

        assert main.main(["--input", str(path), "--now", NOW.isoformat()]) == 1

    def test_corrupt_preferences_returns_error(self, tmp_path, capsys):
        (tmp_path / "preferences.json").write_text("{not json", encoding="utf-8")

        assert main.main(["--list-tags"]) == 1
        assert capsys.readouterr().out == ""
