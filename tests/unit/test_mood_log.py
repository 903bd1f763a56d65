import json
import pytest

from mindspot.adapters.repositories.mood_log import MoodLog, MoodLogLoadError, load_mood_log
from mindspot.core.models import MoodEntry


@pytest.fixture
def log():
    return MoodLog([
        MoodEntry(id=3, mood_level=4, timestamp=3000, tag="Work"),
        MoodEntry(id=1, mood_level=2, timestamp=1000, tag="Sleep"),
        MoodEntry(id=2, mood_level=5, timestamp=2000, tag="Work"),
    ])


class TestMoodLog:

    def test_all_entries_oldest_first(self, log):
        assert [e.id for e in log.all_entries()] == [1, 2, 3]
        assert len(log) == 3

    def test_recent_newest_first(self, log):
        assert [e.id for e in log.recent(2)] == [3, 2]
        assert log.recent(0) == []

    def test_date_range_inclusive(self, log):
        assert [e.id for e in log.by_date_range(1000, 2000)] == [2, 1]
        assert log.by_date_range(4000, 5000) == []

    def test_by_tag_exact_match(self, log):
        assert [e.id for e in log.by_tag("Work")] == [3, 2]
        assert log.by_tag("work") == []

    def test_all_entries_returns_copy(self, log):
        log.all_entries().clear()
        assert len(log.all_entries()) == 3


class TestLoadMoodLog:

    def test_load_list_export(self, tmp_path):
        path = tmp_path / "moods.json"
        path.write_text(json.dumps([
            {"id": 1, "moodId": 4, "timestamp": 2000, "optionalTag": "Sport"},
            {"id": 2, "mood_level": 2, "timestamp": 1000},
        ]), encoding="utf-8")

        log = load_mood_log(str(path))

        assert [e.id for e in log.all_entries()] == [2, 1]
        assert log.all_entries()[1].tag == "Sport"

    def test_load_object_export(self, tmp_path):
        path = tmp_path / "moods.json"
        path.write_text(json.dumps({"entries": [{"mood_level": 3, "timestamp": 10}]}), encoding="utf-8")

        assert len(load_mood_log(str(path))) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(MoodLogLoadError):
            load_mood_log(str(tmp_path / "nope.json"))

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "moods.json"
        path.write_bytes(b'[{"mood_level": 3, "timestamp": 1, "tag": "\xff\xfe"}]')

        with pytest.raises(MoodLogLoadError):
            load_mood_log(str(path))

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "moods.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(MoodLogLoadError):
            load_mood_log(str(path))

    def test_invalid_entry(self, tmp_path):
        path = tmp_path / "moods.json"
        path.write_text(json.dumps([{"mood_level": "great", "timestamp": 1}]), encoding="utf-8")

        with pytest.raises(MoodLogLoadError, match="index 0"):
            load_mood_log(str(path))

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "moods.json"
        path.write_text(json.dumps({"items": []}), encoding="utf-8")

        with pytest.raises(MoodLogLoadError):
            load_mood_log(str(path))
