from datetime import timezone

from mindspot.core.summary import MoodStatistics, calculate_mood_statistics

from tests.factories import NOW


def test_empty_statistics():
    stats = calculate_mood_statistics([], timezone.utc, NOW)

    assert stats == MoodStatistics()
    assert stats.most_frequent_mood is None


def test_statistics_summary(make_entry):
    entries = [
        make_entry(4, days_ago=0),
        make_entry(4, days_ago=1),
        make_entry(2, days_ago=2),
        make_entry(5, days_ago=5),
    ]

    stats = calculate_mood_statistics(entries, timezone.utc, NOW)

    assert stats.total_entries == 4
    assert stats.average_mood == 3.75
    assert stats.most_frequent_level == 4
    assert stats.most_frequent_mood.name == "Good"
    assert stats.mood_distribution == {4: 2, 2: 1, 5: 1}
    assert stats.streak == 3


def test_most_frequent_tie_goes_to_first_seen(make_entry):
    entries = [make_entry(2, days_ago=3), make_entry(5, days_ago=2),
               make_entry(5, days_ago=1), make_entry(2, days_ago=0)]

    stats = calculate_mood_statistics(entries, timezone.utc, NOW)

    assert stats.most_frequent_level == 2


def test_statistics_to_dict(make_entry):
    stats = calculate_mood_statistics([make_entry(3, days_ago=4)], timezone.utc, NOW)

    assert stats.to_dict() == {
        "total_entries": 1,
        "average_mood": 3.0,
        "most_frequent_level": 3,
        "mood_distribution": {3: 1},
        "streak": 0,
    }
