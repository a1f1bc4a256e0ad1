"""Day key helper tests."""

from datetime import date, datetime

from moodscape.core.dates import DAY_NAMES, day_key_for, day_of_week_index, start_of_day, to_local_datetime
from moodscape.core.mood_options import mood_name_for


def test_start_of_day_normalizes_to_local_midnight():
    assert start_of_day(datetime(2024, 3, 5, 17, 45, 12)) == day_key_for(date(2024, 3, 5))
    assert start_of_day(datetime(2024, 3, 5, 0, 0)) == day_key_for(date(2024, 3, 5))

    moment = to_local_datetime(day_key_for(date(2024, 3, 5)))
    assert (moment.hour, moment.minute, moment.second) == (0, 0, 0)


def test_day_of_week_index_starts_on_sunday():
    assert DAY_NAMES[day_of_week_index(day_key_for(date(2024, 1, 7)))] == "Sunday"
    assert DAY_NAMES[day_of_week_index(day_key_for(date(2024, 1, 1)))] == "Monday"
    assert DAY_NAMES[day_of_week_index(day_key_for(date(2024, 1, 6)))] == "Saturday"


def test_mood_name_lookup_falls_back_to_custom():
    assert mood_name_for("😊") == "Happy"
    assert mood_name_for("😴") == "Tired"
    assert mood_name_for("🦄") == "Custom Mood"
