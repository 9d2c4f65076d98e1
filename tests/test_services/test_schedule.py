"""Tests for schedule layout"""

from datetime import datetime, time, timedelta

import pytest
from pydantic import ValidationError

from api.schemas import Talk
from services.schedule import (
    BreakKind,
    EntryKind,
    ScheduleLayout,
    build_schedule,
    format_time,
    matching_talk_ids,
)
from services.talk_store import assign_talk_ids
from tests.factories import SAMPLE_TALKS, SCHEDULE_DAY, TalkFactory


def make_talks(count: int) -> tuple[Talk, ...]:
    return tuple(TalkFactory.build_batch(count))


def at(hour: int, minute: int) -> datetime:
    return datetime.combine(SCHEDULE_DAY, time(hour, minute))


def shape(entries) -> list[str]:
    return [entry.label if entry.kind == EntryKind.BREAK else "talk" for entry in entries]


class TestBuildSchedule:
    """Layout of talks and breaks"""

    def test_empty_talk_list(self):
        """No talks means no entries at all"""
        assert build_schedule((), day=SCHEDULE_DAY) == []

    def test_single_talk_has_no_break(self):
        """A lone talk is not followed by a break"""
        entries = build_schedule(make_talks(1), day=SCHEDULE_DAY)

        assert shape(entries) == ["talk"]
        assert entries[0].start == at(10, 0)
        assert entries[0].end == at(11, 0)

    def test_two_talks_have_one_transition(self):
        entries = build_schedule(make_talks(2), day=SCHEDULE_DAY)

        assert shape(entries) == ["talk", "Transition", "talk"]
        assert entries[1].start == at(11, 0)
        assert entries[1].end == at(11, 10)
        assert entries[2].start == at(11, 10)

    def test_three_talks_end_with_lunch(self):
        """Lunch follows the third talk even when it is the last one"""
        entries = build_schedule(make_talks(3), day=SCHEDULE_DAY)

        assert shape(entries) == [
            "talk",
            "Transition",
            "talk",
            "Transition",
            "talk",
            "Lunch Break",
        ]
        lunch = entries[-1]
        assert lunch.break_kind == BreakKind.LUNCH
        assert lunch.start == at(13, 20)
        assert lunch.end == at(14, 20)

    def test_six_talks(self):
        """Lunch after the third talk, transitions elsewhere, nothing after the last"""
        entries = build_schedule(make_talks(6), day=SCHEDULE_DAY)

        assert shape(entries) == [
            "talk",
            "Transition",
            "talk",
            "Transition",
            "talk",
            "Lunch Break",
            "talk",
            "Transition",
            "talk",
            "Transition",
            "talk",
        ]

    @pytest.mark.parametrize("count", [2, 4, 5, 8])
    def test_one_break_between_each_pair(self, count):
        entries = build_schedule(make_talks(count), day=SCHEDULE_DAY)
        breaks = [e for e in entries if e.kind == EntryKind.BREAK]

        assert len(breaks) == count - 1
        assert sum(1 for b in breaks if b.break_kind == BreakKind.LUNCH) == 1

    def test_talk_start_times_include_preceding_breaks(self):
        """Talk i starts at 10:00 + i hours + all break minutes before it"""
        entries = build_schedule(make_talks(5), day=SCHEDULE_DAY)
        clock = at(10, 0)

        for entry in entries:
            assert entry.start == clock
            clock = entry.end

        talk_starts = [e.start for e in entries if e.kind == EntryKind.TALK]
        assert talk_starts == [at(10, 0), at(11, 10), at(12, 20), at(14, 20), at(15, 30)]

    def test_talks_keep_input_order(self):
        talks = assign_talk_ids([Talk.model_validate(t) for t in SAMPLE_TALKS])
        entries = build_schedule(talks, day=SCHEDULE_DAY)

        titles = [e.talk.title for e in entries if e.kind == EntryKind.TALK]
        assert titles == [t["title"] for t in SAMPLE_TALKS]

    def test_custom_layout(self):
        layout = ScheduleLayout(
            start=time(9, 30), talk_minutes=45, lunch_minutes=30, transition_minutes=5,
            lunch_after_index=0,
        )
        entries = build_schedule(make_talks(2), day=SCHEDULE_DAY, layout=layout)

        assert shape(entries) == ["talk", "Lunch Break", "talk"]
        assert entries[0].end - entries[0].start == timedelta(minutes=45)
        assert entries[1].end == at(10, 45)

    def test_defaults_to_today(self):
        entries = build_schedule(make_talks(1))

        assert entries[0].start.date() == datetime.now().date()
        assert entries[0].start.time() == time(10, 0)


class TestLayoutFromSettings:
    """Timing rules read from settings"""

    def test_from_settings(self, settings_env):
        layout = ScheduleLayout.from_settings(settings_env)

        assert layout == ScheduleLayout()

    def test_from_custom_settings(self, monkeypatch, settings_env):
        from app.config import get_settings

        monkeypatch.setenv("SCHEDULE_START", "08:45")
        monkeypatch.setenv("TRANSITION_MINUTES", "15")
        get_settings.cache_clear()

        layout = ScheduleLayout.from_settings(get_settings())

        assert layout.start == time(8, 45)
        assert layout.transition_minutes == 15

    @pytest.mark.parametrize("value", ["25:00", "10:75", "ten"])
    def test_invalid_start_rejected_on_load(self, monkeypatch, settings_env, value):
        """A bad start time fails when settings load, not on each request"""
        from app.config import Settings

        monkeypatch.setenv("SCHEDULE_START", value)

        with pytest.raises(ValidationError):
            Settings()


class TestTimeFormatting:
    """12-hour clock formatting"""

    def test_format_morning(self):
        assert format_time(at(10, 0)) == "10:00 AM"

    def test_format_pads_hour(self):
        assert format_time(at(13, 5)) == "01:05 PM"

    def test_entry_time_range(self):
        entries = build_schedule(make_talks(4), day=SCHEDULE_DAY)

        assert [e.time_range for e in entries] == [
            "10:00 AM - 11:00 AM",
            "11:00 AM - 11:10 AM",
            "11:10 AM - 12:10 PM",
            "12:10 PM - 12:20 PM",
            "12:20 PM - 01:20 PM",
            "01:20 PM - 02:20 PM",
            "02:20 PM - 03:20 PM",
        ]


class TestMatchingTalkIds:
    """Category search"""

    def setup_method(self):
        self.talks = assign_talk_ids([Talk.model_validate(t) for t in SAMPLE_TALKS])

    def test_case_insensitive_substring(self):
        assert matching_talk_ids(self.talks, "PYTH") == {
            "async-web-services",
            "property-based-testing",
        }

    def test_matches_inside_category_name(self):
        assert matching_talk_ids(self.talks, "science") == {"notebook-to-pipeline"}

    def test_no_match(self):
        assert matching_talk_ids(self.talks, "cobol") == set()

    def test_empty_term_matches_talks_with_categories(self):
        assert len(matching_talk_ids(self.talks, "")) == len(self.talks)
