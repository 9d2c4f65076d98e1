"""Schedule layout: sequential talk slots with fixed breaks"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from api.schemas import Talk


class EntryKind(str, Enum):
    TALK = "talk"
    BREAK = "break"


class BreakKind(str, Enum):
    """Fixed break labels"""

    LUNCH = "Lunch Break"
    TRANSITION = "Transition"


@dataclass(frozen=True)
class ScheduleLayout:
    """Timing rules for a schedule day"""

    start: time = time(10, 0)
    talk_minutes: int = 60
    lunch_minutes: int = 60
    transition_minutes: int = 10
    lunch_after_index: int = 2

    @classmethod
    def from_settings(cls, settings) -> "ScheduleLayout":
        return cls(
            start=settings.schedule_start,
            talk_minutes=settings.talk_minutes,
            lunch_minutes=settings.lunch_minutes,
            transition_minutes=settings.transition_minutes,
            lunch_after_index=settings.lunch_after_index,
        )


@dataclass(frozen=True)
class ScheduleEntry:
    """A talk or break placed at a computed time range"""

    kind: EntryKind
    start: datetime
    end: datetime
    talk: Talk | None = None
    break_kind: BreakKind | None = None

    @property
    def label(self) -> str:
        if self.talk is not None:
            return self.talk.title
        return self.break_kind.value

    @property
    def talk_id(self) -> str | None:
        return self.talk.id if self.talk is not None else None

    @property
    def time_range(self) -> str:
        return f"{format_time(self.start)} - {format_time(self.end)}"


def format_time(moment: datetime) -> str:
    """Format as a 2-digit 12-hour clock time, e.g. "01:10 PM"."""
    return moment.strftime("%I:%M %p")


def build_schedule(
    talks: Sequence[Talk],
    day: date | None = None,
    layout: ScheduleLayout | None = None,
) -> list[ScheduleEntry]:
    """
    Lay out talks back to back, inserting breaks between them.

    Talks keep their given order. After the talk at ``lunch_after_index`` comes
    a lunch break; after every other talk except the last comes a transition.

    Args:
        talks: Talks in display order
        day: Calendar day of the schedule (defaults to today)
        layout: Timing rules (defaults to 10:00 start, 60/60/10 minutes)

    Returns:
        Entries in chronological order
    """
    layout = layout or ScheduleLayout()
    clock = datetime.combine(day or date.today(), layout.start)
    entries: list[ScheduleEntry] = []

    for index, talk in enumerate(talks):
        talk_end = clock + timedelta(minutes=layout.talk_minutes)
        entries.append(ScheduleEntry(EntryKind.TALK, clock, talk_end, talk=talk))
        clock = talk_end

        if index == layout.lunch_after_index:
            break_kind, minutes = BreakKind.LUNCH, layout.lunch_minutes
        elif index < len(talks) - 1:
            break_kind, minutes = BreakKind.TRANSITION, layout.transition_minutes
        else:
            continue

        break_end = clock + timedelta(minutes=minutes)
        entries.append(ScheduleEntry(EntryKind.BREAK, clock, break_end, break_kind=break_kind))
        clock = break_end

    return entries


def matching_talk_ids(talks: Sequence[Talk], search_term: str) -> set[str]:
    """Ids of talks with at least one category containing the term (case-insensitive)."""
    term = search_term.lower()
    return {
        talk.id
        for talk in talks
        if any(term in category.lower() for category in talk.categories)
    }
