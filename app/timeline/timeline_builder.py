# app/timeline/timeline_builder.py
"""
Visit timeline reconstruction.

Merges a patient's appointments and notes into one list:

1. Both collections are filtered to the requested date window.
2. Each appointment claims at most one progress note: the note that links to
   it by id, else an unlinked note from the same calendar day. A claimed note
   is folded into its appointment's entry instead of being listed twice.
3. Appointments and progress notes are numbered 1..N in chronological order
   (day, then creation time, appointments first on ties). Chart notes and
   diagnosis/treatment entries are listed without a number.
4. The result is ordered newest day first, higher visit number first within a
   day, and grouped by year.

All datetimes handled here are naive practice-local wall-clock values, so a
"calendar day" is the day as the practice sees it.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.helpers.time import (
    combine,
    end_of_day,
    from_db,
    is_date_only,
    parse_clock,
    parse_datetime,
    practice_now,
    start_of_day,
    to_practice_local,
)

EPOCH = datetime(1970, 1, 1)

CANCELLED_STATUSES = ("cancelled", "canceled")
NUMBERED_NOTE_TYPE = "progress_note"


class DateRangePreset(str, Enum):
    ALL = "all"
    LAST_30_DAYS = "30days"
    LAST_90_DAYS = "90days"
    LAST_6_MONTHS = "6months"
    LAST_YEAR = "1year"
    CUSTOM = "custom"


PRESET_DAYS = {
    DateRangePreset.LAST_30_DAYS: 30,
    DateRangePreset.LAST_90_DAYS: 90,
    DateRangePreset.LAST_6_MONTHS: 180,
    DateRangePreset.LAST_YEAR: 365,
}


@dataclass
class DateRange:
    preset: DateRangePreset = DateRangePreset.ALL
    start: Optional[date] = None
    end: Optional[date] = None

    def window(self, now: datetime) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Inclusive (start, end) bounds; None means unbounded."""
        preset = DateRangePreset(self.preset)
        if preset in PRESET_DAYS:
            return now - timedelta(days=PRESET_DAYS[preset]), now
        if preset == DateRangePreset.CUSTOM:
            return (
                start_of_day(self.start) if self.start else None,
                end_of_day(self.end) if self.end else None,
            )
        return None, None


@dataclass
class TimelineAppointment:
    id: Any
    start_time: datetime
    status: Optional[str] = None
    title: Optional[str] = None
    end_time: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_cancelled(self) -> bool:
        return (self.status or "").lower() in CANCELLED_STATUSES

    @classmethod
    def from_model(cls, appointment) -> "TimelineAppointment":
        return cls(
            id=appointment.id,
            start_time=to_practice_local(from_db(appointment.start_time)),
            end_time=to_practice_local(from_db(appointment.end_time)),
            status=appointment.appointment_status,
            title=appointment.title,
            created_at=to_practice_local(from_db(appointment.created_at)),
        )


@dataclass
class TimelineNote:
    id: Any
    note_type: str = NUMBERED_NOTE_TYPE
    status: Optional[str] = None
    appointment_id: Any = None
    date_of_service: Optional[date] = None
    time_of_service: Optional[str] = None
    start_time: Optional[datetime] = None
    session_date: Optional[str] = None
    session_time: Optional[str] = None
    created_at: Optional[datetime] = None
    summary: Optional[str] = None
    cpt_code: Optional[str] = None
    signed_by: Optional[str] = None

    @property
    def is_numbered(self) -> bool:
        return self.note_type == NUMBERED_NOTE_TYPE

    @classmethod
    def from_model(cls, note) -> "TimelineNote":
        return cls(
            id=note.id,
            note_type=note.note_type,
            status=note.status,
            appointment_id=note.appointment_id,
            date_of_service=note.date_of_service,
            time_of_service=note.time_of_service,
            start_time=to_practice_local(from_db(note.start_time)),
            session_date=note.session_date,
            session_time=note.session_time,
            created_at=to_practice_local(from_db(note.created_at)),
            summary=note.summary,
            cpt_code=note.cpt_code,
            signed_by=note.signed_by,
        )


@dataclass
class TimelineEntry:
    kind: str  # "appointment" | "note"
    timestamp: datetime
    appointment: Optional[TimelineAppointment] = None
    note: Optional[TimelineNote] = None
    session_number: Optional[int] = None

    @property
    def day(self) -> date:
        return self.timestamp.date()

    @property
    def is_numbered(self) -> bool:
        if self.kind == "appointment":
            return True
        return self.note.is_numbered

    @property
    def has_note(self) -> bool:
        return self.kind == "appointment" and self.note is not None

    @property
    def needs_note(self) -> bool:
        return self.kind == "appointment" and self.note is None and not self.appointment.is_cancelled

    @property
    def created_at(self) -> datetime:
        source = self.appointment if self.kind == "appointment" else self.note
        return source.created_at or EPOCH

    @property
    def key(self) -> str:
        if self.kind == "appointment":
            return f"apt-{self.appointment.id}"
        return f"note-{self.note.id}"


@dataclass
class Timeline:
    entries: List[TimelineEntry] = field(default_factory=list)

    @property
    def numbered_visits(self) -> int:
        return sum(1 for entry in self.entries if entry.session_number is not None)

    @property
    def needs_note_count(self) -> int:
        return sum(1 for entry in self.entries if entry.needs_note)

    def by_year(self) -> List[Tuple[int, List[TimelineEntry]]]:
        groups: Dict[int, List[TimelineEntry]] = {}
        for entry in self.entries:
            groups.setdefault(entry.timestamp.year, []).append(entry)
        return sorted(groups.items(), key=lambda item: item[0], reverse=True)


def note_timestamp(note: TimelineNote) -> datetime:
    """
    Canonical time of a note:
    service date + time, else start time, else session date (a date-only or
    midnight value takes the session time when one is set), else creation time.
    """
    if note.date_of_service and note.time_of_service:
        clock = parse_clock(note.time_of_service)
        day = note.date_of_service
        if isinstance(day, str):
            day = parse_datetime(day).date()
        if clock is not None:
            return combine(day, clock)
    if note.start_time:
        return to_practice_local(note.start_time)
    if note.session_date:
        session = parse_datetime(note.session_date)
        if session is not None:
            clock = parse_clock(note.session_time)
            at_midnight = session.hour == 0 and session.minute == 0
            if clock is not None and (is_date_only(note.session_date) or at_midnight):
                return combine(session.date(), clock)
            return session
    return to_practice_local(note.created_at) or EPOCH


def _in_window(moment: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    if start and moment < start:
        return False
    if end and moment > end:
        return False
    return True


def _associate(
    appointment: TimelineAppointment,
    candidates: Sequence[Tuple[TimelineNote, datetime]],
    claimed: set,
) -> Optional[TimelineNote]:
    """The note documenting an appointment: explicit link first, then same day."""
    for note, _ in candidates:
        if note.id not in claimed and note.appointment_id is not None and note.appointment_id == appointment.id:
            return note
    for note, moment in candidates:
        if note.id in claimed or note.appointment_id is not None:
            continue
        if moment.date() == appointment.start_time.date():
            return note
    return None


def _numbering_key(entry: TimelineEntry):
    return (entry.day, entry.created_at, 0 if entry.kind == "appointment" else 1, entry.timestamp)


def _display_key(entry: TimelineEntry):
    return (entry.day, entry.session_number or 0, entry.timestamp)


def build_timeline(
    appointments: Sequence[TimelineAppointment],
    notes: Sequence[TimelineNote],
    date_range: Optional[DateRange] = None,
    now: Optional[datetime] = None,
) -> Timeline:
    date_range = date_range or DateRange()
    now = to_practice_local(now) if now is not None else practice_now()
    start, end = date_range.window(now)

    timed_notes = [(note, note_timestamp(note)) for note in notes]
    candidates = [(note, moment) for note, moment in timed_notes if note.is_numbered]

    entries: List[TimelineEntry] = []
    claimed = set()

    for appointment in sorted(appointments, key=lambda a: (a.start_time, str(a.id))):
        if not _in_window(appointment.start_time, start, end):
            continue
        associated = _associate(appointment, candidates, claimed)
        if associated is not None:
            claimed.add(associated.id)
        entries.append(TimelineEntry(
            kind="appointment",
            timestamp=appointment.start_time,
            appointment=appointment,
            note=associated,
        ))

    for note, moment in timed_notes:
        if not _in_window(moment, start, end):
            continue
        if note.id in claimed:
            continue
        entries.append(TimelineEntry(kind="note", timestamp=moment, note=note))

    numbered = sorted((entry for entry in entries if entry.is_numbered), key=_numbering_key)
    for number, entry in enumerate(numbered, start=1):
        entry.session_number = number

    entries.sort(key=_display_key, reverse=True)
    return Timeline(entries=entries)
