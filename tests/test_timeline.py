# tests/test_timeline.py
from datetime import date, datetime, timedelta

import pytest

from app.timeline.timeline_builder import (
    DateRange,
    DateRangePreset,
    TimelineAppointment,
    TimelineNote,
    build_timeline,
    note_timestamp,
)

NOW = datetime(2025, 6, 30, 12, 0)


def apt(id, start, status="confirmed", created=None):
    return TimelineAppointment(id=id, start_time=start, status=status, created_at=created or start - timedelta(days=7))


def note(id, service_day=None, clock=None, created=None, note_type="progress_note", appointment_id=None, **extra):
    return TimelineNote(
        id=id,
        note_type=note_type,
        status="signed",
        appointment_id=appointment_id,
        date_of_service=service_day,
        time_of_service=clock,
        created_at=created,
        **extra,
    )


def by_key(timeline):
    return {entry.key: entry for entry in timeline.entries}


# ===== ✅ ASSOCIATION =====
def test_same_day_note_is_folded_into_appointment():
    timeline = build_timeline(
        [apt(1, datetime(2025, 6, 10, 14, 0))],
        [note(10, date(2025, 6, 10), "14:00", created=datetime(2025, 6, 10, 15, 0))],
        now=NOW,
    )

    assert len(timeline.entries) == 1
    entry = timeline.entries[0]
    assert entry.kind == "appointment"
    assert entry.has_note
    assert entry.note.id == 10
    assert entry.needs_note is False
    assert entry.session_number == 1


def test_explicit_link_wins_over_same_day_note():
    timeline = build_timeline(
        [apt(1, datetime(2025, 6, 10, 9, 0)), apt(2, datetime(2025, 6, 10, 15, 0))],
        [
            note(10, date(2025, 6, 10), "15:00", created=datetime(2025, 6, 10, 16, 0), appointment_id=2),
            note(11, date(2025, 6, 10), "09:00", created=datetime(2025, 6, 10, 10, 0)),
        ],
        now=NOW,
    )
    entries = by_key(timeline)

    assert entries["apt-2"].note.id == 10
    assert entries["apt-1"].note.id == 11
    assert "note-10" not in entries and "note-11" not in entries


def test_note_is_claimed_by_at_most_one_appointment():
    timeline = build_timeline(
        [apt(1, datetime(2025, 6, 10, 9, 0)), apt(2, datetime(2025, 6, 10, 15, 0))],
        [note(10, date(2025, 6, 10), "09:00", created=datetime(2025, 6, 10, 10, 0))],
        now=NOW,
    )
    entries = by_key(timeline)

    claimed = [e for e in timeline.entries if e.has_note]
    assert len(claimed) == 1
    assert entries["apt-1"].has_note
    assert entries["apt-2"].needs_note


def test_every_item_appears_once():
    appointments = [apt(i, datetime(2025, 6, i, 10, 0)) for i in range(1, 6)]
    notes = [note(100 + i, date(2025, 6, i), "10:00", created=datetime(2025, 6, i, 11, 0)) for i in (1, 3)]
    notes.append(note(200, date(2025, 6, 20), "10:00", created=datetime(2025, 6, 20, 11, 0)))

    timeline = build_timeline(appointments, notes, now=NOW)
    keys = [entry.key for entry in timeline.entries]

    assert len(keys) == len(set(keys)) == 6
    folded = {e.note.id for e in timeline.entries if e.has_note}
    assert folded == {101, 103}


# ===== ✅ NUMBERING =====
def test_numbers_are_contiguous_and_chronological():
    appointments = [
        apt(1, datetime(2025, 3, 1, 10, 0)),
        apt(2, datetime(2025, 1, 15, 10, 0)),
        apt(3, datetime(2025, 5, 20, 10, 0), status="cancelled"),
    ]
    notes = [
        note(10, date(2025, 2, 10), "11:00", created=datetime(2025, 2, 10, 12, 0)),
        note(11, date(2025, 4, 1), "11:00", created=datetime(2025, 4, 1, 12, 0), note_type="chart_note"),
    ]

    timeline = build_timeline(appointments, notes, now=NOW)
    numbered = sorted((e for e in timeline.entries if e.session_number), key=lambda e: e.session_number)

    assert [e.session_number for e in numbered] == [1, 2, 3, 4]
    assert [e.key for e in numbered] == ["apt-2", "note-10", "apt-1", "apt-3"]
    assert by_key(timeline)["note-11"].session_number is None
    assert timeline.numbered_visits == 4


def test_appointment_outranks_same_day_note_with_equal_creation_time():
    created = datetime(2025, 6, 1, 8, 0)
    timeline = build_timeline(
        [apt(1, datetime(2025, 6, 10, 16, 0), created=created)],
        [note(10, date(2025, 6, 10), "08:00", created=created, appointment_id=99)],
        now=NOW,
    )
    entries = by_key(timeline)

    assert entries["apt-1"].session_number == 1
    assert entries["note-10"].session_number == 2


def test_same_day_order_follows_creation_not_clock_time():
    timeline = build_timeline(
        [apt(1, datetime(2025, 6, 10, 14, 0), created=datetime(2025, 6, 1, 9, 0))],
        [note(10, date(2025, 6, 10), "09:00", created=datetime(2025, 6, 10, 15, 0), appointment_id=99)],
        now=NOW,
    )
    entries = by_key(timeline)

    assert entries["apt-1"].session_number == 1
    assert entries["note-10"].session_number == 2
    # newest day first, higher number first within the day
    assert [e.key for e in timeline.entries] == ["note-10", "apt-1"]


def test_display_order_is_newest_day_first():
    timeline = build_timeline(
        [apt(1, datetime(2024, 12, 30, 10, 0)), apt(2, datetime(2025, 1, 5, 10, 0))],
        [note(10, date(2025, 2, 1), "10:00", created=datetime(2025, 2, 1, 11, 0))],
        now=NOW,
    )

    assert [e.key for e in timeline.entries] == ["note-10", "apt-2", "apt-1"]
    years = timeline.by_year()
    assert [year for year, _ in years] == [2025, 2024]
    assert [e.key for e in years[0][1]] == ["note-10", "apt-2"]


# ===== ✅ NEEDS NOTE =====
def test_needs_note_only_for_uncancelled_appointments_without_note():
    timeline = build_timeline(
        [
            apt(1, datetime(2025, 6, 2, 10, 0)),
            apt(2, datetime(2025, 6, 3, 10, 0), status="Canceled"),
            apt(3, datetime(2025, 6, 4, 10, 0), status="cancelled"),
        ],
        [],
        now=NOW,
    )
    entries = by_key(timeline)

    assert entries["apt-1"].needs_note is True
    assert entries["apt-2"].needs_note is False
    assert entries["apt-3"].needs_note is False
    assert timeline.needs_note_count == 1
    assert entries["apt-3"].session_number is not None


# ===== ✅ DATE WINDOW =====
def test_preset_window_filters_both_collections():
    timeline = build_timeline(
        [apt(1, NOW - timedelta(days=45)), apt(2, NOW - timedelta(days=5))],
        [
            note(10, (NOW - timedelta(days=40)).date(), "10:00", created=NOW - timedelta(days=40)),
            note(11, (NOW - timedelta(days=3)).date(), "10:00", created=NOW - timedelta(days=3)),
        ],
        DateRange(preset=DateRangePreset.LAST_30_DAYS),
        now=NOW,
    )

    assert sorted(e.key for e in timeline.entries) == ["apt-2", "note-11"]
    # numbering restarts inside the window
    assert sorted(e.session_number for e in timeline.entries) == [1, 2]


@pytest.mark.parametrize(
    "preset, days",
    [
        (DateRangePreset.LAST_90_DAYS, 90),
        (DateRangePreset.LAST_6_MONTHS, 180),
        (DateRangePreset.LAST_YEAR, 365),
    ],
)
def test_longer_presets_reach_back_their_day_count(preset, days):
    timeline = build_timeline(
        [apt(1, NOW - timedelta(days=days + 1)), apt(2, NOW - timedelta(days=days - 1))],
        [],
        DateRange(preset=preset),
        now=NOW,
    )

    assert [e.key for e in timeline.entries] == ["apt-2"]


def test_custom_end_date_is_inclusive_through_end_of_day():
    timeline = build_timeline(
        [apt(1, datetime(2025, 6, 15, 23, 30)), apt(2, datetime(2025, 6, 16, 0, 15))],
        [],
        DateRange(preset=DateRangePreset.CUSTOM, start=None, end=date(2025, 6, 15)),
        now=NOW,
    )

    assert [e.key for e in timeline.entries] == ["apt-1"]


def test_custom_start_only():
    timeline = build_timeline(
        [apt(1, datetime(2025, 6, 14, 23, 0)), apt(2, datetime(2025, 6, 15, 0, 0))],
        [],
        DateRange(preset=DateRangePreset.CUSTOM, start=date(2025, 6, 15)),
        now=NOW,
    )

    assert [e.key for e in timeline.entries] == ["apt-2"]


# ===== ✅ NOTE TIMESTAMP =====
def test_note_timestamp_prefers_service_date_and_time():
    n = note(1, date(2025, 6, 10), "14:30", start_time=datetime(2025, 6, 11, 9, 0), created=datetime(2025, 6, 12))
    assert note_timestamp(n) == datetime(2025, 6, 10, 14, 30)


def test_note_timestamp_falls_back_to_start_time():
    n = note(1, start_time=datetime(2025, 6, 11, 9, 0), created=datetime(2025, 6, 12))
    assert note_timestamp(n) == datetime(2025, 6, 11, 9, 0)


def test_note_timestamp_combines_date_only_session_with_session_time():
    n = note(1, session_date="2025-06-09", session_time="16:45", created=datetime(2025, 6, 12))
    assert note_timestamp(n) == datetime(2025, 6, 9, 16, 45)


def test_note_timestamp_falls_back_to_created_at():
    n = note(1, created=datetime(2025, 6, 12, 8, 5))
    assert note_timestamp(n) == datetime(2025, 6, 12, 8, 5)


def test_note_timestamp_midnight_session_takes_session_time():
    n = note(1, session_date="2025-06-09T00:00:00", session_time="16:45", created=datetime(2025, 6, 12))
    assert note_timestamp(n) == datetime(2025, 6, 9, 16, 45)


def test_note_timestamp_session_with_embedded_time_keeps_it():
    n = note(1, session_date="2025-06-09T10:15:00", session_time="16:45", created=datetime(2025, 6, 12))
    assert note_timestamp(n) == datetime(2025, 6, 9, 10, 15)
