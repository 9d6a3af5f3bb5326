# app/timeline/timeline_schemas.py
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel


class TimelineNoteSummary(BaseModel):
    id: int
    note_type: str
    status: Optional[str] = None
    summary: Optional[str] = None
    cpt_code: Optional[str] = None
    signed_by: Optional[str] = None


class TimelineEntryResponse(BaseModel):
    key: str
    kind: Literal["appointment", "note"]
    timestamp: datetime  # practice-local wall clock
    day: date
    session_number: Optional[int] = None
    is_numbered: bool
    has_note: bool
    needs_note: bool
    appointment_id: Optional[int] = None
    appointment_title: Optional[str] = None
    appointment_status: Optional[str] = None
    note: Optional[TimelineNoteSummary] = None


class TimelineYearGroup(BaseModel):
    year: int
    entries: List[TimelineEntryResponse]


class TimelineResponse(BaseModel):
    patient_id: int
    range: str
    start: Optional[date] = None
    end: Optional[date] = None
    timezone: str
    total_entries: int
    numbered_visits: int
    needs_note_count: int
    entries: List[TimelineEntryResponse]
    years: List[TimelineYearGroup]
