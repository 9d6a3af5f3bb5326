# app/system_models/progress_note_model/progress_note_schemas.py
import re
from typing import Any, Dict, List, Literal, Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.helpers.time import from_db
from app.notes.note_styles import NoteStyle, NoteType

NOTE_STATUS = Literal["draft", "signed", "completed"]

_CLOCK = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _clock_or_none(v: Optional[str]) -> Optional[str]:
    if v in (None, ""):
        return None
    if not _CLOCK.match(v):
        raise ValueError("time_of_service must be HH:MM")
    return v


class DiagnosisEntry(BaseModel):
    code: str
    description: str = ""


class NoteInput(BaseModel):
    """Form payload shared by draft saves and signing."""
    note_type: NoteType = NoteType.PROGRESS_NOTE
    note_style: NoteStyle = NoteStyle.SOAP
    appointment_id: Optional[int] = None
    date_of_service: Optional[date] = None
    time_of_service: Optional[str] = None
    duration: Optional[int] = Field(default=50, ge=0, le=1440)
    cpt_code: Optional[str] = "90834"
    session_type: Optional[str] = "individual"
    diagnoses: List[DiagnosisEntry] = []
    clinician_name: Optional[str] = None
    clinician_credentials: Optional[str] = None
    provider_license: Optional[str] = None
    fields: Dict[str, Any] = {}

    @field_validator("time_of_service")
    def check_clock(cls, v):
        return _clock_or_none(v)


class SignNoteRequest(NoteInput):
    signature_name: str = ""


class ChartNoteCreate(BaseModel):
    content: str = ""
    date_of_service: Optional[date] = None
    time_of_service: Optional[str] = None
    clinician_name: Optional[str] = None

    @field_validator("time_of_service")
    def check_clock(cls, v):
        return _clock_or_none(v)


class NoteUpdate(BaseModel):
    note_style: Optional[NoteStyle] = None
    appointment_id: Optional[int] = None
    date_of_service: Optional[date] = None
    time_of_service: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0, le=1440)
    cpt_code: Optional[str] = None
    session_type: Optional[str] = None
    diagnoses: Optional[List[DiagnosisEntry]] = None
    clinician_name: Optional[str] = None
    clinician_credentials: Optional[str] = None
    provider_license: Optional[str] = None
    fields: Optional[Dict[str, Any]] = None

    @field_validator("time_of_service")
    def check_clock(cls, v):
        return _clock_or_none(v)


class NoteResponse(BaseModel):
    id: int
    patient_id: int
    location_id: str
    note_type: str
    note_style: str
    status: NOTE_STATUS
    appointment_id: Optional[int] = None
    date_of_service: Optional[date] = None
    time_of_service: Optional[str] = None
    session_date: Optional[str] = None
    session_time: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[int] = None
    cpt_code: Optional[str] = None
    session_type: Optional[str] = None
    diagnosis: Optional[str] = None
    clinician_name: Optional[str] = None
    clinician_credentials: Optional[str] = None
    provider_license: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    fields: Dict[str, Any] = {}
    signed_by: Optional[str] = None
    signed_at: Optional[datetime] = None
    signer_ip: Optional[str] = None
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    is_locked: bool = False

    model_config = ConfigDict(from_attributes=True)

    @field_validator("start_time", "end_time", "signed_at", "created_at", "updated_at", mode="before")
    def stored_as_utc(cls, v):
        return from_db(v) if isinstance(v, datetime) else v

    @field_validator("fields", mode="before")
    def empty_fields(cls, v):
        return v or {}


class DraftResponse(BaseModel):
    draft: Optional[NoteResponse] = None


class NoteListResponse(BaseModel):
    notes: List[NoteResponse]


class MessageResponse(BaseModel):
    message: str
