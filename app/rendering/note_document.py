# app/rendering/note_document.py
"""
Printable view of a note.

``build_note_document`` flattens a note, its patient and the practice header
into plain strings so the HTML and PDF renderers only lay text out.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Mapping, Optional, Tuple

from config.appconfig import settings
from app.helpers.time import add_minutes, combine, from_db, parse_clock, to_practice_local
from app.notes.diagnosis_codes import format_diagnosis, parse_diagnoses
from app.notes.note_styles import SECTION_HEADERS, NoteType
from app.reference.cpt_codes import describe_cpt

RISK_ITEMS = (
    ("suicidal_ideation", "Suicidal Ideation"),
    ("homicidal_ideation", "Homicidal Ideation"),
    ("self_harm_behavior", "Self-Harm"),
)
RISK_DEFAULT = "Denied"

TITLES = {
    NoteType.PROGRESS_NOTE.value: "Progress Note",
    NoteType.CHART_NOTE.value: "Chart Note",
    NoteType.DIAGNOSIS_TREATMENT.value: "Diagnosis & Treatment Plan",
}


@dataclass
class NoteSection:
    header: Optional[str]
    body: str


@dataclass
class NoteDocument:
    title: str
    status: str
    practice_name: str
    practice_address: Optional[str]
    practice_phone: Optional[str]
    patient_name: str
    patient_dob: str
    provider: str
    provider_license: Optional[str]
    session_type: str
    session_date: str
    time_range: str
    duration: Optional[int]
    billing_line: Optional[str]
    diagnoses: List[str] = field(default_factory=list)
    sections: List[NoteSection] = field(default_factory=list)
    risk: Optional[List[Tuple[str, str]]] = None
    is_signed: bool = False
    signature_name: str = ""
    signature_date: Optional[str] = None
    signature_time: Optional[str] = None
    signer_ip: Optional[str] = None
    footer: str = ""

    @property
    def risk_line(self) -> str:
        return " | ".join(f"{label}: {value}" for label, value in (self.risk or []))


# ============================================================
# ✅ FORMATTERS
# ============================================================
def format_long_date(value: Optional[date]) -> str:
    """June 10, 2025"""
    if value is None:
        return ""
    return f"{value:%B} {value.day}, {value.year}"


def format_clock(value: Optional[datetime]) -> str:
    """2:05 PM"""
    if value is None:
        return ""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def _local(value: Optional[datetime]) -> Optional[datetime]:
    return to_practice_local(from_db(value))


def session_window(note) -> Tuple[Optional[datetime], Optional[datetime]]:
    start = _local(note.start_time)
    end = _local(note.end_time)
    if start is None and note.date_of_service and parse_clock(note.time_of_service):
        start = combine(note.date_of_service, parse_clock(note.time_of_service))
    if end is None and start is not None and note.duration:
        end = add_minutes(start, note.duration)
    return start, end


def split_sections(content: Optional[str]) -> List[NoteSection]:
    """Split assembled content back into its labeled blocks."""
    sections: List[NoteSection] = []
    for block in (content or "").split("\n\n"):
        if not block.strip():
            continue
        first, _, rest = block.partition("\n")
        header = first.rstrip(":")
        if first.endswith(":") and header in SECTION_HEADERS:
            sections.append(NoteSection(header=header, body=rest))
        else:
            sections.append(NoteSection(header=None, body=block))
    return sections


def risk_assessment(fields: Mapping[str, Any]) -> Optional[List[Tuple[str, str]]]:
    """The risk rows, or None when every item is Denied."""
    values = [(label, str(fields.get(key) or RISK_DEFAULT)) for key, label in RISK_ITEMS]
    if all(value == RISK_DEFAULT for _, value in values):
        return None
    return values


# ============================================================
# ✅ DOCUMENT
# ============================================================
def build_note_document(note, patient, practice) -> NoteDocument:
    fields = note.fields or {}
    start, end = session_window(note)
    session_day = start.date() if start else note.date_of_service

    time_range = ""
    if start:
        time_range = format_clock(start)
        if end:
            time_range = f"{time_range} - {format_clock(end)}"
        time_range = f"{time_range} {settings.PRACTICE_TIMEZONE_LABEL}"

    billing_line = None
    if note.cpt_code:
        billing_line = f"{note.cpt_code} - {describe_cpt(note.cpt_code)}"

    provider = note.clinician_name or note.created_by_name or ""
    if note.clinician_credentials:
        provider = f"{provider}, {note.clinician_credentials}"

    is_signed = note.status == "signed" and bool(note.signed_by)
    signed_at = _local(note.signed_at)
    created_at = _local(note.created_at)
    updated_at = _local(note.updated_at) or created_at

    footer = ""
    if created_at:
        footer = (
            f"Created on {format_long_date(created_at.date())} at {format_clock(created_at)}. "
            f"Last updated on {format_long_date(updated_at.date())} at {format_clock(updated_at)}."
        )

    return NoteDocument(
        title=TITLES.get(note.note_type, "Progress Note"),
        status=note.status,
        practice_name=practice.name or settings.PRACTICE_NAME,
        practice_address=practice.address,
        practice_phone=practice.phone,
        patient_name=patient.full_name,
        patient_dob=format_long_date(patient.dob),
        provider=provider,
        provider_license=note.provider_license,
        session_type=(note.session_type or "individual").capitalize(),
        session_date=format_long_date(session_day),
        time_range=time_range,
        duration=note.duration,
        billing_line=billing_line,
        diagnoses=[format_diagnosis(dx) for dx in parse_diagnoses(note.diagnosis)],
        sections=split_sections(note.content),
        risk=risk_assessment(fields) if note.note_type == NoteType.PROGRESS_NOTE.value else None,
        is_signed=is_signed,
        signature_name=note.signed_by or note.clinician_name or "",
        signature_date=format_long_date(signed_at.date()) if is_signed and signed_at else None,
        signature_time=f"{format_clock(signed_at)} {settings.PRACTICE_TIMEZONE_LABEL}" if is_signed and signed_at else None,
        signer_ip=note.signer_ip if is_signed else None,
        footer=footer,
    )
