# app/notes/note_lifecycle.py
"""
Draft/sign lifecycle for clinical notes.

    absent -> draft -> signed

A draft is an ordinary row in the notes table with ``status='draft'``; there
is at most one per patient, so the draft slot and the notes collection never
disagree. ``signed`` and ``completed`` (quick chart notes) are terminal: the
row can be read but never changed or deleted.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.exceptions import (
    InvalidNoteTransitionError,
    NoteAccessDeniedError,
    NoteLockedError,
    NoteNotFoundError,
    NoteValidationError,
)
from app.helpers.time import add_minutes, combine, parse_clock, practice_now, to_utc, utcnow
from app.notes.diagnosis_codes import add_diagnosis, parse_diagnoses, serialize_diagnoses
from app.notes.note_styles import (
    NoteStyle,
    NoteType,
    build_content_for_note,
    missing_required_fields,
    summarize,
)
from app.system_models.patient_model.patient_model import Patient
from app.system_models.progress_note_model.progress_note_model import LOCKED_STATUSES, ProgressNote
from app.system_models.progress_note_model.progress_note_schemas import (
    ChartNoteCreate,
    NoteInput,
    NoteUpdate,
    SignNoteRequest,
)

logger = logging.getLogger(__name__)

DRAFT = "draft"
SIGNED = "signed"
COMPLETED = "completed"

# Allowed status changes; None is a note that does not exist yet
TRANSITIONS = {
    None: {DRAFT, SIGNED, COMPLETED},
    DRAFT: {DRAFT, SIGNED},
    SIGNED: set(),
    COMPLETED: set(),
}

# Columns a draft save writes; created_by stays with the row's first author
DRAFT_COLUMNS = (
    "note_type", "note_style", "appointment_id", "date_of_service", "time_of_service",
    "duration", "cpt_code", "session_type", "fields", "diagnosis",
    "session_date", "session_time", "start_time", "end_time", "content", "summary",
    "clinician_name", "clinician_credentials", "provider_license", "updated_at",
)


def check_transition(note: Optional[ProgressNote], target: str) -> None:
    current = note.status if note is not None else None
    if current in LOCKED_STATUSES:
        raise NoteLockedError(note.id, current)
    if target not in TRANSITIONS.get(current, set()):
        raise InvalidNoteTransitionError(f"Cannot move note from {current or 'absent'} to {target}")


def ensure_mutable(note: ProgressNote) -> None:
    if note.is_locked:
        raise NoteLockedError(note.id, note.status)


# ============================================================
# ✅ FIELD ASSEMBLY
# ============================================================
def derive_schedule(
    date_of_service: Optional[date],
    time_of_service: Optional[str],
    duration: Optional[int],
) -> Dict[str, Any]:
    """Session date/time columns derived from the service date, clock time and duration."""
    if date_of_service is None:
        return {"session_date": None, "session_time": time_of_service, "start_time": None, "end_time": None}

    clock = parse_clock(time_of_service)
    start = combine(date_of_service, clock) if clock else None
    end = add_minutes(start, duration) if start is not None and duration else None
    return {
        "session_date": date_of_service.isoformat(),
        "session_time": time_of_service,
        "start_time": to_utc(start),
        "end_time": to_utc(end),
    }


def _selected_diagnoses(entries) -> List[Dict[str, str]]:
    selection: List[Dict[str, str]] = []
    for dx in entries or []:
        selection = add_diagnosis(selection, dx.model_dump() if hasattr(dx, "model_dump") else dx)
    return selection


def _apply_input(note: ProgressNote, payload: NoteInput) -> List[Dict[str, str]]:
    selection = _selected_diagnoses(payload.diagnoses)

    note.note_type = NoteType(payload.note_type).value
    note.note_style = NoteStyle(payload.note_style).value
    note.appointment_id = payload.appointment_id
    note.date_of_service = payload.date_of_service
    note.time_of_service = payload.time_of_service
    note.duration = payload.duration
    note.cpt_code = payload.cpt_code
    note.session_type = payload.session_type
    note.clinician_name = payload.clinician_name
    note.clinician_credentials = payload.clinician_credentials
    note.provider_license = payload.provider_license
    note.fields = dict(payload.fields or {})
    note.diagnosis = serialize_diagnoses(selection)

    for key, value in derive_schedule(payload.date_of_service, payload.time_of_service, payload.duration).items():
        setattr(note, key, value)

    note.content = build_content_for_note(note.note_type, note.note_style, note.fields, note.diagnosis)
    note.summary = summarize(note.content)
    return selection


def _stamp_author(note: ProgressNote, ctx) -> None:
    if note.created_by is None:
        note.created_by = ctx.user.id
        note.created_by_name = ctx.user.full_name
    if not note.clinician_name:
        note.clinician_name = ctx.user.full_name
    if not note.clinician_credentials:
        note.clinician_credentials = ctx.user.credentials
    if not note.provider_license:
        note.provider_license = ctx.user.license_number


# ============================================================
# ✅ QUERIES
# ============================================================
def _visible_to(query, ctx):
    if ctx.is_admin:
        return query
    return query.where(or_(ProgressNote.created_by == ctx.user.id, ProgressNote.created_by.is_(None)))


def _check_visible(note: ProgressNote, ctx) -> None:
    if not ctx.is_admin and note.created_by is not None and note.created_by != ctx.user.id:
        raise NoteAccessDeniedError(note.id)


async def get_draft(db: AsyncSession, patient_id: int) -> Optional[ProgressNote]:
    result = await db.execute(
        select(ProgressNote)
        .where(ProgressNote.patient_id == patient_id, ProgressNote.status == DRAFT)
        .order_by(ProgressNote.updated_at.desc())
    )
    return result.scalars().first()


async def list_notes(db: AsyncSession, patient_id: int, ctx) -> List[ProgressNote]:
    """Notes for a patient, newest service date first. Non-admins see only their own notes."""
    query = select(ProgressNote).where(
        ProgressNote.patient_id == patient_id,
        ProgressNote.location_id == ctx.location_id,
    )
    result = await db.execute(
        _visible_to(query, ctx).order_by(
            ProgressNote.date_of_service.is_(None),
            ProgressNote.date_of_service.desc(),
            ProgressNote.created_at.desc(),
        )
    )
    return result.scalars().all()


async def get_note(db: AsyncSession, note_id: int, ctx) -> ProgressNote:
    result = await db.execute(
        select(ProgressNote).where(
            ProgressNote.id == note_id,
            ProgressNote.location_id == ctx.location_id,
        )
    )
    note = result.scalars().first()
    if note is None:
        raise NoteNotFoundError(note_id)
    _check_visible(note, ctx)
    return note


async def get_visible_draft(db: AsyncSession, patient_id: int, ctx) -> Optional[ProgressNote]:
    """The draft slot as the caller may see it; another clinician's draft is denied."""
    note = await get_draft(db, patient_id)
    if note is not None:
        _check_visible(note, ctx)
    return note


# ============================================================
# ✅ TRANSITIONS
# ============================================================
async def save_draft(db: AsyncSession, patient: Patient, payload: NoteInput, ctx) -> ProgressNote:
    """
    absent -> draft inserts; draft -> draft overwrites the same row and keeps created_at.

    The unique draft index turns two overlapping first saves into one insert
    and one overwrite, so the last write wins.
    """
    patient_id = patient.id
    note = await get_draft(db, patient_id)
    check_transition(note, DRAFT)

    if note is None:
        note = ProgressNote(
            patient_id=patient.id,
            location_id=patient.location_id,
            status=DRAFT,
            created_at=utcnow(),
        )
        db.add(note)

    _apply_input(note, payload)
    _stamp_author(note, ctx)
    note.updated_at = utcnow()

    try:
        await db.commit()
    except IntegrityError:
        # An overlapping save inserted the draft first; overwrite that row.
        # Rollback expires loaded objects, so copy from the unsaved row.
        await db.rollback()
        pending, note = note, await get_draft(db, patient_id)
        if note is None:
            raise
        for column in DRAFT_COLUMNS:
            setattr(note, column, getattr(pending, column))
        await db.commit()

    await db.refresh(note)
    logger.info(f"Draft {note.id} saved for patient {patient_id}")
    return note


async def sign_note(db: AsyncSession, patient: Patient, payload: SignNoteRequest, ctx) -> ProgressNote:
    """
    draft -> signed (or absent -> signed).

    Required fields for the style and a typed signature name must be present.
    When a draft exists that row becomes the signed note, so the draft slot is
    released in the same commit.
    """
    selection = _selected_diagnoses(payload.diagnoses)
    missing = missing_required_fields(payload.note_type, payload.note_style, payload.fields, selection)
    if missing:
        raise NoteValidationError("Required fields are missing", missing)

    signature_name = (payload.signature_name or "").strip()
    if not signature_name:
        raise NoteValidationError("A typed signature name is required to sign", ["signature_name"])

    if payload.date_of_service is None:
        now = practice_now()
        payload = payload.model_copy(update={
            "date_of_service": now.date(),
            "time_of_service": payload.time_of_service or now.strftime("%H:%M"),
        })

    note = await get_draft(db, patient.id)
    check_transition(note, SIGNED)

    signed_at = utcnow()
    if note is None:
        note = ProgressNote(
            patient_id=patient.id,
            location_id=patient.location_id,
            created_at=signed_at,
        )
        db.add(note)

    _apply_input(note, payload)
    _stamp_author(note, ctx)
    note.status = SIGNED
    note.signed_by = signature_name
    note.signed_at = signed_at
    note.signer_ip = ctx.ip_address or "Unknown"
    note.updated_at = signed_at

    await db.commit()
    await db.refresh(note)
    logger.info(f"Note {note.id} signed by {signature_name} for patient {patient.id}")
    return note


async def discard_draft(db: AsyncSession, patient_id: int) -> bool:
    """Delete the patient's draft. Returns False when there was none."""
    note = await get_draft(db, patient_id)
    if note is None:
        return False
    await db.delete(note)
    await db.commit()
    logger.info(f"Draft {note.id} discarded for patient {patient_id}")
    return True


async def create_chart_note(db: AsyncSession, patient: Patient, payload: ChartNoteCreate, ctx) -> ProgressNote:
    """Quick chart note, stored as completed and read-only."""
    if not payload.content.strip():
        raise NoteValidationError("Chart note content is required", ["chart_note_content"])

    check_transition(None, COMPLETED)
    date_of_service = payload.date_of_service or practice_now().date()
    now = utcnow()
    note = ProgressNote(
        patient_id=patient.id,
        location_id=patient.location_id,
        note_type=NoteType.CHART_NOTE.value,
        note_style=NoteStyle.FREEFORM.value,
        status=COMPLETED,
        date_of_service=date_of_service,
        time_of_service=payload.time_of_service,
        clinician_name=payload.clinician_name,
        fields={"chart_note_content": payload.content},
        content=payload.content,
        summary=summarize(payload.content),
        created_at=now,
        updated_at=now,
    )
    for key, value in derive_schedule(date_of_service, payload.time_of_service, None).items():
        setattr(note, key, value)
    _stamp_author(note, ctx)

    db.add(note)
    await db.commit()
    await db.refresh(note)
    return note


async def update_note(db: AsyncSession, note_id: int, changes: NoteUpdate, ctx) -> ProgressNote:
    """Edit a draft in place. Signed and completed notes are left untouched."""
    note = await get_note(db, note_id, ctx)
    ensure_mutable(note)

    updates = changes.model_dump(exclude_unset=True)
    merged = NoteInput(
        note_type=note.note_type,
        note_style=updates.get("note_style", note.note_style),
        appointment_id=updates.get("appointment_id", note.appointment_id),
        date_of_service=updates.get("date_of_service", note.date_of_service),
        time_of_service=updates.get("time_of_service", note.time_of_service),
        duration=updates.get("duration", note.duration),
        cpt_code=updates.get("cpt_code", note.cpt_code),
        session_type=updates.get("session_type", note.session_type),
        diagnoses=updates["diagnoses"] if "diagnoses" in updates else parse_diagnoses(note.diagnosis),
        clinician_name=updates.get("clinician_name", note.clinician_name),
        clinician_credentials=updates.get("clinician_credentials", note.clinician_credentials),
        provider_license=updates.get("provider_license", note.provider_license),
        fields={**(note.fields or {}), **(updates.get("fields") or {})},
    )
    _apply_input(note, merged)
    note.updated_at = utcnow()

    await db.commit()
    await db.refresh(note)
    return note


async def delete_note(db: AsyncSession, note_id: int, ctx) -> ProgressNote:
    note = await get_note(db, note_id, ctx)
    ensure_mutable(note)
    await db.delete(note)
    await db.commit()
    return note
