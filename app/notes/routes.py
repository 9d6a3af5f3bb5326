# app/notes/routes.py
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.audit.audit_service import audit_event_for, record_audit_event
from app.database.connection import get_db
from app.helpers.exceptions import ChartError, to_http_exception
from app.notes.note_lifecycle import (
    create_chart_note,
    delete_note,
    discard_draft,
    get_visible_draft,
    get_note,
    list_notes,
    save_draft,
    sign_note,
    update_note,
)
from app.system_models.progress_note_model.progress_note_schemas import (
    ChartNoteCreate,
    DraftResponse,
    MessageResponse,
    NoteInput,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
    SignNoteRequest,
)
from app.system_services.create_patient import get_patient
from app.users.auth_dependencies import RequestContext, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter()


def _note_audit(ctx, action: str, note, patient_name: str, description: str):
    return audit_event_for(
        ctx, action, "progress_note",
        resource_id=str(note.id),
        patient_id=note.patient_id,
        patient_name=patient_name,
        description=description,
        details={"note_type": note.note_type, "status": note.status},
    )


# ===== ✅ DRAFT SLOT =====
@router.get("/patients/{patient_id}/draft", response_model=DraftResponse)
async def get_draft_endpoint(
    patient_id: int,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        await get_patient(db, patient_id, ctx.location_id)
        return DraftResponse(draft=await get_visible_draft(db, patient_id, ctx))
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/patients/{patient_id}/draft", response_model=NoteResponse)
async def save_draft_endpoint(
    patient_id: int,
    payload: NoteInput,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Create or overwrite the patient's draft."""
    try:
        patient = await get_patient(db, patient_id, ctx.location_id)
        return await save_draft(db, patient, payload, ctx)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to save draft for patient {patient_id}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/patients/{patient_id}/draft", response_model=MessageResponse)
async def discard_draft_endpoint(
    patient_id: int,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        await get_patient(db, patient_id, ctx.location_id)
        discarded = await discard_draft(db, patient_id)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse(message="Draft discarded" if discarded else "No draft to discard")


# ===== ✅ SIGN / CHART NOTE =====
@router.post("/patients/{patient_id}/notes/sign", response_model=NoteResponse, status_code=201)
async def sign_note_endpoint(
    patient_id: int,
    payload: SignNoteRequest,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Sign the current draft (or the submitted form when there is none)."""
    try:
        patient = await get_patient(db, patient_id, ctx.location_id)
        note = await sign_note(db, patient, payload, ctx)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to sign note for patient {patient_id}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **_note_audit(ctx, "SIGN", note, patient.full_name, f"Signed {note.note_type.replace('_', ' ')} for {patient.full_name}"),
    )
    return note


@router.post("/patients/{patient_id}/chart-notes", response_model=NoteResponse, status_code=201)
async def create_chart_note_endpoint(
    patient_id: int,
    payload: ChartNoteCreate,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        patient = await get_patient(db, patient_id, ctx.location_id)
        note = await create_chart_note(db, patient, payload, ctx)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **_note_audit(ctx, "CREATE", note, patient.full_name, f"Added chart note for {patient.full_name}"),
    )
    return note


# ===== ✅ NOTES COLLECTION =====
@router.get("/patients/{patient_id}/notes", response_model=NoteListResponse)
async def list_notes_endpoint(
    patient_id: int,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        await get_patient(db, patient_id, ctx.location_id)
        return NoteListResponse(notes=await list_notes(db, patient_id, ctx))
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/notes/{note_id}", response_model=NoteResponse)
async def get_note_endpoint(
    note_id: int,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await get_note(db, note_id, ctx)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/notes/{note_id}", response_model=NoteResponse)
async def update_note_endpoint(
    note_id: int,
    changes: NoteUpdate,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Edit a draft. Signed and completed notes answer 409."""
    try:
        note = await update_note(db, note_id, changes, ctx)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **_note_audit(ctx, "UPDATE", note, None, f"Updated note {note.id}"),
    )
    return note


@router.delete("/notes/{note_id}", response_model=MessageResponse)
async def delete_note_endpoint(
    note_id: int,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        note = await delete_note(db, note_id, ctx)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **_note_audit(ctx, "DELETE", note, None, f"Deleted note {note_id}"),
    )
    return MessageResponse(message="Note deleted")
