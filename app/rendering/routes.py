# app/rendering/routes.py
import logging
from typing import Literal

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.audit.audit_service import audit_event_for, record_audit_event
from app.billing.billing_service import get_practice_info
from app.database.connection import get_db
from app.helpers.exceptions import ChartError, to_http_exception
from app.notes.note_lifecycle import get_note
from app.rendering.note_document import build_note_document
from app.rendering.note_pdf import render_note_pdf
from app.rendering.note_renderer import render_note_html
from app.system_services.create_patient import get_patient
from app.users.auth_dependencies import RequestContext, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/notes/{note_id}/render")
async def render_note_endpoint(
    note_id: int,
    background_tasks: BackgroundTasks,
    output_format: Literal["html", "pdf"] = Query("html", alias="format"),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Printable note as an HTML page or a PDF download."""
    try:
        note = await get_note(db, note_id, ctx)
        patient = await get_patient(db, note.patient_id, ctx.location_id)
        practice = await get_practice_info(db, ctx.location_id)
        document = build_note_document(note, patient, practice)
        body = render_note_pdf(document) if output_format == "pdf" else render_note_html(document)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to render note {note_id}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **audit_event_for(
            ctx, "VIEW", "progress_note",
            resource_id=str(note_id),
            patient_id=patient.id,
            patient_name=patient.full_name,
            description=f"Viewed {document.title.lower()} ({output_format})",
        ),
    )

    if output_format == "pdf":
        filename = f"note-{note_id}.pdf"
        return Response(
            content=body,
            media_type="application/pdf",
            headers={"Content-Disposition": f"inline; filename={filename}"},
        )
    return HTMLResponse(content=body)
