# app/timeline/routes.py
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from config.appconfig import settings
from app.database.connection import get_db
from app.helpers.exceptions import ChartError, to_http_exception
from app.helpers.time import practice_now
from app.notes.note_lifecycle import list_notes
from app.system_services.create_appointment import list_appointments
from app.system_services.create_patient import get_patient
from app.timeline.timeline_builder import (
    DateRange,
    DateRangePreset,
    TimelineAppointment,
    TimelineEntry,
    TimelineNote,
    build_timeline,
)
from app.timeline.timeline_schemas import (
    TimelineEntryResponse,
    TimelineNoteSummary,
    TimelineResponse,
    TimelineYearGroup,
)
from app.users.auth_dependencies import RequestContext, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter()


def _entry_response(entry: TimelineEntry) -> TimelineEntryResponse:
    note = None
    if entry.note is not None:
        note = TimelineNoteSummary(
            id=entry.note.id,
            note_type=entry.note.note_type,
            status=entry.note.status,
            summary=entry.note.summary,
            cpt_code=entry.note.cpt_code,
            signed_by=entry.note.signed_by,
        )
    appointment = entry.appointment
    return TimelineEntryResponse(
        key=entry.key,
        kind=entry.kind,
        timestamp=entry.timestamp,
        day=entry.day,
        session_number=entry.session_number,
        is_numbered=entry.is_numbered,
        has_note=entry.has_note,
        needs_note=entry.needs_note,
        appointment_id=appointment.id if appointment else None,
        appointment_title=appointment.title if appointment else None,
        appointment_status=appointment.status if appointment else None,
        note=note,
    )


@router.get("/patients/{patient_id}/timeline", response_model=TimelineResponse)
async def patient_timeline_endpoint(
    patient_id: int,
    date_range: DateRangePreset = Query(DateRangePreset.ALL, alias="range"),
    start: Optional[date] = None,
    end: Optional[date] = None,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Appointments and notes merged into one numbered visit history."""
    try:
        await get_patient(db, patient_id, ctx.location_id)
        appointments = await list_appointments(db, ctx.location_id, patient_id=patient_id)
        notes = await list_notes(db, patient_id, ctx)

        timeline = build_timeline(
            [TimelineAppointment.from_model(a) for a in appointments],
            [TimelineNote.from_model(n) for n in notes],
            DateRange(preset=date_range, start=start, end=end),
            now=practice_now(),
        )
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error building timeline for patient {patient_id}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    entries = [_entry_response(entry) for entry in timeline.entries]
    by_key = {entry.key: entry for entry in entries}
    return TimelineResponse(
        patient_id=patient_id,
        range=date_range.value,
        start=start,
        end=end,
        timezone=settings.PRACTICE_TIMEZONE_LABEL,
        total_entries=len(entries),
        numbered_visits=timeline.numbered_visits,
        needs_note_count=timeline.needs_note_count,
        entries=entries,
        years=[
            TimelineYearGroup(year=year, entries=[by_key[e.key] for e in group])
            for year, group in timeline.by_year()
        ],
    )
