# app/audit/routes.py
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.audit.audit_service import (
    audit_event_for,
    audit_stats,
    export_audit_logs,
    list_audit_logs,
    record_audit_event,
)
from app.database.connection import get_db
from app.helpers.time import practice_now
from app.system_models.audit_log_model.audit_log_schemas import (
    AuditEventCreate,
    AuditLogListResponse,
    AuditStatsResponse,
)
from app.users.auth_dependencies import RequestContext, get_admin_context, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/audit-logs", status_code=202)
async def create_audit_log_endpoint(
    event: AuditEventCreate,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
):
    """Client-side events such as viewing or printing a note."""
    background_tasks.add_task(
        record_audit_event,
        **audit_event_for(ctx, event.action, event.resource_type, **event.model_dump(exclude={"action", "resource_type"})),
    )
    return {"message": "Audit event accepted"}


@router.get("/audit-logs", response_model=AuditLogListResponse)
async def list_audit_logs_endpoint(
    user_id: Optional[int] = Query(None, alias="userId"),
    patient_id: Optional[str] = Query(None, alias="patientId"),
    resource_type: Optional[str] = Query(None, alias="resourceType"),
    action: Optional[str] = None,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await list_audit_logs(
            db,
            page=page,
            limit=limit,
            location_id=ctx.location_id,
            user_id=user_id,
            patient_id=patient_id,
            resource_type=resource_type,
            action=action,
            start_date=start_date,
            end_date=end_date,
            search=search,
        )
    except Exception as e:
        logger.error("Error fetching audit logs", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/audit-logs/stats", response_model=AuditStatsResponse)
async def audit_stats_endpoint(
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await audit_stats(db, location_id=ctx.location_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/audit-logs/export")
async def export_audit_logs_endpoint(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        csv_text = await export_audit_logs(db, location_id=ctx.location_id, start_date=start_date, end_date=end_date)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    filename = f"audit-logs-{practice_now().date().isoformat()}.csv"
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/patients/{patient_id}/audit-logs", response_model=AuditLogListResponse)
async def patient_audit_logs_endpoint(
    patient_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await list_audit_logs(db, page=page, limit=limit, location_id=ctx.location_id, patient_id=str(patient_id))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
