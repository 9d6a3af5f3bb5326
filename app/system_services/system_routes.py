# app/system_services/system_routes.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.audit.audit_service import audit_event_for, record_audit_event
from app.database.connection import get_db
from app.helpers.exceptions import ChartError, to_http_exception
from app.system_models.patient_model.patient_schemas import (
    AdminNotesResponse,
    AdminNotesUpdate,
    PatientCreate,
    PatientResponse,
    PatientUpdate,
)
from app.system_models.appointment_model.appointment_schemas import AppointmentCreate, AppointmentResponse
from app.system_models.patient_diagnosis_model.patient_diagnosis_schemas import (
    PatientDiagnosisResponse,
    PatientDiagnosisUpdate,
)
from app.system_services.create_patient import (
    create_patient,
    get_patient,
    list_patients,
    set_admin_notes,
    update_patient,
)
from app.system_services.create_appointment import create_appointment, list_appointments
from app.system_services.patient_diagnosis import get_patient_diagnosis, save_patient_diagnosis
from app.users.auth_dependencies import RequestContext, get_request_context

router = APIRouter()


def _patient_audit(ctx, action: str, patient, description: str, resource_type: str = "patient"):
    return audit_event_for(
        ctx, action, resource_type,
        resource_id=str(patient.id),
        patient_id=patient.id,
        patient_name=patient.full_name,
        description=description,
    )


# ===== ✅ PATIENTS =====
@router.get("/patients", response_model=List[PatientResponse])
async def list_patients_endpoint(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await list_patients(db, ctx.location_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/patients", response_model=PatientResponse, status_code=201)
async def create_patient_endpoint(
    patient: PatientCreate,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Create a new patient."""
    try:
        db_patient = await create_patient(db, patient, ctx.location_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **_patient_audit(ctx, "CREATE", db_patient, f"Created patient {db_patient.full_name}"),
    )
    return db_patient


@router.get("/patients/{patient_id}", response_model=PatientResponse)
async def get_patient_endpoint(
    patient_id: int,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        db_patient = await get_patient(db, patient_id, ctx.location_id)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **_patient_audit(ctx, "VIEW", db_patient, f"Viewed chart for {db_patient.full_name}"),
    )
    return db_patient


@router.put("/patients/{patient_id}/update", response_model=PatientResponse)
async def update_patient_endpoint(
    patient_id: int,
    changes: PatientUpdate,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        db_patient = await update_patient(db, patient_id, ctx.location_id, changes)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **_patient_audit(ctx, "UPDATE", db_patient, f"Updated demographics for {db_patient.full_name}"),
    )
    return db_patient


# ===== ✅ ADMIN NOTES =====
@router.get("/patients/{patient_id}/admin-notes", response_model=AdminNotesResponse)
async def get_admin_notes_endpoint(
    patient_id: int,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        db_patient = await get_patient(db, patient_id, ctx.location_id)
        return AdminNotesResponse(patient_id=db_patient.id, admin_notes=db_patient.admin_notes or "")
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/patients/{patient_id}/admin-notes", response_model=AdminNotesResponse)
async def save_admin_notes_endpoint(
    patient_id: int,
    payload: AdminNotesUpdate,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        db_patient = await set_admin_notes(db, patient_id, ctx.location_id, payload.admin_notes)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **_patient_audit(ctx, "UPDATE", db_patient, "Updated admin notes", resource_type="admin_notes"),
    )
    return AdminNotesResponse(patient_id=db_patient.id, admin_notes=db_patient.admin_notes or "")


# ===== ✅ DIAGNOSIS & TREATMENT PLAN =====
@router.get("/patients/{patient_id}/diagnosis", response_model=PatientDiagnosisResponse)
async def get_diagnosis_endpoint(
    patient_id: int,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await get_patient_diagnosis(db, patient_id, ctx.location_id)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/patients/{patient_id}/diagnosis", response_model=PatientDiagnosisResponse)
async def save_diagnosis_endpoint(
    patient_id: int,
    payload: PatientDiagnosisUpdate,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        record = await save_patient_diagnosis(db, patient_id, ctx.location_id, payload, updated_by=ctx.user.full_name)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **audit_event_for(
            ctx, "UPDATE", "diagnosis",
            resource_id=str(patient_id),
            patient_id=patient_id,
            description=f"Updated diagnosis ({len(record['diagnoses'])} codes)",
        ),
    )
    return record


# ===== ✅ APPOINTMENTS =====
@router.get("/appointments", response_model=List[AppointmentResponse])
async def list_appointments_endpoint(
    patient_id: Optional[int] = Query(None, alias="patientId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await list_appointments(db, ctx.location_id, patient_id=patient_id, start_date=start_date, end_date=end_date)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/appointments", response_model=AppointmentResponse)
async def create_appointment_endpoint(
    appointment: AppointmentCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Import (or refresh) an appointment from the scheduling system."""
    try:
        return await create_appointment(db, appointment, ctx.location_id)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
