# app/system_services/create_patient.py
from typing import List

from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.exceptions import PatientNotFoundError
from app.system_models.patient_model.patient_model import Patient
from app.system_models.patient_model.patient_schemas import PatientCreate, PatientUpdate


async def create_patient(
    db: AsyncSession,
    patient: PatientCreate,
    location_id: str,
):
    """Create a new patient."""
    db_patient = Patient(**patient.model_dump(), location_id=location_id)
    db.add(db_patient)
    await db.commit()
    await db.refresh(db_patient)
    return db_patient


async def list_patients(db: AsyncSession, location_id: str) -> List[Patient]:
    result = await db.execute(
        select(Patient)
        .where(Patient.location_id == location_id)
        .order_by(Patient.last_name, Patient.first_name)
    )
    return result.scalars().all()


async def get_patient(db: AsyncSession, patient_id: int, location_id: str) -> Patient:
    """Fetch a patient in the caller's location."""
    result = await db.execute(
        select(Patient).where(Patient.id == patient_id, Patient.location_id == location_id)
    )
    patient = result.scalars().first()
    if not patient:
        raise PatientNotFoundError(patient_id)
    return patient


async def update_patient(db: AsyncSession, patient_id: int, location_id: str, changes: PatientUpdate) -> Patient:
    patient = await get_patient(db, patient_id, location_id)
    for key, value in changes.model_dump(exclude_unset=True).items():
        setattr(patient, key, value)
    await db.commit()
    await db.refresh(patient)
    return patient


async def set_admin_notes(db: AsyncSession, patient_id: int, location_id: str, admin_notes: str) -> Patient:
    patient = await get_patient(db, patient_id, location_id)
    patient.admin_notes = admin_notes
    await db.commit()
    await db.refresh(patient)
    return patient
