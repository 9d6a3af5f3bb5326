# app/system_services/patient_diagnosis.py
from typing import Any, Dict

from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.notes.diagnosis_codes import add_diagnosis, parse_diagnoses, serialize_diagnoses
from app.reference.treatment_plans import format_treatment_plan_summary
from app.system_models.patient_diagnosis_model.patient_diagnosis_model import PatientDiagnosis
from app.system_models.patient_diagnosis_model.patient_diagnosis_schemas import PatientDiagnosisUpdate
from app.system_services.create_patient import get_patient


def _as_response(patient_id: int, record: PatientDiagnosis = None) -> Dict[str, Any]:
    if record is None:
        return {"patient_id": patient_id, "diagnosis": "", "diagnoses": []}
    return {
        "patient_id": patient_id,
        "diagnosis": record.diagnosis or "",
        "diagnoses": parse_diagnoses(record.diagnosis),
        "treatment_plan": record.treatment_plan,
        "treatment_plan_summary": format_treatment_plan_summary(record.treatment_plan),
        "updated_by": record.updated_by,
        "updated_at": record.updated_at,
    }


async def _find(db: AsyncSession, patient_id: int):
    result = await db.execute(select(PatientDiagnosis).where(PatientDiagnosis.patient_id == patient_id))
    return result.scalars().first()


async def get_patient_diagnosis(db: AsyncSession, patient_id: int, location_id: str) -> Dict[str, Any]:
    await get_patient(db, patient_id, location_id)
    return _as_response(patient_id, await _find(db, patient_id))


async def save_patient_diagnosis(
    db: AsyncSession,
    patient_id: int,
    location_id: str,
    payload: PatientDiagnosisUpdate,
    updated_by: str = None,
) -> Dict[str, Any]:
    await get_patient(db, patient_id, location_id)

    selection = []
    for dx in payload.diagnoses:
        selection = add_diagnosis(selection, dx.model_dump())

    record = await _find(db, patient_id)
    if record is None:
        record = PatientDiagnosis(patient_id=patient_id)
        db.add(record)
    record.diagnosis = serialize_diagnoses(selection)
    if payload.treatment_plan is not None:
        record.treatment_plan = payload.treatment_plan.model_dump()
    record.updated_by = updated_by
    await db.commit()
    await db.refresh(record)
    return _as_response(patient_id, record)
