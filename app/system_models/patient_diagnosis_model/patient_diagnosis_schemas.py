# app/system_models/patient_diagnosis_model/patient_diagnosis_schemas.py
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, field_validator

from app.helpers.time import from_db
from app.system_models.progress_note_model.progress_note_schemas import DiagnosisEntry

class TreatmentObjective(BaseModel):
    objective: str
    timeframe: str = "4 weeks"

class TreatmentPlan(BaseModel):
    problem: Optional[str] = None
    behaviors: List[str] = []
    long_term_goals: List[str] = []
    objectives: List[TreatmentObjective] = []
    interventions: List[str] = []
    legacy_text: Optional[str] = None

class PatientDiagnosisUpdate(BaseModel):
    diagnoses: List[DiagnosisEntry] = []
    treatment_plan: Optional[TreatmentPlan] = None

class PatientDiagnosisResponse(BaseModel):
    patient_id: int
    diagnosis: str = ""
    diagnoses: List[DiagnosisEntry] = []
    treatment_plan: Optional[TreatmentPlan] = None
    treatment_plan_summary: Optional[str] = None
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None

    @field_validator("updated_at", mode="before")
    def stored_as_utc(cls, v):
        return from_db(v) if isinstance(v, datetime) else v
