# app/system_models/patient_diagnosis_model/patient_diagnosis_model.py
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from app.database.connection import Base
from app.helpers.time import utcnow

class PatientDiagnosis(Base):
    """Current diagnosis list and treatment plan for one patient."""
    __tablename__ = "patient_diagnoses"

    id = Column(Integer, primary_key=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, unique=True)

    diagnosis = Column(Text, nullable=True)  # "CODE - description" lines
    treatment_plan = Column(JSON, nullable=True)

    updated_by = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    patient = relationship("Patient", back_populates="diagnosis_record")
