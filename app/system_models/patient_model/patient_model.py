# app/system_models/patient_model/patient_model.py
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, CheckConstraint
from sqlalchemy.orm import relationship
from app.database.connection import Base
from app.helpers.time import utcnow

class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(String, nullable=False, index=True)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    dob = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    # Free-text administrative notes, separate from the clinical record
    admin_notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("gender IN ('male', 'female', 'other')", name="check_gender_values"),
    )

    appointments = relationship("Appointment", back_populates="patient", cascade="all, delete-orphan")
    notes = relationship("ProgressNote", back_populates="patient", cascade="all, delete-orphan")
    diagnosis_record = relationship(
        "PatientDiagnosis", back_populates="patient", uselist=False, cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return f"<Patient {self.id}: {self.first_name} {self.last_name}>"
