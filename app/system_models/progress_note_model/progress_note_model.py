# app/system_models/progress_note_model/progress_note_model.py
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, JSON, ForeignKey, CheckConstraint, Index, text
from sqlalchemy.orm import relationship
from app.database.connection import Base
from app.helpers.time import utcnow

LOCKED_STATUSES = ("signed", "completed")

class ProgressNote(Base):
    __tablename__ = "progress_notes"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    location_id = Column(String, nullable=False, index=True)

    note_type = Column(String, default="progress_note", nullable=False)
    note_style = Column(String, default="soap", nullable=False)
    status = Column(String, default="draft", nullable=False, index=True)

    # Explicit link to the calendar appointment this note documents
    appointment_id = Column(Integer, nullable=True)

    # Service date/time as entered (practice-local wall clock)
    date_of_service = Column(Date, nullable=True)
    time_of_service = Column(String, nullable=True)  # HH:MM
    session_date = Column(String, nullable=True)
    session_time = Column(String, nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    duration = Column(Integer, nullable=True)  # minutes

    cpt_code = Column(String, nullable=True)
    session_type = Column(String, nullable=True)
    diagnosis = Column(Text, nullable=True)  # "CODE - description" lines

    clinician_name = Column(String, nullable=True)
    clinician_credentials = Column(String, nullable=True)
    provider_license = Column(String, nullable=True)

    content = Column(Text, nullable=True)
    summary = Column(String, nullable=True)
    fields = Column(JSON, nullable=False, default=dict)

    signed_by = Column(String, nullable=True)
    signed_at = Column(DateTime(timezone=True), nullable=True)
    signer_ip = Column(String, nullable=True)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_by_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("status IN ('draft', 'signed', 'completed')", name="check_note_status_values"),
        CheckConstraint(
            "note_type IN ('progress_note', 'chart_note', 'diagnosis_treatment')",
            name="check_note_type_values",
        ),
        # One draft slot per patient
        Index(
            "uq_progress_notes_one_draft_per_patient",
            "patient_id",
            unique=True,
            sqlite_where=text("status = 'draft'"),
            postgresql_where=text("status = 'draft'"),
        ),
    )

    patient = relationship("Patient", back_populates="notes")
    author = relationship("User")

    @property
    def is_locked(self) -> bool:
        return self.status in LOCKED_STATUSES

    def __repr__(self):
        return f"<ProgressNote {self.id}: patient={self.patient_id} {self.note_type}/{self.status}>"
