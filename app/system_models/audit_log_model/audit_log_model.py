# app/system_models/audit_log_model/audit_log_model.py
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from app.database.connection import Base
from app.helpers.time import utcnow

class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, index=True)

    action = Column(String, nullable=False, index=True)  # LOGIN, VIEW, CREATE, UPDATE, SIGN, DELETE, EXPORT
    resource_type = Column(String, nullable=False, index=True)
    resource_id = Column(String, nullable=True)

    patient_id = Column(String, nullable=True, index=True)
    patient_name = Column(String, nullable=True)

    user_id = Column(Integer, nullable=True, index=True)
    user_name = Column(String, nullable=True)
    user_email = Column(String, nullable=True)
    location_id = Column(String, nullable=True, index=True)

    description = Column(Text, nullable=True)
    details = Column(JSON, nullable=True)
    ip_address = Column(String, nullable=True)
