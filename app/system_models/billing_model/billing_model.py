# app/system_models/billing_model/billing_model.py
from sqlalchemy import Column, Integer, String, DateTime, JSON, UniqueConstraint
from app.database.connection import Base
from app.helpers.time import utcnow

class FeeSchedule(Base):
    """CPT code to charge amount, one schedule per location."""
    __tablename__ = "fee_schedules"

    id = Column(Integer, primary_key=True)
    location_id = Column(String, nullable=False, unique=True)
    fees = Column(JSON, nullable=False, default=dict)
    updated_by = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

class CustomPayer(Base):
    __tablename__ = "custom_payers"

    id = Column(Integer, primary_key=True)
    location_id = Column(String, nullable=False, index=True)
    payer_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("location_id", "payer_id", name="uq_custom_payer_location"),
    )

class PracticeInfo(Base):
    """Practice header printed on notes."""
    __tablename__ = "practice_info"

    id = Column(Integer, primary_key=True)
    location_id = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    npi = Column(String, nullable=True)
    tax_id = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    fax = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
