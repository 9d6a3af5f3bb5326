# app/users/user_models/user_model.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from app.database.connection import Base
from app.helpers.time import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    role = Column(String, default="clinician", nullable=False)

    # Home location used when a request carries no location scope
    location_id = Column(String, nullable=True, index=True)

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    credentials = Column(String, nullable=True)  # e.g. "LCSW", "LPC"
    license_number = Column(String, nullable=True)
    npi = Column(String, nullable=True)

    tokens = relationship("Token", back_populates="user")

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'clinician')", name='check_role_values'),
    )

    @property
    def full_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
