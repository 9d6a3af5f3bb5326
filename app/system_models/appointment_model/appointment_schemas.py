# app/system_models/appointment_model/appointment_schemas.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from app.helpers.time import from_db, to_utc

class AppointmentBase(BaseModel):
    patient_id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    title: Optional[str] = None
    appointment_status: str = "confirmed"
    appointment_notes: Optional[str] = None
    external_id: Optional[str] = None

    @model_validator(mode="after")
    def check_end_after_start(self):
        if self.end_time and to_utc(self.end_time) < to_utc(self.start_time):
            raise ValueError("end_time must not be before start_time")
        return self

class AppointmentCreate(AppointmentBase):
    pass

class AppointmentResponse(AppointmentBase):
    id: int
    location_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("start_time", "end_time", "created_at", "updated_at", mode="before")
    def stored_as_utc(cls, v):
        return from_db(v) if isinstance(v, datetime) else v
