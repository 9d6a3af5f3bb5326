# app/system_models/patient_model/patient_schemas.py
from typing import Optional, Literal
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, EmailStr

GENDER = Literal["male", "female", "other"]

class PatientBase(BaseModel):
    first_name: str
    last_name: str
    dob: Optional[date] = None
    gender: Optional[GENDER] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

class PatientCreate(PatientBase):
    pass

class PatientUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[GENDER] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

class PatientResponse(PatientBase):
    id: int
    location_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class AdminNotesUpdate(BaseModel):
    admin_notes: str = ""

class AdminNotesResponse(BaseModel):
    patient_id: int
    admin_notes: str = ""
