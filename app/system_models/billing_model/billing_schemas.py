# app/system_models/billing_model/billing_schemas.py
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class FeeScheduleUpdate(BaseModel):
    fee_schedule: Dict[str, float]

    @field_validator("fee_schedule")
    def non_negative(cls, v):
        for code, amount in v.items():
            if amount < 0:
                raise ValueError(f"fee for {code} must not be negative")
        return v

class FeeScheduleResponse(BaseModel):
    location_id: str
    fee_schedule: Dict[str, float]
    is_default: bool

class ChargeResponse(BaseModel):
    cpt_code: str
    description: str
    amount: Optional[float] = None

class CustomPayerCreate(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

class CustomPayerResponse(BaseModel):
    id: str
    name: str
    custom: bool = True

class CustomPayerListResponse(BaseModel):
    payers: List[CustomPayerResponse]

class PracticeInfoBase(BaseModel):
    name: str
    npi: Optional[str] = None
    tax_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None

class PracticeInfoUpdate(PracticeInfoBase):
    pass

class PracticeInfoResponse(PracticeInfoBase):
    location_id: str

    model_config = ConfigDict(from_attributes=True)
