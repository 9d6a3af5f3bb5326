# app/users/user_models/schemas.py


from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# Allowed values as constants
ROLES = Literal["admin", "clinician"]


# ✅ Request schema for registration
class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    credentials: Optional[str] = None
    license_number: Optional[str] = None
    npi: Optional[str] = None
    location_id: Optional[str] = None

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ✅ Admin-created account; the only way to choose a role
class UserCreate(UserRegister):
    role: ROLES = "clinician"


# ✅ User login request
class UserLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ✅ Response schema for user info
class UserResponse(BaseModel):
    id: int
    email: str
    role: ROLES
    is_active: bool
    created_at: datetime
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    credentials: Optional[str] = None
    license_number: Optional[str] = None
    location_id: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


# ✅ Response schema for user login
class UserLoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    user: UserResponse


# ✅ Response schema for user logout
class UserLogoutResponse(BaseModel):
    message: str


# ✅ Response schema for token refresh
class UserRefreshResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
