# app/system_models/audit_log_model/audit_log_schemas.py
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator

from app.helpers.time import from_db

class AuditLogResponse(BaseModel):
    id: int
    timestamp: datetime
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    patient_id: Optional[str] = None
    patient_name: Optional[str] = None
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    location_id: Optional[str] = None
    description: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("timestamp", mode="before")
    def stored_as_utc(cls, v):
        return from_db(v) if isinstance(v, datetime) else v

class AuditPagination(BaseModel):
    page: int
    limit: int
    total_logs: int
    total_pages: int
    has_more: bool

class AuditLogListResponse(BaseModel):
    logs: List[AuditLogResponse]
    pagination: AuditPagination

class RecentActivity(BaseModel):
    user_name: Optional[str] = None
    patient_name: Optional[str] = None
    timestamp: datetime
    ip_address: Optional[str] = None

class AuditStatsResponse(BaseModel):
    total_logs: int
    last_24_hours: int
    last_7_days: int
    last_30_days: int
    unique_users_24h: int
    unique_users_7d: int
    action_counts: Dict[str, int]
    resource_counts: Dict[str, int]
    recent_logins: List[RecentActivity]
    recent_patient_views: List[RecentActivity]

class AuditEventCreate(BaseModel):
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    patient_id: Optional[str] = None
    patient_name: Optional[str] = None
    description: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
