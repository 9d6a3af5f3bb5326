# app/audit/audit_service.py
"""
Audit trail.

Events are written fire-and-forget: ``record_audit_event`` opens its own
session, and a failed write is logged and dropped so it never interrupts the
request that triggered it.
"""
import csv
import io
import logging
import math
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.appconfig import settings
from app.database.connection import AsyncSessionLocal
from app.helpers.time import end_of_day, from_db, start_of_day, to_utc, utcnow
from app.system_models.audit_log_model.audit_log_model import AuditLog

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Timestamp", "Action", "Resource Type", "Patient Name", "User Name", "Description", "IP Address"]


# ============================================================
# ✅ RECORD EVENT (fire-and-forget)
# ============================================================
async def record_audit_event(
    action: str,
    resource_type: str,
    resource_id: Optional[str] = None,
    patient_id: Optional[Any] = None,
    patient_name: Optional[str] = None,
    user_id: Optional[int] = None,
    user_name: Optional[str] = None,
    user_email: Optional[str] = None,
    location_id: Optional[str] = None,
    description: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None,
) -> None:
    try:
        async with AsyncSessionLocal() as session:
            session.add(AuditLog(
                timestamp=utcnow(),
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                patient_id=str(patient_id) if patient_id is not None else None,
                patient_name=patient_name,
                user_id=user_id,
                user_name=user_name,
                user_email=user_email,
                location_id=location_id,
                description=description,
                details=details,
                ip_address=ip_address,
            ))
            await session.commit()
            await enforce_retention(session)
    except Exception:
        logger.warning(f"Failed to record audit event {action} {resource_type}", exc_info=True)


def audit_event_for(ctx, action: str, resource_type: str, **fields) -> Dict[str, Any]:
    """Keyword arguments for ``record_audit_event`` attributed to the caller."""
    return dict(
        action=action,
        resource_type=resource_type,
        user_id=ctx.user.id,
        user_name=ctx.user.full_name,
        user_email=ctx.user.email,
        location_id=ctx.location_id,
        ip_address=ctx.ip_address,
        **fields,
    )


async def enforce_retention(db: AsyncSession, max_entries: Optional[int] = None) -> int:
    """Drop the oldest entries beyond the retention cap. Returns the number removed."""
    cap = max_entries if max_entries is not None else settings.AUDIT_LOG_MAX_ENTRIES
    total = await db.scalar(select(func.count(AuditLog.id)))
    if total <= cap:
        return 0

    keep = select(AuditLog.id).order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(cap)
    await db.execute(delete(AuditLog).where(AuditLog.id.not_in(keep.scalar_subquery())))
    await db.commit()
    return total - cap


# ============================================================
# ✅ QUERY
# ============================================================
def _filtered(
    location_id: Optional[str] = None,
    user_id: Optional[int] = None,
    patient_id: Optional[str] = None,
    resource_type: Optional[str] = None,
    action: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
):
    query = select(AuditLog)
    if location_id:
        query = query.where(AuditLog.location_id == location_id)
    if user_id is not None:
        query = query.where(AuditLog.user_id == user_id)
    if patient_id:
        query = query.where(AuditLog.patient_id == str(patient_id))
    if resource_type:
        query = query.where(AuditLog.resource_type == resource_type)
    if action:
        query = query.where(AuditLog.action == action)
    if start_date:
        query = query.where(AuditLog.timestamp >= to_utc(start_of_day(start_date)))
    if end_date:
        # End date is inclusive through the last second of the day
        query = query.where(AuditLog.timestamp <= to_utc(end_of_day(end_date)))
    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(or_(
            func.lower(AuditLog.description).like(pattern),
            func.lower(AuditLog.user_name).like(pattern),
            func.lower(AuditLog.patient_name).like(pattern),
        ))
    return query


async def list_audit_logs(db: AsyncSession, page: int = 1, limit: Optional[int] = None, **filters) -> Dict[str, Any]:
    limit = limit or settings.AUDIT_PAGE_SIZE
    query = _filtered(**filters)

    total_logs = await db.scalar(select(func.count()).select_from(query.subquery()))
    result = await db.execute(
        query.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    total_pages = math.ceil(total_logs / limit) if total_logs else 0
    return {
        "logs": result.scalars().all(),
        "pagination": {
            "page": page,
            "limit": limit,
            "total_logs": total_logs,
            "total_pages": total_pages,
            "has_more": page < total_pages,
        },
    }


def _recent(entry: AuditLog) -> Dict[str, Any]:
    return {
        "user_name": entry.user_name,
        "patient_name": entry.patient_name,
        "timestamp": from_db(entry.timestamp),
        "ip_address": entry.ip_address,
    }


async def audit_stats(db: AsyncSession, location_id: Optional[str] = None) -> Dict[str, Any]:
    result = await db.execute(_filtered(location_id=location_id).order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()))
    logs = result.scalars().all()

    now = utcnow()
    windows = {
        "24h": now - timedelta(hours=24),
        "7d": now - timedelta(days=7),
        "30d": now - timedelta(days=30),
    }
    within = {
        key: [log for log in logs if from_db(log.timestamp) >= since]
        for key, since in windows.items()
    }

    action_counts: Dict[str, int] = {}
    resource_counts: Dict[str, int] = {}
    for log in within["30d"]:
        action_counts[log.action] = action_counts.get(log.action, 0) + 1
        resource_counts[log.resource_type] = resource_counts.get(log.resource_type, 0) + 1

    return {
        "total_logs": len(logs),
        "last_24_hours": len(within["24h"]),
        "last_7_days": len(within["7d"]),
        "last_30_days": len(within["30d"]),
        "unique_users_24h": len({log.user_id for log in within["24h"]}),
        "unique_users_7d": len({log.user_id for log in within["7d"]}),
        "action_counts": action_counts,
        "resource_counts": resource_counts,
        "recent_logins": [_recent(log) for log in logs if log.action == "LOGIN"][:10],
        "recent_patient_views": [
            _recent(log) for log in logs if log.action == "VIEW" and log.resource_type == "patient"
        ][:10],
    }


# ============================================================
# ✅ CSV EXPORT
# ============================================================
def audit_logs_to_csv(logs: List[AuditLog]) -> str:
    """Every cell is quoted, with embedded quotes doubled."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for log in logs:
        writer.writerow([
            from_db(log.timestamp).isoformat() if log.timestamp else "",
            log.action or "",
            log.resource_type or "",
            log.patient_name or "",
            log.user_name or "",
            log.description or "",
            log.ip_address or "",
        ])
    return buffer.getvalue()


async def export_audit_logs(
    db: AsyncSession,
    location_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> str:
    result = await db.execute(
        _filtered(location_id=location_id, start_date=start_date, end_date=end_date)
        .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
    )
    return audit_logs_to_csv(result.scalars().all())
