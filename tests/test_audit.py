# tests/test_audit.py
import asyncio
import csv
import io
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from app.audit.audit_service import audit_logs_to_csv, enforce_retention, record_audit_event
from app.database.connection import AsyncSessionLocal
from app.system_models.audit_log_model.audit_log_model import AuditLog


def test_patient_view_and_logins_are_audited(client, admin_headers, clinician_headers, patient):
    client.get(f"/api/patients/{patient['id']}", headers=clinician_headers)

    body = client.get("/api/audit-logs", headers=admin_headers).json()
    actions = [log["action"] for log in body["logs"]]
    assert actions.count("LOGIN") == 2
    assert "CREATE" in actions and "VIEW" in actions

    views = client.get("/api/audit-logs", params={"action": "VIEW"}, headers=admin_headers).json()["logs"]
    assert len(views) == 1
    assert views[0]["patient_name"] == "Jamie Rivera"
    assert views[0]["user_name"] == "Terry Therapist"
    assert views[0]["resource_type"] == "patient"


def test_audit_log_is_admin_only(client, clinician_headers):
    assert client.get("/api/audit-logs", headers=clinician_headers).status_code == 403
    assert client.get("/api/audit-logs/stats", headers=clinician_headers).status_code == 403


def test_pagination(client, admin_headers, clinician_headers, patient):
    for _ in range(3):
        client.get(f"/api/patients/{patient['id']}", headers=clinician_headers)

    body = client.get("/api/audit-logs", params={"limit": 2, "page": 1}, headers=admin_headers).json()
    assert len(body["logs"]) == 2
    assert body["pagination"]["has_more"] is True
    assert body["pagination"]["total_pages"] == (body["pagination"]["total_logs"] + 1) // 2


def test_stats(client, admin_headers, clinician_headers, patient):
    client.get(f"/api/patients/{patient['id']}", headers=clinician_headers)

    stats = client.get("/api/audit-logs/stats", headers=admin_headers).json()
    assert stats["last_24_hours"] == stats["total_logs"]
    assert stats["unique_users_24h"] == 2
    assert stats["action_counts"]["LOGIN"] == 2
    assert len(stats["recent_logins"]) == 2
    assert stats["recent_patient_views"][0]["patient_name"] == "Jamie Rivera"


def test_patient_audit_history(client, admin_headers, clinician_headers, patient):
    client.get(f"/api/patients/{patient['id']}", headers=clinician_headers)
    body = client.get(f"/api/patients/{patient['id']}/audit-logs", headers=admin_headers).json()
    assert {log["action"] for log in body["logs"]} == {"CREATE", "VIEW"}


def test_client_events_are_accepted(client, admin_headers, clinician_headers):
    response = client.post(
        "/api/audit-logs",
        json={"action": "PRINT", "resource_type": "progress_note", "resource_id": "7", "description": "Printed note"},
        headers=clinician_headers,
    )
    assert response.status_code == 202

    logs = client.get("/api/audit-logs", params={"action": "PRINT"}, headers=admin_headers).json()["logs"]
    assert logs[0]["description"] == "Printed note"


def test_export_csv(client, admin_headers, clinician_headers, patient):
    client.get(f"/api/patients/{patient['id']}", headers=clinician_headers)

    response = client.get("/api/audit-logs/export", headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=audit-logs-" in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert lines[0] == '"Timestamp","Action","Resource Type","Patient Name","User Name","Description","IP Address"'
    assert any('"Jamie Rivera"' in line for line in lines[1:])


def test_csv_quotes_every_column():
    log = AuditLog(
        timestamp=datetime(2025, 6, 10, 19, 0, tzinfo=timezone.utc),
        action="UPDATE",
        resource_type="admin_notes",
        patient_name='Sam "Sammy" Lee',
        user_name="Terry",
        description="Edited, then saved",
        ip_address="10.0.0.2",
    )
    row = audit_logs_to_csv([log]).splitlines()[1]
    assert row == (
        '"2025-06-10T19:00:00+00:00","UPDATE","admin_notes","Sam ""Sammy"" Lee","Terry",'
        '"Edited, then saved","10.0.0.2"'
    )


def test_csv_escapes_commas_outside_free_text():
    log = AuditLog(action="VIEW", resource_type="note,pdf", ip_address="10.0.0.2, 10.0.0.3")
    row = next(csv.reader(io.StringIO(audit_logs_to_csv([log]).splitlines()[1])))
    assert row == ["", "VIEW", "note,pdf", "", "", "", "10.0.0.2, 10.0.0.3"]


def test_retention_keeps_newest_entries(client):
    async def scenario():
        for i in range(5):
            await record_audit_event(action="VIEW", resource_type="patient", description=f"event {i}")
        async with AsyncSessionLocal() as db:
            removed = await enforce_retention(db, max_entries=3)
            remaining = (await db.execute(select(AuditLog.description).order_by(AuditLog.id))).scalars().all()
            total = await db.scalar(select(func.count(AuditLog.id)))
        return removed, remaining, total

    removed, remaining, total = asyncio.run(scenario())
    assert removed == 2
    assert total == 3
    assert remaining == ["event 2", "event 3", "event 4"]
