# tests/test_timeline_api.py
from tests.conftest import SOAP_FIELDS


def _appointment(client, headers, patient_id, start, end, **extra):
    response = client.post(
        "/api/appointments",
        json={"patient_id": patient_id, "start_time": start, "end_time": end, "title": "Therapy", **extra},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_timeline_merges_appointments_and_notes(client, clinician_headers, patient):
    pid = patient["id"]
    _appointment(client, clinician_headers, pid, "2025-06-10T14:00:00", "2025-06-10T14:50:00")
    _appointment(client, clinician_headers, pid, "2025-06-17T14:00:00", "2025-06-17T14:50:00")
    _appointment(
        client, clinician_headers, pid, "2025-06-24T14:00:00", "2025-06-24T14:50:00",
        appointment_status="cancelled",
    )
    client.post(
        f"/api/patients/{pid}/notes/sign",
        json={
            "note_style": "soap",
            "date_of_service": "2025-06-10",
            "time_of_service": "14:00",
            "fields": SOAP_FIELDS,
            "signature_name": "Terry",
        },
        headers=clinician_headers,
    )

    response = client.get(f"/api/patients/{pid}/timeline", headers=clinician_headers)
    assert response.status_code == 200, response.text
    body = response.json()

    assert body["total_entries"] == 3
    assert body["numbered_visits"] == 3
    assert body["needs_note_count"] == 1
    assert body["timezone"] == "CT"

    entries = body["entries"]
    assert [e["day"] for e in entries] == ["2025-06-24", "2025-06-17", "2025-06-10"]
    assert [e["session_number"] for e in entries] == [3, 2, 1]
    assert entries[2]["has_note"] is True
    assert entries[2]["note"]["status"] == "signed"
    assert entries[2]["timestamp"].startswith("2025-06-10T14:00")
    assert entries[1]["needs_note"] is True
    assert entries[0]["needs_note"] is False
    assert [group["year"] for group in body["years"]] == [2025]


def test_timeline_custom_range(client, clinician_headers, patient):
    pid = patient["id"]
    _appointment(client, clinician_headers, pid, "2025-06-10T14:00:00", "2025-06-10T14:50:00")
    _appointment(client, clinician_headers, pid, "2025-07-01T14:00:00", "2025-07-01T14:50:00")

    response = client.get(
        f"/api/patients/{pid}/timeline",
        params={"range": "custom", "start": "2025-06-01", "end": "2025-06-30"},
        headers=clinician_headers,
    )
    body = response.json()
    assert [e["day"] for e in body["entries"]] == ["2025-06-10"]
    assert body["entries"][0]["session_number"] == 1


def test_draft_absorbs_its_appointment(client, clinician_headers, patient):
    pid = patient["id"]
    _appointment(client, clinician_headers, pid, "2025-06-10T14:00:00", "2025-06-10T14:50:00")
    client.post(
        f"/api/patients/{pid}/draft",
        json={"note_style": "soap", "date_of_service": "2025-06-10", "fields": {"subjective": "x"}},
        headers=clinician_headers,
    )

    body = client.get(f"/api/patients/{pid}/timeline", headers=clinician_headers).json()
    assert body["total_entries"] == 1
    entry = body["entries"][0]
    assert entry["kind"] == "appointment"
    assert entry["note"]["status"] == "draft"
    assert body["needs_note_count"] == 0


def test_appointment_import_is_idempotent_by_external_id(client, clinician_headers, patient):
    pid = patient["id"]
    first = _appointment(client, clinician_headers, pid, "2025-06-10T14:00:00", None, external_id="cal-1")
    second = _appointment(
        client, clinician_headers, pid, "2025-06-10T15:00:00", None, external_id="cal-1", appointment_status="cancelled"
    )
    assert first["id"] == second["id"]

    listed = client.get("/api/appointments", params={"patientId": pid}, headers=clinician_headers).json()
    assert len(listed) == 1
    assert listed[0]["appointment_status"] == "cancelled"


def test_appointment_end_before_start_is_rejected(client, clinician_headers, patient):
    response = client.post(
        "/api/appointments",
        json={"patient_id": patient["id"], "start_time": "2025-06-10T14:00:00", "end_time": "2025-06-10T13:00:00"},
        headers=clinician_headers,
    )
    assert response.status_code == 422
