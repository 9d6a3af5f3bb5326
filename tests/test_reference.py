# tests/test_reference.py
from app.reference.cpt_codes import describe_cpt
from app.reference.treatment_plans import format_treatment_plan_summary


def test_icd10_search_endpoint(client, clinician_headers):
    results = client.get("/api/reference/icd10", params={"q": "f41", "limit": 5}, headers=clinician_headers).json()
    assert 0 < len(results) <= 5
    assert all(r["code"].lower().startswith("f41") for r in results)


def test_cpt_and_styles(client, clinician_headers):
    cpt = client.get("/api/reference/cpt", headers=clinician_headers).json()
    assert {"code": "90834", "description": "Psychotherapy, 38-52 min"} in cpt

    styles = client.get("/api/reference/note-styles", headers=clinician_headers).json()
    assert styles[0] == {"id": "soap", "name": "SOAP", "description": "Subjective, Objective, Assessment, Plan"}


def test_treatment_plan_templates(client, clinician_headers):
    areas = client.get("/api/reference/treatment-plans", headers=clinician_headers).json()
    assert [a["id"] for a in areas] == ["depression", "anxiety", "trauma", "substance_use", "bipolar", "relationship"]

    anxiety = client.get("/api/reference/treatment-plans/anxiety", headers=clinician_headers).json()
    assert anxiety["long_term_goals"]
    assert all("timeframe" in o for o in anxiety["short_term_objectives"])

    assert client.get("/api/reference/treatment-plans/unknown", headers=clinician_headers).status_code == 404


def test_unknown_cpt_describes_itself():
    assert describe_cpt("12345") == "12345"


def test_treatment_plan_summary():
    plan = {
        "problem": "anxiety",
        "long_term_goals": ["a", "b"],
        "objectives": [{"objective": "x", "timeframe": "4 weeks"}] * 3,
        "interventions": ["i"],
    }
    assert format_treatment_plan_summary(plan) == (
        "Problem: Anxiety • Goals: 2 long-term goal(s) • 3 objective(s) • 1 intervention(s)"
    )
    assert format_treatment_plan_summary({"legacy_text": "Old plan"}) == "Old plan"
    assert format_treatment_plan_summary(None) is None


def test_patient_diagnosis_record(client, clinician_headers, patient):
    pid = patient["id"]
    assert client.get(f"/api/patients/{pid}/diagnosis", headers=clinician_headers).json()["diagnosis"] == ""

    saved = client.put(
        f"/api/patients/{pid}/diagnosis",
        json={
            "diagnoses": [
                {"code": "F41.1", "description": "Generalized anxiety disorder"},
                {"code": "F41.1", "description": "Generalized anxiety disorder"},
            ],
            "treatment_plan": {"problem": "anxiety", "long_term_goals": ["Reduce worry"]},
        },
        headers=clinician_headers,
    )
    assert saved.status_code == 200, saved.text
    body = saved.json()
    assert body["diagnosis"] == "F41.1 - Generalized anxiety disorder"
    assert body["treatment_plan_summary"] == "Problem: Anxiety • Goals: 1 long-term goal(s)"
    assert body["updated_by"] == "Terry Therapist"


def test_admin_notes(client, clinician_headers, patient):
    pid = patient["id"]
    saved = client.put(f"/api/patients/{pid}/admin-notes", json={"admin_notes": "Prefers mornings"}, headers=clinician_headers)
    assert saved.json() == {"patient_id": pid, "admin_notes": "Prefers mornings"}
    assert client.get(f"/api/patients/{pid}/admin-notes", headers=clinician_headers).json()["admin_notes"] == "Prefers mornings"
