# tests/test_rendering.py
from datetime import date, datetime, timezone
from types import SimpleNamespace

from app.rendering.note_document import build_note_document, format_clock, format_long_date, split_sections
from app.rendering.note_renderer import render_note_html
from app.rendering.note_pdf import render_note_pdf
from tests.conftest import SOAP_FIELDS


def _note(**overrides):
    values = dict(
        note_type="progress_note",
        status="signed",
        date_of_service=date(2025, 6, 10),
        time_of_service="14:00",
        # 19:00 UTC is 2:00 PM in Chicago during daylight time
        start_time=datetime(2025, 6, 10, 19, 0, tzinfo=timezone.utc),
        end_time=datetime(2025, 6, 10, 19, 50, tzinfo=timezone.utc),
        duration=50,
        cpt_code="90834",
        session_type="individual",
        diagnosis="F41.1 - Generalized anxiety disorder",
        clinician_name="Terry Therapist",
        clinician_credentials="LCSW",
        provider_license="LCSW-1234",
        content="SUBJECTIVE:\nDoing <better>\n\nPLAN:\nContinue",
        fields={"suicidal_ideation": "Denied", "homicidal_ideation": "Denied", "self_harm_behavior": "Denied"},
        signed_by="Terry Therapist, LCSW",
        signed_at=datetime(2025, 6, 10, 20, 5, tzinfo=timezone.utc),
        signer_ip="203.0.113.7",
        created_by_name="Terry Therapist",
        created_at=datetime(2025, 6, 10, 19, 55, tzinfo=timezone.utc),
        updated_at=datetime(2025, 6, 10, 20, 5, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


PATIENT = SimpleNamespace(full_name="Jamie Rivera", dob=date(1990, 4, 2))
PRACTICE = SimpleNamespace(name="Riverbend Counseling", address="12 Main St", phone="555-0100")


def test_formatters():
    assert format_long_date(date(2025, 6, 10)) == "June 10, 2025"
    assert format_clock(datetime(2025, 6, 10, 0, 5)) == "12:05 AM"
    assert format_clock(datetime(2025, 6, 10, 14, 0)) == "2:00 PM"


def test_document_fields():
    doc = build_note_document(_note(), PATIENT, PRACTICE)

    assert doc.session_date == "June 10, 2025"
    assert doc.time_range == "2:00 PM - 2:50 PM CT"
    assert doc.billing_line == "90834 - Psychotherapy, 38-52 min"
    assert doc.diagnoses == ["F41.1 - Generalized anxiety disorder"]
    assert doc.provider == "Terry Therapist, LCSW"
    assert doc.patient_dob == "April 2, 1990"
    assert doc.risk is None
    assert doc.is_signed
    assert doc.signature_date == "June 10, 2025"
    assert doc.signature_time == "3:05 PM CT"
    assert doc.footer == "Created on June 10, 2025 at 2:55 PM. Last updated on June 10, 2025 at 3:05 PM."


def test_risk_block_shown_when_any_item_is_not_denied():
    fields = {"suicidal_ideation": "Passive, no plan", "homicidal_ideation": "Denied"}
    doc = build_note_document(_note(fields=fields), PATIENT, PRACTICE)
    assert doc.risk_line == "Suicidal Ideation: Passive, no plan | Homicidal Ideation: Denied | Self-Harm: Denied"


def test_sections_are_split_on_known_headers():
    sections = split_sections("SUBJECTIVE:\nS text\n\nNot a header:\nbody")
    assert sections[0].header == "SUBJECTIVE" and sections[0].body == "S text"
    assert sections[1].header is None


def test_html_escapes_note_text_and_shows_signature():
    html = render_note_html(build_note_document(_note(), PATIENT, PRACTICE))
    assert "Doing &lt;better&gt;" in html
    assert "Electronically Signed" in html
    assert "IP: 203.0.113.7" in html
    assert "Riverbend Counseling" in html


def test_unsigned_note_says_so():
    doc = build_note_document(_note(status="draft", signed_by=None, signed_at=None, signer_ip=None), PATIENT, PRACTICE)
    assert not doc.is_signed
    assert "Not Yet Signed" in render_note_html(doc)


def test_pdf_is_a_pdf():
    pdf = render_note_pdf(build_note_document(_note(), PATIENT, PRACTICE))
    assert pdf.startswith(b"%PDF")


def test_render_endpoint(client, clinician_headers, admin_headers, patient):
    signed = client.post(
        f"/api/patients/{patient['id']}/notes/sign",
        json={
            "note_style": "soap",
            "date_of_service": "2025-06-10",
            "time_of_service": "14:00",
            "fields": SOAP_FIELDS,
            "signature_name": "Terry Therapist",
        },
        headers=clinician_headers,
    ).json()

    html = client.get(f"/api/notes/{signed['id']}/render", headers=clinician_headers)
    assert html.status_code == 200
    assert html.headers["content-type"].startswith("text/html")
    assert "Jamie Rivera" in html.text
    assert "2:00 PM - 2:50 PM CT" in html.text

    pdf = client.get(f"/api/notes/{signed['id']}/render", params={"format": "pdf"}, headers=clinician_headers)
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")

    views = client.get("/api/audit-logs", params={"resourceType": "progress_note", "action": "VIEW"}, headers=admin_headers)
    assert len(views.json()["logs"]) == 2
