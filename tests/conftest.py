# tests/conftest.py
import os
import tempfile
from pathlib import Path

import pytest

_DB_PATH = Path(tempfile.gettempdir()) / "chart_service_test.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["DEFAULT_LOCATION_ID"] = "loc-1"
os.environ["BOOTSTRAP_ADMIN_EMAIL"] = "admin@clinic.org"

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402

PASSWORD = "correct-horse-battery"


@pytest.fixture
def client():
    if _DB_PATH.exists():
        _DB_PATH.unlink()
    with TestClient(app) as test_client:
        yield test_client
    if _DB_PATH.exists():
        _DB_PATH.unlink()


def register_and_login(client, email: str, **extra) -> dict:
    payload = {"email": email, "password": PASSWORD, **extra}
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 200, response.text
    response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return register_and_login(client, "admin@clinic.org", first_name="Ada", last_name="Admin")


@pytest.fixture
def clinician_headers(client):
    return register_and_login(
        client,
        "therapist@clinic.org",
        first_name="Terry",
        last_name="Therapist",
        credentials="LCSW",
        license_number="LCSW-1234",
    )


@pytest.fixture
def patient(client, clinician_headers):
    response = client.post(
        "/api/patients",
        json={"first_name": "Jamie", "last_name": "Rivera", "dob": "1990-04-02", "gender": "other"},
        headers=clinician_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


SOAP_FIELDS = {
    "subjective": "Client reports improved sleep.",
    "objective": "Alert and oriented, affect congruent.",
    "assessment": "Symptoms of GAD decreasing.",
    "plan": "Continue CBT weekly.",
}
