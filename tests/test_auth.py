# tests/test_auth.py
from tests.conftest import PASSWORD, SOAP_FIELDS, register_and_login


def test_me_returns_profile(client, clinician_headers):
    me = client.get("/api/auth/me", headers=clinician_headers).json()
    assert me["email"] == "therapist@clinic.org"
    assert me["role"] == "clinician"
    assert me["credentials"] == "LCSW"


def test_duplicate_registration_rejected(client, clinician_headers):
    response = client.post(
        "/api/auth/register", json={"email": "Therapist@Clinic.org", "password": PASSWORD}
    )
    assert response.status_code == 400


def test_wrong_password(client, clinician_headers):
    response = client.post("/api/auth/login", json={"email": "therapist@clinic.org", "password": "nope-nope"})
    assert response.status_code == 401


def test_requests_without_token_are_rejected(client):
    assert client.get("/api/patients").status_code == 401
    assert client.get("/api/reference/cpt").status_code == 401


def test_logout_revokes_tokens(client, clinician_headers):
    assert client.post("/api/auth/logout", headers=clinician_headers).status_code == 200
    assert client.get("/api/auth/me", headers=clinician_headers).status_code == 401


def test_refresh_issues_new_tokens(client):
    client.post("/api/auth/register", json={"email": "refresh@clinic.org", "password": PASSWORD})
    tokens = client.post("/api/auth/login", json={"email": "refresh@clinic.org", "password": PASSWORD}).json()

    refreshed = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refreshed.status_code == 200
    new_access = refreshed.json()["access_token"]
    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {new_access}"}).status_code == 200

    # a refresh token is single use
    again = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert again.status_code == 401


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_self_registration_cannot_claim_admin(client, clinician_headers, patient):
    client.post(
        f"/api/patients/{patient['id']}/notes/sign",
        json={"note_style": "soap", "fields": SOAP_FIELDS, "signature_name": "Terry"},
        headers=clinician_headers,
    )
    stranger = register_and_login(client, "stranger@example.com", role="admin")

    assert client.get("/api/auth/me", headers=stranger).json()["role"] == "clinician"
    assert client.get(f"/api/patients/{patient['id']}/notes", headers=stranger).json()["notes"] == []
    assert client.get("/api/audit-logs", headers=stranger).status_code == 403


def test_bootstrap_address_registers_as_admin(client, admin_headers):
    assert client.get("/api/auth/me", headers=admin_headers).json()["role"] == "admin"


def test_only_admins_create_admin_accounts(client, admin_headers, clinician_headers):
    payload = {"email": "second-admin@clinic.org", "password": PASSWORD, "role": "admin"}
    assert client.post("/api/auth/users", json=payload, headers=clinician_headers).status_code == 403

    created = client.post("/api/auth/users", json=payload, headers=admin_headers)
    assert created.status_code == 201, created.text
    assert created.json()["role"] == "admin"
