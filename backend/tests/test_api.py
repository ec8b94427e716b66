from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from factories import ADMIN_EMAIL, ADMIN_PASSWORD, student_fields
from ojt_records.main import app
from ojt_records.models import Account
from ojt_records.services.profiles import ProfileService


def register(client, email="a@x.com", password="p1", **overrides):
    body = {"email": email, "password": password, **student_fields(**overrides)}
    response = client.post("/api/register", json=body)
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def admin_token(client):
    response = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_admin_login(client):
    response = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    data = response.json()

    assert response.status_code == 200
    assert data["success"] is True
    assert data["role"] == "admin"
    assert data["user"]["email"] == ADMIN_EMAIL
    assert data["token"]


def test_login_failures_share_status_and_body(client):
    register(client)

    wrong_password = client.post("/api/login", json={"email": "a@x.com", "password": "nope"})
    unknown_email = client.post("/api/login", json={"email": "ghost@x.com", "password": "p1"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"success": False, "error": "Invalid credentials"}


def test_register_returns_token_and_account(client):
    data = register(client)

    assert data["success"] is True
    assert data["user"]["email"] == "a@x.com"
    assert data["user"]["role"] == "student"

    me = client.get("/api/me", headers=bearer(data["token"]))
    assert me.status_code == 200
    assert me.json()["user"] == {"id": data["user"]["id"], "role": "student"}


def test_register_duplicate_email(client):
    register(client)
    response = client.post("/api/register", json={"email": "a@x.com", "password": "p2", **student_fields()})

    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"


def test_register_missing_field_is_reported(client):
    fields = student_fields()
    del fields["address"]
    response = client.post("/api/register", json={"email": "a@x.com", "password": "p1", **fields})

    assert response.status_code == 400
    assert "address" in response.json()["error"]


def test_register_without_email_is_rejected_by_schema(client):
    response = client.post("/api/register", json={"password": "p1", **student_fields()})
    assert response.status_code == 422


def test_student_reads_own_profile(client):
    data = register(client, department="IT", project="Alpha", skills="go, rust, c")

    response = client.get(f"/api/student/{data['user']['id']}", headers=bearer(data["token"]))
    student = response.json()["student"]

    assert response.status_code == 200
    assert student["userId"] == data["user"]["id"]
    assert student["skills"] == ["go", "rust", "c"]
    assert student["project"] == "Alpha"
    assert student["fullName"] == "Ana Cruz"


def test_student_cannot_read_other_profile(client):
    first = register(client, email="a@x.com")
    second = register(client, email="b@x.com")

    response = client.get(f"/api/student/{second['user']['id']}", headers=bearer(first["token"]))
    assert response.status_code == 403


def test_profile_requires_token(client):
    data = register(client)

    assert client.get(f"/api/student/{data['user']['id']}").status_code == 401
    bad = client.get(f"/api/student/{data['user']['id']}", headers=bearer("not-a-token"))
    assert bad.status_code == 401


def test_admin_missing_profile_is_404(client):
    response = client.get("/api/student/unknown", headers=bearer(admin_token(client)))

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Student not found"}


def test_list_students_newest_first_admin_only(client):
    first = register(client, email="p1@x.com", fullName="P1")
    register(client, email="p2@x.com", fullName="P2")

    assert client.get("/api/students", headers=bearer(first["token"])).status_code == 403

    response = client.get("/api/students", headers=bearer(admin_token(client)))
    assert response.status_code == 200
    assert [s["fullName"] for s in response.json()["students"]] == ["P2", "P1"]


def test_update_profile(client):
    data = register(client)
    account_id = data["user"]["id"]

    response = client.put(
        f"/api/student/{account_id}",
        json={"school": "Tech Institute", "skills": "a, b"},
        headers=bearer(data["token"]),
    )
    student = response.json()["student"]

    assert response.status_code == 200
    assert student["school"] == "Tech Institute"
    assert student["skills"] == ["a", "b"]
    assert student["course"] == "BSIT"
    assert student["updatedAt"] > student["createdAt"]


def test_admin_updates_any_profile(client):
    data = register(client)
    response = client.put(
        f"/api/student/{data['user']['id']}",
        json={"yearLevel": "3rd Year"},
        headers=bearer(admin_token(client)),
    )
    assert response.status_code == 200
    assert response.json()["student"]["yearLevel"] == "3rd Year"


def test_delete_student(client):
    data = register(client)
    token = admin_token(client)
    student = client.get(f"/api/student/{data['user']['id']}", headers=bearer(token)).json()["student"]

    # Students cannot delete records
    assert client.delete(f"/api/student/{student['id']}", headers=bearer(data["token"])).status_code == 403

    response = client.delete(f"/api/student/{student['id']}", headers=bearer(token))
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert client.get(f"/api/student/{data['user']['id']}", headers=bearer(token)).status_code == 404
    assert client.post("/api/login", json={"email": "a@x.com", "password": "p1"}).status_code == 401
    # The deleted account's token no longer opens a session
    assert client.get("/api/me", headers=bearer(data["token"])).status_code == 401


def test_delete_unknown_student(client):
    response = client.delete("/api/student/unknown", headers=bearer(admin_token(client)))
    assert response.status_code == 404


def test_reset_password(client):
    register(client, password="old-pass")

    response = client.post("/api/reset-password", json={"email": "a@x.com", "newPassword": "new-pass"})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert client.post("/api/login", json={"email": "a@x.com", "password": "new-pass"}).status_code == 200
    assert client.post("/api/login", json={"email": "a@x.com", "password": "old-pass"}).status_code == 401


def test_reset_password_unknown_email(client):
    response = client.post("/api/reset-password", json={"email": "ghost@x.com", "newPassword": "x"})

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Email not found"}


def test_register_password_bcrypt_cannot_hash(client, db):
    body = {"email": "a@x.com", "password": "a\u0000b", **student_fields()}
    response = client.post("/api/register", json=body)

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"success": False, "error": "Password contains unsupported characters"}
    # Rejected before the account insert, so nothing is left behind
    assert db.query(Account).filter(Account.email == "a@x.com").count() == 0


def test_reset_password_bcrypt_cannot_hash(client):
    register(client)
    response = client.post("/api/reset-password", json={"email": "a@x.com", "newPassword": "a\u0000b"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert client.post("/api/login", json={"email": "a@x.com", "password": "p1"}).status_code == 200


def test_login_with_nul_password_is_invalid_credentials(client):
    register(client)
    response = client.post("/api/login", json={"email": "a@x.com", "password": "a\u0000b"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}


def test_storage_failure_reported_without_details(client, db, monkeypatch):
    token = admin_token(client)

    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT * FROM accounts", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "query", broken_query)
    response = client.get("/api/students", headers=bearer(token))

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Storage unavailable"}
    assert "SELECT" not in response.text
    assert "locked" not in response.text


def test_unexpected_error_keeps_json_envelope(client, monkeypatch):
    token = admin_token(client)

    def boom(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(ProfileService, "list_all", boom)
    unguarded = TestClient(app, raise_server_exceptions=False)
    response = unguarded.get("/api/students", headers=bearer(token))

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Request failed"}
    assert "fire" not in response.text
