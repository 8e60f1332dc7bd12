from contact_api.app.core.db import get_connection
from contact_api.app.core.security import verify_password


def _stored_user(username):
    conn = get_connection()
    try:
        row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


class TestRegister:
    def test_registers_new_user(self, client):
        response = client.post("/api/users", json={"username": "khannedy", "password": "rahasia", "name": "Eko"})

        assert response.status_code == 200
        assert response.json() == {"data": {"username": "khannedy", "name": "Eko"}}
        stored = _stored_user("khannedy")
        assert stored["password"] != "rahasia"
        assert verify_password("rahasia", stored["password"])
        assert stored["token"] is None

    def test_rejects_invalid_request(self, client):
        response = client.post("/api/users", json={"username": "", "password": "", "name": ""})

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"username", "password", "name"}

    def test_rejects_too_long_username(self, client):
        response = client.post("/api/users", json={"username": "a" * 101, "password": "x", "name": "x"})

        assert response.status_code == 400

    def test_rejects_duplicate_username(self, client, test_user):
        response = client.post("/api/users", json={"username": "test", "password": "test", "name": "test"})

        assert response.status_code == 409
        assert response.json()["errors"] == "Username already exists"


class TestLogin:
    def test_login_issues_new_token(self, client, test_user):
        response = client.post("/api/users/login", json={"username": "test", "password": "test"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["username"] == "test"
        assert data["name"] == "test"
        assert data["token"] and data["token"] != "test"
        assert _stored_user("test")["token"] == data["token"]

    def test_login_invalidates_previous_token(self, client, test_user):
        token = client.post("/api/users/login", json={"username": "test", "password": "test"}).json()["data"]["token"]

        assert client.get("/api/users/current", headers={"Authorization": "test"}).status_code == 401
        assert client.get("/api/users/current", headers={"Authorization": token}).status_code == 200

    def test_rejects_wrong_password(self, client, test_user):
        response = client.post("/api/users/login", json={"username": "test", "password": "salah"})

        assert response.status_code == 401
        assert response.json()["errors"]
        assert _stored_user("test")["token"] == "test"

    def test_rejects_unknown_username(self, client, test_user):
        response = client.post("/api/users/login", json={"username": "salah", "password": "test"})

        assert response.status_code == 401

    def test_rejects_invalid_request(self, client):
        response = client.post("/api/users/login", json={"username": ""})

        assert response.status_code == 400


class TestCurrentUser:
    def test_get_current_user(self, client, test_user):
        response = client.get("/api/users/current", headers={"Authorization": "test"})

        assert response.status_code == 200
        assert response.json() == {"data": {"username": "test", "name": "test"}}

    def test_get_current_user_rejects_unknown_token(self, client, test_user):
        response = client.get("/api/users/current", headers={"Authorization": "salah"})

        assert response.status_code == 401
        assert response.json()["errors"]

    def test_blank_header_is_unauthorized(self, client, test_user):
        response = client.get("/api/users/current", headers={"Authorization": "Bearer"})

        assert response.status_code == 401

    def test_update_name(self, client, test_user):
        response = client.patch("/api/users/current", headers={"Authorization": "test"}, json={"name": "Eko"})

        assert response.status_code == 200
        assert response.json()["data"] == {"username": "test", "name": "Eko"}
        assert verify_password("test", _stored_user("test")["password"])

    def test_update_password(self, client, test_user):
        response = client.patch("/api/users/current", headers={"Authorization": "test"}, json={"password": "baru"})

        assert response.status_code == 200
        assert verify_password("baru", _stored_user("test")["password"])

    def test_update_rejects_empty_name(self, client, test_user):
        response = client.patch("/api/users/current", headers={"Authorization": "test"}, json={"name": ""})

        assert response.status_code == 400
        assert _stored_user("test")["name"] == "test"

    def test_logout_clears_token(self, client, test_user):
        response = client.delete("/api/users/current", headers={"Authorization": "test"})

        assert response.status_code == 200
        assert response.json() == {"data": True}
        assert _stored_user("test")["token"] is None
        assert client.get("/api/users/current", headers={"Authorization": "test"}).status_code == 401

    def test_logout_requires_token(self, client, test_user):
        response = client.delete("/api/users/current")

        assert response.status_code == 401

    def test_remove_account_deletes_user_and_contacts(self, client, test_contact):
        response = client.delete("/api/users/current/account", headers={"Authorization": "test"})

        assert response.status_code == 200
        assert _stored_user("test") is None
        conn = get_connection()
        try:
            count = conn.execute("SELECT COUNT(*) FROM contacts").fetchone()[0]
        finally:
            conn.close()
        assert count == 0


def test_register_login_and_manage_contacts(client):
    client.post("/api/users", json={"username": "budi", "password": "rahasia", "name": "Budi"})
    token = client.post("/api/users/login", json={"username": "budi", "password": "rahasia"}).json()["data"]["token"]

    created = client.post("/api/contacts", headers={"Authorization": token}, json={"first_name": "Eko"})
    contact_id = created.json()["data"]["id"]
    fetched = client.get(f"/api/contacts/{contact_id}", headers={"Authorization": f"Bearer {token}"})

    assert fetched.status_code == 200
    assert fetched.json()["data"]["first_name"] == "Eko"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"errors": "Not Found"}
