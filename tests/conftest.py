import pytest
from fastapi.testclient import TestClient

from contact_api.app.core.config import settings
from contact_api.app.core.db import get_connection, init_db
from contact_api.app.core.security import hash_password
from contact_api.app.main import app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with all migrations applied."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    init_db()
    return settings.database_url


@pytest.fixture
def client(database):
    with TestClient(app) as test_client:
        yield test_client


def _create_user(username, password, name, token):
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO users (username, password, name, token) VALUES (?, ?, ?, ?)",
            (username, hash_password(password), name, token),
        )
        conn.commit()
        return {"id": cursor.lastrowid, "username": username, "name": name, "token": token}
    finally:
        conn.close()


def _create_contact(user_id, **fields):
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO contacts (user_id, first_name, last_name, email, phone) VALUES (?, ?, ?, ?, ?)",
            (user_id, fields.get("first_name"), fields.get("last_name"), fields.get("email"), fields.get("phone")),
        )
        conn.commit()
        row = cursor.execute("SELECT * FROM contacts WHERE id = ?", (cursor.lastrowid,)).fetchone()
        return dict(row)
    finally:
        conn.close()


@pytest.fixture
def test_user(database):
    """User ``test`` with password ``test`` already logged in with token ``test``."""
    return _create_user("test", "test", "test", "test")


@pytest.fixture
def other_user(database):
    return _create_user("other", "other", "Other", "other-token")


@pytest.fixture
def test_contact(test_user):
    return _create_contact(
        test_user["id"],
        first_name="Eko",
        last_name="Khannedy",
        email="eko@gmail.com",
        phone="0899999",
    )


@pytest.fixture
def create_contact():
    return _create_contact