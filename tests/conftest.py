import pytest
from fastapi.testclient import TestClient

from connect_api.app.core import db
from connect_api.app.core.config import settings
from connect_api.app.main import create_app


@pytest.fixture(autouse=True)
def temp_db(tmp_path, monkeypatch):
    db_path = tmp_path / "connect_app_test.sqlite"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    # keep PBKDF2 cheap in tests
    monkeypatch.setattr(settings, "password_hash_iterations", 1000)
    return str(db_path)


@pytest.fixture()
def conn(temp_db):
    db.init_db()
    connection = db.get_connection()
    yield connection
    connection.close()


@pytest.fixture()
def client(temp_db):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def act(client):
    def _act(action=None, **fields):
        body = dict(fields)
        if action is not None:
            body["action"] = action
        return client.post("/api/v1/actions", json=body)

    return _act
