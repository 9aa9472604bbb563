import pytest
from fastapi.testclient import TestClient

from exercise_tracker.config import Settings
from exercise_tracker.main import create_app


@pytest.fixture()
def client(tmp_path, monkeypatch):
    """Fresh application bound to a throwaway SQLite database."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    app = create_app(Settings())
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_user(client):
    def _make(username="alice"):
        r = client.post("/api/users", data={"username": username})
        assert r.status_code == 200
        return r.json()["_id"]
    return _make
