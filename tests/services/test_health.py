"""Health routes — liveness and readiness."""

from foopoc import __version__
from foopoc.infrastructure import database


class _Manager:
    def __init__(self, ok):
        self.ok = ok

    async def health_check(self):
        return self.ok


async def test_liveness(client):
    res = await client.get("/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
    assert res.json()["version"] == __version__


async def test_liveness_needs_no_token(client):
    res = await client.get("/health/", headers={"Authorization": "garbage"})
    assert res.status_code == 200


async def test_ready_without_database(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_ready_when_database_down(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", _Manager(False))
    res = await client.get("/health/ready")
    assert res.status_code == 503


async def test_ready_when_database_up(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", _Manager(True))
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}
