"""Health Routes: liveness text, liveness JSON, and readiness probe."""

import chat_relay.infrastructure.database as db_module


async def test_root_returns_plain_text(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.text == "Server is running!"


async def test_health_is_awake(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "OK", "message": "Server is awake."}


async def test_ready_when_database_reachable(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_not_ready_without_database(client):
    db_module.db_manager = None
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
