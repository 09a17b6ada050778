"""Health probes - verifies liveness and readiness responses."""

from marketplace.api.dependencies import get_fixtures
from marketplace.main import app
from marketplace.services.fixtures import JsonFixtureProvider


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_checks_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_reports_missing_fixtures(client, tmp_path):
    app.dependency_overrides[get_fixtures] = lambda: JsonFixtureProvider(tmp_path)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["checks"]["fixtures"] == "missing"
