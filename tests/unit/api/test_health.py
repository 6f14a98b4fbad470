"""Health endpoint."""

from httpx import AsyncClient


async def test_health(client: AsyncClient):
    r = await client.get("/health", headers={"X-Actor-Name": "alice"})
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["actor"] == "alice"
    assert "version" in data
