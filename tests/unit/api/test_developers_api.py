"""Developers API."""

from httpx import AsyncClient


async def _create(client: AsyncClient, headers, name="Ada", email="ada@example.com", skills="python, sql"):
    r = await client.post("/api/developers/", json={"name": name, "email": email, "skills": skills}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


async def test_create_and_lookup_by_email(client: AsyncClient, actor_headers):
    created = await _create(client, actor_headers, email="Ada@Example.com")
    assert created["email"] == "ada@example.com"

    r = await client.get("/api/developers/email/ada@example.com")
    assert r.status_code == 200
    assert r.json()["id"] == created["id"]


async def test_invalid_email_returns_422(client: AsyncClient, actor_headers):
    r = await client.post("/api/developers/", json={"name": "Ada", "email": "not-an-email"}, headers=actor_headers)
    assert r.status_code == 422


async def test_duplicate_email_returns_409(client: AsyncClient, actor_headers):
    await _create(client, actor_headers)
    r = await client.post("/api/developers/", json={"name": "Other", "email": "ada@example.com"}, headers=actor_headers)
    assert r.status_code == 409


async def test_search_count_and_without_tasks(client: AsyncClient, actor_headers):
    await _create(client, actor_headers)
    await _create(client, actor_headers, name="Bob", email="bob@example.com", skills="go")

    r = await client.get("/api/developers/search/skill", params={"skill": "python"})
    assert [d["name"] for d in r.json()["content"]] == ["Ada"]

    r = await client.get("/api/developers/search", params={"name": "bo"})
    assert [d["name"] for d in r.json()["content"]] == ["Bob"]

    assert (await client.get("/api/developers/count")).json() == {"count": 2}

    r = await client.get("/api/developers/without-tasks")
    assert {d["name"] for d in r.json()} == {"Ada", "Bob"}
    assert all(d["task_count"] == 0 for d in r.json())


async def test_update_and_delete(client: AsyncClient, actor_headers):
    created = await _create(client, actor_headers)

    r = await client.put(f"/api/developers/{created['id']}", json={"skills": "rust"}, headers=actor_headers)
    assert r.status_code == 200
    assert (await client.get(f"/api/developers/{created['id']}")).json()["skills"] == "rust"

    r = await client.delete(f"/api/developers/{created['id']}", headers=actor_headers)
    assert r.status_code == 204
    assert (await client.get(f"/api/developers/{created['id']}")).status_code == 404

    r = await client.get("/api/audit/count/entity-type/Developer")
    assert r.json() == {"key": "Developer", "count": 3}
