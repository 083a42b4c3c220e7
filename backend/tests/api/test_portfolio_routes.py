"""Portfolio routes - status codes, camelCase wire format, error envelopes."""

from uuid import uuid4


async def test_list_empty(client):
    res = await client.get("/api/v1/portfolios")
    assert res.status_code == 200
    assert res.json() == []


async def test_create_returns_201_with_server_fields(client, portfolio_payload):
    res = await client.post("/api/v1/portfolios", json=portfolio_payload)
    assert res.status_code == 201
    body = res.json()
    assert body["id"]
    assert body["createdAt"]
    assert body["updatedAt"]
    assert body["technologies"] == ["React", "TypeScript"]
    assert body["projectUrl"] is None
    assert body["featured"] is True


async def test_create_normalizes_comma_separated_entry(client, portfolio_payload):
    portfolio_payload["technologies"] = ["React", "TypeScript", " Node.js "]
    res = await client.post("/api/v1/portfolios", json=portfolio_payload)
    assert res.json()["technologies"] == ["React", "TypeScript", "Node.js"]


async def test_create_rejects_blank_technologies(client, portfolio_payload):
    portfolio_payload["technologies"] = [" ", ""]
    res = await client.post("/api/v1/portfolios", json=portfolio_payload)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["fields"] == {"technologies": ["At least one technology is required"]}


async def test_create_rejects_bad_url(client, portfolio_payload):
    portfolio_payload["imageUrl"] = "cover.png"
    res = await client.post("/api/v1/portfolios", json=portfolio_payload)
    assert res.status_code == 400
    assert res.json()["error"]["fields"]["image_url"] == ["Must be a valid URL"]


async def test_wrong_type_is_400_not_422(client, portfolio_payload):
    portfolio_payload["featured"] = {"nested": True}
    res = await client.post("/api/v1/portfolios", json=portfolio_payload)
    assert res.status_code == 400
    assert "featured" in res.json()["error"]["fields"]


async def test_get_after_create(client, portfolio_payload):
    created = (await client.post("/api/v1/portfolios", json=portfolio_payload)).json()
    res = await client.get(f"/api/v1/portfolios/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created


async def test_get_missing_returns_404(client):
    missing = uuid4()
    res = await client.get(f"/api/v1/portfolios/{missing}")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == f"Portfolio '{missing}' not found"
    assert error["context"]["operation"] == "getPortfolio"


async def test_update_replaces_fields(client, portfolio_payload):
    created = (await client.post("/api/v1/portfolios", json=portfolio_payload)).json()
    replacement = {
        "title": "Renamed",
        "description": "New description",
        "technologies": ["Go"],
    }
    res = await client.put(f"/api/v1/portfolios/{created['id']}", json=replacement)
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == created["id"]
    assert body["title"] == "Renamed"
    assert body["githubUrl"] is None
    assert body["featured"] is False
    assert body["createdAt"] == created["createdAt"]
    assert body["updatedAt"] != created["updatedAt"]


async def test_update_missing_returns_404(client, portfolio_payload):
    res = await client.put(f"/api/v1/portfolios/{uuid4()}", json=portfolio_payload)
    assert res.status_code == 404


async def test_delete_twice(client, portfolio_payload):
    created = (await client.post("/api/v1/portfolios", json=portfolio_payload)).json()
    first = await client.delete(f"/api/v1/portfolios/{created['id']}")
    assert first.status_code == 200
    assert first.json() == {"id": created["id"], "deleted": True}
    second = await client.delete(f"/api/v1/portfolios/{created['id']}")
    assert second.status_code == 404
    listed = await client.get("/api/v1/portfolios")
    assert listed.json() == []


async def test_malformed_id_is_400(client):
    res = await client.get("/api/v1/portfolios/not-a-uuid")
    assert res.status_code == 400
