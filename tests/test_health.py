import pytest


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/health")
    assert response.status_code == 200

    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["version"] == "1.0.0"
    assert "timestamp" in payload
    assert "success" not in payload


@pytest.mark.asyncio
async def test_unknown_api_path_is_json_404(client):
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_validation_errors_use_error_envelope(client):
    response = await client.post("/api/leads", content="not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid request")
