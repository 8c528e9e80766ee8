import pytest
from sqlalchemy import select

from leadflow.features.clients.models.client import Client
from leadflow.features.trials.models.trial_signup import TrialSignup

CLIENT = {
    "business_name": "Reyes Roofing",
    "contact_name": "Dana Reyes",
    "email": "Dana@ReyesRoofing.ca",
    "phone": "780-555-0101",
    "industry": "roofing",
    "city": "Edmonton",
}


@pytest.mark.asyncio
async def test_create_client(client, db):
    response = await client.post("/api/admin/clients", json=CLIENT)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    token = data["client"]["dashboardToken"]
    assert len(token) == 24
    assert data["dashboardUrl"] == f"https://leadflow24.test/dashboard?token={token}"

    stored = await db.get(Client, data["client"]["id"])
    assert stored.email == "dana@reyesroofing.ca"
    assert stored.plan == "starter"
    assert stored.plan_price == 397
    assert stored.status == "active"
    assert stored.onboarded_at is not None


@pytest.mark.asyncio
async def test_create_client_converts_trial(client, db):
    trial = TrialSignup(first_name="Dana", email="dana@reyesroofing.ca", phone="780-555-0101")
    db.add(trial)
    await db.commit()
    trial_id = trial.id

    response = await client.post("/api/admin/clients", json={**CLIENT, "trial_id": trial_id, "plan": "growth"})
    assert response.status_code == 200

    db.expire_all()
    converted = await db.get(TrialSignup, trial_id)
    assert converted.status == "converted"

    stored = (await db.execute(select(Client))).scalar_one()
    assert stored.trial_id == trial_id
    assert stored.plan == "growth"


@pytest.mark.asyncio
async def test_create_client_unknown_trial(client, db):
    response = await client.post("/api/admin/clients", json={**CLIENT, "trial_id": "missing"})

    assert response.status_code == 404
    assert response.json() == {"error": "Trial signup not found"}
    assert (await db.execute(select(Client))).first() is None


@pytest.mark.asyncio
async def test_duplicate_client_email(client):
    await client.post("/api/admin/clients", json=CLIENT)
    response = await client.post("/api/admin/clients", json={**CLIENT, "email": "dana@reyesroofing.ca"})

    assert response.status_code == 409
    assert response.json() == {"error": "A client with this email already exists"}


@pytest.mark.asyncio
async def test_create_client_validates_body(client):
    response = await client.post("/api/admin/clients", json={"business_name": "Only a name"})
    assert response.status_code == 400
    assert "contact_name" in response.json()["error"]


@pytest.mark.asyncio
async def test_update_client(client, db):
    client_id = (await client.post("/api/admin/clients", json=CLIENT)).json()["client"]["id"]

    response = await client.patch(
        f"/api/admin/clients/{client_id}",
        json={"plan": "pro", "plan_price": 697, "service_area": "Edmonton + St. Albert", "phone": None},
    )
    assert response.status_code == 200

    stored = await db.get(Client, client_id)
    assert stored.plan == "pro"
    assert stored.plan_price == 697
    assert stored.service_area == "Edmonton + St. Albert"
    assert stored.phone == "780-555-0101"


@pytest.mark.asyncio
async def test_tokens_are_unique(client, db):
    for i in range(5):
        await client.post("/api/admin/clients", json={**CLIENT, "email": f"owner{i}@example.com"})

    tokens = (await db.execute(select(Client.dashboard_token))).scalars().all()
    assert len(set(tokens)) == 5
