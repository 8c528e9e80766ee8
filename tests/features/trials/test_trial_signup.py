import pytest
from sqlalchemy import func, select

from leadflow.features.subscribers.models.subscriber import Subscriber
from leadflow.features.trials.models.trial_signup import TrialSignup

SIGNUP = {
    "firstName": "Dana",
    "lastName": "Reyes",
    "businessName": "Reyes Roofing",
    "email": "dana@reyesroofing.ca",
    "phone": "780-555-0101",
    "industry": "roofing",
    "city": "Edmonton",
}


@pytest.mark.asyncio
async def test_trial_signup_success(client, db, notifier):
    response = await client.post("/api/trial-signup", json=SIGNUP)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Trial signup successful"

    trial = await db.get(TrialSignup, data["id"])
    assert trial.first_name == "Dana"
    assert trial.business_name == "Reyes Roofing"
    assert trial.status == "new"
    assert trial.source == "free_trial_page"

    subscriber = (await db.execute(select(Subscriber))).scalar_one()
    assert subscriber.email == "dana@reyesroofing.ca"
    assert subscriber.source == "trial_signup"

    welcome, internal = notifier.sent
    assert welcome["template"] == "trial_welcome"
    assert welcome["recipient"] == "dana@reyesroofing.ca"
    assert welcome["data"] == {"firstName": "Dana"}
    assert internal["type"] == "Trial Signup"
    assert internal["subject"] == "🚀 NEW TRIAL SIGNUP: Reyes Roofing (roofing) — Edmonton"


@pytest.mark.asyncio
async def test_duplicate_trial_is_conflict(client, db, notifier):
    await client.post("/api/trial-signup", json=SIGNUP)
    sent_before = len(notifier.sent)

    response = await client.post("/api/trial-signup", json={**SIGNUP, "email": "DANA@reyesroofing.ca"})

    assert response.status_code == 409
    assert response.json() == {"error": "Email already registered for a trial"}
    assert await db.scalar(select(func.count(TrialSignup.id))) == 1
    assert len(notifier.sent) == sent_before


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["firstName", "email", "phone"])
async def test_trial_signup_required_fields(client, missing):
    body = {k: v for k, v in SIGNUP.items() if k != missing}
    response = await client.post("/api/trial-signup", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "First name, email, and phone required"}


@pytest.mark.asyncio
async def test_trial_signup_for_existing_subscriber(client, db):
    await client.post("/api/subscribe", json={"email": SIGNUP["email"], "source": "homepage"})
    response = await client.post("/api/trial-signup", json=SIGNUP)

    assert response.status_code == 200
    subscriber = (await db.execute(select(Subscriber))).scalar_one()
    assert subscriber.source == "homepage"


@pytest.mark.asyncio
async def test_admin_can_update_trial(client, db):
    trial_id = (await client.post("/api/trial-signup", json=SIGNUP)).json()["id"]

    response = await client.patch(
        f"/api/admin/trials/{trial_id}",
        json={"status": "active", "notes": "Called, wants a demo", "assigned_to": "luke"},
    )
    assert response.status_code == 200

    trial = await db.get(TrialSignup, trial_id)
    assert trial.status == "active"
    assert trial.notes == "Called, wants a demo"
    assert trial.assigned_to == "luke"


@pytest.mark.asyncio
async def test_update_unknown_trial(client):
    response = await client.patch("/api/admin/trials/nope", json={"status": "active"})
    assert response.status_code == 404
    assert response.json() == {"error": "Trial signup not found"}


@pytest.mark.asyncio
async def test_trial_signup_accepts_snake_case_keys(client, db):
    body = {
        "first_name": "Sam",
        "business_name": "Sam's Plumbing",
        "email": "sam@samsplumbing.ca",
        "phone": "780-555-0199",
    }
    response = await client.post("/api/trial-signup", json=body)

    assert response.status_code == 200
    trial = await db.get(TrialSignup, response.json()["id"])
    assert trial.first_name == "Sam"
    assert trial.business_name == "Sam's Plumbing"
