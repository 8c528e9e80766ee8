from datetime import datetime, timedelta, timezone

import pytest

from leadflow.features.clients.models.client import Client
from leadflow.features.clients.services.dashboard import ClientDashboardService, lead_stats, weekly_histogram
from leadflow.features.leads.models.lead import Lead

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)
TOKEN = "0123456789abcdef01234567"


@pytest.fixture
async def owner(db):
    owner = Client(
        business_name="Reyes Roofing",
        contact_name="Dana Reyes",
        email="dana@reyesroofing.ca",
        phone="780-555-0101",
        industry="roofing",
        city="Edmonton",
        plan="starter",
        plan_price=397,
        dashboard_token=TOKEN,
    )
    db.add(owner)
    await db.commit()
    return owner


def _lead(client_id, days_ago, status="new", job_value=None):
    return Lead(
        client_id=client_id,
        name=f"Lead {days_ago}",
        phone="555-0100",
        status=status,
        job_value=job_value,
        created_at=NOW - timedelta(days=days_ago),
    )


@pytest.mark.asyncio
async def test_dashboard_without_leads(client, owner):
    response = await client.get(f"/api/dashboard/{TOKEN}")

    assert response.status_code == 200
    data = response.json()
    assert "success" not in data
    assert data["client"] == {
        "businessName": "Reyes Roofing",
        "plan": "starter",
        "industry": "roofing",
        "city": "Edmonton",
    }
    assert data["stats"]["totalLeads"] == 0
    assert data["stats"]["closeRate"] == 0
    assert data["stats"]["costPerLead"] == 0
    assert [w["week"] for w in data["weeklyLeads"]] == ["W1", "W2", "W3", "W4"]
    assert all(w["count"] == 0 for w in data["weeklyLeads"])
    assert data["recentLeads"] == []


@pytest.mark.asyncio
async def test_dashboard_unknown_token(client):
    response = await client.get("/api/dashboard/not-a-token")
    assert response.status_code == 404
    assert response.json() == {"error": "Dashboard not found"}


@pytest.mark.asyncio
async def test_dashboard_stats(db, owner):
    leads = [_lead(owner.id, i, status="booked", job_value=500) for i in range(3)]
    leads += [_lead(owner.id, i + 3, status="contacted") for i in range(2)]
    leads += [_lead(owner.id, i + 5) for i in range(5)]
    db.add_all(leads)
    # Another client's lead never shows up
    db.add(Lead(client_id=None, name="Stray", phone="555-0199", created_at=NOW))
    await db.commit()

    dashboard = await ClientDashboardService(db).get_dashboard(TOKEN, now=NOW)
    stats = dashboard["stats"]

    assert stats["totalLeads"] == 10
    assert stats["bookedLeads"] == 3
    assert stats["contactedLeads"] == 2
    assert stats["newLeads"] == 5
    assert stats["totalRevenue"] == 1500
    assert stats["closeRate"] == "30.0"
    assert stats["costPerLead"] == "40"

    recent = dashboard["recentLeads"]
    assert recent[0]["name"] == "Lead 0"
    assert set(recent[0]) == {"id", "name", "phone", "serviceNeeded", "city", "status", "jobValue", "createdAt"}


@pytest.mark.asyncio
async def test_recent_leads_are_capped(db, owner):
    db.add_all([_lead(owner.id, i % 28) for i in range(25)])
    await db.commit()

    dashboard = await ClientDashboardService(db).get_dashboard(TOKEN, now=NOW)
    assert dashboard["stats"]["totalLeads"] == 25
    assert len(dashboard["recentLeads"]) == 20


def test_weekly_histogram_windows():
    leads = [
        Lead(created_at=NOW - timedelta(days=1)),
        Lead(created_at=NOW - timedelta(days=6, hours=23)),
        # Exactly seven days old belongs to the previous window
        Lead(created_at=NOW - timedelta(days=7)),
        Lead(created_at=NOW - timedelta(days=20)),
        Lead(created_at=NOW - timedelta(days=27)),
        Lead(created_at=NOW - timedelta(days=40)),
    ]

    weeks = weekly_histogram(leads, NOW)

    assert weeks == [
        {"week": "W1", "count": 1},
        {"week": "W2", "count": 1},
        {"week": "W3", "count": 1},
        {"week": "W4", "count": 2},
    ]


def test_weekly_histogram_covers_recent_leads():
    leads = [Lead(created_at=NOW - timedelta(hours=h)) for h in range(0, 27 * 24, 13)]
    weeks = weekly_histogram(leads, NOW)
    assert len(weeks) == 4
    assert sum(w["count"] for w in weeks) == len(leads)


def test_weekly_histogram_accepts_naive_timestamps():
    naive = NOW.replace(tzinfo=None) - timedelta(days=2)
    assert weekly_histogram([Lead(created_at=naive)], NOW)[-1]["count"] == 1


def test_lead_stats_without_plan_price():
    stats = lead_stats([Lead(status="new")], None)
    assert stats["costPerLead"] == "0"
    assert stats["closeRate"] == "0.0"
