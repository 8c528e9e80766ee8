import pytest

from leadflow.features.capture_pages.models.capture_page import CapturePage
from leadflow.features.pages.routes import pages


@pytest.fixture
def public_dir(tmp_path, monkeypatch):
    (tmp_path / "index.html").write_text("<h1>LeadFlow24</h1>")
    (tmp_path / "capture-page.html").write_text("<form id='lead-form'></form>")
    (tmp_path / "quote" / "hvac").mkdir(parents=True)
    (tmp_path / "quote" / "hvac" / "edmonton.html").write_text("<h1>HVAC Edmonton</h1>")
    monkeypatch.setattr(pages.settings, "PUBLIC_DIR", str(tmp_path))
    return tmp_path


@pytest.mark.asyncio
async def test_quote_page_counts_a_view(client, db, public_dir):
    db.add(CapturePage(slug="hvac-edmonton-demo", title="Edmonton HVAC Services", industry="hvac", city="Edmonton"))
    await db.commit()

    response = await client.get("/quote/hvac-edmonton-demo")
    assert response.status_code == 200
    assert "lead-form" in response.text

    page = (await db.execute(CapturePage.__table__.select())).one()
    assert page.views == 1


@pytest.mark.asyncio
async def test_unknown_quote_page_is_404(client, public_dir):
    response = await client.get("/quote/nope")
    assert response.status_code == 404
    assert response.text == "Page not found"


@pytest.mark.asyncio
async def test_static_quote_page_falls_back_to_index(client, public_dir):
    found = await client.get("/quote/hvac/edmonton")
    assert found.status_code == 200
    assert "HVAC Edmonton" in found.text

    missing = await client.get("/quote/plumbing/calgary")
    assert missing.status_code == 404
    assert "LeadFlow24" in missing.text


@pytest.mark.asyncio
async def test_catch_all_serves_index_but_not_for_api(client, public_dir):
    response = await client.get("/some/marketing/path")
    assert response.status_code == 200
    assert "LeadFlow24" in response.text

    traversal = await client.get("/quote/..%2F..%2Fetc/passwd")
    assert "root:" not in traversal.text
