"""Tests for API endpoints."""

from random import Random

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import create_app
from core.cards import CardStore


@pytest.fixture
def store():
    """Store backing the app under test."""
    return CardStore(rng=Random(42))


@pytest.fixture
def app(store):
    return create_app(store)


@pytest_asyncio.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "remaining": 52, "discard": 0}


@pytest.mark.asyncio
async def test_list_cards(client):
    response = await client.get("/cards")
    assert response.status_code == 200
    cards = response.json()
    assert len(cards) == 52
    assert cards[0] == {"id": "A-Clubs", "rank": "A", "suit": "Clubs"}


@pytest.mark.asyncio
async def test_list_cards_filtered(client):
    response = await client.get("/cards", params={"suit": "hearts", "rank": "k"})
    assert response.json() == [{"id": "K-Hearts", "rank": "K", "suit": "Hearts"}]


@pytest.mark.asyncio
async def test_get_card(client):
    response = await client.get("/cards/10-Spades")
    assert response.status_code == 200
    assert response.json()["rank"] == "10"


@pytest.mark.asyncio
async def test_get_discarded_card(client):
    await client.post("/draw")
    response = await client.get("/cards/A-Clubs")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_get_missing_card(client):
    response = await client.get("/cards/joker")
    assert response.status_code == 404
    assert response.json() == {"error": "Card not found"}


@pytest.mark.asyncio
async def test_add_card(client, store):
    response = await client.post("/cards", json={"rank": "Joker", "suit": "Black", "id": "joker-black"})
    assert response.status_code == 201
    assert response.json() == {"id": "joker-black", "rank": "Joker", "suit": "Black"}
    assert store.active[-1].id == "joker-black"


@pytest.mark.asyncio
async def test_add_card_default_id(client):
    response = await client.post("/cards", json={"rank": "Joker", "suit": "Red"})
    assert response.json()["id"] == "Joker-Red"


@pytest.mark.asyncio
async def test_add_card_missing_fields(client):
    response = await client.post("/cards", json={"rank": "A"})
    assert response.status_code == 400
    assert response.json() == {"error": "rank and suit are required"}


@pytest.mark.asyncio
async def test_add_card_without_body(client):
    response = await client.post("/cards")
    assert response.status_code == 400
    assert response.json() == {"error": "rank and suit are required"}


@pytest.mark.asyncio
async def test_add_duplicate_card(client):
    response = await client.post("/cards", json={"rank": "A", "suit": "Clubs"})
    assert response.status_code == 409
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_update_card(client):
    response = await client.put("/cards/A-Clubs", json={"suit": "Clovers", "newId": "A-Clovers"})
    assert response.status_code == 200
    assert response.json() == {"id": "A-Clovers", "rank": "A", "suit": "Clovers"}

    response = await client.get("/cards/A-Clubs")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_card_conflict(client):
    response = await client.put("/cards/A-Clubs", json={"rank": "Z", "newId": "2-Clubs"})
    assert response.status_code == 409
    assert (await client.get("/cards/A-Clubs")).json()["rank"] == "A"


@pytest.mark.asyncio
async def test_update_missing_card(client):
    response = await client.put("/cards/nope", json={"rank": "A"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_without_body_leaves_card(client):
    response = await client.put("/cards/A-Clubs")
    assert response.status_code == 200
    assert response.json() == {"id": "A-Clubs", "rank": "A", "suit": "Clubs"}


@pytest.mark.asyncio
async def test_update_missing_card_without_body(client):
    response = await client.put("/cards/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Card not in deck"}


@pytest.mark.asyncio
async def test_delete_card(client):
    response = await client.delete("/cards/Q-Hearts")
    assert response.status_code == 200
    assert response.json() == {"removed": {"id": "Q-Hearts", "rank": "Q", "suit": "Hearts"}}

    stats = (await client.get("/stats")).json()
    assert stats == {"remaining": 51, "discard": 1}

    response = await client.delete("/cards/Q-Hearts")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_shuffle(client, store):
    response = await client.post("/shuffle")
    assert response.status_code == 200
    assert response.json() == {"status": "shuffled", "remaining": 52}
    assert sorted(c.id for c in store.active) == sorted(c.id for c in CardStore().active)


@pytest.mark.asyncio
async def test_draw_three_from_fresh_deck(client):
    response = await client.post("/draw", params={"n": 3})
    assert response.status_code == 200
    data = response.json()
    assert [c["id"] for c in data["drawn"]] == ["A-Clubs", "2-Clubs", "3-Clubs"]
    assert data["remaining"] == 49


@pytest.mark.asyncio
async def test_draw_count_from_body(client):
    response = await client.post("/draw", json={"n": 2})
    assert len(response.json()["drawn"]) == 2


@pytest.mark.asyncio
async def test_draw_defaults_to_one(client):
    response = await client.post("/draw")
    data = response.json()
    assert len(data["drawn"]) == 1
    assert data["remaining"] == 51


@pytest.mark.asyncio
async def test_draw_from_empty_deck(client):
    await client.post("/draw", params={"n": 52})
    response = await client.post("/draw")
    assert response.status_code == 400
    assert response.json() == {"error": "Deck is empty"}


@pytest.mark.asyncio
async def test_draw_invalid_count(client):
    response = await client.post("/draw", params={"n": "lots"})
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_peek(client):
    response = await client.get("/peek", params={"n": 2})
    assert [c["id"] for c in response.json()] == ["A-Clubs", "2-Clubs"]
    assert (await client.get("/stats")).json()["remaining"] == 52


@pytest.mark.asyncio
async def test_peek_default(client):
    response = await client.get("/peek")
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_peek_invalid_count(client):
    response = await client.get("/peek", params={"n": "abc"})
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_reset_then_stats(client):
    await client.post("/draw", params={"n": 5})
    await client.post("/shuffle")
    response = await client.post("/reset")
    assert response.json() == {"status": "reset", "remaining": 52}

    response = await client.get("/stats")
    assert response.json() == {"remaining": 52, "discard": 0}


@pytest.mark.asyncio
async def test_unknown_route(client):
    response = await client.get("/jokers")
    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_unhandled_error_returns_500(store, monkeypatch):
    def boom():
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "stats", boom)
    transport = ASGITransport(app=create_app(store), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/stats")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
