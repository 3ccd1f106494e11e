import pytest


pytestmark = pytest.mark.asyncio


def card_payload(name="Red Rocks N1", filled=25, **extra):
    squares = [f"Square {i}" for i in range(filled)] + [""] * (25 - filled)
    return {"name": name, "date": "2024-08-09", "venue": "Red Rocks", "squares": squares, **extra}


async def _headers(create_user, auth_header_factory):
    user, password = await create_user()
    return await auth_header_factory(user.email, password), user


async def test_full_card_crud_flow(client, create_user, auth_header_factory):
    headers, user = await _headers(create_user, auth_header_factory)

    list_resp = await client.get("/api/bingo-cards", headers=headers)
    assert list_resp.status_code == 200
    assert list_resp.json()["data"] == []
    assert list_resp.json()["count"] == 0

    create_resp = await client.post("/api/bingo-cards", headers=headers, json=card_payload(filled=10))
    assert create_resp.status_code == 201
    card = create_resp.json()["data"]
    assert card["userId"] == str(user.id)
    assert len(card["squares"]) == 25
    assert card["summary"] == {
        "filledSquares": 10,
        "totalSquares": 25,
        "progress": "10/25",
        "isComplete": False,
    }

    detail_resp = await client.get(f"/api/bingo-cards/{card['id']}", headers=headers)
    assert detail_resp.status_code == 200
    assert detail_resp.json()["data"]["name"] == "Red Rocks N1"

    update_resp = await client.put(
        f"/api/bingo-cards/{card['id']}",
        headers=headers,
        json={"name": "Renamed", "userId": "someone-else", "bogus": True},
    )
    assert update_resp.status_code == 200
    updated = update_resp.json()["data"]
    assert updated["name"] == "Renamed"
    assert updated["venue"] == "Red Rocks"
    assert updated["userId"] == str(user.id)
    assert len(updated["squares"]) == 25

    delete_resp = await client.delete(f"/api/bingo-cards/{card['id']}", headers=headers)
    assert delete_resp.status_code == 200

    missing_resp = await client.get(f"/api/bingo-cards/{card['id']}", headers=headers)
    assert missing_resp.status_code == 404


async def test_create_defaults_and_validation(client, create_user, auth_header_factory):
    headers, _ = await _headers(create_user, auth_header_factory)

    resp = await client.post(
        "/api/bingo-cards",
        headers=headers,
        json={"name": "Minimal", "squares": [""] * 25},
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["date"] == ""
    assert resp.json()["data"]["venue"] == ""

    bad = await client.post("/api/bingo-cards", headers=headers, json={"name": "Short", "squares": ["a"] * 24})
    assert bad.status_code == 400
    assert "exactly 25 squares" in bad.json()["error"]["message"]

    missing = await client.post("/api/bingo-cards", headers=headers, json={})
    assert missing.status_code == 400
    assert "Card name is required" in missing.json()["error"]["message"]


async def test_update_with_24_squares_rejected(client, create_user, auth_header_factory):
    headers, _ = await _headers(create_user, auth_header_factory)
    card_id = (await client.post("/api/bingo-cards", headers=headers, json=card_payload())).json()["data"]["id"]

    resp = await client.put(
        f"/api/bingo-cards/{card_id}",
        headers=headers,
        json={"squares": ["x"] * 24},
    )
    assert resp.status_code == 400
    assert "exactly 25 squares" in resp.json()["error"]["message"]

    unchanged = await client.get(f"/api/bingo-cards/{card_id}", headers=headers)
    assert unchanged.json()["data"]["squares"][0] == "Square 0"


async def test_cards_isolated_per_user(client, create_user, auth_header_factory):
    owner_headers, _ = await _headers(create_user, auth_header_factory)
    other_headers, _ = await _headers(create_user, auth_header_factory)

    card_id = (await client.post("/api/bingo-cards", headers=owner_headers, json=card_payload())).json()["data"]["id"]

    assert (await client.get(f"/api/bingo-cards/{card_id}", headers=other_headers)).status_code == 404
    assert (
        await client.put(f"/api/bingo-cards/{card_id}", headers=other_headers, json={"name": "Mine now"})
    ).status_code == 404
    assert (await client.delete(f"/api/bingo-cards/{card_id}", headers=other_headers)).status_code == 404
    assert (await client.get("/api/bingo-cards", headers=other_headers)).json()["data"] == []

    still_there = await client.get(f"/api/bingo-cards/{card_id}", headers=owner_headers)
    assert still_there.status_code == 200
    assert still_there.json()["data"]["name"] == "Red Rocks N1"


async def test_malformed_card_id_is_not_found(client, create_user, auth_header_factory):
    headers, _ = await _headers(create_user, auth_header_factory)
    resp = await client.get("/api/bingo-cards/not-a-uuid", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Bingo card not found"


async def test_list_pagination_and_sort(client, create_user, auth_header_factory):
    headers, _ = await _headers(create_user, auth_header_factory)
    for name in ("Alpha", "Charlie", "Bravo"):
        await client.post("/api/bingo-cards", headers=headers, json=card_payload(name=name))

    by_name = await client.get("/api/bingo-cards", headers=headers, params={"sort": "name"})
    assert [c["name"] for c in by_name.json()["data"]] == ["Charlie", "Bravo", "Alpha"]

    page = await client.get("/api/bingo-cards", headers=headers, params={"sort": "name", "limit": 1, "skip": 1})
    assert [c["name"] for c in page.json()["data"]] == ["Bravo"]
    assert page.json()["count"] == 1

    bad_sort = await client.get("/api/bingo-cards", headers=headers, params={"sort": "squares"})
    assert bad_sort.status_code == 400


async def test_stats_empty(client, create_user, auth_header_factory):
    headers, _ = await _headers(create_user, auth_header_factory)
    resp = await client.get("/api/bingo-cards/stats", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "totalCards": 0,
        "completedCards": 0,
        "averageProgress": 0,
        "recentCards": [],
    }


async def test_stats_with_cards(client, create_user, auth_header_factory):
    headers, _ = await _headers(create_user, auth_header_factory)
    for i, filled in enumerate((25, 10, 0, 25, 5, 12)):
        await client.post("/api/bingo-cards", headers=headers, json=card_payload(name=f"Card{i}", filled=filled))

    data = (await client.get("/api/bingo-cards/stats", headers=headers)).json()["data"]
    assert data["totalCards"] == 6
    assert data["completedCards"] == 2
    assert data["averageProgress"] == 13  # 77 / 6 = 12.83
    assert len(data["recentCards"]) == 5


async def test_cards_require_auth(client):
    assert (await client.get("/api/bingo-cards")).status_code == 401
    assert (await client.get("/api/bingo-cards/stats")).status_code == 401
    assert (await client.post("/api/bingo-cards", json=card_payload())).status_code == 401
