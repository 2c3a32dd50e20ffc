"""HTTP tests for load endpoints and the boat/load carrier routes."""

import pytest

ALICE = "auth0|alice"
BOB = "auth0|bob"
LOAD = {"volume": 5, "item": "LEGO Blocks", "creation_date": "10/18/2021"}


def auth(sub: str) -> dict[str, str]:
    return {"Authorization": f"Bearer token-{sub}"}


async def _create_boat(client, sub=ALICE):
    response = await client.post(
        "/api/v1/boats", json={"name": "Sea Breeze", "type": "Sloop", "length": 28}, headers=auth(sub)
    )
    return response.json()


async def _create_load(client, sub=ALICE, **overrides):
    response = await client.post("/api/v1/loads", json={**LOAD, **overrides}, headers=auth(sub))
    assert response.status_code == 201, response.text
    return response.json()


async def _get_load(client, load_id, sub=ALICE):
    return (await client.get(f"/api/v1/loads/{load_id}", headers=auth(sub))).json()


@pytest.mark.asyncio
async def test_new_load_has_no_carrier(client):
    load = await _create_load(client, carrier={"id": 1, "kind": "Boat"})

    assert load["carrier"] is None
    assert load["self"] == f"http://test/api/v1/loads/{load['id']}"


@pytest.mark.asyncio
async def test_load_date_format_is_validated(client):
    response = await client.post(
        "/api/v1/loads", json={**LOAD, "creation_date": "2021-10-18"}, headers=auth(ALICE)
    )
    assert response.status_code == 400
    assert response.json()["validation"]["field"] == "creation_date"


@pytest.mark.asyncio
async def test_assign_and_remove_carrier(client):
    boat = await _create_boat(client)
    load = await _create_load(client)

    response = await client.put(f"/api/v1/boats/{boat['id']}/loads/{load['id']}", headers=auth(ALICE))
    assert response.status_code == 204

    carrier = (await _get_load(client, load["id"]))["carrier"]
    assert carrier == {"id": boat["id"], "kind": "Boat", "self": boat["self"]}

    response = await client.delete(f"/api/v1/boats/{boat['id']}/loads/{load['id']}", headers=auth(ALICE))
    assert response.status_code == 204
    assert (await _get_load(client, load["id"]))["carrier"] is None


@pytest.mark.asyncio
async def test_carried_load_cannot_move_to_another_boat(client):
    boat = await _create_boat(client)
    other = await _create_boat(client)
    load = await _create_load(client)
    await client.put(f"/api/v1/boats/{boat['id']}/loads/{load['id']}", headers=auth(ALICE))

    response = await client.put(f"/api/v1/boats/{other['id']}/loads/{load['id']}", headers=auth(ALICE))

    assert response.status_code == 403
    assert (await _get_load(client, load["id"]))["carrier"]["id"] == boat["id"]


@pytest.mark.asyncio
async def test_remove_from_wrong_boat_is_not_found(client):
    boat = await _create_boat(client)
    other = await _create_boat(client)
    load = await _create_load(client)
    await client.put(f"/api/v1/boats/{boat['id']}/loads/{load['id']}", headers=auth(ALICE))

    response = await client.delete(f"/api/v1/boats/{other['id']}/loads/{load['id']}", headers=auth(ALICE))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_carrier_routes_need_both_entities(client):
    boat = await _create_boat(client)

    response = await client.put(f"/api/v1/boats/{boat['id']}/loads/99999", headers=auth(ALICE))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_carrier_routes_check_ownership(client):
    boat = await _create_boat(client, sub=ALICE)
    load = await _create_load(client, sub=BOB)

    response = await client.put(f"/api/v1/boats/{boat['id']}/loads/{load['id']}", headers=auth(BOB))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_deleting_boat_releases_its_loads(client):
    boat = await _create_boat(client)
    loads = [await _create_load(client) for _ in range(6)]
    for load in loads:
        await client.put(f"/api/v1/boats/{boat['id']}/loads/{load['id']}", headers=auth(ALICE))

    response = await client.delete(f"/api/v1/boats/{boat['id']}", headers=auth(ALICE))

    assert response.status_code == 204
    for load in loads:
        assert (await _get_load(client, load["id"]))["carrier"] is None


@pytest.mark.asyncio
async def test_replace_load_keeps_carrier(client):
    boat = await _create_boat(client)
    load = await _create_load(client)
    await client.put(f"/api/v1/boats/{boat['id']}/loads/{load['id']}", headers=auth(ALICE))

    response = await client.put(
        f"/api/v1/loads/{load['id']}",
        json={"volume": 9, "item": "Bricks", "creation_date": "01/01/2022", "carrier": None},
        headers=auth(ALICE),
    )

    assert response.status_code == 200
    assert response.json()["volume"] == 9
    assert response.json()["carrier"]["id"] == boat["id"]


@pytest.mark.asyncio
async def test_load_listing_counts_per_owner(client):
    for _ in range(3):
        await _create_load(client, sub=ALICE)
    await _create_load(client, sub=BOB)

    mine = (await client.get("/api/v1/loads", headers=auth(BOB))).json()
    everyone = (await client.get("/api/v1/loads")).json()

    assert mine["count"] == 1
    assert len(mine["data"]) == 1
    assert everyone["count"] == 4


@pytest.mark.asyncio
async def test_delete_load(client):
    load = await _create_load(client)

    assert (await client.delete(f"/api/v1/loads/{load['id']}", headers=auth(ALICE))).status_code == 204
    assert (await client.get(f"/api/v1/loads/{load['id']}", headers=auth(ALICE))).status_code == 404
    assert (await client.get("/api/v1/loads", headers=auth(ALICE))).json()["count"] == 0
