import pytest

from tests.helpers import BUDGETS, create_budget


@pytest.mark.asyncio
async def test_requires_authentication(client):
    r = await client.get(BUDGETS)
    assert r.status_code == 401
    body = r.json()
    assert body["error"] == "Unauthorized"
    assert body["details"]["method"] == "GET"
    assert body["details"]["url"].endswith(BUDGETS)


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(client):
    r = await client.get(BUDGETS, headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_create_then_get_round_trip(client, user, auth_headers):
    created = await create_budget(client, auth_headers)
    assert created["user_id"] == user.id
    assert created["name"] == "Household"
    assert created["amount"] == 150000

    r = await client.get(f"{BUDGETS}/{created['id']}", headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Budget fetched successfully"
    assert body["data"]["id"] == created["id"]
    assert body["data"]["description"] == "Monthly spend"


@pytest.mark.asyncio
async def test_list_only_returns_own_budgets(client, auth_headers, other_headers):
    mine = await create_budget(client, auth_headers, name="Mine")
    await create_budget(client, other_headers, name="Theirs")

    r = await client.get(BUDGETS, headers=auth_headers)
    assert r.status_code == 200
    assert [b["id"] for b in r.json()["data"]] == [mine["id"]]


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(client, auth_headers):
    created = await create_budget(client, auth_headers)

    r = await client.put(f"{BUDGETS}/{created['id']}", json={"name": "Renamed"}, headers=auth_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["name"] == "Renamed"
    assert data["description"] == "Monthly spend"
    assert data["amount"] == 150000
    assert data["updated_at"] is not None


@pytest.mark.asyncio
async def test_update_is_idempotent(client, auth_headers):
    created = await create_budget(client, auth_headers)
    patch = {"amount": 999}

    first = await client.put(f"{BUDGETS}/{created['id']}", json=patch, headers=auth_headers)
    second = await client.put(f"{BUDGETS}/{created['id']}", json=patch, headers=auth_headers)
    assert first.status_code == second.status_code == 200
    assert first.json()["data"]["amount"] == second.json()["data"]["amount"] == 999


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["user_id", "id", "created_at"])
async def test_update_rejects_immutable_fields(client, auth_headers, field):
    created = await create_budget(client, auth_headers)

    r = await client.put(f"{BUDGETS}/{created['id']}", json={field: 1}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Input doesn't match the schema for this request"


@pytest.mark.asyncio
async def test_negative_amount_is_rejected(client, auth_headers):
    r = await client.post(BUDGETS, json={"name": "Bad", "amount": -1}, headers=auth_headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_other_users_budget_is_not_found(client, auth_headers, other_headers):
    theirs = await create_budget(client, other_headers)
    url = f"{BUDGETS}/{theirs['id']}"

    assert (await client.get(url, headers=auth_headers)).status_code == 404
    assert (await client.put(url, json={"name": "x"}, headers=auth_headers)).status_code == 404
    assert (await client.delete(url, headers=auth_headers)).status_code == 404

    # Still intact for its owner
    r = await client.get(url, headers=other_headers)
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Household"


@pytest.mark.asyncio
async def test_missing_budget_is_not_found(client, auth_headers):
    r = await client.get(f"{BUDGETS}/4242", headers=auth_headers)
    assert r.status_code == 404
    body = r.json()
    assert body["error"] == "Not Found"
    assert body["message"] == "Budget not found"


@pytest.mark.asyncio
async def test_delete_returns_row_and_second_delete_is_404(client, auth_headers):
    created = await create_budget(client, auth_headers)
    url = f"{BUDGETS}/{created['id']}"

    r = await client.delete(url, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["id"] == created["id"]

    assert (await client.delete(url, headers=auth_headers)).status_code == 404
    assert (await client.get(url, headers=auth_headers)).status_code == 404
