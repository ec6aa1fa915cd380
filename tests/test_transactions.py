import pytest

from app.models.transaction import Transaction
from tests.helpers import (
    BUDGETS,
    create_budget,
    create_category,
    create_item,
    create_transaction,
    create_transaction_type,
)


@pytest.mark.asyncio
async def test_transaction_crud(client, user, auth_headers):
    budget = await create_budget(client, auth_headers)
    created = await create_transaction(client, auth_headers, budget["id"])
    assert created["user_id"] == user.id
    assert created["budget_id"] == budget["id"]
    assert created["date"] == "2026-10-01"
    url = f"{BUDGETS}/{budget['id']}/transactions/{created['id']}"

    r = await client.get(f"{BUDGETS}/{budget['id']}/transactions", headers=auth_headers)
    assert [t["id"] for t in r.json()["data"]] == [created["id"]]

    r = await client.put(url, json={"amount": 1500}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["amount"] == 1500
    assert r.json()["data"]["description"] == "Corner shop"

    r = await client.delete(url, headers=auth_headers)
    assert r.status_code == 200
    assert (await client.get(url, headers=auth_headers)).status_code == 404


@pytest.mark.asyncio
async def test_transaction_with_item_and_type(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    category = await create_category(client, auth_headers, budget["id"])
    item = await create_item(client, auth_headers, budget["id"], category["id"])
    transaction_type = await create_transaction_type(client, auth_headers, budget["id"])

    created = await create_transaction(
        client, auth_headers, budget["id"], item_id=item["id"], transaction_type_id=transaction_type["id"]
    )
    assert created["item_id"] == item["id"]
    assert created["transaction_type_id"] == transaction_type["id"]


@pytest.mark.asyncio
async def test_item_from_another_budget_is_not_found(client, auth_headers):
    first = await create_budget(client, auth_headers, name="First")
    second = await create_budget(client, auth_headers, name="Second")
    category = await create_category(client, auth_headers, first["id"])
    item = await create_item(client, auth_headers, first["id"], category["id"])

    r = await client.post(
        f"{BUDGETS}/{second['id']}/transactions",
        json={"amount": 10, "date": "2026-10-02", "item_id": item["id"]},
        headers=auth_headers,
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Budget category item not found"


@pytest.mark.asyncio
async def test_update_rejects_budget_and_user_ids(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    created = await create_transaction(client, auth_headers, budget["id"])
    url = f"{BUDGETS}/{budget['id']}/transactions/{created['id']}"

    assert (await client.put(url, json={"budget_id": 99}, headers=auth_headers)).status_code == 400
    assert (await client.put(url, json={"user_id": 99}, headers=auth_headers)).status_code == 400


@pytest.mark.asyncio
async def test_malformed_date_is_bad_request(client, auth_headers):
    budget = await create_budget(client, auth_headers)

    r = await client.post(
        f"{BUDGETS}/{budget['id']}/transactions",
        json={"amount": 10, "date": "not-a-date"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["details"]["issues"]


@pytest.mark.asyncio
async def test_other_users_transactions_are_not_found(client, auth_headers, other_headers):
    theirs = await create_budget(client, other_headers)
    transaction = await create_transaction(client, other_headers, theirs["id"])

    r = await client.get(f"{BUDGETS}/{theirs['id']}/transactions/{transaction['id']}", headers=auth_headers)
    assert r.status_code == 404
    r = await client.get(f"{BUDGETS}/{theirs['id']}/transactions", headers=auth_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_deleting_budget_cascades(client, auth_headers, db_session):
    budget = await create_budget(client, auth_headers)
    category = await create_category(client, auth_headers, budget["id"])
    item = await create_item(client, auth_headers, budget["id"], category["id"])
    transaction = await create_transaction(client, auth_headers, budget["id"], item_id=item["id"])

    r = await client.delete(f"{BUDGETS}/{budget['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert db_session.query(Transaction).filter_by(id=transaction["id"]).first() is None
    r = await client.get(f"{BUDGETS}/{budget['id']}/categories/{category['id']}", headers=auth_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_transaction_survives_deletion_of_its_type(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    transaction_type = await create_transaction_type(client, auth_headers, budget["id"])
    transaction = await create_transaction(
        client, auth_headers, budget["id"], transaction_type_id=transaction_type["id"]
    )

    r = await client.delete(
        f"{BUDGETS}/{budget['id']}/transactions/types/{transaction_type['id']}", headers=auth_headers
    )
    assert r.status_code == 200

    r = await client.get(f"{BUDGETS}/{budget['id']}/transactions/{transaction['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["transaction_type_id"] is None
