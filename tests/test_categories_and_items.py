import pytest

from tests.helpers import BUDGETS, create_budget, create_category, create_item


@pytest.mark.asyncio
async def test_category_crud(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    category = await create_category(client, auth_headers, budget["id"])
    assert category["budget_id"] == budget["id"]
    url = f"{BUDGETS}/{budget['id']}/categories/{category['id']}"

    r = await client.get(f"{BUDGETS}/{budget['id']}/categories", headers=auth_headers)
    assert [c["id"] for c in r.json()["data"]] == [category["id"]]

    r = await client.put(url, json={"description": "Weekly shop"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Groceries"
    assert r.json()["data"]["description"] == "Weekly shop"

    r = await client.delete(url, headers=auth_headers)
    assert r.status_code == 200
    assert (await client.get(url, headers=auth_headers)).status_code == 404


@pytest.mark.asyncio
async def test_category_update_rejects_budget_id(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    category = await create_category(client, auth_headers, budget["id"])

    r = await client.put(
        f"{BUDGETS}/{budget['id']}/categories/{category['id']}",
        json={"budget_id": budget["id"]},
        headers=auth_headers,
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_category_under_wrong_budget_is_not_found(client, auth_headers):
    first = await create_budget(client, auth_headers, name="First")
    second = await create_budget(client, auth_headers, name="Second")
    category = await create_category(client, auth_headers, first["id"])

    r = await client.get(f"{BUDGETS}/{second['id']}/categories/{category['id']}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Budget category not found"


@pytest.mark.asyncio
async def test_categories_of_other_users_budget_are_not_found(client, auth_headers, other_headers):
    theirs = await create_budget(client, other_headers)

    r = await client.post(f"{BUDGETS}/{theirs['id']}/categories", json={"name": "x"}, headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Budget not found"


@pytest.mark.asyncio
async def test_item_crud(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    category = await create_category(client, auth_headers, budget["id"])
    item = await create_item(client, auth_headers, budget["id"], category["id"])
    assert item["category_id"] == category["id"]
    url = f"{BUDGETS}/{budget['id']}/categories/{category['id']}/items/{item['id']}"

    r = await client.get(url, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["amount"] == 450

    r = await client.put(url, json={"amount": 500}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["amount"] == 500
    assert r.json()["data"]["name"] == "Milk"

    r = await client.delete(url, headers=auth_headers)
    assert r.status_code == 200
    assert (await client.get(url, headers=auth_headers)).status_code == 404


@pytest.mark.asyncio
async def test_item_under_wrong_category_is_not_found(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    food = await create_category(client, auth_headers, budget["id"], name="Food")
    rent = await create_category(client, auth_headers, budget["id"], name="Rent")
    item = await create_item(client, auth_headers, budget["id"], food["id"])

    r = await client.get(
        f"{BUDGETS}/{budget['id']}/categories/{rent['id']}/items/{item['id']}", headers=auth_headers
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Budget category item not found"


@pytest.mark.asyncio
async def test_delete_all_items(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    category = await create_category(client, auth_headers, budget["id"])
    await create_item(client, auth_headers, budget["id"], category["id"], name="Milk")
    await create_item(client, auth_headers, budget["id"], category["id"], name="Bread")
    url = f"{BUDGETS}/{budget['id']}/categories/{category['id']}/items"

    r = await client.delete(url, headers=auth_headers)
    assert r.status_code == 200
    assert sorted(i["name"] for i in r.json()["data"]) == ["Bread", "Milk"]

    r = await client.get(url, headers=auth_headers)
    assert r.json()["data"] == []


@pytest.mark.asyncio
async def test_delete_all_items_of_empty_category_is_not_found(client, auth_headers):
    budget = await create_budget(client, auth_headers)
    category = await create_category(client, auth_headers, budget["id"])

    r = await client.delete(f"{BUDGETS}/{budget['id']}/categories/{category['id']}/items", headers=auth_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_deleting_category_cascades_to_items(client, auth_headers, db_session):
    from app.models.budget_category_item import BudgetCategoryItem

    budget = await create_budget(client, auth_headers)
    category = await create_category(client, auth_headers, budget["id"])
    item = await create_item(client, auth_headers, budget["id"], category["id"])

    r = await client.delete(f"{BUDGETS}/{budget['id']}/categories/{category['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert db_session.query(BudgetCategoryItem).filter_by(id=item["id"]).first() is None
