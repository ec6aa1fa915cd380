from app.core.security import create_access_token, get_password_hash
from app.models.user import User

BUDGETS = "/api/v1/budgets"


async def create_budget(client, headers, **fields):
    payload = {"name": "Household", "description": "Monthly spend", "amount": 150000}
    payload.update(fields)
    r = await client.post(BUDGETS, json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


async def create_category(client, headers, budget_id, name="Groceries"):
    r = await client.post(f"{BUDGETS}/{budget_id}/categories", json={"name": name}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


async def create_item(client, headers, budget_id, category_id, name="Milk", amount=450):
    r = await client.post(
        f"{BUDGETS}/{budget_id}/categories/{category_id}/items",
        json={"name": name, "amount": amount},
        headers=headers,
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


async def create_transaction_type(client, headers, budget_id, label="Groceries run"):
    r = await client.post(f"{BUDGETS}/{budget_id}/transactions/types", json={"label": label}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


async def create_transaction(client, headers, budget_id, **fields):
    payload = {"amount": 1299, "date": "2026-10-01", "description": "Corner shop"}
    payload.update(fields)
    r = await client.post(f"{BUDGETS}/{budget_id}/transactions", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def create_user(db, email="u1@example.com", password="password123", name="Test User"):
    user = User(email=email, name=name, password_hash=get_password_hash(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers_for(app, user_id: int) -> dict:
    token = create_access_token(app.state.settings, user_id)
    return {"Authorization": f"Bearer {token}"}


class FakePipeline:
    def __init__(self, store):
        self.store = store
        self.ops = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def incr(self, key, amount=1):
        self.ops.append(("incr", key, amount))

    def expire(self, key, seconds, nx=False):
        self.ops.append(("expire", key, seconds))

    def execute(self):
        results = []
        for op, key, value in self.ops:
            if op == "incr":
                self.store[key] = self.store.get(key, 0) + value
                results.append(self.store[key])
            else:
                results.append(True)
        self.ops = []
        return results


class FakeCache:
    """In-memory stand-in for the Redis counter used by the rate limiter."""

    def __init__(self):
        self.store = {}

    def pipeline(self):
        return FakePipeline(self.store)
