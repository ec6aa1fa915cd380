import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.error_handlers import translate_db_error
from app.core.exceptions import BadRequestError, ConflictError, InternalServerError


class PgError(Exception):
    def __init__(self, pgcode, message="db error"):
        super().__init__(message)
        self.pgcode = pgcode


@pytest.mark.parametrize(
    "pgcode, expected",
    [
        ("23505", ConflictError),
        ("23503", BadRequestError),
        ("23514", BadRequestError),
        ("42703", BadRequestError),
        ("40001", InternalServerError),
    ],
)
def test_translate_postgres_errors(pgcode, expected):
    exc = IntegrityError("INSERT ...", {}, PgError(pgcode))
    assert type(translate_db_error(exc)) is expected


@pytest.mark.parametrize(
    "message, expected",
    [
        ("UNIQUE constraint failed: users.email", ConflictError),
        ("FOREIGN KEY constraint failed", BadRequestError),
        ("CHECK constraint failed: ck_budgets_amount_non_negative", BadRequestError),
        ("table budgets has no column named colour", BadRequestError),
        ("disk I/O error", InternalServerError),
    ],
)
def test_translate_sqlite_errors(message, expected):
    exc = OperationalError("UPDATE ...", {}, Exception(message))
    assert type(translate_db_error(exc)) is expected


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client):
    r = await client.get("/api/v1/nowhere")
    assert r.status_code == 404
    body = r.json()
    assert body["error"] == "Not Found"
    assert body["message"] == "Resource not found"
    assert body["details"]["method"] == "GET"


@pytest.mark.asyncio
async def test_wrong_method_keeps_status(client):
    r = await client.patch("/healthz")
    assert r.status_code == 405


@pytest.mark.asyncio
async def test_unexpected_error_is_500_with_stack_outside_production(make_app):
    app = make_app()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/boom")
    assert r.status_code == 500
    body = r.json()
    assert body["message"] == "An unexpected error occurred"
    assert "RuntimeError" in body["details"]["stack"]


@pytest.mark.asyncio
async def test_production_hides_stack(make_app):
    app = make_app(ENVIRONMENT="production")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/boom")
    assert r.status_code == 500
    details = r.json()["details"]
    assert "stack" not in details
    assert details["issues"] == []


@pytest.mark.asyncio
async def test_healthz(client):
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "OK"}
