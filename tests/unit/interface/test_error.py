"""Unit tests for error to HTTP status mapping."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from singles.domain.error import (
    ConflictError,
    DomainError,
    DuplicateError,
    ForbiddenError,
    IneligibleError,
    InvalidTransitionError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from singles.interface.error import register_exception_handlers, status_for
from singles.persistence.error import StoreUnavailableError


class TestStatusFor:
    """Tests for status_for."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ValidationError("bad"), 400),
            (IneligibleError("no"), 403),
            (ForbiddenError("no"), 403),
            (NotFoundError("Invite", "x"), 404),
            (QuotaExceededError(3, 3), 429),
            (ConflictError("taken"), 409),
            (DuplicateError("again"), 409),
            (InvalidTransitionError("revoked", "completed"), 409),
            (DomainError("other"), 400),
        ],
    )
    def test_mapping(self, error, expected):
        assert status_for(error) == expected


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/quota")
    async def quota():
        raise QuotaExceededError(3, 3)

    @app.get("/store")
    async def store():
        raise StoreUnavailableError(3, ConnectionResetError())

    return app


class TestExceptionHandlers:
    """Tests for the registered exception handlers."""

    def test_domain_error_body(self):
        client = TestClient(_app())

        response = client.get("/quota")

        assert response.status_code == 429
        assert response.json() == {
            "detail": "You already have 3 active invites. "
            "Please revoke one before creating another."
        }

    def test_store_unavailable(self):
        client = TestClient(_app())

        response = client.get("/store")

        assert response.status_code == 503
        assert response.json()["detail"] == "Service temporarily unavailable. Please retry."
