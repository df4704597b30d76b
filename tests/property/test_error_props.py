"""Property-based tests for error responses.

Every failure is rendered as {status, status_text, error?} and no error
body ever carries stack traces, file paths or the text of the underlying
database exception.
"""

import re
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from litestar import Litestar
from litestar.datastructures import State
from litestar.di import Provide
from litestar.testing import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from confhub.api.errors import EXCEPTION_HANDLERS
from confhub.api.settings import SettingsController
from confhub.app import create_app
from confhub.core.auth import auth_middleware
from tests.conftest import ADMIN_HEADERS, READ_HEADERS, make_test_settings

BASE = "/api/v1/settings"

SENSITIVE_DETAIL = "disk I/O error at /var/lib/confhub/confhub.db line 42"

# Patterns that should never appear in error responses
FORBIDDEN_PATTERNS = [
    r"Traceback \(most recent call last\)",
    r"File \".*\.py\"",
    r"line \d+",
    r"/var/",
    r"\.py:",
    r"OperationalError",
    r"SELECT",
]


def response_is_safe(response_text: str) -> bool:
    """Check that a response body leaks nothing internal."""
    return not any(re.search(pattern, response_text) for pattern in FORBIDDEN_PATTERNS)


def create_failing_app() -> Litestar:
    """Create an app whose database session fails on every query."""

    async def provide_broken_session() -> AsyncGenerator[AsyncSession]:
        failure = OperationalError(
            "SELECT * FROM settings", {}, Exception(SENSITIVE_DETAIL)
        )
        session = AsyncMock(spec=AsyncSession)
        session.scalars.side_effect = failure
        session.get.side_effect = failure
        session.execute.side_effect = failure
        yield session

    return Litestar(
        route_handlers=[SettingsController],
        state=State({"settings": make_test_settings()}),
        dependencies={"session": Provide(provide_broken_session)},
        middleware=[auth_middleware],
        exception_handlers=EXCEPTION_HANDLERS,
    )


# "key" and "category" are static route segments, not ids
non_numeric_id = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz_-"),
    min_size=1,
    max_size=20,
).filter(lambda s: s not in {"key", "category"})

setting_id = st.integers(min_value=1, max_value=2**62)


class TestBadIdsAreInvalidRequests:
    """Any id that is not an integer yields 400 for every id route."""

    @settings(max_examples=30, deadline=None)
    @given(raw_id=non_numeric_id)
    def test_non_numeric_ids_return_400(self, raw_id: str) -> None:
        app = create_app(make_test_settings())
        with TestClient(app) as client:
            responses = [
                client.get(f"{BASE}/{raw_id}", headers=READ_HEADERS),
                client.put(
                    f"{BASE}/{raw_id}",
                    json={"key": "k", "value": "v"},
                    headers=ADMIN_HEADERS,
                ),
                client.delete(f"{BASE}/{raw_id}", headers=ADMIN_HEADERS),
            ]

        for response in responses:
            assert response.status_code == 400
            assert response.json() == {
                "status": 400,
                "status_text": "Invalid request.",
                "error": "invalid setting ID",
            }


class TestUnknownIdsAreNotFound:
    """Any well-formed id that does not exist yields 404."""

    @settings(max_examples=30, deadline=None)
    @given(missing_id=setting_id)
    def test_unknown_ids_return_404(self, missing_id: int) -> None:
        app = create_app(make_test_settings())
        with TestClient(app) as client:
            get_response = client.get(f"{BASE}/{missing_id}", headers=READ_HEADERS)
            delete_response = client.delete(
                f"{BASE}/{missing_id}", headers=ADMIN_HEADERS
            )
            put_response = client.put(
                f"{BASE}/{missing_id}", json={"value": ""}, headers=ADMIN_HEADERS
            )

        for response in (get_response, delete_response, put_response):
            assert response.status_code == 404
            data: dict[str, object] = response.json()  # pyright: ignore[reportAny]
            assert data["status"] == 404
            assert data["status_text"] == "Resource not found."
            assert "code" not in data


class TestStoreFailuresAreOpaque:
    """Store failures yield a generic 500 that reveals nothing."""

    @settings(
        max_examples=30,
        deadline=None,
        suppress_health_check=[HealthCheck.too_slow],
    )
    @given(
        call=st.sampled_from(
            [
                ("GET", BASE, None),
                ("GET", f"{BASE}/category/room", None),
                ("GET", f"{BASE}/1", None),
                ("GET", f"{BASE}/key/system_name", None),
                ("POST", BASE, {"key": "k", "value": "v"}),
                ("PUT", f"{BASE}/1", {"key": "k", "value": "v"}),
                ("PATCH", f"{BASE}/system_name", {"value": "v"}),
                ("DELETE", f"{BASE}/1", None),
            ]
        )
    )
    def test_internal_errors_are_generic(
        self, call: tuple[str, str, dict[str, str] | None]
    ) -> None:
        method, path, body = call
        with TestClient(create_failing_app()) as client:
            response = client.request(method, path, json=body, headers=ADMIN_HEADERS)

        assert response.status_code == 500
        assert response.json() == {
            "status": 500,
            "status_text": "Internal server error.",
        }
        assert response_is_safe(response.text)
