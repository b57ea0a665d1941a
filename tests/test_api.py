"""
Integration tests for the router bootstrap.

Builds the full application with test route groups and exercises the
middleware pipeline, the /api catch-all and the unified error format
through TestClient.
"""

import logging
from typing import Optional

import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.exc import NoResultFound

from helpers import build_settings
from space.api.activity import ActivityLogger
from space.api.deps import get_auth, get_space, require_auth
from space.api.health import bind_health_api
from space.api.router import ApiRouter
from space.common.errors import BadRequestError, NotFoundError
from space.core.app import App
from space.core.auth import AuthContext, TokenAuthResolver
from space.main import create_app

NOT_FOUND_BODY = {"code": 404, "message": NotFoundError.default_message}


def bind_failing_api(app: App, api: ApiRouter) -> None:
    @api.get("/fail/generic")
    def generic() -> None:
        raise ValueError("unexpected")

    @api.get("/fail/no-rows")
    def no_rows() -> None:
        raise NoResultFound()

    @api.get("/fail/http")
    def http_error() -> None:
        raise HTTPException(status_code=409, detail="already exists")

    @api.get("/fail/odd-status")
    def odd_status() -> None:
        raise HTTPException(status_code=999, detail="odd")

    @api.get("/fail/api")
    def api_error() -> None:
        raise BadRequestError("invalid filter", raw_data={"filter": "x"})

    @api.get("/fail/validation")
    def validation(n: int) -> dict:
        return {"n": n}


def bind_records_api(app: App, api: ApiRouter) -> None:
    @api.get("/records/{record_id}", dependencies=[Depends(ActivityLogger(app))])
    def view(record_id: str) -> dict:
        return {"route": "view", "id": record_id}

    @api.get("/records/export")
    def export() -> dict:
        return {"route": "export"}


def bind_dup_first(app: App, api: ApiRouter) -> None:
    @api.api_route("/dup", methods=["GET", "POST"])
    def first() -> dict:
        return {"handler": "first"}


def bind_dup_second(app: App, api: ApiRouter) -> None:
    @api.get("/dup")
    def second() -> dict:
        return {"handler": "second"}


def bind_me_api(app: App, api: ApiRouter) -> None:
    @api.get("/me")
    def me(auth: AuthContext = Depends(require_auth)) -> dict:
        return {"id": auth.id, "type": auth.type}

    @api.get("/whoami")
    def whoami(auth: Optional[AuthContext] = Depends(get_auth), space: App = Depends(get_space)) -> dict:
        return {"id": auth.id if auth else None, "debug": space.is_debug()}


GROUPS = [
    bind_health_api,
    bind_failing_api,
    bind_records_api,
    bind_dup_first,
    bind_dup_second,
    bind_me_api,
]


@pytest.fixture
def fastapi_app() -> FastAPI:
    return create_app(build_settings(DEBUG=True, JWT_SECRET_KEY="test-secret"), route_groups=GROUPS)


@pytest.fixture
def client(fastapi_app: FastAPI) -> TestClient:
    return TestClient(fastapi_app)


class TestHealth:
    def test_health_returns_200(self, client) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"code": 200, "message": "API is healthy."}

    def test_trailing_slash_removed_for_api_paths(self, client) -> None:
        response = client.get("/api/health/")
        assert response.status_code == 200


class TestCatchAll:
    def test_unknown_api_path_is_404_envelope(self, client) -> None:
        response = client.get("/api/missing/route")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND_BODY

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
    def test_every_method_is_404(self, client, method) -> None:
        response = client.request(method, "/api/missing")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND_BODY

    @pytest.mark.parametrize("path", ["/api", "/api/"])
    def test_bare_prefix_is_404_envelope(self, client, path) -> None:
        response = client.get(path)
        assert response.status_code == 404
        assert response.json() == NOT_FOUND_BODY

    def test_wrong_method_on_existing_path_is_404(self, client) -> None:
        """The catch-all takes every method, so a known path with another method is a 404."""
        response = client.post("/api/health")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND_BODY

    def test_head_has_empty_body(self, client) -> None:
        response = client.head("/api/missing")
        assert response.status_code == 404
        assert response.content == b""

    def test_unmatched_requests_are_recorded(self, client, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="space.activity"):
            client.get("/api/nowhere")
        assert "/api/nowhere failed: NotFoundError" in caplog.text

    def test_concrete_routes_are_recorded(self, client, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="space.activity"):
            client.get("/api/records/42")
        assert "/api/records/42 ok" in caplog.text

    def test_paths_outside_api_are_not_rewritten(self, fastapi_app) -> None:
        @fastapi_app.get("/outside")
        def outside() -> dict:
            return {"ok": True}

        client = TestClient(fastapi_app)
        assert client.get("/outside").status_code == 200

        response = client.get("/outside/")
        assert response.status_code == 404
        assert response.json()["code"] == 404


class TestErrorClassification:
    def test_generic_exception_is_400_and_server_keeps_running(self, client) -> None:
        response = client.get("/api/fail/generic")
        assert response.status_code == 400
        assert response.json() == {"code": 400, "message": BadRequestError.default_message}

        assert client.get("/api/health").status_code == 200

    def test_no_rows_is_404(self, client) -> None:
        response = client.get("/api/fail/no-rows")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND_BODY

    def test_framework_http_error_keeps_code_and_message(self, client) -> None:
        response = client.get("/api/fail/http")
        assert response.status_code == 409
        assert response.json() == {"code": 409, "message": "Already exists."}

    def test_out_of_range_http_status_is_400_envelope(self, client) -> None:
        response = client.get("/api/fail/odd-status")
        assert response.status_code == 400
        assert response.json() == {"code": 400, "message": BadRequestError.default_message}

    def test_api_error_raw_data_never_sent(self, client) -> None:
        response = client.get("/api/fail/api")
        assert response.status_code == 400
        assert response.json() == {"code": 400, "message": "Invalid filter."}

    def test_validation_error_is_400(self, client) -> None:
        response = client.get("/api/fail/validation", params={"n": "abc"})
        assert response.status_code == 400
        assert set(response.json()) == {"code", "message"}

    def test_hooks_observe_route_errors(self, fastapi_app) -> None:
        seen = []
        space: App = fastapi_app.state.space
        space.on_before_api_error().add(lambda e: seen.append(("before", e.error.code)))
        space.on_after_api_error().add(lambda e: seen.append(("after", e.error.code)))

        TestClient(fastapi_app).get("/api/fail/no-rows")

        assert seen == [("before", 404), ("after", 404)]


class TestRouting:
    def test_later_registration_wins(self, client) -> None:
        assert client.get("/api/dup").json() == {"handler": "second"}

    def test_non_overlapping_methods_survive(self, client) -> None:
        assert client.post("/api/dup").json() == {"handler": "first"}

    def test_static_segment_beats_earlier_param_route(self, client) -> None:
        assert client.get("/api/records/export").json() == {"route": "export"}
        assert client.get("/api/records/abc").json() == {"route": "view", "id": "abc"}

    def test_path_params_are_unescaped(self, client) -> None:
        assert client.get("/api/records/a%20b").json()["id"] == "a b"

    def test_routes_registered_after_init_are_not_shadowed(self, fastapi_app) -> None:
        api: ApiRouter = fastapi_app.state.api_router

        @api.get("/late")
        def late() -> dict:
            return {"late": True}

        assert TestClient(fastapi_app).get("/api/late").json() == {"late": True}


class TestMiddlewares:
    def test_security_headers_on_success(self, client) -> None:
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["X-XSS-Protection"] == "1; mode=block"

    def test_security_headers_on_error(self, client) -> None:
        response = client.get("/api/missing")
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_trace_id_echoed(self, client) -> None:
        response = client.get("/api/health", headers={"X-Request-Id": "req-123"})
        assert response.headers["X-Trace-Id"] == "req-123"

    def test_trace_id_generated(self, client) -> None:
        assert client.get("/api/health").headers["X-Trace-Id"]


class TestAuthContext:
    def _token(self, **claims) -> str:
        return TokenAuthResolver("test-secret").make_token(auth_id="u1", auth_type="users", **claims)

    def test_bearer_token_loaded(self, client) -> None:
        response = client.get("/api/me", headers={"Authorization": f"Bearer {self._token()}"})
        assert response.status_code == 200
        assert response.json() == {"id": "u1", "type": "users"}

    def test_raw_token_loaded(self, client) -> None:
        response = client.get("/api/whoami", headers={"Authorization": self._token()})
        assert response.json() == {"id": "u1", "debug": True}

    def test_missing_token_is_401(self, client) -> None:
        response = client.get("/api/me")
        assert response.status_code == 401
        assert response.json()["code"] == 401

    def test_invalid_token_is_ignored(self, client) -> None:
        response = client.get("/api/whoami", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 200
        assert response.json() == {"id": None, "debug": True}

    def test_token_signed_with_other_secret_is_ignored(self, client) -> None:
        token = TokenAuthResolver("other-secret").make_token(auth_id="u1", auth_type="users")
        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
