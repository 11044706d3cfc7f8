"""Tests for the request-id and security-header middleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from scrobble_insights.logging import request_id_var
from scrobble_insights.middleware import RequestIDMiddleware, SecurityHeadersMiddleware


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/whoami")
    async def whoami() -> dict[str, str | None]:
        return {"request_id": request_id_var.get()}

    return app


def test_request_id_is_bound_to_log_context() -> None:
    resp = TestClient(_app()).get("/whoami", headers={"X-Request-ID": "req-7"})
    assert resp.json() == {"request_id": "req-7"}
    assert resp.headers["X-Request-ID"] == "req-7"


def test_request_id_is_generated() -> None:
    resp = TestClient(_app()).get("/whoami")
    generated = resp.headers["X-Request-ID"]
    assert len(generated) == 32
    assert resp.json() == {"request_id": generated}


def test_security_headers() -> None:
    resp = TestClient(_app()).get("/whoami")
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert request_id_var.get() is None
