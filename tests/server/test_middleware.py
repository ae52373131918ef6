"""Tests for RawBodyMiddleware and the require_telnyx_signature dependency."""

from __future__ import annotations

import asyncio

from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from telnyx_webhook.server.auth import require_telnyx_signature
from telnyx_webhook.server.middleware import RawBodyMiddleware


def _echo_app(paths=None) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RawBodyMiddleware, paths=paths)

    @app.post("/capture")
    async def capture(request: Request) -> dict:
        parsed = await request.json()
        raw = getattr(request.state, "raw_body", None)
        return {"raw": raw.decode() if raw is not None else None, "parsed": parsed}

    @app.post("/other")
    async def other(request: Request) -> dict:
        raw = getattr(request.state, "raw_body", None)
        return {"raw": raw.decode() if raw is not None else None}

    return app


class TestRawBodyMiddleware:
    def test_captures_and_replays_body(self):
        with TestClient(_echo_app()) as c:
            resp = c.post("/capture", content=b'{"a":  1}')
        assert resp.json() == {"raw": '{"a":  1}', "parsed": {"a": 1}}

    def test_path_filter(self):
        with TestClient(_echo_app(paths=["/capture"])) as c:
            resp = c.post("/other", content=b"{}")
        assert resp.json() == {"raw": None}

    def test_all_paths_when_unfiltered(self):
        with TestClient(_echo_app()) as c:
            resp = c.post("/other", content=b"{}")
        assert resp.json() == {"raw": "{}"}

    def test_joins_chunked_body(self):
        seen = {}

        async def downstream(scope, receive, send):
            seen["state"] = scope["state"]["raw_body"]
            seen["message"] = await receive()

        messages = [
            {"type": "http.request", "body": b'{"a"', "more_body": True},
            {"type": "http.request", "body": b":1}", "more_body": False},
        ]

        async def receive():
            return messages.pop(0)

        async def send(message):
            pass

        scope = {"type": "http", "path": "/x", "headers": []}
        asyncio.run(RawBodyMiddleware(downstream)(scope, receive, send))
        assert seen["state"] == b'{"a":1}'
        assert seen["message"] == {"type": "http.request", "body": b'{"a":1}', "more_body": False}

    def test_disconnect_is_replayed(self):
        seen = {}

        async def downstream(scope, receive, send):
            seen["message"] = await receive()

        async def receive():
            return {"type": "http.disconnect"}

        async def send(message):
            pass

        scope = {"type": "http", "path": "/x", "headers": []}
        asyncio.run(RawBodyMiddleware(downstream)(scope, receive, send))
        assert seen["message"] == {"type": "http.disconnect"}

    def test_non_http_scopes_pass_through(self):
        seen = {}

        async def downstream(scope, receive, send):
            seen["scope"] = scope

        async def receive():
            raise AssertionError("body must not be read")

        async def send(message):
            pass

        scope = {"type": "lifespan"}
        asyncio.run(RawBodyMiddleware(downstream)(scope, receive, send))
        assert "state" not in seen["scope"]


class TestRequireTelnyxSignature:
    """The dependency used on a hand-built FastAPI app."""

    def _app(self) -> FastAPI:
        app = FastAPI()
        app.add_middleware(RawBodyMiddleware, paths=["/telnyx"])

        @app.post("/telnyx", dependencies=[Depends(require_telnyx_signature)])
        async def telnyx() -> dict:
            return {"status": "ok"}

        return app

    def test_accepts_signed_request(self, monkeypatch, public_key_b64, sample_payload, signed_headers):
        monkeypatch.setenv("TELNYX_PUBLIC_KEY", public_key_b64)
        with TestClient(self._app()) as c:
            resp = c.post("/telnyx", content=sample_payload, headers=signed_headers(sample_payload))
        assert resp.status_code == 200

    def test_rejects_with_reason(self, monkeypatch, other_public_key_b64, sample_payload, signed_headers):
        monkeypatch.setenv("TELNYX_PUBLIC_KEY", other_public_key_b64)
        with TestClient(self._app()) as c:
            resp = c.post("/telnyx", content=sample_payload, headers=signed_headers(sample_payload))
        assert resp.status_code == 401
        assert resp.json() == {"detail": "invalid_signature"}

    def test_missing_raw_body_without_middleware(self, monkeypatch, public_key_b64, sample_payload, signed_headers):
        monkeypatch.setenv("TELNYX_PUBLIC_KEY", public_key_b64)
        app = FastAPI()

        @app.post("/telnyx", dependencies=[Depends(require_telnyx_signature)])
        async def telnyx() -> dict:
            return {"status": "ok"}

        with TestClient(app) as c:
            resp = c.post("/telnyx", content=sample_payload, headers=signed_headers(sample_payload))
        assert resp.status_code == 401
        assert resp.json() == {"detail": "missing_raw_body"}
