"""
Shared pytest fixtures for the Omada API client tests.

FakeController answers the controller's handshake and site-scoped paths
through httpx.MockTransport, recording every request it sees.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import httpx
import pytest

from omada_api import OmadaSession

BASE_URL = "https://controller.test"


@dataclass
class FakeController:
    """Scriptable controller behind an httpx.MockTransport."""

    controller_id: str = "C1"
    tokens: list[str] = field(default_factory=lambda: ["T1"])
    session_cookies: list[str] = field(default_factory=lambda: ["S1"])
    info_response: Optional[dict] = None
    login_response: Optional[dict] = None
    sites_response: Optional[dict] = None
    routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = field(
        default_factory=dict
    )
    requests: list[httpx.Request] = field(default_factory=list)
    _logins: int = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/info":
            body = self.info_response or {
                "errorCode": 0,
                "result": {"omadacId": self.controller_id, "controllerVer": "5.15.8"},
            }
            return httpx.Response(200, json=body)

        if path == f"/{self.controller_id}/api/v2/login":
            index = min(self._logins, len(self.tokens) - 1)
            self._logins += 1
            body = self.login_response or {
                "errorCode": 0,
                "msg": "Log in successfully.",
                "result": {"token": self.tokens[index]},
            }
            cookie = self.session_cookies[min(index, len(self.session_cookies) - 1)]
            return httpx.Response(
                200,
                json=body,
                headers=[("set-cookie", f"TPOMADA_SESSIONID={cookie}; Path=/; HttpOnly")],
            )

        if path == f"/{self.controller_id}/api/v2/sites":
            body = self.sites_response or {
                "errorCode": 0,
                "result": {
                    "totalRows": 1,
                    "currentPage": 1,
                    "currentSize": 100,
                    "data": [{"id": "S1", "name": "Default"}],
                },
            }
            return httpx.Response(200, json=body)

        route = self.routes.get((request.method, path))
        if route is not None:
            return route(request)
        return httpx.Response(200, json={"errorCode": 0, "result": {}})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def controller() -> FakeController:
    return FakeController()


@pytest.fixture
def make_session(controller):
    """Factory building sessions wired to the fake controller."""
    sessions: list[OmadaSession] = []

    def _make(**kwargs: Any) -> OmadaSession:
        kwargs.setdefault("transport", controller.transport())
        session = OmadaSession(BASE_URL, "admin", "secret", **kwargs)
        sessions.append(session)
        return session

    yield _make
    for session in sessions:
        session.close()


@pytest.fixture
def session(make_session):
    """A session that has completed the handshake."""
    s = make_session()
    s.connect()
    return s
