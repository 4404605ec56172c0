"""Shared fixtures: isolated per-user folders, a scripted HTTP session, a fake clock."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path
from typing import Any

import pytest
import requests

from ghrest.core.session import GitHubSession


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: dict[str, str]
    data: bytes | None
    timeout: float | None


class FakeHttp:
    """Stands in for requests.Session: replays queued responses in order."""

    def __init__(self) -> None:
        self.queue: list[Any] = []
        self.fallback: requests.Response | None = None
        self.calls: list[RecordedCall] = []
        self.closed = False

    def add(self, *responses: Any) -> FakeHttp:
        self.queue.extend(responses)
        return self

    def always(self, response: requests.Response) -> FakeHttp:
        self.fallback = response
        return self

    def request(self, method, url, headers=None, data=None, timeout=None):
        self.calls.append(RecordedCall(method, url, dict(headers or {}), data, timeout))
        if self.queue:
            item = self.queue.pop(0)
        elif self.fallback is not None:
            item = self.fallback
        else:
            raise AssertionError(f"Unexpected request: {method} {url}")
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


def build_response(
    status: int = 200,
    json_body: Any = None,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
    content_type: str | None = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = HTTPStatus(status).phrase
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode()
        response.headers["Content-Type"] = content_type or "application/json; charset=utf-8"
    else:
        response._content = content or b""
        if content_type:
            response.headers["Content-Type"] = content_type
    response.headers.update(headers or {})
    return response


def link_header(next_url: str | None = None, last_url: str | None = None) -> dict[str, str]:
    parts = []
    if next_url:
        parts.append(f'<{next_url}>; rel="next"')
    if last_url:
        parts.append(f'<{last_url}>; rel="last"')
    return {"Link": ", ".join(parts)}


class FakeClock:
    """Replaces the ``time`` module inside ghrest.core.rest / polling."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def monotonic(self) -> float:
        return self.now


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every per-user folder at a temp dir and hide GITHUB_TOKEN."""
    monkeypatch.setattr("ghrest.utils.paths.config_dir", lambda: tmp_path / "config")
    monkeypatch.setattr("ghrest.utils.paths.data_dir", lambda: tmp_path / "data")
    monkeypatch.setattr("ghrest.utils.paths.log_dir", lambda: tmp_path / "logs")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("ghrest")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr("ghrest.core.rest.time", fake)
    monkeypatch.setattr("ghrest.core.polling.time", fake)
    return fake


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def make_links():
    return link_header


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def session(http: FakeHttp) -> GitHubSession:
    """A session with default config, no token and the scripted HTTP client."""
    return GitHubSession(http=http)


@pytest.fixture
def authed_session(session: GitHubSession) -> GitHubSession:
    session.credentials.set_token("ghp_testtoken", session_only=True)
    return session
