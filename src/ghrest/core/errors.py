"""Exception hierarchy shared by the core and the command layer."""

from __future__ import annotations

from typing import Any


class GitHubError(Exception):
    """Base class for every error raised by ghrest."""


class ConfigurationError(GitHubError):
    """Raised for unknown configuration keys or invalid values."""


class AuthenticationError(GitHubError):
    """Raised when a stored credential cannot be used."""


class ParameterError(GitHubError):
    """Raised before any network call when call parameters are invalid."""


class GitHubTransportError(GitHubError):
    """Raised when the HTTP request itself fails (DNS, TLS, timeout...)."""

    def __init__(self, message: str, method: str = "", url: str = "") -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class GitHubApiError(GitHubError):
    """A non-2xx response from the API.

    Carries the HTTP status code and whatever the server explained about the
    failure (``message``, ``errors``, ``documentation_url``).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        method: str = "",
        url: str = "",
        errors: list[Any] | None = None,
        documentation_url: str = "",
        request_id: str = "",
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.method = method
        self.url = url
        self.errors = errors or []
        self.documentation_url = documentation_url
        self.request_id = request_id
        super().__init__(self._render())

    def _render(self) -> str:
        text = f"{self.status_code} {self.message}".strip()
        target = " ".join(part for part in (self.method, self.url) if part)
        if target:
            text += f" ({target})"
        for detail in self.errors:
            if isinstance(detail, dict):
                detail = detail.get("message") or ", ".join(
                    f"{k}={v}" for k, v in sorted(detail.items())
                )
            text += f"\n  - {detail}"
        if self.documentation_url:
            text += f"\nSee: {self.documentation_url}"
        if self.request_id:
            text += f"\nRequest id: {self.request_id}"
        return text


class ResultNotReadyError(GitHubError):
    """Raised when an endpoint keeps answering 202 past the retry limit."""

    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(
            f"Request to {url} exceeded maximum retries ({attempts}) while the "
            "result was still being prepared. Increase "
            "maximum_retries_when_result_not_ready or retry later."
        )
        self.url = url
        self.attempts = attempts


class StateChangeTimeoutError(GitHubError):
    """Raised when a polled resource does not settle within the timeout."""

    def __init__(self, last_state: str, timeout: float) -> None:
        super().__init__(
            f"Timed out after {timeout:g}s waiting for state change "
            f"(last state: {last_state})"
        )
        self.last_state = last_state
        self.timeout = timeout
