"""Single-request REST invoker.

Every API call in ghrest funnels through :func:`invoke_rest_method`: it builds
the URL and headers, encodes the body, retries while the server answers
``202 Accepted`` and turns failures into :class:`GitHubApiError` /
:class:`GitHubTransportError`.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlencode

import requests

from ghrest import __version__
from ghrest.core.errors import GitHubApiError, GitHubTransportError, ResultNotReadyError
from ghrest.core.resolver import api_base_url
from ghrest.core.session import GitHubSession

logger = logging.getLogger(__name__)

DEFAULT_ACCEPT = "application/vnd.github+json"
API_VERSION = "2022-11-28"
USER_AGENT = f"ghrest/{__version__}"

_REDACTED = "<redacted>"


class MediaType(str, Enum):
    """Custom media types some endpoints accept for bodies and content."""

    RAW = "raw"
    TEXT = "text"
    HTML = "html"
    FULL = "full"
    OBJECT = "object"
    BASE64 = "base64"


def media_accept_header(
    media_type: MediaType = MediaType.RAW,
    as_json: bool = True,
    accept_header: str | None = None,
) -> str:
    """Build an Accept header selecting *media_type*.

    ``accept_header`` (e.g. a preview media type) is kept in front.
    """
    header = f"application/vnd.github.{media_type.value}"
    if as_json:
        header += "+json"
    if accept_header:
        return f"{accept_header}, {header}"
    return header


@dataclass
class RestResponse:
    """Everything a caller may want beyond the decoded body."""

    result: Any
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    request_id: str = ""
    next_link: str | None = None
    last_link: str | None = None
    rate_limit_remaining: int | None = None
    rate_limit_reset: int | None = None


def with_query(uri_fragment: str, params: dict[str, Any]) -> str:
    """Append query parameters, skipping ones that are None.

    Lists are joined with commas, booleans rendered lowercase.
    """
    cleaned: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = str(value).lower()
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        elif isinstance(value, Enum):
            value = value.value
        cleaned[key] = str(value)
    if not cleaned:
        return uri_fragment
    separator = "&" if "?" in uri_fragment else "?"
    return f"{uri_fragment}{separator}{urlencode(cleaned)}"


def build_url(session: GitHubSession, uri_fragment: str) -> str:
    if uri_fragment.startswith(("https://", "http://")):
        return uri_fragment
    return f"{api_base_url(session.config.api_host_name)}/{uri_fragment.lstrip('/')}"


def invoke_rest_method(
    session: GitHubSession,
    uri_fragment: str,
    method: str = "GET",
    description: str = "",
    body: Any = None,
    accept_header: str | None = None,
    additional_headers: dict[str, str] | None = None,
    access_token: str | None = None,
    timeout: float | None = None,
    extended_result: bool = False,
    save_raw: bool = False,
    treat_not_modified_as_success: bool = False,
    retry_not_ready: bool | None = None,
) -> Any:
    """Issue one API request and return its decoded result.

    Args:
        uri_fragment: Path below the API root (``repos/o/r``) or an absolute URL.
        method: HTTP verb.
        description: Human readable summary, logged before the request.
        body: dict/list (JSON-encoded), str (pre-serialized JSON) or bytes.
        accept_header: Overrides the default ``application/vnd.github+json``.
        access_token: Explicit token; otherwise the session's credentials.
        timeout: Seconds; defaults to ``web_request_timeout_seconds`` (0 = none).
        extended_result: Return a :class:`RestResponse` instead of the body.
        save_raw: Return the raw response bytes instead of decoding JSON.
        treat_not_modified_as_success: Return None for 304 instead of raising.
        retry_not_ready: Re-issue on 202; defaults to True for GET only.

    Raises:
        GitHubApiError: Non-2xx status or malformed JSON.
        GitHubTransportError: The request never produced a response.
        ResultNotReadyError: Still 202 after the configured number of attempts.
    """
    config = session.config
    method = method.upper()
    url = build_url(session, uri_fragment)
    token = session.credentials.resolve(access_token)

    headers = {
        "Accept": accept_header or DEFAULT_ACCEPT,
        "User-Agent": USER_AGENT,
        "X-GitHub-Api-Version": API_VERSION,
    }
    if token:
        headers["Authorization"] = f"token {token}"
    headers.update(additional_headers or {})

    data = _encode_body(body)
    if data is not None and not isinstance(body, bytes):
        headers["Content-Type"] = "application/json; charset=UTF-8"

    if timeout is None and config.web_request_timeout_seconds > 0:
        timeout = config.web_request_timeout_seconds
    if retry_not_ready is None:
        retry_not_ready = method == "GET"
    max_attempts = max(1, config.maximum_retries_when_result_not_ready)

    if description:
        logger.info(description)
    logger.debug("%s %s headers=%s", method, url, _redact(headers))
    if data is not None and config.log_request_body and not isinstance(body, bytes):
        logger.debug("Request body: %s", data.decode("utf-8"))

    attempt = 0
    while True:
        attempt += 1
        response = _send(session, method, url, headers, data, timeout)
        if response.status_code != 202 or not retry_not_ready:
            break
        if attempt >= max_attempts:
            logger.error(
                "%s %s still not ready after %d attempts", method, url, attempt
            )
            raise ResultNotReadyError(url, attempt)
        logger.info(
            "%s %s returned 202 (attempt %d of %d); retrying in %ds",
            method,
            url,
            attempt,
            max_attempts,
            config.retry_delay_seconds,
        )
        time.sleep(config.retry_delay_seconds)

    _log_rate_limit(response)

    if response.status_code == 304 and treat_not_modified_as_success:
        logger.debug("%s %s returned 304; nothing to change", method, url)
        result = None
    elif not 200 <= response.status_code < 300:
        error = _api_error(response, method, url)
        logger.error("%s", error)
        raise error
    else:
        result = _decode(response, method, url, save_raw)

    if not extended_result:
        return result
    return RestResponse(
        result=result,
        status_code=response.status_code,
        headers=dict(response.headers),
        request_id=response.headers.get("X-GitHub-Request-Id", ""),
        next_link=response.links.get("next", {}).get("url"),
        last_link=response.links.get("last", {}).get("url"),
        rate_limit_remaining=_int_header(response, "X-RateLimit-Remaining"),
        rate_limit_reset=_int_header(response, "X-RateLimit-Reset"),
    )


# -- Internal helpers --


def _encode_body(body: Any) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body).encode("utf-8")


def _send(
    session: GitHubSession,
    method: str,
    url: str,
    headers: dict[str, str],
    data: bytes | None,
    timeout: float | None,
) -> requests.Response:
    try:
        return session.http.request(method, url, headers=headers, data=data, timeout=timeout)
    except requests.RequestException as e:
        logger.error("%s %s failed: %s", method, url, e)
        raise GitHubTransportError(f"{method} {url} failed: {e}", method=method, url=url) from e


def _decode(response: requests.Response, method: str, url: str, save_raw: bool) -> Any:
    if not response.content:
        return None
    if save_raw:
        return response.content
    content_type = response.headers.get("Content-Type", "")
    if "json" not in content_type:
        return response.content
    try:
        return response.json()
    except ValueError as e:
        logger.error("%s %s returned malformed JSON: %s", method, url, e)
        raise GitHubApiError(
            response.status_code,
            f"Malformed JSON in response: {e}",
            method=method,
            url=url,
            request_id=response.headers.get("X-GitHub-Request-Id", ""),
        ) from e


def _api_error(response: requests.Response, method: str, url: str) -> GitHubApiError:
    message = response.reason or ""
    errors: list[Any] = []
    documentation_url = ""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = payload.get("message") or message
        errors = payload.get("errors") or []
        documentation_url = payload.get("documentation_url", "")
    elif response.text:
        message = response.text.strip()[:500]
    return GitHubApiError(
        response.status_code,
        message,
        method=method,
        url=url,
        errors=errors,
        documentation_url=documentation_url,
        request_id=response.headers.get("X-GitHub-Request-Id", ""),
    )


def _redact(headers: dict[str, str]) -> dict[str, str]:
    return {k: (_REDACTED if k.lower() == "authorization" else v) for k, v in headers.items()}


def _int_header(response: requests.Response, name: str) -> int | None:
    value = response.headers.get(name)
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def _log_rate_limit(response: requests.Response) -> None:
    remaining = _int_header(response, "X-RateLimit-Remaining")
    if remaining is None:
        return
    reset = _int_header(response, "X-RateLimit-Reset")
    logger.debug("Rate limit remaining: %d (resets at %s)", remaining, reset)
