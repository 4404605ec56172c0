"""Follow ``Link: rel="next"`` headers and concatenate every page."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any
from urllib.parse import parse_qs, urlparse

from rich.console import Console
from rich.progress import Progress

from ghrest.core.rest import RestResponse, invoke_rest_method
from ghrest.core.session import GitHubSession

logger = logging.getLogger(__name__)

_progress_console = Console(stderr=True)


def page_count(last_link: str | None) -> int | None:
    """Number of pages advertised by a ``rel="last"`` link, if any."""
    if not last_link:
        return None
    values = parse_qs(urlparse(last_link).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


def _records(payload: Any, unwrap_key: str | None) -> list[Any]:
    if payload is None:
        return []
    if unwrap_key and isinstance(payload, dict):
        payload = payload.get(unwrap_key, [])
    if isinstance(payload, list):
        return payload
    return [payload]


def iter_pages(
    session: GitHubSession,
    uri_fragment: str,
    description: str = "",
    accept_header: str | None = None,
    single_page: bool = False,
    **kwargs: Any,
) -> Iterator[RestResponse]:
    """Yield one :class:`RestResponse` per page, in server order."""
    url: str | None = uri_fragment
    page = 0
    while url:
        page += 1
        response = invoke_rest_method(
            session,
            url,
            description=description if page == 1 else "",
            accept_header=accept_header,
            extended_result=True,
            **kwargs,
        )
        yield response
        if single_page:
            return
        url = response.next_link
        if url:
            logger.debug("Following next page link %s", url)


def invoke_rest_method_multiple_result(
    session: GitHubSession,
    uri_fragment: str,
    description: str = "",
    accept_header: str | None = None,
    unwrap_key: str | None = None,
    single_page: bool = False,
    no_status: bool | None = None,
    **kwargs: Any,
) -> list[Any]:
    """Fetch a collection, following next links until exhausted.

    Records are appended in the order each page returns them; nothing is
    deduplicated. ``unwrap_key`` names the array inside endpoints that wrap
    their collection in an object (``{"total_count": 1, "codespaces": [...]}``).
    A failing page raises and discards what was already fetched.
    """
    if no_status is None:
        no_status = session.config.default_no_status
    threshold = session.config.multi_request_progress_threshold

    results: list[Any] = []
    progress: Progress | None = None
    task = None
    pages = iter_pages(
        session,
        uri_fragment,
        description=description,
        accept_header=accept_header,
        single_page=single_page,
        **kwargs,
    )
    try:
        for index, response in enumerate(pages, start=1):
            results.extend(_records(response.result, unwrap_key))

            if index == 1 and not no_status and not single_page and threshold > 0:
                total = page_count(response.last_link)
                if total is not None and total >= threshold:
                    progress = Progress(console=_progress_console, transient=True)
                    progress.start()
                    task = progress.add_task(description or "Fetching pages", total=total)
            if progress is not None and task is not None:
                progress.update(task, completed=index)
    finally:
        if progress is not None:
            progress.stop()

    logger.debug("Fetched %d records from %s", len(results), uri_fragment)
    return results
