"""Poll a resource until it leaves its transitional states."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Collection
from typing import TypeVar

from ghrest.core.errors import StateChangeTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def wait_for_state(
    fetch: Callable[[], T],
    state_of: Callable[[T], str],
    in_progress: Collection[str],
    delay: float,
    timeout: float | None = None,
) -> T:
    """Call *fetch* every *delay* seconds until its state is settled.

    With ``timeout=None`` this waits forever if the remote resource never
    settles. A positive timeout raises :class:`StateChangeTimeoutError` once
    the next sleep would cross it.
    """
    deadline = None if not timeout else time.monotonic() + timeout
    result = fetch()
    state = state_of(result)
    while state in in_progress:
        if deadline is not None and time.monotonic() + delay > deadline:
            raise StateChangeTimeoutError(state, timeout or 0)
        logger.info("State is %s; checking again in %gs", state, delay)
        time.sleep(delay)
        result = fetch()
        state = state_of(result)
    logger.debug("Settled in state %s", state)
    return result
