"""Endpoints that do not belong to a single resource family."""

from __future__ import annotations

from ghrest.core.rest import invoke_rest_method
from ghrest.core.schema import RateLimit
from ghrest.core.session import GitHubSession


def get_rate_limit(session: GitHubSession) -> RateLimit:
    data = invoke_rest_method(session, "rate_limit", description="Getting rate limit status")
    return RateLimit.model_validate(data)
