"""Repository endpoints."""

from __future__ import annotations

import logging

from ghrest.core.errors import GitHubError
from ghrest.core.paging import invoke_rest_method_multiple_result
from ghrest.core.resolver import FromDefaults, RepositorySource, resolve
from ghrest.core.rest import invoke_rest_method, with_query
from ghrest.core.schema import ContributorStatistics, Repository
from ghrest.core.session import GitHubSession

logger = logging.getLogger(__name__)


def get_repository(session: GitHubSession, source: RepositorySource = FromDefaults()) -> Repository:
    ref = resolve(session, source)
    data = invoke_rest_method(session, ref.path, description=f"Getting repository {ref}")
    return Repository.model_validate(data)


def list_repositories_for_user(
    session: GitHubSession,
    user_name: str | None = None,
    type: str | None = None,
    sort: str | None = None,
    direction: str | None = None,
) -> list[Repository]:
    """Repositories of *user_name*, or of the authenticated user when omitted."""
    fragment = f"users/{user_name}/repos" if user_name else "user/repos"
    fragment = with_query(fragment, {"type": type, "sort": sort, "direction": direction})
    who = user_name or "the authenticated user"
    records = invoke_rest_method_multiple_result(
        session, fragment, description=f"Getting repositories for {who}"
    )
    return [Repository.model_validate(r) for r in records]


def get_repository_contributor_statistics(
    session: GitHubSession, source: RepositorySource = FromDefaults()
) -> list[ContributorStatistics]:
    """Per-contributor commit activity.

    GitHub computes these statistics lazily and answers 202 until they are
    ready; the invoker keeps retrying on the configured delay.
    """
    ref = resolve(session, source)
    data = invoke_rest_method(
        session,
        f"{ref.path}/stats/contributors",
        description=f"Getting contributor statistics for {ref}",
    )
    return [ContributorStatistics.model_validate(r) for r in data or []]


def is_repository_starred(
    session: GitHubSession, source: RepositorySource = FromDefaults()
) -> bool:
    """Whether the authenticated user starred the repository.

    Any request failure, including the 404 GitHub uses for "not starred",
    reads as False.
    """
    ref = resolve(session, source)
    try:
        invoke_rest_method(
            session,
            f"user/starred/{ref.owner_name}/{ref.repository_name}",
            description=f"Checking whether {ref} is starred",
        )
    except GitHubError as e:
        logger.debug("Star check for %s failed: %s", ref, e)
        return False
    return True
