"""Codespace endpoints, including waiting for start/stop to settle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ghrest.core.paging import invoke_rest_method_multiple_result
from ghrest.core.polling import wait_for_state
from ghrest.core.resolver import RepositorySource, resolve
from ghrest.core.rest import invoke_rest_method
from ghrest.core.schema import Codespace
from ghrest.core.session import GitHubSession

# States GitHub reports while a codespace is moving between stable states.
IN_PROGRESS_STATES = frozenset(
    {
        "Queued",
        "Provisioning",
        "Starting",
        "ShuttingDown",
        "Exporting",
        "Updating",
        "Rebuilding",
    }
)


@dataclass(frozen=True)
class ForAuthenticatedUser:
    pass


@dataclass(frozen=True)
class ForRepository:
    source: RepositorySource


@dataclass(frozen=True)
class ForOrganization:
    organization_name: str
    user_name: str | None = None


CodespaceScope = Union[ForAuthenticatedUser, ForRepository, ForOrganization]


def _list_fragment(session: GitHubSession, scope: CodespaceScope) -> tuple[str, str]:
    if isinstance(scope, ForRepository):
        ref = resolve(session, scope.source)
        return f"{ref.path}/codespaces", f"repository {ref}"
    if isinstance(scope, ForOrganization):
        org = scope.organization_name
        if scope.user_name:
            return (
                f"orgs/{org}/members/{scope.user_name}/codespaces",
                f"{scope.user_name} in {org}",
            )
        return f"orgs/{org}/codespaces", f"organization {org}"
    return "user/codespaces", "the authenticated user"


def list_codespaces(
    session: GitHubSession, scope: CodespaceScope = ForAuthenticatedUser()
) -> list[Codespace]:
    fragment, who = _list_fragment(session, scope)
    records = invoke_rest_method_multiple_result(
        session,
        fragment,
        description=f"Getting codespaces for {who}",
        unwrap_key="codespaces",
    )
    return [Codespace.model_validate(r) for r in records]


def get_codespace(session: GitHubSession, codespace_name: str) -> Codespace:
    data = invoke_rest_method(
        session,
        f"user/codespaces/{codespace_name}",
        description=f"Getting codespace {codespace_name}",
    )
    return Codespace.model_validate(data)


def wait_for_codespace(
    session: GitHubSession, codespace_name: str, timeout: float | None = None
) -> Codespace:
    """Poll until the codespace leaves :data:`IN_PROGRESS_STATES`.

    ``timeout`` defaults to ``state_change_timeout_seconds``; 0 there means
    wait indefinitely.
    """
    if timeout is None:
        timeout = session.config.state_change_timeout_seconds or None
    return wait_for_state(
        lambda: get_codespace(session, codespace_name),
        lambda codespace: codespace.state,
        IN_PROGRESS_STATES,
        delay=session.config.state_change_delay_seconds,
        timeout=timeout,
    )


def start_codespace(
    session: GitHubSession,
    codespace_name: str,
    wait: bool = False,
    timeout: float | None = None,
) -> Codespace:
    data = invoke_rest_method(
        session,
        f"user/codespaces/{codespace_name}/start",
        method="POST",
        description=f"Starting codespace {codespace_name}",
    )
    if wait:
        return wait_for_codespace(session, codespace_name, timeout=timeout)
    return Codespace.model_validate(data)


def stop_codespace(
    session: GitHubSession,
    codespace_name: str,
    wait: bool = False,
    timeout: float | None = None,
) -> Codespace:
    data = invoke_rest_method(
        session,
        f"user/codespaces/{codespace_name}/stop",
        method="POST",
        description=f"Stopping codespace {codespace_name}",
    )
    if wait:
        return wait_for_codespace(session, codespace_name, timeout=timeout)
    return Codespace.model_validate(data)
