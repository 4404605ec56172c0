"""Team membership endpoints."""

from __future__ import annotations

from ghrest.core.errors import ParameterError
from ghrest.core.paging import invoke_rest_method_multiple_result
from ghrest.core.resolver import resolve_parameter
from ghrest.core.rest import invoke_rest_method, with_query
from ghrest.core.schema import Owner, TeamMembership
from ghrest.core.session import GitHubSession

_ROLES = {"member", "maintainer"}


def list_team_members(
    session: GitHubSession,
    team_slug: str,
    organization_name: str | None = None,
    role: str | None = None,
) -> list[Owner]:
    org = resolve_parameter(session, organization_name, "default_owner_name")
    if not org:
        raise ParameterError("Unable to determine organization_name")
    fragment = with_query(f"orgs/{org}/teams/{team_slug}/members", {"role": role})
    records = invoke_rest_method_multiple_result(
        session, fragment, description=f"Getting members of {org}/{team_slug}"
    )
    return [Owner.model_validate(r) for r in records]


def add_team_member(
    session: GitHubSession,
    team_slug: str,
    user_name: str,
    organization_name: str | None = None,
    role: str = "member",
) -> TeamMembership | None:
    """Add or update a membership.

    Returns None when GitHub answers 304 because nothing changed.
    """
    if role not in _ROLES:
        raise ParameterError(f"role must be one of {', '.join(sorted(_ROLES))}, got {role!r}")
    org = resolve_parameter(session, organization_name, "default_owner_name")
    if not org:
        raise ParameterError("Unable to determine organization_name")
    data = invoke_rest_method(
        session,
        f"orgs/{org}/teams/{team_slug}/memberships/{user_name}",
        method="PUT",
        body={"role": role},
        description=f"Adding {user_name} to {org}/{team_slug} as {role}",
        treat_not_modified_as_success=True,
    )
    if data is None:
        return None
    return TeamMembership.model_validate(data)
