"""Issue endpoints."""

from __future__ import annotations

from ghrest.core.errors import ParameterError
from ghrest.core.paging import invoke_rest_method_multiple_result
from ghrest.core.resolver import FromDefaults, RepositorySource, resolve
from ghrest.core.rest import invoke_rest_method, with_query
from ghrest.core.schema import Issue
from ghrest.core.session import GitHubSession

_STATES = {"open", "closed", "all"}


def list_issues(
    session: GitHubSession,
    source: RepositorySource = FromDefaults(),
    state: str = "open",
    labels: list[str] | None = None,
    sort: str | None = None,
    direction: str | None = None,
    since: str | None = None,
    include_pull_requests: bool = True,
) -> list[Issue]:
    if state not in _STATES:
        raise ParameterError(f"state must be one of {', '.join(sorted(_STATES))}, got {state!r}")
    ref = resolve(session, source)
    fragment = with_query(
        f"{ref.path}/issues",
        {
            "state": state,
            "labels": labels or None,
            "sort": sort,
            "direction": direction,
            "since": since,
        },
    )
    records = invoke_rest_method_multiple_result(
        session, fragment, description=f"Getting issues for {ref}"
    )
    issues = [Issue.model_validate(r) for r in records]
    if not include_pull_requests:
        issues = [i for i in issues if not i.is_pull_request]
    return issues


def get_issue(
    session: GitHubSession, issue_number: int, source: RepositorySource = FromDefaults()
) -> Issue:
    ref = resolve(session, source)
    data = invoke_rest_method(
        session,
        f"{ref.path}/issues/{issue_number}",
        description=f"Getting issue #{issue_number} for {ref}",
    )
    return Issue.model_validate(data)


def new_issue(
    session: GitHubSession,
    title: str,
    source: RepositorySource = FromDefaults(),
    body: str | None = None,
    labels: list[str] | None = None,
    assignees: list[str] | None = None,
) -> Issue:
    if not title.strip():
        raise ParameterError("title must not be empty")
    ref = resolve(session, source)
    payload: dict = {"title": title}
    if body is not None:
        payload["body"] = body
    if labels:
        payload["labels"] = labels
    if assignees:
        payload["assignees"] = assignees
    data = invoke_rest_method(
        session,
        f"{ref.path}/issues",
        method="POST",
        body=payload,
        description=f"Creating issue in {ref}",
    )
    return Issue.model_validate(data)
