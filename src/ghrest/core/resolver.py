"""Turn a repository URL, an owner/name pair or the configured defaults into
one (owner, repository) reference.

Callers describe where the repository comes from with one of three source
types (``ByUri``, ``ByElements``, ``FromDefaults``) instead of passing a bag
of optional arguments and letting the resolver guess.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union
from urllib.parse import urlparse

from ghrest.core.errors import ParameterError
from ghrest.core.session import GitHubSession

# git@github.com:owner/repo.git
_SSH_REMOTE = re.compile(r"^[\w.-]+@(?P<host>[^:/]+):(?P<path>.+)$")


@dataclass(frozen=True)
class RepositoryReference:
    owner_name: str
    repository_name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner_name}/{self.repository_name}"

    @property
    def path(self) -> str:
        """URI fragment for the repository endpoint (``repos/o/r``)."""
        return f"repos/{self.owner_name}/{self.repository_name}"

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class ByUri:
    uri: str


@dataclass(frozen=True)
class ByElements:
    owner_name: str
    repository_name: str


@dataclass(frozen=True)
class FromDefaults:
    pass


RepositorySource = Union[ByUri, ByElements, FromDefaults]


def api_base_url(host: str) -> str:
    """API root for github.com or a GitHub Enterprise Server host."""
    host = host.strip().removeprefix("https://").removeprefix("http://").rstrip("/")
    if host in ("github.com", "api.github.com"):
        return "https://api.github.com"
    return f"https://{host}/api/v3"


def _host_and_segments(uri: str) -> tuple[str, list[str]]:
    ssh = _SSH_REMOTE.match(uri.strip())
    if ssh:
        host, path = ssh.group("host"), ssh.group("path")
    else:
        parsed = urlparse(uri.strip())
        if not parsed.netloc:
            raise ParameterError(f"Not an absolute repository URL: {uri!r}")
        host, path = parsed.hostname or "", parsed.path
    return host.lower(), [seg for seg in path.split("/") if seg]


def split_github_uri(uri: str) -> RepositoryReference:
    """Parse owner and repository name out of a web, API or SSH URL.

    >>> split_github_uri("https://github.com/octocat/Hello-World")
    RepositoryReference(owner_name='octocat', repository_name='Hello-World')
    """
    _, segments = _host_and_segments(uri)
    if segments[:2] == ["api", "v3"]:
        segments = segments[2:]
    if segments[:1] == ["repos"]:
        segments = segments[1:]
    if len(segments) < 2:
        raise ParameterError(f"Could not find owner and repository name in {uri!r}")
    name = segments[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return RepositoryReference(owner_name=segments[0], repository_name=name)


def _validate_host(session: GitHubSession, uri: str) -> None:
    configured = session.config.api_host_name.lower()
    allowed = {configured, f"api.{configured}"}
    host, _ = _host_and_segments(uri)
    if host not in allowed:
        raise ParameterError(
            f"URL host {host!r} does not match the configured host {configured!r}. "
            "Change api_host_name or set disable_uri_validation."
        )


def resolve_repository(
    session: GitHubSession,
    owner_name: str | None = None,
    repository_name: str | None = None,
    uri: str | None = None,
    validate: bool = True,
) -> RepositoryReference:
    """Resolve one repository reference, falling back to configured defaults."""
    if uri and (owner_name or repository_name):
        raise ParameterError("uri cannot be combined with owner_name or repository_name")

    if uri:
        if not session.config.disable_uri_validation:
            _validate_host(session, uri)
        return split_github_uri(uri)

    owner = owner_name or session.config.default_owner_name
    name = repository_name or session.config.default_repository_name
    if validate:
        if not owner:
            raise ParameterError(_missing("owner_name", "default_owner_name"))
        if not name:
            raise ParameterError(_missing("repository_name", "default_repository_name"))
    return RepositoryReference(owner_name=owner or "", repository_name=name or "")


def resolve(session: GitHubSession, source: RepositorySource) -> RepositoryReference:
    """Dispatch on the repository source type."""
    if isinstance(source, ByUri):
        return resolve_repository(session, uri=source.uri)
    if isinstance(source, ByElements):
        return resolve_repository(
            session, owner_name=source.owner_name, repository_name=source.repository_name
        )
    if isinstance(source, FromDefaults):
        return resolve_repository(session)
    raise ParameterError(f"Unsupported repository source: {source!r}")


def resolve_parameter(session: GitHubSession, value: Any, config_name: str) -> Any:
    """Return *value* if given, otherwise the configured default for it."""
    if value is not None and value != "":
        return value
    return session.config_store.get(config_name)


def _missing(parameter: str, config_name: str) -> str:
    return (
        f"Unable to determine {parameter}. Provide {parameter} (or a repository uri), "
        f"or set a default with `ghrest config set {config_name} <value>`."
    )
