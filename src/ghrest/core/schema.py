"""Pydantic v2 models for the records returned by the command layer.

Unknown API fields are kept (``extra="allow"``). Convenience fields are filled
in once, when the model is built.
"""

from __future__ import annotations

import base64
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ghrest.core.errors import ParameterError


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Owner(_ApiModel):
    login: str
    id: int | None = None
    type: str = ""
    html_url: str = ""


# -- Repositories --


class Repository(_ApiModel):
    id: int | None = None
    name: str
    full_name: str = ""
    owner: Owner | None = None
    html_url: str = ""
    private: bool = False
    fork: bool = False
    archived: bool = False
    default_branch: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None

    owner_name: str = ""
    repository_url: str = ""

    @model_validator(mode="after")
    def _fill_convenience(self) -> Repository:
        if not self.owner_name:
            if self.owner is not None:
                self.owner_name = self.owner.login
            elif "/" in self.full_name:
                self.owner_name = self.full_name.split("/", 1)[0]
        self.repository_url = self.repository_url or self.html_url
        return self


class ContributorWeek(_ApiModel):
    w: datetime
    a: int = 0
    d: int = 0
    c: int = 0


class ContributorStatistics(_ApiModel):
    author: Owner | None = None
    total: int = 0
    weeks: list[ContributorWeek] = Field(default_factory=list)

    user_name: str = ""

    @model_validator(mode="after")
    def _fill_convenience(self) -> ContributorStatistics:
        if self.author is not None:
            self.user_name = self.author.login
        return self


# -- Issues --


class Label(_ApiModel):
    name: str
    color: str = ""
    description: str | None = None


class Issue(_ApiModel):
    id: int | None = None
    number: int
    title: str
    state: str = "open"
    body: str | None = None
    user: Owner | None = None
    labels: list[Label] = Field(default_factory=list)
    html_url: str = ""
    comments: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None

    issue_number: int = 0
    repository_html_url: str = ""
    is_pull_request: bool = False

    @model_validator(mode="after")
    def _fill_convenience(self) -> Issue:
        self.issue_number = self.number
        extra = self.model_extra or {}
        self.is_pull_request = "pull_request" in extra
        for marker in ("/issues/", "/pull/"):
            if marker in self.html_url:
                self.repository_html_url = self.html_url.split(marker, 1)[0]
                break
        return self


# -- Codespaces --


class Codespace(_ApiModel):
    id: int | None = None
    name: str
    display_name: str | None = None
    state: str
    owner: Owner | None = None
    repository: Repository | None = None
    machine: dict[str, Any] | None = None
    url: str = ""
    web_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_used_at: datetime | None = None

    codespace_url: str = ""
    repository_url: str = ""

    @model_validator(mode="after")
    def _fill_convenience(self) -> Codespace:
        self.codespace_url = self.url
        if self.repository is not None:
            self.repository_url = self.repository.html_url
        return self


# -- Contents --


class Content(_ApiModel):
    type: str
    name: str
    path: str
    sha: str = ""
    size: int = 0
    encoding: str | None = None
    content: str | None = None
    html_url: str | None = None
    download_url: str | None = None

    def decode(self) -> bytes:
        """Decode base64 file content. Only called when a caller asks for it."""
        if self.content is None:
            raise ParameterError(f"{self.path} carries no inline content (type={self.type})")
        if self.encoding not in (None, "base64"):
            raise ParameterError(f"Unsupported content encoding: {self.encoding}")
        return base64.b64decode(self.content)


# -- Teams --


class TeamMembership(_ApiModel):
    url: str = ""
    role: str = "member"
    state: str = ""


# -- Rate limit --


class RateLimitResource(_ApiModel):
    limit: int
    remaining: int
    reset: datetime
    used: int = 0


class RateLimit(_ApiModel):
    resources: dict[str, RateLimitResource] = Field(default_factory=dict)

    @property
    def core(self) -> RateLimitResource | None:
        return self.resources.get("core")
