"""Tests for the team membership endpoints."""

import json

import pytest

from ghrest.api import teams
from ghrest.core.errors import ParameterError

API = "https://api.github.com"


class TestTeams:
    def test_list_members_uses_default_org(self, session, http, make_response):
        session.config_store.set("default_owner_name", "github", session_only=True)
        http.add(make_response(200, [{"login": "octocat"}]))
        members = teams.list_team_members(session, "justice-league", role="maintainer")
        assert [m.login for m in members] == ["octocat"]
        assert http.calls[0].url == f"{API}/orgs/github/teams/justice-league/members?role=maintainer"

    def test_add_member(self, authed_session, http, make_response):
        http.add(make_response(200, {"role": "maintainer", "state": "active"}))
        membership = teams.add_team_member(authed_session, "justice-league", "octocat", "github", role="maintainer")
        call = http.calls[0]
        assert membership.state == "active"
        assert call.method == "PUT"
        assert call.url == f"{API}/orgs/github/teams/justice-league/memberships/octocat"
        assert json.loads(call.data) == {"role": "maintainer"}

    def test_add_member_not_modified(self, authed_session, http, make_response):
        http.add(make_response(304))
        assert teams.add_team_member(authed_session, "justice-league", "octocat", "github") is None

    def test_invalid_role(self, session, http):
        with pytest.raises(ParameterError):
            teams.add_team_member(session, "t", "octocat", "github", role="owner")
        assert http.calls == []

    def test_missing_org(self, session, http):
        with pytest.raises(ParameterError, match="organization_name"):
            teams.list_team_members(session, "t")
