import pytest

from ghrest.core.session import GitHubSession


@pytest.fixture
def cli_http(monkeypatch, http):
    """Route every CLI invocation through the scripted HTTP client with a token set."""

    def make_session():
        session = GitHubSession(http=http)
        session.credentials.set_token("ghp_testtoken", session_only=True)
        return session

    monkeypatch.setattr("ghrest.cli.main.GitHubSession", make_session)
    return http
