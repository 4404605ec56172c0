"""GitHubSession: the context object every core and API call receives."""

from __future__ import annotations

import requests

from ghrest.core.auth import CredentialProvider
from ghrest.core.config import ConfigurationStore, GitHubConfiguration


class GitHubSession:
    """Bundles configuration, credentials and the HTTP connection pool.

    Create one per process (the CLI does this in its callback) and pass it to
    every call. Nothing in ghrest keeps module-level state.
    """

    def __init__(
        self,
        config_store: ConfigurationStore | None = None,
        credentials: CredentialProvider | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self.config_store = config_store or ConfigurationStore()
        self.credentials = credentials or CredentialProvider(self.config_store)
        self.http = http or requests.Session()

    @property
    def config(self) -> GitHubConfiguration:
        return self.config_store.current

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> GitHubSession:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
