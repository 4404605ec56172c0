"""Credential provider: find the API token, cache it, keep it encrypted at rest.

Resolution order:

1. an explicit token passed by the caller
2. the token cached in memory for this session
3. the token stored in the secured per-user file
4. the legacy ``GITHUB_TOKEN`` environment variable
5. nothing: requests go out anonymously and are heavily rate limited

The secured file is a Fernet token whose key is derived from a random salt
plus the current user and machine names, so it only opens for the same user on
the same machine.
"""

from __future__ import annotations

import base64
import json
import logging
import os
import secrets
from pathlib import Path

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ghrest.core.config import ConfigurationStore
from ghrest.core.errors import AuthenticationError
from ghrest.utils.paths import get_machine_name, get_username, token_file

logger = logging.getLogger(__name__)

LEGACY_TOKEN_ENV = "GITHUB_TOKEN"

_KDF_ITERATIONS = 390_000
_FILE_VERSION = 1

NO_TOKEN_WARNING = (
    "No GitHub API token is configured; requests are anonymous and heavily "
    "rate limited. Run `ghrest auth set` to store a token, or set "
    "suppress_no_token_warning to hide this message."
)


def _derive_key(salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=_KDF_ITERATIONS,
    )
    secret = f"{get_username()}@{get_machine_name()}".encode()
    return base64.urlsafe_b64encode(kdf.derive(secret))


def encrypt_token(token: str) -> dict:
    salt = secrets.token_bytes(16)
    cipher = Fernet(_derive_key(salt))
    return {
        "version": _FILE_VERSION,
        "salt": base64.b64encode(salt).decode(),
        "token": cipher.encrypt(token.encode()).decode(),
    }


def decrypt_token(document: dict) -> str:
    try:
        salt = base64.b64decode(document["salt"])
        cipher = Fernet(_derive_key(salt))
        return cipher.decrypt(document["token"].encode()).decode()
    except (KeyError, TypeError, ValueError, InvalidToken) as e:
        raise AuthenticationError(
            "The stored API token could not be decrypted (it was saved by another "
            "user or on another machine, or the file is damaged). Run "
            "`ghrest auth clear` and then `ghrest auth set`."
        ) from e


class CredentialProvider:
    """Owns the in-memory token cache and the warn-once flag for one session."""

    def __init__(self, config: ConfigurationStore, path: Path | None = None) -> None:
        self.config = config
        self.path = path or token_file()
        self._cached: str | None = None
        self._warned = False

    def resolve(self, explicit: str | None = None) -> str | None:
        """Return the token to use for a request, or None for anonymous access."""
        if explicit:
            return explicit
        if self._cached:
            return self._cached

        stored = self._read_file()
        if stored:
            self._cached = stored
            return stored

        legacy = os.environ.get(LEGACY_TOKEN_ENV)
        if legacy:
            logger.debug("Using token from the %s environment variable", LEGACY_TOKEN_ENV)
            self._cached = legacy
            return legacy

        self._warn_no_token()
        return None

    def is_configured(self) -> bool:
        """True when a usable token exists; an undecryptable file does not count."""
        if self._cached:
            return True
        try:
            if self._read_file():
                return True
        except AuthenticationError as e:
            logger.warning("%s", e)
            return False
        return bool(os.environ.get(LEGACY_TOKEN_ENV))

    def set_token(self, token: str, session_only: bool = False) -> None:
        token = token.strip()
        if not token:
            raise AuthenticationError("Refusing to store an empty token")
        self._cached = token
        if not session_only:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(encrypt_token(token), indent=2) + "\n")
            os.chmod(self.path, 0o600)
            logger.info("Stored encrypted API token at %s", self.path)

    def clear(self, session_only: bool = False) -> None:
        """Forget the cached token and, unless session_only, delete the file."""
        self._cached = None
        if not session_only and self.path.exists():
            self.path.unlink()
            logger.info("Removed stored API token at %s", self.path)

    # -- Internal helpers --

    def _read_file(self) -> str | None:
        if not self.path.is_file():
            return None
        try:
            document = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            raise AuthenticationError(
                f"Stored token file {self.path} is unreadable: {e}. "
                "Run `ghrest auth clear` and then `ghrest auth set`."
            ) from e
        if not isinstance(document, dict):
            raise AuthenticationError(f"Stored token file {self.path} is malformed")
        return decrypt_token(document)

    def _warn_no_token(self) -> None:
        if self._warned or self.config.get("suppress_no_token_warning"):
            return
        self._warned = True
        logger.warning(NO_TOKEN_WARNING)
