"""
TokenStore — the cached OAuth2 credential on disk.

The file holds the JSON produced by google.oauth2.credentials.Credentials.to_json()
(access token, refresh token, expiry, token URI, client id/secret, scopes).

A missing or unusable file is a cache miss, not an error: load() returns None
and the caller falls back to the interactive browser flow.
"""
from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Optional

from google.oauth2.credentials import Credentials

from .errors import AuthorizationError

logger = logging.getLogger(__name__)


class TokenStore:
    """
    Reads and writes one credential file.

    load() re-reads the file on every call so a token rewritten by another
    process is picked up; reads through the same instance are serialised.
    """

    def __init__(self, path: Path, scopes: Optional[list[str]] = None) -> None:
        self.path = Path(path)
        self._scopes = scopes
        self._lock = threading.Lock()

    def load(self) -> Optional[Credentials]:
        """Return the cached credential, or None if there is no usable one."""
        with self._lock:
            try:
                with open(self.path, encoding="utf-8") as f:
                    info = json.load(f)
            except FileNotFoundError:
                logger.debug("No cached token at %s", self.path)
                return None
            except OSError as exc:
                logger.warning("Cannot read cached token %s: %s", self.path, exc)
                return None
            except ValueError as exc:
                logger.warning("Cached token %s is not valid JSON: %s", self.path, exc)
                return None

            try:
                creds = Credentials.from_authorized_user_info(info, self._scopes)
            except (ValueError, TypeError, AttributeError) as exc:
                logger.warning("Cached token %s is malformed: %s", self.path, exc)
                return None

        logger.debug("Loaded cached token from %s", self.path)
        return creds

    def save(self, creds: Credentials) -> None:
        """Create or truncate the token file and write the credential as JSON."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Owner-only from creation; the file holds the refresh token
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                # A pre-existing file keeps its old mode through O_CREAT
                if hasattr(os, "fchmod"):
                    os.fchmod(f.fileno(), 0o600)
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthorizationError(f"cannot save token to {self.path}: {exc}") from exc
        logger.info("Token saved to %s", self.path)

    def delete(self) -> bool:
        """Remove the token file. Returns True if a file was removed."""
        with self._lock:
            try:
                self.path.unlink()
            except FileNotFoundError:
                return False
        logger.info("Deleted cached token %s", self.path)
        return True
