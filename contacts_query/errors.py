"""Exception hierarchy. Anything deriving from ContactsQueryError is fatal to a run."""
from __future__ import annotations


class ContactsQueryError(Exception):
    """Base class for all errors raised by contacts_query."""


class ConfigError(ContactsQueryError):
    """Client secrets or settings are missing or invalid."""


class AuthorizationError(ContactsQueryError):
    """The interactive OAuth flow or token persistence failed."""


class UnsupportedPlatformError(AuthorizationError):
    """No known way to open a browser on this operating system."""

    def __init__(self, platform: str) -> None:
        super().__init__(f"don't know how to open URLs on platform {platform!r}")
        self.platform = platform


class FetchError(ContactsQueryError):
    """The People API request failed."""


class StreamError(ContactsQueryError):
    """The producer side of the query pipeline failed unexpectedly."""
