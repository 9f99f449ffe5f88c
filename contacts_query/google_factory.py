"""
GoogleServiceFactory — one authorized credential, lazily built People API service.

The service object is built on first access and cached, so several clients
sharing a factory do not trigger repeated auth flows or discovery builds.

Usage:
    factory = GoogleServiceFactory(authorizer)
    people_svc = factory.people

    # Or pass the factory to a typed client class:
    from contacts_query.contacts_client import ContactsClient
    client = ContactsClient(factory)
"""
from __future__ import annotations

from typing import Any, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from .authorizer import Authorizer


class GoogleServiceFactory:
    """
    Constructs and caches Google API service objects from a single OAuth2 credential.

    Service objects are built at most once per (api_name, version) pair.
    """

    def __init__(self, authorizer: Authorizer) -> None:
        self._authorizer = authorizer
        self._creds: Optional[Credentials] = None
        self._services: dict[str, Any] = {}

    # ── Credentials ───────────────────────────────────────────────────────────

    @property
    def credentials(self) -> Credentials:
        """Return credentials, asking the authorizer when none are held yet."""
        if self._creds is None:
            self._creds = self._authorizer.authorize()
        return self._creds

    # ── Internal builder ──────────────────────────────────────────────────────

    def _build(self, name: str, version: str) -> Any:
        """Build and cache a googleapiclient service object."""
        key = f"{name}/{version}"
        if key not in self._services:
            self._services[key] = build(
                name, version, credentials=self.credentials, cache_discovery=False
            )
        return self._services[key]

    # ── Service properties ────────────────────────────────────────────────────

    @property
    def people(self) -> Any:
        """Google People API v1 service object (Contacts)."""
        return self._build("people", "v1")
