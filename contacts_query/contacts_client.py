"""
ContactsClient — typed wrapper around the Google People API v1 connections list.

Note: requires the 'contacts.readonly' OAuth scope.
"""
from __future__ import annotations

import logging

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.errors import HttpError

from .errors import AuthorizationError, FetchError
from .google_factory import GoogleServiceFactory
from .models import Contact

logger = logging.getLogger(__name__)

# Only what address completion needs
_PERSON_FIELDS = "names,emailAddresses"

DEFAULT_PAGE_SIZE = 500


class ContactsClient:
    """
    Google Contacts (People API v1) listing.

    Usage:
        factory  = GoogleServiceFactory(authorizer)
        contacts = ContactsClient(factory)
        everyone = contacts.list_all()
    """

    def __init__(self, factory: GoogleServiceFactory, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._factory = factory
        self._page_size = page_size

    def list_all(self) -> list[Contact]:
        """
        Return the first page of the user's connections (up to page_size).

        Contacts without email addresses are included; callers decide what to drop.
        Raises FetchError if the request fails.
        """
        try:
            resp = self._factory.people.people().connections().list(
                resourceName="people/me",
                pageSize=self._page_size,
                personFields=_PERSON_FIELDS,
            ).execute()
        except RefreshError as exc:
            raise AuthorizationError(
                f"cached token could not be refreshed, run contacts-query-reauth: {exc}"
            ) from exc
        except (HttpError, httplib2.HttpLib2Error, TransportError, OSError) as exc:
            raise FetchError(f"listing contacts failed: {exc}") from exc

        connections = resp.get("connections", [])
        if resp.get("nextPageToken"):
            logger.debug("More than %d contacts; only the first page is used", self._page_size)
        logger.debug("Fetched %d contacts", len(connections))
        return [_parse_person(p) for p in connections]


# ── Parser (module-level) ─────────────────────────────────────────────────────

def _parse_person(raw: dict) -> Contact:
    """Convert a raw People API person dict into a typed Contact."""
    names = raw.get("names", [])
    name = names[0].get("displayName", "") if names else ""

    emails = [e["value"] for e in raw.get("emailAddresses", []) if e.get("value")]

    return Contact(
        resource_name=raw.get("resourceName", ""),
        name=name,
        emails=emails,
    )
