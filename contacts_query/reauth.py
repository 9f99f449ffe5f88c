"""
Re-authorize from scratch.
Run this after changing scopes on the OAuth consent screen, or when the cached
refresh token has been revoked. Deletes the existing token, runs the browser
flow, saves the new token and lists contacts once as a smoke test.
"""
from __future__ import annotations

import argparse
import sys

from .authorizer import Authorizer
from .base import EXIT_OK, BaseScript
from .browser import opener_for_platform
from .config import load_client_config
from .contacts_client import ContactsClient
from .google_factory import GoogleServiceFactory
from .token_store import TokenStore


class Reauth(BaseScript):
    """Delete the cached Google token and authorize again in the browser."""

    def run(self, args: argparse.Namespace) -> int:
        settings = self.settings
        client_config = load_client_config(settings.client_secret_file)

        store = TokenStore(settings.token_file, settings.scopes)
        if store.delete():
            print(f"Deleted old token: {store.path}", file=sys.stderr)

        print(f"Requesting {len(settings.scopes)} scopes:", file=sys.stderr)
        for scope in settings.scopes:
            print(f"  {scope}", file=sys.stderr)

        authorizer = Authorizer(store, client_config, settings.scopes, opener_for_platform())
        factory = GoogleServiceFactory(authorizer)
        _ = factory.credentials   # triggers the browser flow

        # Quick smoke test
        contacts = ContactsClient(factory, page_size=settings.page_size).list_all()
        with_email = sum(1 for c in contacts if c.has_email)
        print(
            f"People API: {len(contacts)} contact(s), {with_email} with email",
            file=sys.stderr,
        )
        print("Re-auth complete.", file=sys.stderr)
        return EXIT_OK


def main() -> None:
    Reauth.main()


if __name__ == "__main__":
    main()
