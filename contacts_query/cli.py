"""
contacts-query — mutt query_command backed by Google Contacts.

muttrc:
    set query_command = "contacts-query %s"

Output (stdout):
    fetching...<TAB>OK
    ada@example.com<TAB>Ada Lovelace<TAB>
    ...

Exit status: 0 if anything matched, 1 if nothing did or the line stream
broke, 2 on any other fatal error.
"""
from __future__ import annotations

import argparse

from .authorizer import Authorizer
from .base import EXIT_NO_MATCH, EXIT_OK, BaseScript
from .browser import opener_for_platform
from .config import load_client_config
from .contacts_client import ContactsClient
from .google_factory import GoogleServiceFactory
from .pipeline import QueryPipeline
from .token_store import TokenStore


class ContactsQuery(BaseScript):
    """Print Google contacts whose "email<TAB>name" line contains QUERY."""

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "query", nargs="?", default="",
            help="Substring to look for (default: match everything)."
        )

    def build_client(self) -> ContactsClient:
        """Wire settings → token store → authorizer → People API client."""
        settings = self.settings
        client_config = load_client_config(settings.client_secret_file)

        store = TokenStore(settings.token_file, settings.scopes)
        authorizer = Authorizer(store, client_config, settings.scopes, opener_for_platform())
        factory = GoogleServiceFactory(authorizer)
        # Authorize up front, before the pipeline starts writing output
        _ = factory.credentials
        return ContactsClient(factory, page_size=settings.page_size)

    def run(self, args: argparse.Namespace) -> int:
        client = self.build_client()
        found = QueryPipeline(client.list_all, query=args.query).run()
        return EXIT_OK if found else EXIT_NO_MATCH


def main() -> None:
    ContactsQuery.main()


if __name__ == "__main__":
    main()
