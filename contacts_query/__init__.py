"""
contacts-query — Google Contacts lookup for mutt's query_command.

Package structure:
    contacts_query.errors           — exception hierarchy
    contacts_query.config           — Settings (dotenv + environment), client secrets
    contacts_query.models           — Contact dataclass
    contacts_query.token_store      — TokenStore (cached OAuth2 credential on disk)
    contacts_query.browser          — BrowserOpener implementations per platform
    contacts_query.callback_server  — loopback OAuth redirect listener
    contacts_query.authorizer       — Authorizer (cached token, else browser flow)
    contacts_query.google_factory   — GoogleServiceFactory (People API service)
    contacts_query.contacts_client  — ContactsClient
    contacts_query.pipeline         — format + filter producer/consumer
    contacts_query.base             — BaseScript (logging, CLI scaffold, exit codes)
    contacts_query.cli              — `contacts-query` entry point
    contacts_query.reauth           — `contacts-query-reauth` entry point
"""

__version__ = "0.1.0"
