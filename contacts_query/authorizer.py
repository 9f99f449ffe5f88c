"""
Google OAuth2 authorization with token persistence.

The cached token is reused as-is; an expired access token is refreshed by
google-auth when the People API request is made. The browser flow only runs
when there is no usable cached token.

Usage:
    authorizer = Authorizer(TokenStore(path, scopes), client_config, scopes,
                            opener_for_platform())
    creds = authorizer.authorize()
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Optional

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error
from requests.exceptions import RequestException

from .browser import BrowserOpener
from .callback_server import CallbackServer
from .errors import AuthorizationError
from .token_store import TokenStore

logger = logging.getLogger(__name__)

# Fixed anti-forgery state sent with the authorization request
STATE = "csrf"

FlowFactory = Callable[[dict[str, Any], list[str]], Any]


def _installed_app_flow(client_config: dict[str, Any], scopes: list[str]) -> InstalledAppFlow:
    return InstalledAppFlow.from_client_config(client_config, scopes=scopes)


class Authorizer:
    """Produces a Credential from the TokenStore, or from an interactive browser flow."""

    def __init__(
        self,
        store: TokenStore,
        client_config: dict[str, Any],
        scopes: list[str],
        opener: BrowserOpener,
        flow_factory: Optional[FlowFactory] = None,
    ) -> None:
        self._store = store
        self._client_config = client_config
        self._scopes = scopes
        self._opener = opener
        self._flow_factory: FlowFactory = flow_factory or _installed_app_flow

    def authorize(self) -> Credentials:
        """
        Return credentials, running the browser flow on a cache miss.

        Raises AuthorizationError if the browser flow, the code exchange or
        saving the new token fails.
        """
        creds = self._store.load()
        if creds is not None:
            return creds

        logger.info("No usable cached token, starting browser authorization")
        creds = self.authorize_interactive()
        self._store.save(creds)
        return creds

    def authorize_interactive(self) -> Credentials:
        """Run the authorization-code flow through the browser. Does not persist."""
        flow = self._flow_factory(self._client_config, self._scopes)

        with CallbackServer() as server:
            flow.redirect_uri = server.redirect_uri
            auth_url, _ = flow.authorization_url(access_type="offline", state=STATE)

            print("Opening browser for Google authorization…", file=sys.stderr)
            logger.debug("Authorization URL: %s", auth_url)
            self._opener.open(auth_url)

            code = server.wait_for_code()

        try:
            flow.fetch_token(code=code)
        except (OAuth2Error, RequestException, ValueError) as exc:
            raise AuthorizationError(f"exchanging authorization code failed: {exc}") from exc

        print("✓ OAuth flow completed", file=sys.stderr)
        return flow.credentials
