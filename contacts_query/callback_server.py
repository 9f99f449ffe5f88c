"""
Loopback HTTP listener that receives the OAuth redirect.

Modelled on the local server google_auth_oauthlib runs inside
InstalledAppFlow.run_local_server(), but split so the caller controls the
authorization URL, the browser launch and the token exchange.

Usage:
    with CallbackServer() as server:
        flow.redirect_uri = server.redirect_uri
        ...open the browser...
        code = server.wait_for_code()
"""
from __future__ import annotations

import logging
import queue
import threading
import wsgiref.simple_server
from typing import Any, Callable, Iterable, Optional
from urllib.parse import parse_qs

from .errors import AuthorizationError

logger = logging.getLogger(__name__)

CLOSE_PAGE = (
    b"<html><head><title>contacts-query</title></head>"
    b"<body><pre>Authorization received. You may close this window.</pre></body></html>"
)


class _QuietHandler(wsgiref.simple_server.WSGIRequestHandler):
    """Route wsgiref's per-request access log to our logger instead of stderr."""

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("callback %s", format % args)


class CallbackServer:
    """
    One-shot redirect target on localhost, served from a daemon thread.

    The first request decides the outcome: with a `code` parameter the code is
    handed to wait_for_code(); without one it is taken as the signal to stop
    listening and wait_for_code() fails.
    """

    def __init__(self, host: str = "localhost", port: int = 0) -> None:
        self._host = host
        self._results: queue.Queue[tuple[Optional[str], Optional[str]]] = queue.Queue()
        self._server = wsgiref.simple_server.make_server(
            host, port, self._app, handler_class=_QuietHandler
        )
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="oauth-callback", daemon=True
        )
        self._closed = False

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def __enter__(self) -> "CallbackServer":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def start(self) -> None:
        self._thread.start()
        logger.debug("OAuth callback listening on %s", self.redirect_uri)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._thread.is_alive():
            self._server.shutdown()
            self._thread.join()
        self._server.server_close()

    @property
    def port(self) -> int:
        return self._server.server_port

    @property
    def redirect_uri(self) -> str:
        return f"http://{self._host}:{self.port}/"

    # ── Waiting ───────────────────────────────────────────────────────────────

    def wait_for_code(self) -> str:
        """Block until the browser hits the redirect URI; return the code."""
        code, error = self._results.get()
        if code is None:
            reason = error or "no authorization code in callback"
            raise AuthorizationError(f"authorization was not granted: {reason}")
        return code

    # ── WSGI app ──────────────────────────────────────────────────────────────

    def _app(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        params = parse_qs(environ.get("QUERY_STRING", ""))
        code = params.get("code", [None])[0]
        if code:
            self._results.put((code, None))
        else:
            self._results.put((None, params.get("error", [None])[0]))

        start_response(
            "200 OK",
            [
                ("Content-Type", "text/html; charset=utf-8"),
                ("Content-Length", str(len(CLOSE_PAGE))),
            ],
        )
        return [CLOSE_PAGE]
