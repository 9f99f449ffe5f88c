"""Tests for the loopback OAuth redirect listener."""

import pytest
import requests

from contacts_query.callback_server import CallbackServer
from contacts_query.errors import AuthorizationError


def test_redirect_uri_uses_bound_port():
    with CallbackServer() as server:
        assert server.port > 0
        assert server.redirect_uri == f"http://localhost:{server.port}/"


def test_code_is_delivered_and_browser_told_to_close():
    with CallbackServer() as server:
        resp = requests.get(server.redirect_uri, params={"code": "4/abc", "state": "csrf"}, timeout=5)
        assert resp.status_code == 200
        assert "You may close this window" in resp.text
        assert server.wait_for_code() == "4/abc"


def test_request_without_code_stops_waiting():
    with CallbackServer() as server:
        requests.get(server.redirect_uri, params={"error": "access_denied"}, timeout=5)
        with pytest.raises(AuthorizationError, match="access_denied"):
            server.wait_for_code()


def test_bare_request_stops_waiting():
    with CallbackServer() as server:
        requests.get(server.redirect_uri, timeout=5)
        with pytest.raises(AuthorizationError, match="no authorization code"):
            server.wait_for_code()


def test_close_is_idempotent():
    server = CallbackServer()
    server.start()
    server.close()
    server.close()


def test_close_without_start():
    CallbackServer().close()
