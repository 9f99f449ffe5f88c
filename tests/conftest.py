import datetime
import logging

import pytest
from google.oauth2.credentials import Credentials

from contacts_query.config import SCOPES
from contacts_query.models import Contact


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep settings, logs and tokens out of the real home directory."""
    monkeypatch.setenv("CONTACTS_QUERY_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("CONTACTS_QUERY_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("CONTACTS_QUERY_TOKEN_FILE", str(tmp_path / "token.json"))
    monkeypatch.setenv("CONTACTS_QUERY_CLIENT_SECRET_FILE", str(tmp_path / "secrets.json"))
    monkeypatch.delenv("CONTACTS_QUERY_PAGE_SIZE", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Each main() run installs handlers bound to the current (captured) stderr."""
    yield
    logger = logging.getLogger("contacts_query")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def client_config():
    return {
        "installed": {
            "client_id": "client-id.apps.googleusercontent.com",
            "client_secret": "client-secret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["http://localhost"],
        }
    }


@pytest.fixture
def credentials():
    return Credentials(
        token="access-token",
        refresh_token="refresh-token",
        token_uri="https://oauth2.googleapis.com/token",
        client_id="client-id.apps.googleusercontent.com",
        client_secret="client-secret",
        scopes=SCOPES,
        expiry=datetime.datetime(2030, 1, 2, 3, 4, 5),
    )


@pytest.fixture
def contacts():
    """Mixed bag: named, unnamed, and one without any email."""
    return [
        Contact("people/c1", "Ada Lovelace", ["ada@example.com", "ada@math.org"]),
        Contact("people/c2", "", ["a@x.com", "b@y.com"]),
        Contact("people/c3", "No Mail", []),
    ]
