"""
Runtime settings and the Google OAuth client secrets.

Settings come from defaults, then an optional dotenv file, then the process
environment. Paths are resolved once here and handed to the constructors that
need them; nothing else reads the environment.

Usage:
    from contacts_query.config import load_settings, load_client_config
    settings = load_settings()
    client_config = load_client_config(settings.client_secret_file)
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_ENV_FILE = "~/.config/contacts-query/.env"
DEFAULT_CLIENT_SECRET_FILE = "~/.contacts-secrets.json"
DEFAULT_TOKEN_FILE = "~/.contacts-token"
DEFAULT_LOG_DIR = "~/.cache/contacts-query/logs"
DEFAULT_PAGE_SIZE = 500

SCOPES: list[str] = [
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/contacts.readonly",
]


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one run."""

    client_secret_file: Path
    token_file: Path
    log_dir: Path
    page_size: int = DEFAULT_PAGE_SIZE
    scopes: list[str] = field(default_factory=lambda: list(SCOPES))


def _path(env_var: str, default: str) -> Path:
    return Path(os.environ.get(env_var) or default).expanduser()


def load_settings() -> Settings:
    """Load the dotenv file (if any) and build Settings from the environment."""
    env_file = _path("CONTACTS_QUERY_ENV_FILE", DEFAULT_ENV_FILE)
    # Variables already in the environment win over the dotenv file
    load_dotenv(env_file, override=False)

    raw_page_size = os.environ.get("CONTACTS_QUERY_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))
    try:
        page_size = int(raw_page_size)
    except ValueError:
        raise ConfigError(
            f"CONTACTS_QUERY_PAGE_SIZE must be an integer, got {raw_page_size!r}"
        ) from None
    if not 1 <= page_size <= 1000:
        raise ConfigError(f"CONTACTS_QUERY_PAGE_SIZE must be 1-1000, got {page_size}")

    return Settings(
        client_secret_file=_path("CONTACTS_QUERY_CLIENT_SECRET_FILE", DEFAULT_CLIENT_SECRET_FILE),
        token_file=_path("CONTACTS_QUERY_TOKEN_FILE", DEFAULT_TOKEN_FILE),
        log_dir=_path("CONTACTS_QUERY_LOG_DIR", DEFAULT_LOG_DIR),
        page_size=page_size,
    )


def load_client_config(path: Path) -> dict[str, Any]:
    """
    Read a Google OAuth client secrets file (the JSON downloaded from Cloud Console).

    Raises ConfigError if the file is missing, unreadable, not JSON, or has
    neither an "installed" nor a "web" section.
    """
    try:
        with open(path, encoding="utf-8") as f:
            config = json.load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read client secrets {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"client secrets {path} is not valid JSON: {exc}") from exc

    if not isinstance(config, dict) or not ({"installed", "web"} & config.keys()):
        raise ConfigError(
            f"client secrets {path} has no 'installed' or 'web' client section"
        )
    return config
