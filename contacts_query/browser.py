"""
BrowserOpener — launch the user's default browser at a URL.

One implementation per operating-system family, chosen once at startup by
opener_for_platform(). The launcher is started and not waited on.
"""
from __future__ import annotations

import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import Optional

from .errors import AuthorizationError, UnsupportedPlatformError

logger = logging.getLogger(__name__)


class BrowserOpener(ABC):
    """Opens a URL in the user's browser."""

    @abstractmethod
    def open(self, url: str) -> None:
        ...


class CommandOpener(BrowserOpener):
    """Opens URLs by running a platform launcher command with the URL appended."""

    def __init__(self, *command: str) -> None:
        self.command: tuple[str, ...] = command

    def open(self, url: str) -> None:
        argv = [*self.command, url]
        logger.debug("Launching browser: %s", argv[0])
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise AuthorizationError(f"cannot launch {argv[0]}: {exc}") from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self.command!r}"


class UnsupportedPlatformOpener(BrowserOpener):
    """Stand-in for platforms with no known launcher; every open() fails."""

    def __init__(self, platform: str) -> None:
        self.platform = platform

    def open(self, url: str) -> None:
        raise UnsupportedPlatformError(self.platform)


# sys.platform prefix -> launcher command
_LAUNCHERS: list[tuple[str, tuple[str, ...]]] = [
    ("linux", ("xdg-open",)),
    ("freebsd", ("xdg-open",)),
    ("openbsd", ("xdg-open",)),
    ("netbsd", ("xdg-open",)),
    ("darwin", ("open",)),
    ("win32", ("rundll32", "url.dll,FileProtocolHandler")),
]


def opener_for_platform(platform: Optional[str] = None) -> BrowserOpener:
    """Return the BrowserOpener for `platform` (default: sys.platform)."""
    platform = platform or sys.platform
    for prefix, command in _LAUNCHERS:
        if platform.startswith(prefix):
            return CommandOpener(*command)
    return UnsupportedPlatformOpener(platform)
