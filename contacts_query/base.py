"""
BaseScript — abstract base class for the contacts-query command-line scripts.

Provides:
  - Rotating file logger + stderr handler (stdout belongs to query output)
  - Abstract run() method that returns the process exit code
  - main() classmethod: parses --debug plus subclass arguments, runs the
    script, and turns ContactsQueryError into a logged fatal exit

Subclass usage:
    class MyScript(BaseScript):
        @classmethod
        def add_arguments(cls, parser):
            parser.add_argument("name")

        def run(self, args) -> int:
            self.logger.info("doing work...")
            return EXIT_OK

    def main():
        MyScript.main()
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
import traceback
from abc import ABC, abstractmethod
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from .config import Settings, load_settings
from .errors import ContactsQueryError, StreamError

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_FATAL = 2

# Parent of every module logger in the package
PACKAGE_LOGGER = "contacts_query"


def _origin(exc: BaseException) -> str:
    """file:line where the exception was raised."""
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return "?"
    last = frames[-1]
    return f"{Path(last.filename).name}:{last.lineno}"


class BaseScript(ABC):
    """Abstract base for contacts-query scripts."""

    def __init__(self, settings: Settings, debug: bool = False) -> None:
        # Derive script name from the concrete class name (lowercased)
        self.script_name: str = type(self).__name__.lower()
        self.settings = settings
        self.debug = debug
        self.logger: logging.Logger = self._setup_logger()

    # ── Logging ───────────────────────────────────────────────────────────────

    def _setup_logger(self) -> logging.Logger:
        """
        Configure the package logger to write to both:
          - <log_dir>/<script_name>.log  (rotating, max 2 MB × 5 backups)
          - stderr (WARNING and above, everything with --debug)
        """
        root = logging.getLogger(PACKAGE_LOGGER)
        root.setLevel(logging.DEBUG if self.debug else logging.INFO)
        logger = logging.getLogger(f"{PACKAGE_LOGGER}.{self.script_name}")

        # Avoid adding duplicate handlers if main() runs twice in one process
        if root.handlers:
            return logger

        fmt = logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s %(filename)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        log_dir = self.settings.log_dir
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / f"{self.script_name}.log",
            maxBytes=2_000_000,   # 2 MB per file
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(fmt)

        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(logging.DEBUG if self.debug else logging.WARNING)
        stream_handler.setFormatter(fmt)

        root.addHandler(file_handler)
        root.addHandler(stream_handler)
        return logger

    # ── Abstract interface ────────────────────────────────────────────────────

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Hook for subclasses to register their own arguments."""

    @abstractmethod
    def run(self, args: argparse.Namespace) -> int:
        """Execute the script and return the process exit code."""

    # ── CLI entrypoint ────────────────────────────────────────────────────────

    @classmethod
    def main(cls, argv: Optional[Sequence[str]] = None) -> NoReturn:
        """
        Standard CLI entrypoint.

        Exits with run()'s code, or after logging a ContactsQueryError with
        the location it was raised from: EXIT_NO_MATCH for a StreamError,
        EXIT_FATAL for the rest. Any other exception is logged with its
        traceback and propagates.
        """
        doc = (cls.__doc__ or cls.__name__).strip().splitlines()[0]
        parser = argparse.ArgumentParser(description=doc)
        parser.add_argument(
            "--debug", action="store_true", help="Enable DEBUG-level logging on stderr"
        )
        cls.add_arguments(parser)
        args = parser.parse_args(argv)

        try:
            settings = load_settings()
        except ContactsQueryError as exc:
            print(f"{parser.prog}: {_origin(exc)}: {exc}", file=sys.stderr)
            sys.exit(EXIT_FATAL)

        script = cls(settings, debug=args.debug)

        t0 = time.monotonic()
        try:
            code = script.run(args)
        except ContactsQueryError as exc:
            script.logger.critical("%s: %s", _origin(exc), exc)
            # A broken line stream ends the run like "no matches"
            sys.exit(EXIT_NO_MATCH if isinstance(exc, StreamError) else EXIT_FATAL)
        except Exception:
            elapsed = time.monotonic() - t0
            script.logger.exception("Script failed after %.2fs", elapsed)
            raise

        script.logger.debug("Completed in %.2fs with exit code %d", time.monotonic() - t0, code)
        sys.exit(code)
