"""
Format contacts as mutt query lines and filter them by substring.

A producer thread fetches and formats; the calling thread consumes the lines
from a queue and prints matches as they arrive. The producer always finishes
by putting an end-of-stream marker, which is the consumer's only stop signal.

Output line format (mutt query_command):
    email<TAB>name<TAB>
"""
from __future__ import annotations

import logging
import queue
import sys
import threading
from typing import Callable, Iterable, Optional, TextIO

from .errors import ContactsQueryError, StreamError
from .models import Contact

logger = logging.getLogger(__name__)

_EOF = object()


def format_contact(contact: Contact) -> list[str]:
    """
    One line per email address. Without a display name the local part of the
    address stands in for it.
    """
    lines = []
    for email in contact.emails:
        name = contact.name or email.split("@")[0]
        lines.append(f"{email}\t{name}\t")
    return lines


class QueryPipeline:
    """
    Fetch, format and filter contacts concurrently.

    Usage:
        pipeline = QueryPipeline(client.list_all, query="smith")
        found = pipeline.run()
    """

    def __init__(
        self,
        fetch: Callable[[], Iterable[Contact]],
        query: str = "",
        out: Optional[TextIO] = None,
        announce: bool = True,
    ) -> None:
        self._fetch = fetch
        self._query = query
        self._out = out if out is not None else sys.stdout
        # mutt shows the first output line as a status message
        self._announce = announce
        self._lines: queue.Queue = queue.Queue()
        self._error: Optional[Exception] = None

    # ── Producer ──────────────────────────────────────────────────────────────

    def _produce(self) -> None:
        try:
            if self._announce:
                self._out.write("fetching...\t")
                self._out.flush()
            try:
                contacts = self._fetch()
            except Exception as exc:
                # Terminate the status line so match lines never join it
                if self._announce:
                    self._out.write(f"{exc}\n")
                    self._out.flush()
                raise
            if self._announce:
                self._out.write("OK\n")
                self._out.flush()

            for contact in contacts:
                if not contact.has_email:
                    continue
                for line in format_contact(contact):
                    self._lines.put(line)
        except Exception as exc:
            self._error = exc
        finally:
            self._lines.put(_EOF)

    # ── Consumer ──────────────────────────────────────────────────────────────

    def run(self) -> bool:
        """
        Run both sides to completion and return True if any line was printed.

        Re-raises a producer failure after the stream has been drained.
        """
        producer = threading.Thread(target=self._produce, name="contacts-producer", daemon=True)
        producer.start()

        printed = 0
        while True:
            line = self._lines.get()
            if line is _EOF:
                break
            if self._query in line:
                self._out.write(line + "\n")
                self._out.flush()
                printed += 1

        producer.join()
        logger.debug("Printed %d matching lines for query %r", printed, self._query)

        if self._error is not None:
            if isinstance(self._error, ContactsQueryError):
                raise self._error
            raise StreamError(f"contact producer failed: {self._error!r}") from self._error
        return printed > 0
