"""
Typed data model for People API contacts.

Plain dataclass, no external dependencies. Formatting lives in the pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Contact:
    """A Google Contacts person record, reduced to what address completion needs."""

    resource_name: str
    name: str = ""
    emails: list[str] = field(default_factory=list)

    @property
    def has_email(self) -> bool:
        return bool(self.emails)
