"""Exceptions shared across services."""

from __future__ import annotations


class RecordNotFound(LookupError):
    """A service was asked to act on a row that does not exist for the user."""

    def __init__(self, kind: str, record_id: int) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")
