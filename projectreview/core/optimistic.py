"""Optimistic local markers with explicit confirm/rollback.

Mutations are fire-and-confirm: a local marker is applied before the
network call, then either confirmed once the remote service reports
success or rolled back to the value it replaced.

Usage::

    token = ledger.apply_local_marker(item_id, "under_review", previous="completed")
    try:
        client.create_file(...)
    except SubmissionError:
        status = ledger.rollback(token)
        raise
    ledger.confirm(token)
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import UUID

from projectreview.core.errors import StaleTokenError


@dataclass(frozen=True)
class PendingToken:
    """Handle for one applied marker."""

    key: str
    marker: Any
    previous: Any = None
    id: UUID = field(default_factory=uuid.uuid4)


class OptimisticLedger:
    """Tracks at most one in-flight marker per key."""

    def __init__(self):
        self._pending: Dict[str, PendingToken] = {}

    def apply_local_marker(self, key: str, marker: Any, previous: Any = None) -> PendingToken:
        """Record a marker for ``key`` ahead of a remote call.

        Args:
            key: Identifier of the item being mutated
            marker: Value shown while the call is in flight
            previous: Value to restore on rollback

        Returns:
            Token to pass to confirm() or rollback()

        Raises:
            ValueError: If ``key`` already has a marker in flight
        """
        if key in self._pending:
            raise ValueError(f"A change for {key} is already in progress")
        token = PendingToken(key=key, marker=marker, previous=previous)
        self._pending[key] = token
        return token

    def confirm(self, token: PendingToken) -> Any:
        """Commit a marker after remote success. Returns the marker."""
        self._release(token)
        return token.marker

    def rollback(self, token: PendingToken) -> Any:
        """Discard a marker after remote failure. Returns the previous value."""
        self._release(token)
        return token.previous

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    def marker_for(self, key: str) -> Optional[Any]:
        token = self._pending.get(key)
        return token.marker if token else None

    @property
    def pending_keys(self) -> List[str]:
        return list(self._pending)

    def _release(self, token: PendingToken) -> None:
        current = self._pending.get(token.key)
        if current is None or current.id != token.id:
            raise StaleTokenError(f"Token for {token.key} was already settled")
        del self._pending[token.key]
