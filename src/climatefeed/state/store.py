"""Single-slot snapshot cache.

The orchestrator is the only component allowed to write here.
"""

from __future__ import annotations

import logging

from climatefeed.models.snapshot import Snapshot

_logger = logging.getLogger(__name__)


class ClimateCache:
    """Process-wide holder of the latest :class:`Snapshot`.

    Lifecycle: created holding the all-empty snapshot, replaced wholesale on
    every completed refresh cycle, never expired.  Snapshots are frozen, so
    replacing the slot is a single reference assignment and a reader sees
    either the previous snapshot or the new one, never a mix of both.
    """

    def __init__(self, initial: Snapshot | None = None) -> None:
        self._snapshot = initial if initial is not None else Snapshot()
        self._generation = 0

    def read(self) -> Snapshot:
        """Return the current snapshot (may be the initial empty one)."""
        return self._snapshot

    def write(self, snapshot: Snapshot) -> None:
        """Replace the current snapshot."""
        if not isinstance(snapshot, Snapshot):
            raise TypeError(f"expected Snapshot, got {type(snapshot).__name__}")
        self._snapshot = snapshot
        self._generation += 1
        _logger.debug("Cache generation %d installed (last_updated=%s)", self._generation, snapshot.last_updated)

    @property
    def generation(self) -> int:
        """Number of snapshots written since creation."""
        return self._generation

    @property
    def is_ready(self) -> bool:
        return self._snapshot.is_ready
