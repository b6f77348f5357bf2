"""State layer.

Holds the one snapshot every reader is served from.  Only the refresh
orchestrator writes to it.
"""

from climatefeed.state.store import ClimateCache

__all__ = ["ClimateCache"]
