"""Probes for cross-cutting infrastructure events.

Database lifecycle events are reported through these probes so callers
never talk to the logger directly.
"""

from infrastructure.observability.probes import (
    DatabaseProbe,
    DefaultDatabaseProbe,
)

__all__ = [
    "DatabaseProbe",
    "DefaultDatabaseProbe",
]
