"""States of a follower as tracked by the leader."""

from __future__ import annotations

import enum


class StateType(enum.IntEnum):
    """How the leader interacts with a tracked follower."""

    # The follower's last index is unknown; it is probed with periodic appends.
    PROBE = 0
    # Steady state: the follower eagerly receives log entries.
    REPLICATE = 1
    # The follower needs a full snapshot before it can replicate again.
    SNAPSHOT = 2

    def __str__(self) -> str:
        return _STATE_NAMES[self]

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_STATE_NAMES = {
    StateType.PROBE: "StateProbe",
    StateType.REPLICATE: "StateReplicate",
    StateType.SNAPSHOT: "StateSnapshot",
}