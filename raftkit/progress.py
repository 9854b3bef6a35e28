"""A follower's replication progress as seen by the leader."""

from __future__ import annotations

from dataclasses import dataclass

from .inflights import Inflights
from .state import StateType

_U64 = (1 << 64) - 1


def _prev(index: int) -> int:
    """index - 1 with 64-bit unsigned wrap-around."""
    return (index - 1) & _U64


@dataclass(eq=False)
class Progress:
    """Replication state of one follower.

    Invariant: 0 <= match < next. In StateSnapshot,
    next == pending_snapshot + 1 == sent_commit + 1.
    """

    match: int = 0
    next: int = 0
    sent_commit: int = 0
    state: StateType = StateType.PROBE
    pending_snapshot: int = 0
    recent_active: bool = False
    msg_app_flow_paused: bool = False
    inflights: Inflights | None = None
    is_learner: bool = False

    def reset_state(self, state: StateType) -> None:
        """Move to ``state``, clearing pause, pending snapshot and inflights."""
        self.msg_app_flow_paused = False
        self.pending_snapshot = 0
        self.state = state
        if self.inflights is not None:
            self.inflights.reset()

    def become_probe(self) -> None:
        """Switch to StateProbe, probing from Match+1 or past the pending snapshot."""
        if self.state == StateType.SNAPSHOT:
            pending = self.pending_snapshot
            self.reset_state(StateType.PROBE)
            self.next = max(self.match + 1, pending + 1)
        else:
            self.reset_state(StateType.PROBE)
            self.next = self.match + 1
        self.sent_commit = min(self.sent_commit, self.next - 1)

    def become_replicate(self) -> None:
        """Switch to StateReplicate with Next reset to Match+1."""
        self.reset_state(StateType.REPLICATE)
        self.next = self.match + 1

    def become_snapshot(self, snapshot_index: int) -> None:
        """Switch to StateSnapshot awaiting the snapshot at ``snapshot_index``."""
        self.reset_state(StateType.SNAPSHOT)
        self.pending_snapshot = snapshot_index
        self.next = snapshot_index + 1
        self.sent_commit = snapshot_index

    def sent_entries(self, entries: int, size: int) -> None:
        """Account for ``entries`` entries of ``size`` bytes sent from Next on."""
        if self.state == StateType.REPLICATE:
            if entries > 0:
                self.next += entries
                self.inflights.add(self.next - 1, size)
            # A message that fills the window is treated as a probe.
            self.msg_app_flow_paused = self.inflights.full()
        elif self.state == StateType.PROBE:
            if entries > 0:
                self.msg_app_flow_paused = True
        else:
            raise ValueError(f"sending append in unhandled state {self.state}")

    def can_bump_commit(self, index: int) -> bool:
        """Whether sending commit ``index`` may advance the follower's commit."""
        return index > self.sent_commit and self.sent_commit < _prev(self.next)

    def mark_sent_commit(self, commit: int) -> None:
        """Record the highest commit index sent to the follower."""
        self.sent_commit = commit

    def maybe_update(self, n: int) -> bool:
        """Apply an acknowledgement of index ``n``; False if it is stale."""
        if n <= self.match:
            return False
        self.match = n
        self.next = max(self.next, n + 1)
        self.msg_app_flow_paused = False
        return True

    def maybe_decr_to(self, rejected: int, match_hint: int) -> bool:
        """Apply a rejection of the append at ``rejected``; False if it is stale."""
        if self.state == StateType.REPLICATE:
            if rejected <= self.match:
                return False
            self.next = self.match + 1
            self.sent_commit = min(self.sent_commit, self.next - 1)
            return True

        # Non-replicating followers are probed one entry at a time.
        if _prev(self.next) != rejected:
            return False

        self.next = max(min(rejected, match_hint + 1), self.match + 1)
        self.sent_commit = min(self.sent_commit, self.next - 1)
        self.msg_app_flow_paused = False
        return True

    def is_paused(self) -> bool:
        """Whether sending log entries to this follower is throttled."""
        if self.state == StateType.SNAPSHOT:
            return True
        return self.msg_app_flow_paused

    def __str__(self) -> str:
        parts = [f"{str(self.state)} match={self.match} next={self.next}"]
        if self.is_learner:
            parts.append(" learner")
        if self.is_paused():
            parts.append(" paused")
        if self.pending_snapshot > 0:
            parts.append(f" pendingSnap={self.pending_snapshot}")
        if not self.recent_active:
            parts.append(" inactive")
        if self.inflights is not None and (n := self.inflights.count()) > 0:
            parts.append(f" inflight={n}")
            if self.inflights.full():
                parts.append("[full]")
        return "".join(parts)


class ProgressMap(dict):
    """Maps node IDs to their Progress."""

    def __str__(self) -> str:
        return "".join(f"{node_id}: {self[node_id]}\n" for node_id in sorted(self))