"""Core log types: entries, entry identifiers and log slices."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


def _label(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


class EntryType(enum.IntEnum):
    """Kind of payload carried by a log entry."""

    ENTRY_NORMAL = 0
    ENTRY_CONF_CHANGE = 1
    ENTRY_CONF_CHANGE_V2 = 2

    def __str__(self) -> str:
        return _label(self.name)


class MessageType(enum.IntEnum):
    """Kind of a raft message."""

    MSG_HUP = 0
    MSG_BEAT = 1
    MSG_PROP = 2
    MSG_APP = 3
    MSG_APP_RESP = 4
    MSG_VOTE = 5
    MSG_VOTE_RESP = 6
    MSG_SNAP = 7
    MSG_HEARTBEAT = 8
    MSG_HEARTBEAT_RESP = 9
    MSG_UNREACHABLE = 10
    MSG_SNAP_STATUS = 11
    MSG_CHECK_QUORUM = 12
    MSG_TRANSFER_LEADER = 13
    MSG_TIMEOUT_NOW = 14
    MSG_READ_INDEX = 15
    MSG_READ_INDEX_RESP = 16
    MSG_PRE_VOTE = 17
    MSG_PRE_VOTE_RESP = 18
    MSG_STORAGE_APPEND = 19
    MSG_STORAGE_APPEND_RESP = 20
    MSG_STORAGE_APPLY = 21
    MSG_STORAGE_APPLY_RESP = 22
    MSG_FORGET_LEADER = 23

    def __str__(self) -> str:
        return _label(self.name)


def _varint_size(value: int) -> int:
    return max(1, (value.bit_length() + 6) // 7)


@dataclass(frozen=True)
class Entry:
    """A single raft log entry."""

    term: int = 0
    index: int = 0
    type: EntryType = EntryType.ENTRY_NORMAL
    data: bytes | None = None

    def size(self) -> int:
        """Return the protocol buffer encoding size of the entry."""
        n = 1 + _varint_size(int(self.type))
        n += 1 + _varint_size(self.term)
        n += 1 + _varint_size(self.index)
        if self.data is not None:
            length = len(self.data)
            n += 1 + length + _varint_size(length)
        return n


@dataclass(frozen=True)
class EntryID:
    """Uniquely identifies a log entry by its term and index."""

    term: int = 0
    index: int = 0

    def __str__(self) -> str:
        return f"{{term:{self.term} index:{self.index}}}"


def entry_id(entry: Entry) -> EntryID:
    """Return the ID of the given entry."""
    return EntryID(term=entry.term, index=entry.index)


@dataclass
class LogSlice:
    """A contiguous slice of a raft log, seen from a given leader term."""

    term: int = 0
    prev: EntryID = field(default_factory=EntryID)
    entries: list[Entry] = field(default_factory=list)

    def last_index(self) -> int:
        """Index of the last entry, or of prev if the slice is empty."""
        return self.prev.index + len(self.entries)

    def last_entry_id(self) -> EntryID:
        """ID of the last entry, or prev if the slice is empty."""
        if self.entries:
            return entry_id(self.entries[-1])
        return self.prev

    def validate(self) -> None:
        """Raise ValueError unless the slice is well formed."""
        prev = self.prev
        for entry in self.entries:
            current = entry_id(entry)
            if current.term < prev.term or current.index != prev.index + 1:
                raise ValueError(
                    f"leader term {self.term}: entries {prev} and {current} not consistent"
                )
            prev = current
        if self.term < prev.term:
            raise ValueError(f"leader term {self.term}: entry {prev} has a newer term")