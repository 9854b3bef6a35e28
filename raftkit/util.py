"""Message classification, entry descriptions and size helpers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from .types import Entry, EntryType, MessageType

EntryFormatter = Callable[[bytes], str]

_LOCAL_MESSAGES = frozenset(
    {
        MessageType.MSG_HUP,
        MessageType.MSG_BEAT,
        MessageType.MSG_UNREACHABLE,
        MessageType.MSG_SNAP_STATUS,
        MessageType.MSG_CHECK_QUORUM,
        MessageType.MSG_STORAGE_APPEND,
        MessageType.MSG_STORAGE_APPEND_RESP,
        MessageType.MSG_STORAGE_APPLY,
        MessageType.MSG_STORAGE_APPLY_RESP,
    }
)

_RESPONSE_MESSAGES = frozenset(
    {
        MessageType.MSG_APP_RESP,
        MessageType.MSG_VOTE_RESP,
        MessageType.MSG_HEARTBEAT_RESP,
        MessageType.MSG_UNREACHABLE,
        MessageType.MSG_READ_INDEX_RESP,
        MessageType.MSG_PRE_VOTE_RESP,
        MessageType.MSG_STORAGE_APPEND_RESP,
        MessageType.MSG_STORAGE_APPLY_RESP,
    }
)

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    '"': '\\"',
    "\\": "\\\\",
}


def is_local_msg(msg_type: MessageType) -> bool:
    """Whether the message type never leaves the local node."""
    return msg_type in _LOCAL_MESSAGES


def is_response_msg(msg_type: MessageType) -> bool:
    """Whether the message type is a response."""
    return msg_type in _RESPONSE_MESSAGES


def vote_resp_msg_type(msg_type: MessageType) -> MessageType:
    """Map a vote or pre-vote message type to its response type."""
    if msg_type == MessageType.MSG_VOTE:
        return MessageType.MSG_VOTE_RESP
    if msg_type == MessageType.MSG_PRE_VOTE:
        return MessageType.MSG_PRE_VOTE_RESP
    raise ValueError(f"not a vote message: {msg_type}")


def _quote(data: bytes) -> str:
    out = ['"']
    for ch in data.decode("utf-8", errors="surrogateescape"):
        code = ord(ch)
        if 0xDC80 <= code <= 0xDCFF:
            out.append(f"\\x{code - 0xDC00:02x}")
        elif ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif code < 0x20 or code == 0x7F:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def describe_entry(entry: Entry, formatter: EntryFormatter | None = None) -> str:
    """Return a concise human-readable description of an entry."""
    fmt = formatter or _quote
    formatted = ""
    if entry.type == EntryType.ENTRY_NORMAL:
        formatted = fmt(entry.data or b"")
    if formatted:
        formatted = " " + formatted
    return f"{entry.term}/{entry.index} {entry.type}{formatted}"


def describe_entries(entries: Iterable[Entry], formatter: EntryFormatter | None = None) -> str:
    """Describe each entry on its own line."""
    return "".join(describe_entry(e, formatter) + "\n" for e in entries)


def entries_size(entries: Iterable[Entry]) -> int:
    """Total encoding size of the entries."""
    return sum(e.size() for e in entries)


def limit_size(entries: Sequence[Entry], max_size: int) -> list[Entry]:
    """Longest prefix whose total size fits max_size; never empty for non-empty input."""
    if not entries:
        return list(entries)
    total = entries[0].size()
    for limit, entry in enumerate(entries[1:], start=1):
        total += entry.size()
        if total > max_size:
            return list(entries[:limit])
    return list(entries)


def payload_size(entry: Entry) -> int:
    """Size of the entry's payload."""
    return len(entry.data or b"")


def payloads_size(entries: Iterable[Entry]) -> int:
    """Total payload size of the entries."""
    return sum(payload_size(e) for e in entries)