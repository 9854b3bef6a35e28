"""Flow control for in-flight append messages."""

from __future__ import annotations


class Inflights:
    """Limits the number and total size of unacknowledged append messages.

    Each in-flight message is recorded by the index of its last entry and its
    byte size. Check ``full()`` before ``add()``; release quota with
    ``free_le()`` when an acknowledgement arrives. A ``max_bytes`` of 0 means
    no byte limit; the byte limit is soft, so one message may push the total
    past it.
    """

    def __init__(self, size: int, max_bytes: int = 0) -> None:
        self.size = size
        self.max_bytes = max_bytes
        self._start = 0
        self._count = 0
        self._bytes = 0
        # Ring buffer of (index, bytes) pairs, grown on demand up to size.
        self._buffer: list[tuple[int, int]] = []

    def clone(self) -> Inflights:
        """Return an independent copy."""
        other = Inflights(self.size, self.max_bytes)
        other._start = self._start
        other._count = self._count
        other._bytes = self._bytes
        other._buffer = list(self._buffer)
        return other

    def add(self, index: int, size: int) -> None:
        """Record a new message whose last entry has the given index."""
        if self.full():
            raise RuntimeError("cannot add into a full inflights")
        slot = self._start + self._count
        if slot >= self.size:
            slot -= self.size
        if slot >= len(self._buffer):
            self._grow()
        self._buffer[slot] = (index, size)
        self._count += 1
        self._bytes += size

    def _grow(self) -> None:
        new_size = len(self._buffer) * 2
        if new_size == 0:
            new_size = 1
        elif new_size > self.size:
            new_size = self.size
        self._buffer.extend([(0, 0)] * (new_size - len(self._buffer)))

    def free_le(self, to: int) -> None:
        """Free all in-flight messages with index less than or equal to ``to``."""
        if self._count == 0 or to < self._buffer[self._start][0]:
            return
        slot = self._start
        freed = 0
        freed_bytes = 0
        while freed < self._count:
            index, size = self._buffer[slot]
            if to < index:
                break
            freed_bytes += size
            freed += 1
            slot += 1
            if slot >= self.size:
                slot -= self.size
        self._count -= freed
        self._bytes -= freed_bytes
        self._start = slot
        if self._count == 0:
            # Restart at the front so the buffer is not grown needlessly.
            self._start = 0

    def full(self) -> bool:
        """Whether no more messages can be sent at the moment."""
        return self._count == self.size or (
            self.max_bytes != 0 and self._bytes >= self.max_bytes
        )

    def count(self) -> int:
        """Number of in-flight messages."""
        return self._count

    def reset(self) -> None:
        """Free all in-flight messages."""
        self._start = 0
        self._count = 0
        self._bytes = 0