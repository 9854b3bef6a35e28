# raftkit

Core pieces of the Raft consensus algorithm, usable on their own:

- **Log entries and slices** (`raftkit.types`): `Entry` (with `size()`, its
  protocol buffer encoding size), `EntryType`, `MessageType`, `EntryID`,
  `entry_id()` and `LogSlice`. `LogSlice.validate()` raises `ValueError`
  unless the entries are contiguous after `prev`, their terms never go
  backwards, and no entry has a term above the slice's leader term.
- **Entry helpers** (`raftkit.util`): `describe_entry()` and
  `describe_entries()` for readable debug output, `entries_size()`,
  `limit_size()`, `payload_size()`, `payloads_size()`, and classification of
  message types with `is_local_msg()`, `is_response_msg()` and
  `vote_resp_msg_type()` (which raises `ValueError` for anything other than a
  vote or pre-vote).
- **Follower progress** (`raftkit.state`, `raftkit.inflights`,
  `raftkit.progress`): `StateType` (`PROBE`, `REPLICATE`, `SNAPSHOT`), the
  `Inflights` window that limits unacknowledged appends by count and bytes,
  and `Progress` / `ProgressMap`, the leader's view of each follower.

## Installation

```
pip install raftkit
```

## Example

```python
from raftkit.types import Entry, EntryID, LogSlice
from raftkit.util import describe_entry, limit_size
from raftkit.inflights import Inflights
from raftkit.progress import Progress
from raftkit.state import StateType

entries = [Entry(term=1, index=2), Entry(term=2, index=3)]
log = LogSlice(term=2, prev=EntryID(term=1, index=1), entries=entries)
log.validate()                 # raises ValueError if the slice is malformed
print(log.last_entry_id())     # {term:2 index:3}

print(describe_entry(Entry(term=1, index=2, data=b"hello"), None))
# 1/2 EntryNormal "hello"

print(len(limit_size(entries, 0)))  # 1: the first entry is always kept

pr = Progress(match=1, next=2, inflights=Inflights(256, 0))
pr.become_replicate()
pr.sent_entries(3, 300)
print(pr.state is StateType.REPLICATE, pr.next, pr.inflights.count())
# True 5 1
pr.maybe_update(4)
print(pr)
# StateReplicate match=4 next=5 inactive inflight=1
```

`Inflights.add()` raises `RuntimeError` when the window is full; call
`full()` first. `Progress.sent_entries()` raises `ValueError` in
`StateType.SNAPSHOT`.

## What this package does not do

raftkit holds data structures and helpers only. It has no raft node or state
machine that steps messages, elects leaders or commits entries, no log
storage, no transport, and no quorum or vote counting across a configuration.
`describe_entry()` does not decode configuration-change payloads: such
entries are shown by term, index and type alone.

## Running the tests

```
pip install raftkit[test]
pytest
```