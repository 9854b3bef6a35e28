"""Building blocks of the Raft protocol: log entries, slices and follower progress."""

__version__ = "0.1.0"
__all__ = ["types", "util", "state", "inflights", "progress"]