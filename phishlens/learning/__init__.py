"""PhishLens adaptive learning — weight adjustments, domain reputation and their storage."""

from .adaptive import AdaptiveLearning, DomainReputation, FeedbackEntry
from .store import KeyValueStore, MemoryKeyValueStore, SqlKeyValueStore

__all__ = [
    "AdaptiveLearning",
    "DomainReputation",
    "FeedbackEntry",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqlKeyValueStore",
]
