"""Adaptive Learning — feedback-driven weight adjustments and domain reputation.

All mutable learning state lives on one ``AdaptiveLearning`` instance that is
injected wherever it is needed. Writers serialize on an ``asyncio.Lock``;
readers get snapshot copies and never take the lock.

Persisted records (JSON, camelCase field names):
    weight_adjustments  feature -> signed delta in [-0.3, 0.3]
    domain_reputation   domain -> {domain, phishingCount, legitimateCount, lastSeen}
    feedback_log        newest-last list of feedback entries
"""

import asyncio
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from ..analysis.models import FEATURE_NAMES, THREAT_LEVELS, clamp_features
from ..analysis.url_analyzer import host_of
from ..utils.logging import get_logger
from .store import KeyValueStore

logger = get_logger("learning.adaptive")

WEIGHT_ADJUSTMENTS_KEY = "weight_adjustments"
DOMAIN_REPUTATION_KEY = "domain_reputation"
FEEDBACK_LOG_KEY = "feedback_log"

LEARNING_STEP = 0.05
MAX_ADJUSTMENT = 0.3
DEFAULT_MAX_FEEDBACK_ENTRIES = 100

_LEVEL_RANK = {level: rank for rank, level in enumerate(THREAT_LEVELS)}


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _feature_multiplier(value: float) -> float:
    if value > 0.5:
        return 1.5
    if value > 0.2:
        return 1.0
    return 0.5


def _clamp_adjustment(value: float) -> float:
    return max(-MAX_ADJUSTMENT, min(MAX_ADJUSTMENT, value))


def _validate_level(name: str, level: str) -> None:
    if level not in _LEVEL_RANK:
        raise ValueError(f"{name} must be one of {THREAT_LEVELS}, got {level!r}")


@dataclass
class DomainReputation:
    domain: str
    phishing_count: int = 0
    legitimate_count: int = 0
    last_seen: str = field(default_factory=_utcnow_iso)

    def to_dict(self) -> dict:
        return {
            "domain": self.domain,
            "phishingCount": self.phishing_count,
            "legitimateCount": self.legitimate_count,
            "lastSeen": self.last_seen,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DomainReputation":
        return cls(
            domain=str(data["domain"]),
            phishing_count=int(data["phishingCount"]),
            legitimate_count=int(data["legitimateCount"]),
            last_seen=str(data["lastSeen"]),
        )


@dataclass
class FeedbackEntry:
    text: str
    urls: list[str]
    predicted_threat_level: str
    actual_threat_level: str
    features: dict[str, float]
    timestamp: str = field(default_factory=_utcnow_iso)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "urls": list(self.urls),
            "predictedThreatLevel": self.predicted_threat_level,
            "actualThreatLevel": self.actual_threat_level,
            "features": dict(self.features),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FeedbackEntry":
        return cls(
            text=str(data["text"]),
            urls=[str(url) for url in data["urls"]],
            predicted_threat_level=str(data["predictedThreatLevel"]),
            actual_threat_level=str(data["actualThreatLevel"]),
            features=clamp_features(data["features"]),
            timestamp=str(data["timestamp"]),
        )


def _default_adjustments() -> dict[str, float]:
    return {name: 0.0 for name in FEATURE_NAMES}


def _parse_adjustments(raw: Any) -> dict[str, float]:
    if not isinstance(raw, dict):
        raise ValueError("weight adjustments must be an object")
    adjustments = _default_adjustments()
    for name in FEATURE_NAMES:
        if name in raw:
            adjustments[name] = _clamp_adjustment(float(raw[name]))
    return adjustments


def _parse_reputation(raw: Any) -> dict[str, DomainReputation]:
    if not isinstance(raw, dict):
        raise ValueError("domain reputation must be an object")
    return {domain: DomainReputation.from_dict(record) for domain, record in raw.items()}


def _parse_feedback(raw: Any) -> list[FeedbackEntry]:
    if not isinstance(raw, list):
        raise ValueError("feedback log must be a list")
    return [FeedbackEntry.from_dict(entry) for entry in raw]


class AdaptiveLearning:
    """Owns the learned weight deltas, per-domain reputation and the feedback log.

    Lifecycle: ``await initialize()`` once to load persisted state, then
    ``record_feedback`` mutates under the lock and persists each changed
    record. A failed write is logged; in-memory state stays authoritative.
    """

    def __init__(self, store: KeyValueStore, max_feedback_entries: int = DEFAULT_MAX_FEEDBACK_ENTRIES):
        if max_feedback_entries < 1:
            raise ValueError("max_feedback_entries must be at least 1")
        self._store = store
        self._max_feedback_entries = max_feedback_entries
        self._lock = asyncio.Lock()
        self._adjustments = _default_adjustments()
        self._reputation: dict[str, DomainReputation] = {}
        self._feedback: deque[FeedbackEntry] = deque(maxlen=max_feedback_entries)
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Load persisted state. Unreadable or corrupt records fall back to defaults."""
        async with self._lock:
            self._adjustments = await self._load(
                WEIGHT_ADJUSTMENTS_KEY, _parse_adjustments, _default_adjustments
            )
            self._reputation = await self._load(DOMAIN_REPUTATION_KEY, _parse_reputation, dict)
            entries = await self._load(FEEDBACK_LOG_KEY, _parse_feedback, list)
            self._feedback = deque(entries, maxlen=self._max_feedback_entries)
            self._initialized = True

        logger.info(
            "learning_state_loaded",
            domains=len(self._reputation),
            feedback_entries=len(self._feedback),
        )

    async def _load(self, key, parse, default):
        try:
            raw = await self._store.get(key)
            if raw is None:
                return default()
            return parse(raw)
        except Exception as e:
            logger.warning("learning_record_load_failed", key=key, error=str(e))
            return default()

    async def _persist(self, key: str, value: Any) -> None:
        try:
            await self._store.set(key, value)
        except Exception as e:
            logger.error("learning_record_persist_failed", key=key, error=str(e), exc_info=True)

    async def _persist_all(self) -> None:
        await self._persist(WEIGHT_ADJUSTMENTS_KEY, dict(self._adjustments))
        await self._persist(
            DOMAIN_REPUTATION_KEY,
            {domain: rep.to_dict() for domain, rep in self._reputation.items()},
        )
        await self._persist(FEEDBACK_LOG_KEY, [entry.to_dict() for entry in self._feedback])

    def get_weight_adjustments(self) -> dict[str, float]:
        """Snapshot of the current per-feature deltas."""
        return dict(self._adjustments)

    def get_domain_reputation(self, domain: str) -> Optional[DomainReputation]:
        rep = self._reputation.get(domain.lower())
        if rep is None:
            return None
        return DomainReputation(rep.domain, rep.phishing_count, rep.legitimate_count, rep.last_seen)

    def check_known_bad_domain(self, url: str) -> bool:
        """True when the URL's host has more phishing than legitimate reports."""
        domain = host_of(url)
        if domain is None:
            return False
        rep = self._reputation.get(domain)
        return rep is not None and rep.phishing_count > rep.legitimate_count

    def recent_feedback(self, limit: int = 20) -> list[FeedbackEntry]:
        """Newest-first view of the feedback log."""
        if limit <= 0:
            return []
        entries = list(self._feedback)[-limit:]
        entries.reverse()
        return entries

    async def record_feedback(
        self,
        text: str,
        urls: list[str],
        predicted: str,
        actual: str,
        features: dict[str, float],
    ) -> FeedbackEntry:
        """Record a user correction and learn from it.

        Raises:
            ValueError: if ``predicted`` or ``actual`` is not a known threat level.
        """
        _validate_level("predicted", predicted)
        _validate_level("actual", actual)

        entry = FeedbackEntry(
            text=text,
            urls=list(urls),
            predicted_threat_level=predicted,
            actual_threat_level=actual,
            features=clamp_features(features),
        )

        async with self._lock:
            self._feedback.append(entry)

            adjusted = predicted != actual
            if adjusted:
                direction = LEARNING_STEP if _LEVEL_RANK[predicted] < _LEVEL_RANK[actual] else -LEARNING_STEP
                for name in FEATURE_NAMES:
                    delta = direction * _feature_multiplier(entry.features[name])
                    self._adjustments[name] = _clamp_adjustment(self._adjustments[name] + delta)

            touched = self._update_reputation(entry.urls, phishing=actual == "high", seen=entry.timestamp)

            if adjusted:
                await self._persist(WEIGHT_ADJUSTMENTS_KEY, dict(self._adjustments))
            if touched:
                await self._persist(
                    DOMAIN_REPUTATION_KEY,
                    {domain: rep.to_dict() for domain, rep in self._reputation.items()},
                )
            await self._persist(FEEDBACK_LOG_KEY, [e.to_dict() for e in self._feedback])

        logger.info(
            "feedback_recorded",
            predicted=predicted,
            actual=actual,
            weights_adjusted=adjusted,
            domains=len(touched),
        )
        return entry

    def _update_reputation(self, urls: list[str], phishing: bool, seen: str) -> list[str]:
        touched = []
        for url in urls:
            domain = host_of(url)
            if domain is None:
                continue
            rep = self._reputation.get(domain)
            if rep is None:
                rep = self._reputation[domain] = DomainReputation(domain=domain)
            if phishing:
                rep.phishing_count += 1
            else:
                rep.legitimate_count += 1
            rep.last_seen = seen
            if domain not in touched:
                touched.append(domain)
        return touched

    async def reset(self) -> None:
        """Forget everything learned and persist the empty state."""
        async with self._lock:
            self._adjustments = _default_adjustments()
            self._reputation = {}
            self._feedback = deque(maxlen=self._max_feedback_entries)
            await self._persist_all()
        logger.info("learning_state_reset")
