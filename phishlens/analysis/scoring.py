"""Weighted scoring of feature vectors and threat-level thresholds."""

from typing import Mapping, Optional

from .models import FEATURE_NAMES

BASE_WEIGHTS = {
    "urgency": 0.20,
    "badGrammar": 0.15,
    "sensitiveInfo": 0.25,
    "suspiciousLinks": 0.30,
    "impersonation": 0.10,
}

MIN_ADJUSTED_WEIGHT = 0.05

MEDIUM_THRESHOLD = 0.3
HIGH_THRESHOLD = 0.6


def weighted_score(features: Mapping[str, float], weights: Optional[Mapping[str, float]] = None) -> float:
    """Dot product of a feature vector with ``weights`` (base weights by default)."""
    weights = BASE_WEIGHTS if weights is None else weights
    return sum(features.get(name, 0.0) * weights.get(name, 0.0) for name in FEATURE_NAMES)


def threat_level_for(score: float) -> str:
    """Closed-open bands: [0, 0.3) low, [0.3, 0.6) medium, [0.6, 1] high."""
    if score < MEDIUM_THRESHOLD:
        return "low"
    if score < HIGH_THRESHOLD:
        return "medium"
    return "high"


def adjusted_weights(adjustments: Mapping[str, float]) -> dict[str, float]:
    """Apply learned deltas to the base weights.

    Each weight is floored at 0.05 so no feature is silenced, then the set is
    renormalized to sum to 1.
    """
    raw = {
        name: max(MIN_ADJUSTED_WEIGHT, BASE_WEIGHTS[name] + adjustments.get(name, 0.0))
        for name in FEATURE_NAMES
    }
    total = sum(raw.values())
    return {name: value / total for name, value in raw.items()}
