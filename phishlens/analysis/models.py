"""Result types produced by the analysis pipeline.

Attributes are snake_case; ``to_dict()`` emits the stable camelCase wire
names consumed by callers and the HTTP layer.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

FEATURE_NAMES = ("urgency", "badGrammar", "sensitiveInfo", "suspiciousLinks", "impersonation")

THREAT_LEVELS = ("low", "medium", "high")


def empty_features() -> dict[str, float]:
    """A feature vector with every feature at zero."""
    return {name: 0.0 for name in FEATURE_NAMES}


def clamp_features(features: dict[str, float]) -> dict[str, float]:
    """Return a complete feature vector with each value clamped to [0, 1].

    Missing features count as zero and unknown keys are dropped.
    """
    return {
        name: min(max(float(features.get(name, 0.0)), 0.0), 1.0)
        for name in FEATURE_NAMES
    }


@dataclass
class SecurityFeatures:
    https: bool = False
    valid_certificate: bool = False
    domain_age: str = "unknown"

    def to_dict(self) -> dict:
        return {
            "https": self.https,
            "validCertificate": self.valid_certificate,
            "domainAge": self.domain_age,
        }


@dataclass
class UrlAnalysisResult:
    """Risk report for a single URL."""

    url: str
    domain: str = ""
    protocol: str = ""
    tld: str = ""
    suspicious: bool = False
    reasons: list[str] = field(default_factory=list)
    risk_score: int = 0
    brand_impersonation: Optional[str] = None
    redirect_count: int = 0
    security_features: SecurityFeatures = field(default_factory=SecurityFeatures)

    def copy(self) -> UrlAnalysisResult:
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "domain": self.domain,
            "protocol": self.protocol,
            "tld": self.tld,
            "suspicious": self.suspicious,
            "reasons": list(self.reasons),
            "riskScore": self.risk_score,
            "brandImpersonation": self.brand_impersonation,
            "redirectCount": self.redirect_count,
            "securityFeatures": self.security_features.to_dict(),
        }


@dataclass
class AnalysisResult:
    """Verdict for a piece of text."""

    score: float
    threat_level: str
    features: dict[str, float] = field(default_factory=empty_features)
    identified_patterns: list[str] = field(default_factory=list)
    url_analysis: list[UrlAnalysisResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "threatLevel": self.threat_level,
            "features": dict(self.features),
            "identifiedPatterns": list(self.identified_patterns),
            "urlAnalysis": [report.to_dict() for report in self.url_analysis],
        }
