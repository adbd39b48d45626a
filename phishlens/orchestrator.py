"""Enhanced Analysis Orchestrator — the stateful layer over the base pipeline.

Runs the stateless text analysis, re-scores it with learned weights and
enriches every URL report with domain reputation, a threat-feed lookup and
the lookalike detectors. URL enrichments run concurrently.
"""

import asyncio
from typing import Optional, Sequence

from .analysis.detectors import LookalikeDetector, default_detectors
from .analysis.models import AnalysisResult, UrlAnalysisResult
from .analysis.policies import ENHANCED_SCORE_FLOORS, MAX_RISK_SCORE, apply_score_floors
from .analysis.scoring import adjusted_weights, threat_level_for, weighted_score
from .analysis.text_analyzer import analyze_text
from .intel.blacklist import BlacklistProvider, safe_lookup
from .learning.adaptive import AdaptiveLearning
from .utils.logging import get_logger

logger = get_logger("phishlens.orchestrator")

KNOWN_PHISHING_RISK = 85
REPUTATION_POINTS_PER_REPORT = 5
MAX_REPUTATION_POINTS = 30
LEGITIMATE_REPUTATION_DISCOUNT = 20
ENHANCED_LINK_BOOST = 0.2
MIN_DETECTOR_HOST_LENGTH = 5


class EnhancedAnalyzer:
    """Analyzes text with learned weights and enriched URL reports.

    Args:
        learning: Shared adaptive-learning context (read-only here).
        blacklist: Optional known-phishing collaborator.
        detectors: Lookalike detectors; defaults to the built-in letter-sequence rule.
        blacklist_timeout: Seconds to wait for each blacklist lookup.
    """

    def __init__(
        self,
        learning: AdaptiveLearning,
        blacklist: Optional[BlacklistProvider] = None,
        detectors: Optional[Sequence[LookalikeDetector]] = None,
        blacklist_timeout: float = 3.0,
    ):
        self.learning = learning
        self.blacklist = blacklist
        self.detectors = list(default_detectors() if detectors is None else detectors)
        self.blacklist_timeout = blacklist_timeout

    async def analyze(self, text: str) -> AnalysisResult:
        base = analyze_text(text)

        weights = adjusted_weights(self.learning.get_weight_adjustments())
        features = dict(base.features)
        score = weighted_score(features, weights)

        enriched = await asyncio.gather(*(self._enrich(report) for report in base.url_analysis))

        patterns = list(base.identified_patterns)
        for before, after in zip(base.url_analysis, enriched):
            if after.suspicious and not before.suspicious:
                patterns.append(f"Enhanced detection: URL {after.url} identified as suspicious")
                features["suspiciousLinks"] = min(1.0, features["suspiciousLinks"] + ENHANCED_LINK_BOOST)

        score = apply_score_floors(score, enriched, ENHANCED_SCORE_FLOORS)
        threat_level = threat_level_for(score)

        logger.debug(
            "enhanced_analysis_complete",
            base_score=round(base.score, 4),
            score=round(score, 4),
            threat_level=threat_level,
            urls=len(enriched),
        )
        return AnalysisResult(
            score=score,
            threat_level=threat_level,
            features=features,
            identified_patterns=patterns,
            url_analysis=list(enriched),
        )

    async def _enrich(self, base_report: UrlAnalysisResult) -> UrlAnalysisResult:
        report = base_report.copy()

        self._apply_reputation(report)

        if self.blacklist is not None:
            if await safe_lookup(self.blacklist, report.url, self.blacklist_timeout):
                report.suspicious = True
                report.reasons.append("Found in known phishing database")
                report.risk_score = max(report.risk_score, KNOWN_PHISHING_RISK)

        if not report.suspicious and len(report.domain) > MIN_DETECTOR_HOST_LENGTH:
            self._apply_detectors(report)

        report.risk_score = min(report.risk_score, MAX_RISK_SCORE)
        return report

    def _apply_reputation(self, report: UrlAnalysisResult) -> None:
        if not report.domain:
            return
        reputation = self.learning.get_domain_reputation(report.domain)
        if reputation is None:
            return

        if reputation.phishing_count > 0:
            report.suspicious = True
            report.reasons.append(f"Previously reported as phishing {reputation.phishing_count} times")
            report.risk_score += min(
                reputation.phishing_count * REPUTATION_POINTS_PER_REPORT, MAX_REPUTATION_POINTS
            )
        elif reputation.legitimate_count > 2:
            report.risk_score = max(0, report.risk_score - LEGITIMATE_REPUTATION_DISCOUNT)
            report.reasons.append(f"Previously verified as legitimate {reputation.legitimate_count} times")
            if report.suspicious and report.risk_score < 40 and reputation.legitimate_count > 5:
                report.suspicious = False

    def _apply_detectors(self, report: UrlAnalysisResult) -> None:
        for detector in self.detectors:
            finding = detector.inspect(report.domain)
            if finding is None:
                continue
            report.suspicious = True
            report.reasons.append(finding.reason)
            report.risk_score += finding.risk_points
            if finding.brand and not report.brand_impersonation:
                report.brand_impersonation = finding.brand
            logger.info(
                "lookalike_detected",
                detector=getattr(detector, "name", type(detector).__name__),
                domain=report.domain,
                brand=finding.brand,
            )
