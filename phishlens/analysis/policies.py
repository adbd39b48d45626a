"""Named post-processing rules for URL reports and text scores.

URL rules mutate a ``UrlAnalysisResult`` in place once every heuristic has
run. Score-floor rules raise a text score to a minimum when a URL report
makes a low verdict untenable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from .models import UrlAnalysisResult

HTTP_ONLY_REASON = "Uses HTTP instead of HTTPS"
INSECURE_HTTP_REASON = "Uses insecure HTTP protocol instead of HTTPS"

MAX_RISK_SCORE = 100
LEGITIMATE_RISK_CAP = 40
LEGITIMATE_SUSPICION_THRESHOLD = 20
HIGH_RISK_URL_SCORE = 80
SCORE_FLOOR = 0.7


def is_short_numeric_domain(domain: str) -> bool:
    """Hosts under six characters that contain a digit (``t2.co``, ``x1.io``)."""
    return 0 < len(domain) < 6 and any(ch.isdigit() for ch in domain)


def clamp_risk_score(report: UrlAnalysisResult, is_legitimate: bool) -> None:
    report.risk_score = max(0, min(report.risk_score, MAX_RISK_SCORE))


def legitimate_domain_cap(report: UrlAnalysisResult, is_legitimate: bool) -> None:
    if not is_legitimate:
        return
    report.risk_score = min(report.risk_score, LEGITIMATE_RISK_CAP)
    http_note_only = report.reasons == [HTTP_ONLY_REASON]
    if report.risk_score < LEGITIMATE_SUSPICION_THRESHOLD or http_note_only:
        report.suspicious = False


def insecure_transport_fallback(report: UrlAnalysisResult, is_legitimate: bool) -> None:
    if is_legitimate or report.suspicious:
        return
    if report.protocol != "https":
        report.suspicious = True


URL_POLICIES: tuple[Callable[[UrlAnalysisResult, bool], None], ...] = (
    clamp_risk_score,
    legitimate_domain_cap,
    insecure_transport_fallback,
)


def apply_url_policies(report: UrlAnalysisResult, is_legitimate: bool) -> UrlAnalysisResult:
    for policy in URL_POLICIES:
        policy(report, is_legitimate)
    return report


@dataclass(frozen=True)
class ScoreFloor:
    """Raise the score to ``minimum`` when ``applies`` holds for any URL report."""

    name: str
    applies: Callable[[UrlAnalysisResult], bool]
    minimum: float = SCORE_FLOOR

    def triggered(self, reports: Sequence[UrlAnalysisResult]) -> bool:
        return any(self.applies(report) for report in reports)


short_numeric_domain = ScoreFloor(
    name="short_numeric_domain",
    applies=lambda report: is_short_numeric_domain(report.domain),
)

high_risk_url = ScoreFloor(
    name="high_risk_url",
    applies=lambda report: report.risk_score >= HIGH_RISK_URL_SCORE,
)

# Base pass: only the shortener floor. The enhanced pass adds the high-risk URL floor.
BASE_SCORE_FLOORS: tuple[ScoreFloor, ...] = (short_numeric_domain,)
ENHANCED_SCORE_FLOORS: tuple[ScoreFloor, ...] = (short_numeric_domain, high_risk_url)


def apply_score_floors(
    score: float,
    reports: Sequence[UrlAnalysisResult],
    floors: Sequence[ScoreFloor] = BASE_SCORE_FLOORS,
) -> float:
    for floor in floors:
        if floor.triggered(reports):
            score = max(score, floor.minimum)
    return score
