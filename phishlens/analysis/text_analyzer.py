"""
Text feature extractor. Turns free-form text into a five-feature vector
plus human-readable evidence lines, then scores it.

Rule-based only: lexicon lookups, regular expressions and the per-URL
reports from the URL analyzer.
"""

import re

from .lexicon import (
    MISSPELLINGS,
    MONEY_TERMS,
    PHISHING_KEYWORDS,
    SENSITIVE_REQUEST_PATTERNS,
    TEXT_BRANDS,
    URGENCY_WORDS,
)
from .models import AnalysisResult, UrlAnalysisResult, clamp_features, empty_features
from .policies import apply_score_floors, is_short_numeric_domain
from .scoring import threat_level_for, weighted_score
from .url_analyzer import analyze_url
from .url_extractor import extract_urls

NUMERIC_SUBSTITUTION_PATTERN = re.compile(r"\b(?:[A-Za-z]+\d|\d+[A-Za-z])[A-Za-z0-9]*\b")

_money_patterns = [(term, re.compile(rf"\b{re.escape(term)}", re.I)) for term in MONEY_TERMS]
_brand_patterns = [(brand, re.compile(rf"\b{re.escape(brand)}\b", re.I)) for brand in TEXT_BRANDS]


def _score_urls(reports: list[UrlAnalysisResult], features: dict, patterns: list[str]) -> None:
    for report in reports:
        if not report.suspicious:
            continue
        features["suspiciousLinks"] += 0.35
        for reason in report.reasons:
            patterns.append(f"URL issue ({report.url}): {reason}")

        if report.brand_impersonation:
            features["impersonation"] += 0.2
            patterns.append(f"URL impersonates {report.brand_impersonation}")

        if is_short_numeric_domain(report.domain):
            features["suspiciousLinks"] += 0.25
            features["impersonation"] += 0.15


def extract_features(text: str, reports: list[UrlAnalysisResult]) -> tuple[dict[str, float], list[str]]:
    """Compute the clamped feature vector and evidence lines for ``text``."""
    lower_text = text.lower()
    features = empty_features()
    patterns: list[str] = []

    if NUMERIC_SUBSTITUTION_PATTERN.search(text):
        features["impersonation"] += 0.2
        patterns.append('Uses numeric character substitution (e.g., "0" for "O")')

    for word in URGENCY_WORDS:
        if word in lower_text:
            features["urgency"] += 0.2
            patterns.append(f'Urgency indicator: "{word}"')

    for term, pattern in _money_patterns:
        if pattern.search(text):
            features["sensitiveInfo"] += 0.2
            patterns.append(f'Money-related term: "{term}"')

    for keyword in PHISHING_KEYWORDS:
        if keyword in lower_text:
            features["sensitiveInfo"] += 0.15
            patterns.append(f'Suspicious keyword: "{keyword}"')

    for misspelling in MISSPELLINGS:
        if misspelling in lower_text:
            features["badGrammar"] += 0.1
            patterns.append(f'Possible misspelling: "{misspelling}"')

    _score_urls(reports, features, patterns)

    for brand, pattern in _brand_patterns:
        if pattern.search(text):
            features["impersonation"] += 0.15
            patterns.append(f'Possible brand impersonation: "{brand}"')

    for pattern, message in SENSITIVE_REQUEST_PATTERNS:
        if pattern.search(text):
            features["sensitiveInfo"] += 0.2
            patterns.append(f"Sensitive information request: {message}")

    return clamp_features(features), patterns


def analyze_text(text: str) -> AnalysisResult:
    """Run the base, stateless pipeline over ``text``.

    Accepts any string, including empty text.
    """
    text = text or ""
    reports = [analyze_url(url) for url in extract_urls(text)]
    features, patterns = extract_features(text, reports)

    score = apply_score_floors(weighted_score(features), reports)
    return AnalysisResult(
        score=score,
        threat_level=threat_level_for(score),
        features=features,
        identified_patterns=patterns,
        url_analysis=reports,
    )
