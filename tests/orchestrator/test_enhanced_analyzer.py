"""Tests for the Enhanced Analysis Orchestrator."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from phishlens.analysis.scoring import adjusted_weights, weighted_score
from phishlens.analysis.text_analyzer import analyze_text
from phishlens.orchestrator import EnhancedAnalyzer

ZERO = {"urgency": 0.0, "badGrammar": 0.0, "sensitiveInfo": 0.0, "suspiciousLinks": 0.0, "impersonation": 0.0}

PHISHING_SMS = (
    "URGENT: Your account has been compromised. Click here immediately to verify "
    "your identity: http://amaz0n-security-verify.com."
)


class SlowBlacklist:
    async def is_known_phishing(self, url):
        await asyncio.sleep(5)
        return True


class BrokenBlacklist:
    async def is_known_phishing(self, url):
        raise ConnectionError("feed unreachable")


class TestEnhancedAnalyzer:
    @pytest.mark.asyncio
    async def test_phishing_sms_is_high(self, learning):
        result = await EnhancedAnalyzer(learning).analyze(PHISHING_SMS)
        assert result.threat_level == "high"
        assert result.url_analysis[0].suspicious is True
        assert result.url_analysis[0].brand_impersonation == "Amazon"

    @pytest.mark.asyncio
    async def test_high_risk_url_floor_applies_only_when_enhanced(self, learning):
        text = "Visit http://paypa1-secure-login.xyz"
        assert analyze_text(text).threat_level == "low"

        result = await EnhancedAnalyzer(learning).analyze(text)
        assert result.score == pytest.approx(0.7)
        assert result.threat_level == "high"

    @pytest.mark.asyncio
    async def test_clean_text_matches_base(self, learning):
        text = "Hi team, the meeting is moved to Thursday afternoon."
        result = await EnhancedAnalyzer(learning).analyze(text)
        assert result.threat_level == "low"
        assert result.identified_patterns == []

    @pytest.mark.asyncio
    async def test_learned_weights_rescore(self, learning):
        for _ in range(3):
            await learning.record_feedback("x", [], "low", "high", dict(ZERO, urgency=0.9))
        text = "URGENT: act now, this is important"
        base = analyze_text(text)

        result = await EnhancedAnalyzer(learning).analyze(text)
        expected = weighted_score(base.features, adjusted_weights(learning.get_weight_adjustments()))
        assert result.score == pytest.approx(expected)
        assert result.score > base.score

    @pytest.mark.asyncio
    async def test_phishing_reputation_enriches_clean_url(self, learning):
        for _ in range(3):
            await learning.record_feedback("x", ["https://example.org/products"], "low", "high", ZERO)
        text = "See https://example.org/products for details"
        assert analyze_text(text).url_analysis[0].suspicious is False

        result = await EnhancedAnalyzer(learning).analyze(text)
        report = result.url_analysis[0]
        assert report.suspicious is True
        assert "Previously reported as phishing 3 times" in report.reasons
        assert report.risk_score == 15
        assert "Enhanced detection: URL https://example.org/products identified as suspicious" in result.identified_patterns
        assert result.features["suspiciousLinks"] == pytest.approx(0.2)

    @pytest.mark.asyncio
    async def test_legitimate_reputation_clears_minor_suspicion(self, learning):
        for _ in range(6):
            await learning.record_feedback("x", ["http://deals-example.org"], "medium", "low", ZERO)

        result = await EnhancedAnalyzer(learning).analyze("Offers at http://deals-example.org")
        report = result.url_analysis[0]
        assert "Previously verified as legitimate 6 times" in report.reasons
        assert report.risk_score == 0
        assert report.suspicious is False

    @pytest.mark.asyncio
    async def test_blacklist_hit(self, learning):
        blacklist = AsyncMock()
        blacklist.is_known_phishing = AsyncMock(return_value=True)

        result = await EnhancedAnalyzer(learning, blacklist=blacklist).analyze("See https://example.org/products")
        report = result.url_analysis[0]
        assert "Found in known phishing database" in report.reasons
        assert report.risk_score >= 85
        assert result.threat_level == "high"
        blacklist.is_known_phishing.assert_awaited_once_with("https://example.org/products")

    @pytest.mark.asyncio
    async def test_blacklist_timeout_does_not_fail(self, learning):
        analyzer = EnhancedAnalyzer(learning, blacklist=SlowBlacklist(), blacklist_timeout=0.01)
        result = await analyzer.analyze("See https://example.org/products")
        assert result.url_analysis[0].suspicious is False
        assert result.threat_level == "low"

    @pytest.mark.asyncio
    async def test_blacklist_error_does_not_fail(self, learning):
        analyzer = EnhancedAnalyzer(learning, blacklist=BrokenBlacklist())
        result = await analyzer.analyze("See https://example.org/products")
        assert "Found in known phishing database" not in result.url_analysis[0].reasons

    @pytest.mark.asyncio
    async def test_letter_sequence_lookalike(self, learning):
        text = "Sign in at https://rnicrosoft.support-desk.com today"
        assert analyze_text(text).url_analysis[0].suspicious is False

        result = await EnhancedAnalyzer(learning).analyze(text)
        report = result.url_analysis[0]
        assert report.suspicious is True
        assert "Possible advanced homograph attack detected (rn -> m)" in report.reasons
        assert report.risk_score == 35
        assert "Enhanced detection: URL https://rnicrosoft.support-desk.com identified as suspicious" in result.identified_patterns

    @pytest.mark.asyncio
    async def test_detectors_can_be_disabled(self, learning):
        result = await EnhancedAnalyzer(learning, detectors=[]).analyze(
            "Sign in at https://rnicrosoft.support-desk.com today"
        )
        assert result.url_analysis[0].suspicious is False

    @pytest.mark.asyncio
    async def test_url_order_preserved(self, learning):
        text = "First https://example.org/a then http://t2.co/abcd1234 then https://example.net/b"
        result = await EnhancedAnalyzer(learning).analyze(text)
        assert [r.url for r in result.url_analysis] == [
            "https://example.org/a",
            "http://t2.co/abcd1234",
            "https://example.net/b",
        ]
