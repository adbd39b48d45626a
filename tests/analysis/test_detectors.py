"""Tests for the lookalike detectors."""

from phishlens.analysis.detectors import LetterSequenceDetector, default_detectors


class TestLetterSequenceDetector:
    def test_rn_for_m(self):
        finding = LetterSequenceDetector().inspect("rnicrosoft.support-desk.com")
        assert finding is not None
        assert finding.reason == "Possible advanced homograph attack detected (rn -> m)"
        assert finding.brand == "Microsoft"
        assert finding.risk_points == 35

    def test_vv_for_w(self):
        finding = LetterSequenceDetector().inspect("vvellsfargo-login.com")
        assert finding is not None
        assert finding.reason == "Possible advanced homograph attack detected (vv -> w)"
        assert finding.brand == "Bank"

    def test_ordinary_rn_is_ignored(self):
        assert LetterSequenceDetector().inspect("modern-times.com") is None

    def test_brand_already_present_is_ignored(self):
        assert LetterSequenceDetector().inspect("microsoft-learn.example.com") is None

    def test_default_detectors(self):
        detectors = default_detectors()
        assert len(detectors) == 1
        assert detectors[0].name == "letter_sequence"
