"""Tests for the blacklist collaborators and timeout isolation."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from phishlens.config import PhishLensConfig
from phishlens.intel.blacklist import (
    ChainedBlacklist,
    ReputationBlacklist,
    build_blacklist,
    safe_lookup,
)
from phishlens.intel.urlhaus import URLhausBlacklist
from phishlens.learning.adaptive import AdaptiveLearning
from phishlens.learning.store import MemoryKeyValueStore

ZERO = {"urgency": 0.0, "badGrammar": 0.0, "sensitiveInfo": 0.0, "suspiciousLinks": 0.0, "impersonation": 0.0}


class SlowProvider:
    name = "slow"

    async def is_known_phishing(self, url):
        await asyncio.sleep(5)
        return True


class BrokenProvider:
    name = "broken"

    async def is_known_phishing(self, url):
        raise RuntimeError("feed unavailable")


def _provider(result):
    provider = AsyncMock()
    provider.is_known_phishing = AsyncMock(return_value=result)
    return provider


class TestSafeLookup:
    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        assert await safe_lookup(_provider(True), "http://a.example", timeout=1.0) is True
        assert await safe_lookup(_provider(False), "http://a.example", timeout=1.0) is False

    @pytest.mark.asyncio
    async def test_timeout_is_not_found(self):
        assert await safe_lookup(SlowProvider(), "http://a.example", timeout=0.01) is False

    @pytest.mark.asyncio
    async def test_error_is_not_found(self):
        assert await safe_lookup(BrokenProvider(), "http://a.example", timeout=1.0) is False


class TestChainedBlacklist:
    @pytest.mark.asyncio
    async def test_any_positive(self):
        chained = ChainedBlacklist([_provider(False), BrokenProvider(), _provider(True)])
        assert await chained.is_known_phishing("http://a.example") is True

    @pytest.mark.asyncio
    async def test_all_negative(self):
        chained = ChainedBlacklist([_provider(False), BrokenProvider()])
        assert await chained.is_known_phishing("http://a.example") is False

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await ChainedBlacklist([]).is_known_phishing("http://a.example") is False


class TestReputationBlacklist:
    @pytest.mark.asyncio
    async def test_backed_by_reputation(self):
        learning = AdaptiveLearning(MemoryKeyValueStore())
        await learning.initialize()
        blacklist = ReputationBlacklist(learning)

        assert await blacklist.is_known_phishing("http://bad.example.net/login") is False
        await learning.record_feedback("x", ["http://bad.example.net"], "low", "high", ZERO)
        assert await blacklist.is_known_phishing("http://bad.example.net/login") is True


class TestBuildBlacklist:
    @pytest.fixture
    def learning(self):
        return AdaptiveLearning(MemoryKeyValueStore())

    def test_none(self, learning):
        assert build_blacklist(PhishLensConfig(blacklist_provider="none"), learning) is None

    def test_reputation(self, learning):
        provider = build_blacklist(PhishLensConfig(blacklist_provider="reputation"), learning)
        assert isinstance(provider, ReputationBlacklist)

    def test_urlhaus(self, learning):
        config = PhishLensConfig(blacklist_provider="urlhaus", blacklist_timeout_seconds=1.5)
        provider = build_blacklist(config, learning)
        assert isinstance(provider, URLhausBlacklist)
        assert provider.timeout == 1.5

    def test_chained(self, learning):
        provider = build_blacklist(PhishLensConfig(blacklist_provider="chained"), learning)
        assert isinstance(provider, ChainedBlacklist)
        assert len(provider.providers) == 2

    def test_invalid_provider_rejected(self):
        with pytest.raises(ValueError):
            PhishLensConfig(blacklist_provider="carrier-pigeon")
