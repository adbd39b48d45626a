"""Known-phishing URL collaborators behind one narrow async interface."""

import asyncio
from typing import Protocol, Sequence

from ..config import PhishLensConfig
from ..learning.adaptive import AdaptiveLearning
from ..utils.logging import get_logger
from .urlhaus import URLhausBlacklist

logger = get_logger("intel.blacklist")


class BlacklistProvider(Protocol):
    async def is_known_phishing(self, url: str) -> bool:
        ...


class ReputationBlacklist:
    """Local stand-in for a threat feed, backed by learned domain reputation."""

    name = "reputation"

    def __init__(self, learning: AdaptiveLearning):
        self.learning = learning

    async def is_known_phishing(self, url: str) -> bool:
        return self.learning.check_known_bad_domain(url)


class ChainedBlacklist:
    """Positive when any provider is positive. Providers are queried concurrently."""

    name = "chained"

    def __init__(self, providers: Sequence[BlacklistProvider]):
        self.providers = list(providers)

    async def is_known_phishing(self, url: str) -> bool:
        if not self.providers:
            return False
        results = await asyncio.gather(
            *(provider.is_known_phishing(url) for provider in self.providers),
            return_exceptions=True,
        )
        for provider, result in zip(self.providers, results):
            if isinstance(result, Exception):
                logger.warning(
                    "blacklist_provider_failed",
                    provider=getattr(provider, "name", type(provider).__name__),
                    url=url,
                    error=str(result),
                )
        return any(result is True for result in results)


async def safe_lookup(provider: BlacklistProvider, url: str, timeout: float) -> bool:
    """Ask ``provider`` about ``url``; a timeout or error counts as not found."""
    try:
        return bool(await asyncio.wait_for(provider.is_known_phishing(url), timeout=timeout))
    except asyncio.TimeoutError:
        logger.warning("blacklist_lookup_timeout", url=url, timeout=timeout)
        return False
    except Exception as e:
        logger.warning("blacklist_lookup_failed", url=url, error=str(e))
        return False


def build_blacklist(config: PhishLensConfig, learning: AdaptiveLearning):
    """Build the provider selected by ``config.blacklist_provider`` (None for "none")."""
    choice = config.blacklist_provider
    if choice == "none":
        return None
    if choice == "reputation":
        return ReputationBlacklist(learning)

    urlhaus = URLhausBlacklist(
        api_url=config.urlhaus_api_url,
        auth_key=config.urlhaus_auth_key,
        timeout=config.blacklist_timeout_seconds,
    )
    if choice == "urlhaus":
        return urlhaus
    return ChainedBlacklist([ReputationBlacklist(learning), urlhaus])
