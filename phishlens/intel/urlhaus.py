"""URLhaus threat intelligence provider — single-URL phishing lookups."""

from typing import Optional

import httpx

from ..utils.logging import get_logger

logger = get_logger("intel.urlhaus")

_URLHAUS_BASE_URL = "https://urlhaus-api.abuse.ch/v1"

# url_status values that still count as a live threat
_ACTIVE_STATUSES = {"online", "unknown"}


class URLhausBlacklist:
    """Looks URLs up against the abuse.ch URLhaus database.

    An auth key is optional; abuse.ch requires one for unthrottled access.
    Any HTTP, network or payload problem is logged and reported as a miss.
    """

    name = "urlhaus"

    def __init__(
        self,
        api_url: str = _URLHAUS_BASE_URL,
        auth_key: Optional[str] = None,
        timeout: float = 3.0,
    ):
        self.api_url = api_url.rstrip("/")
        self.auth_key = auth_key
        self.timeout = timeout

    def _headers(self) -> dict:
        return {"Auth-Key": self.auth_key} if self.auth_key else {}

    async def is_known_phishing(self, url: str) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.api_url}/url/",
                    data={"url": url},
                    headers=self._headers(),
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("urlhaus_lookup_error", url=url, status=exc.response.status_code)
            return False
        except Exception as exc:
            logger.warning("urlhaus_lookup_exception", url=url, error=str(exc))
            return False

        if not isinstance(data, dict):
            logger.warning("urlhaus_lookup_malformed", url=url)
            return False

        status = data.get("query_status")
        if status != "ok":
            # "no_results" is the normal miss
            if status != "no_results":
                logger.debug("urlhaus_lookup_status", url=url, query_status=status)
            return False

        hit = data.get("url_status") in _ACTIVE_STATUSES
        if hit:
            logger.info("urlhaus_lookup_hit", url=url, threat=data.get("threat"))
        return hit
