"""Tests for URLhausBlacklist — single-URL lookups against abuse.ch."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from phishlens.intel.urlhaus import URLhausBlacklist


def _mock_httpx_response(status_code=200, json_data=None):
    """Create a mock httpx Response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.raise_for_status = MagicMock()
    return response


def _patched_client(response=None, side_effect=None):
    mock_client = AsyncMock()
    mock_client.post = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


class TestIsKnownPhishing:
    @pytest.mark.asyncio
    async def test_online_hit(self):
        response = _mock_httpx_response(json_data={
            "query_status": "ok",
            "url_status": "online",
            "threat": "malware_download",
        })
        provider = URLhausBlacklist(api_url="https://urlhaus.test/v1/", auth_key="secret")

        with patch("phishlens.intel.urlhaus.httpx.AsyncClient") as MockClient:
            mock_client = _patched_client(response)
            MockClient.return_value = mock_client
            result = await provider.is_known_phishing("http://evil.example/x")

        assert result is True
        mock_client.post.assert_awaited_once_with(
            "https://urlhaus.test/v1/url/",
            data={"url": "http://evil.example/x"},
            headers={"Auth-Key": "secret"},
        )

    @pytest.mark.asyncio
    async def test_unknown_status_counts(self):
        response = _mock_httpx_response(json_data={"query_status": "ok", "url_status": "unknown"})
        with patch("phishlens.intel.urlhaus.httpx.AsyncClient") as MockClient:
            MockClient.return_value = _patched_client(response)
            assert await URLhausBlacklist().is_known_phishing("http://evil.example") is True

    @pytest.mark.asyncio
    async def test_offline_is_a_miss(self):
        response = _mock_httpx_response(json_data={"query_status": "ok", "url_status": "offline"})
        with patch("phishlens.intel.urlhaus.httpx.AsyncClient") as MockClient:
            MockClient.return_value = _patched_client(response)
            assert await URLhausBlacklist().is_known_phishing("http://old.example") is False

    @pytest.mark.asyncio
    async def test_no_results(self):
        response = _mock_httpx_response(json_data={"query_status": "no_results"})
        with patch("phishlens.intel.urlhaus.httpx.AsyncClient") as MockClient:
            mock_client = _patched_client(response)
            MockClient.return_value = mock_client
            assert await URLhausBlacklist().is_known_phishing("https://example.org") is False
        # No auth key configured, no header sent
        assert mock_client.post.await_args.kwargs["headers"] == {}

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        response = _mock_httpx_response(json_data=["unexpected"])
        with patch("phishlens.intel.urlhaus.httpx.AsyncClient") as MockClient:
            MockClient.return_value = _patched_client(response)
            assert await URLhausBlacklist().is_known_phishing("http://evil.example") is False

    @pytest.mark.asyncio
    async def test_http_error(self):
        response = _mock_httpx_response(status_code=401)
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "unauthorized", request=MagicMock(), response=MagicMock(status_code=401)
        )
        with patch("phishlens.intel.urlhaus.httpx.AsyncClient") as MockClient:
            MockClient.return_value = _patched_client(response)
            assert await URLhausBlacklist().is_known_phishing("http://evil.example") is False

    @pytest.mark.asyncio
    async def test_network_error(self):
        with patch("phishlens.intel.urlhaus.httpx.AsyncClient") as MockClient:
            MockClient.return_value = _patched_client(side_effect=httpx.ConnectError("down"))
            assert await URLhausBlacklist().is_known_phishing("http://evil.example") is False
