"""Tests for the composed company data load and its MCP tools."""

from __future__ import annotations

import httpx
import pytest

from fastmcp import Client, FastMCP
from fmp_client import FMPClient
from tests.conftest import AAPL_OWNERSHIP, AAPL_PRICES_LIGHT, AAPL_PROFILE, AAPL_SEARCH, MSFT_PROFILE
from tools.company import CompanyDataError, load_company_data, register


def _mock_aapl(mock_api, ownership_response: httpx.Response | None = None):
    mock_api.get("/stable/profile", params={"symbol": "AAPL"}).mock(
        return_value=httpx.Response(200, json=AAPL_PROFILE)
    )
    mock_api.get("/stable/profile").mock(return_value=httpx.Response(200, json=[]))
    mock_api.get("/stable/historical-price-eod/light").mock(
        return_value=httpx.Response(200, json=AAPL_PRICES_LIGHT)
    )
    mock_api.get("/stable/acquisition-of-beneficial-ownership").mock(
        return_value=ownership_response or httpx.Response(200, json=AAPL_OWNERSHIP)
    )


def _make_server() -> tuple[FastMCP, FMPClient]:
    mcp = FastMCP("Test")
    client = FMPClient(api_key="test_key")
    register(mcp, client)
    return mcp, client


class TestLoadCompanyData:
    @pytest.mark.asyncio
    async def test_full_result(self, mock_api, fmp_client):
        _mock_aapl(mock_api)
        data = await load_company_data(fmp_client, "Apple")

        assert data["symbol"] == "AAPL"
        assert data["companyName"] == "Apple Inc."
        assert [p["close"] for p in data["priceData"]["historical"]] == [150.0, 100.0, 80.0, 20.0]
        assert len(data["ownershipData"]) == 2
        assert data["ownershipData"][0]["sharesOwned"] == 1328000000

        stats = data["basicStats"]
        assert stats["price"] == 189.84
        assert stats["fiftyTwoWeekLow"] == 80.0
        assert stats["fiftyTwoWeekHigh"] == 150.0
        assert stats["marketCap"] == 2950000000000
        assert stats["freeFloat"] == 15530000000
        assert stats["avgTradingVolume"] == 60000000
        assert stats["currency"] == "USD"

    @pytest.mark.asyncio
    async def test_ownership_failure_is_absorbed(self, mock_api, fmp_client):
        _mock_aapl(mock_api, ownership_response=httpx.Response(402, text="Payment Required"))
        data = await load_company_data(fmp_client, "AAPL")

        assert data["ownershipData"] == []
        assert data["symbol"] == "AAPL"
        assert data["basicStats"]["price"] == 189.84

    @pytest.mark.asyncio
    async def test_unresolvable_term(self, mock_api, fmp_client):
        for path in ("/stable/search-name", "/stable/search", "/stable/search-symbol", "/stable/stock-list"):
            mock_api.get(path).mock(return_value=httpx.Response(200, json=[]))

        with pytest.raises(CompanyDataError) as exc_info:
            await load_company_data(fmp_client, "zzz_not_a_company_zzz")

        message = str(exc_info.value)
        assert message.startswith("Failed to fetch company data: ")
        assert "zzz_not_a_company_zzz" in message

    @pytest.mark.asyncio
    async def test_price_failure_after_resolution_is_fatal(self, mock_api, fmp_client):
        mock_api.get("/stable/profile").mock(return_value=httpx.Response(200, json=MSFT_PROFILE))
        mock_api.get("/stable/historical-price-eod/light").mock(
            return_value=httpx.Response(503, text="Service Unavailable")
        )
        with pytest.raises(CompanyDataError, match="Failed to fetch company data: FMP API error 503"):
            await load_company_data(fmp_client, "MSFT")

    @pytest.mark.asyncio
    async def test_empty_price_history(self, mock_api, fmp_client):
        mock_api.get("/stable/profile").mock(return_value=httpx.Response(200, json=MSFT_PROFILE))
        mock_api.get("/stable/historical-price-eod/light").mock(return_value=httpx.Response(200, json={}))
        mock_api.get("/stable/acquisition-of-beneficial-ownership").mock(return_value=httpx.Response(200, json=[]))

        data = await load_company_data(fmp_client, "msft")

        assert data["priceData"] == {"historical": []}
        assert data["basicStats"]["price"] == 415.5
        assert data["basicStats"]["fiftyTwoWeekLow"] is None
        assert data["basicStats"]["marketCap"] == 3090000000000


class TestCompanyTools:
    @pytest.mark.asyncio
    async def test_company_data_tool(self, mock_api):
        _mock_aapl(mock_api)
        mcp, fmp = _make_server()
        async with Client(mcp) as c:
            result = await c.call_tool("company_data", {"term": "aapl"})

        data = result.data
        assert data["symbol"] == "AAPL"
        assert "error" not in data
        await fmp.close()

    @pytest.mark.asyncio
    async def test_company_data_tool_error(self, mock_api):
        for path in ("/stable/search-name", "/stable/search", "/stable/search-symbol", "/stable/stock-list"):
            mock_api.get(path).mock(return_value=httpx.Response(200, json={"data": []}))
        mcp, fmp = _make_server()
        async with Client(mcp) as c:
            result = await c.call_tool("company_data", {"term": "no such company"})

        assert 'Unable to find company "no such company"' in result.data["error"]
        await fmp.close()

    @pytest.mark.asyncio
    async def test_resolve_company_tool(self, mock_api):
        mock_api.get("/stable/search-name").mock(return_value=httpx.Response(200, json=AAPL_SEARCH))
        mcp, fmp = _make_server()
        async with Client(mcp) as c:
            result = await c.call_tool("resolve_company", {"term": "apple inc"})

        assert result.data == {"symbol": "AAPL", "companyName": "Apple Inc."}
        await fmp.close()
