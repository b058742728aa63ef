"""Shared test fixtures."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
import respx

from fmp_client import FMPClient

BASE = "https://financialmodelingprep.com"


def build_test_client(api_key: str = "test_key") -> FMPClient:
    return FMPClient(api_key=api_key)


@pytest.fixture
def fmp_client():
    """Create an FMPClient with a test API key."""
    return build_test_client("test_key")


@pytest.fixture
def mock_api():
    """Start respx mock for FMP API calls."""
    with respx.mock(base_url=BASE, assert_all_called=False) as api:
        yield api


def _days_ago(days: int) -> str:
    return (date.today() - timedelta(days=days)).isoformat()


# --- Sample response data ---

AAPL_PROFILE = [{
    "symbol": "AAPL",
    "companyName": "Apple Inc.",
    "price": 189.84,
    "currency": "USD",
    "mktCap": 2950000000000,
    "sharesOutstanding": 15550000000,
    "floatShares": 15530000000,
    "volAvg": 60000000,
    "sector": "Technology",
}]

MSFT_PROFILE = [{
    "symbol": "MSFT",
    "companyName": "Microsoft Corporation",
    "price": 415.5,
    "currency": "USD",
    "marketCap": 3090000000000,
    "averageVolume": 21000000,
}]

AAPL_SEARCH = [
    {"symbol": "AAPD", "name": "Direxion Daily AAPL Bear 1X", "exchangeShortName": "NASDAQ"},
    {"symbol": "AAPL", "name": "Apple Inc.", "exchangeShortName": "NASDAQ"},
]

STOCK_LIST = [
    {"symbol": "A", "name": "Agilent Technologies, Inc."},
    {"symbol": "BRK-B", "name": "Berkshire Hathaway Inc."},
    {"symbol": "ZTS", "name": "Zoetis Inc."},
]

AAPL_PRICES_LIGHT = [
    {"symbol": "AAPL", "date": _days_ago(1), "price": 150.0, "volume": 55000000},
    {"symbol": "AAPL", "date": _days_ago(2), "price": 100.0, "volume": 52000000},
    {"symbol": "AAPL", "date": _days_ago(3), "price": 80.0, "volume": 48000000},
    {"symbol": "AAPL", "date": _days_ago(800), "price": 20.0, "volume": 48000000},
]

AAPL_OWNERSHIP = [
    {
        "cik": "0000320193",
        "symbol": "AAPL",
        "filingDate": "2024-02-13",
        "acceptedDate": "2024-02-13",
        "nameOfReportingPerson": "Vanguard Group Inc",
        "typeOfReportingPerson": "IA",
        "amountBeneficiallyOwned": 1328000000,
        "percentOfClass": 8.58,
        "soleVotingPower": 0,
        "sharedVotingPower": 19300000,
        "soleDispositivePower": 1260000000,
        "sharedDispositivePower": 67700000,
        "url": "https://www.sec.gov/Archives/edgar/data/320193/000110465924021184.txt",
    },
    {
        "reportingPerson": "BlackRock Inc.",
        "amount": "1042000000",
        "percent": "6.7",
        "date": "2024-02-01",
        "link": "https://www.sec.gov/Archives/edgar/data/320193/000108636424003101.txt",
        "type": "HC",
    },
]
