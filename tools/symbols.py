"""Static company-name to symbol shortcuts."""

from __future__ import annotations

from types import MappingProxyType

# Lowercased exact names of large caps. Used only as a first guess before
# the search endpoints; a miss is not an error.
COMMON_COMPANY_SYMBOLS = MappingProxyType({
    "microsoft": "MSFT",
    "apple": "AAPL",
    "amazon": "AMZN",
    "alphabet": "GOOGL",
    "google": "GOOGL",
    "meta": "META",
    "facebook": "META",
    "tesla": "TSLA",
    "nvidia": "NVDA",
    "netflix": "NFLX",
    "samsung": "005930",  # KRX listing
    "samsung electronics": "005930",
    "intel": "INTC",
    "amd": "AMD",
    "oracle": "ORCL",
    "ibm": "IBM",
    "cisco": "CSCO",
    "adobe": "ADBE",
    "salesforce": "CRM",
    "paypal": "PYPL",
    "visa": "V",
    "mastercard": "MA",
    "jpmorgan": "JPM",
    "bank of america": "BAC",
    "goldman sachs": "GS",
    "morgan stanley": "MS",
    "disney": "DIS",
    "nike": "NKE",
    "coca cola": "KO",
    "pepsi": "PEP",
    "walmart": "WMT",
    "target": "TGT",
    "home depot": "HD",
    "mcdonalds": "MCD",
    "starbucks": "SBUX",
})


def mapped_symbol(name: str) -> str | None:
    """Look up the symbol for a lowercased company name."""
    return COMMON_COMPANY_SYMBOLS.get(name)
