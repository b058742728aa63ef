"""Company data page: resolution, price history, profile, ownership, stats."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tools._helpers import as_profile
from tools.ownership import fetch_ownership
from tools.prices import fetch_price_history
from tools.resolver import ResolutionError, SymbolResolver
from tools.stats import aggregate_stats

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from fmp_client import FMPClient

logger = logging.getLogger(__name__)


class CompanyDataError(Exception):
    """Unrecoverable failure while loading company data."""


async def load_company_data(client: FMPClient, term: str) -> dict:
    """Resolve ``term`` and compose everything the company page displays.

    Ownership data is supplementary and never fails the request. Any
    other failure is raised as CompanyDataError.
    """
    try:
        identity = await SymbolResolver(client).resolve(term)
        symbol = identity.symbol

        prices = await fetch_price_history(client, symbol)
        profile = as_profile(await client.get("/stable/profile", params={"symbol": symbol}))
        ownership = await fetch_ownership(client, symbol)
        stats = aggregate_stats(prices, profile)
    except Exception as e:
        raise CompanyDataError(f"Failed to fetch company data: {e}") from e

    return {
        **identity.to_dict(),
        "priceData": {"historical": [point.to_dict() for point in prices]},
        "ownershipData": [record.to_dict() for record in ownership],
        "basicStats": stats.to_dict(),
    }


def register(mcp: FastMCP, client: FMPClient) -> None:
    @mcp.tool(
        annotations={
            "title": "Company Data",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        }
    )
    async def company_data(term: str) -> dict:
        """Look up a company by name or ticker and return its page data.

        Resolves the term to a symbol (direct ticker, known names, search
        endpoints, full stock list), then returns daily closes, beneficial
        ownership filings, and basic stats (price, 52-week range, market
        cap, shares outstanding, float, average volume).

        Args:
            term: Company name or ticker (e.g. "Apple", "MSFT")
        """
        try:
            return await load_company_data(client, term)
        except CompanyDataError as e:
            logger.warning("company_data failed for %r: %s", term, e.__cause__)
            return {"error": str(e)}

    @mcp.tool(
        annotations={
            "title": "Resolve Company",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        }
    )
    async def resolve_company(term: str) -> dict:
        """Resolve a company name or ticker to its canonical symbol.

        Args:
            term: Company name or ticker (e.g. "microsoft", "BRK.B")
        """
        try:
            identity = await SymbolResolver(client).resolve(term)
        except ResolutionError as e:
            return {"error": str(e)}
        return identity.to_dict()
