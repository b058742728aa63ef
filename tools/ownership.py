"""Beneficial ownership (Schedule 13D/13G) filings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tools._helpers import _first_present, coerce_non_negative_number, unwrap

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from fmp_client import FMPClient

logger = logging.getLogger(__name__)


class SupplementaryDataError(Exception):
    """Ownership data could not be fetched or normalized."""


@dataclass(frozen=True)
class OwnershipRecord:
    name: str = ""
    shares_owned: float = 0
    ownership_percentage: float = 0
    sole_voting_power: float = 0
    shared_voting_power: float = 0
    sole_dispositive_power: float = 0
    shared_dispositive_power: float = 0
    filing_date: str = ""
    url: str = ""
    type_of_reporting_person: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sharesOwned": self.shares_owned,
            "ownershipPercentage": self.ownership_percentage,
            "soleVotingPower": self.sole_voting_power,
            "sharedVotingPower": self.shared_voting_power,
            "soleDispositivePower": self.sole_dispositive_power,
            "sharedDispositivePower": self.shared_dispositive_power,
            "filingDate": self.filing_date,
            "url": self.url,
            "typeOfReportingPerson": self.type_of_reporting_person,
        }


def _text(row: dict, *keys: str) -> str:
    value = _first_present(row, *keys)
    return "" if value is None else str(value)


def _number(row: dict, *keys: str) -> int | float:
    return coerce_non_negative_number(_first_present(row, *keys)) or 0


def _to_record(row: Any) -> OwnershipRecord:
    if not isinstance(row, dict):
        return OwnershipRecord()
    return OwnershipRecord(
        name=_text(row, "nameOfReportingPerson", "name", "reportingPerson"),
        shares_owned=_number(row, "amountBeneficiallyOwned", "sharesOwned", "amount"),
        ownership_percentage=_number(row, "percentOfClass", "ownershipPercentage", "percent"),
        sole_voting_power=_number(row, "soleVotingPower", "soleVoting"),
        shared_voting_power=_number(row, "sharedVotingPower", "sharedVoting"),
        sole_dispositive_power=_number(row, "soleDispositivePower", "soleDispositive"),
        shared_dispositive_power=_number(row, "sharedDispositivePower", "sharedDispositive"),
        filing_date=_text(row, "filingDate", "date", "filing"),
        url=_text(row, "url", "link"),
        type_of_reporting_person=_text(row, "typeOfReportingPerson", "type"),
    )


def normalize_ownership(rows: list) -> list[OwnershipRecord]:
    """Map raw filing rows to records, defaulting absent fields."""
    return [_to_record(row) for row in rows or []]


async def _fetch_ownership_records(client: FMPClient, symbol: str) -> list[OwnershipRecord]:
    try:
        raw = await client.get("/stable/acquisition-of-beneficial-ownership", params={"symbol": symbol})
        return normalize_ownership(unwrap(raw))
    except Exception as e:
        raise SupplementaryDataError(f"Beneficial ownership unavailable for {symbol}: {e}") from e


async def fetch_ownership(client: FMPClient, symbol: str) -> list[OwnershipRecord]:
    """Fetch ownership filings; any failure yields an empty list."""
    try:
        return await _fetch_ownership_records(client, symbol)
    except SupplementaryDataError as e:
        logger.warning("Failed to fetch acquisition-of-beneficial-ownership data for %s: %s", symbol, e.__cause__)
        return []


def register(mcp: FastMCP, client: FMPClient) -> None:
    @mcp.tool(
        annotations={
            "title": "Beneficial Ownership",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        }
    )
    async def beneficial_ownership(symbol: str) -> dict:
        """Get beneficial ownership filings (13D/13G acquisitions) for a stock.

        Returns reporting persons with shares owned, percent of class,
        voting and dispositive power, and filing links. Missing data
        yields an empty list rather than an error.

        Args:
            symbol: Stock ticker symbol (e.g. "AAPL")
        """
        symbol = symbol.upper().strip()
        records = await fetch_ownership(client, symbol)
        return {
            "symbol": symbol,
            "count": len(records),
            "filings": [record.to_dict() for record in records],
        }
