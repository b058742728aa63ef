"""Company name / ticker to symbol resolution cascade."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tools._helpers import as_profile, unwrap
from tools.symbols import mapped_symbol

if TYPE_CHECKING:
    from fmp_client import FMPClient

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9.-]{1,10}$")
ERROR_HINT_LENGTH = 200


@dataclass(frozen=True)
class QueryTerm:
    """Raw user input, stripped once and never modified."""

    raw: str

    @classmethod
    def parse(cls, value: str) -> QueryTerm:
        return cls((value or "").strip())

    @property
    def upper(self) -> str:
        return self.raw.upper()

    @property
    def lower(self) -> str:
        return self.raw.lower()

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class ResolvedIdentity:
    symbol: str
    company_name: str

    def to_dict(self) -> dict:
        return {"symbol": self.symbol, "companyName": self.company_name}


@dataclass(frozen=True)
class SearchCandidate:
    symbol: str
    name: str

    @classmethod
    def from_record(cls, record: Any) -> SearchCandidate | None:
        if not isinstance(record, dict):
            return None
        symbol = str(record.get("symbol") or "").upper()
        name = str(record.get("name") or record.get("companyName") or "")
        return cls(symbol=symbol, name=name)

    def to_identity(self) -> ResolvedIdentity | None:
        if not self.symbol:
            return None
        return ResolvedIdentity(symbol=self.symbol, company_name=self.name or self.symbol)


class ResolutionError(Exception):
    """Every lookup strategy failed to produce a symbol."""

    def __init__(self, term: str, last_error: str | None = None, failures: list[str] | None = None):
        self.term = term
        self.last_error = last_error
        self.failures = failures or []
        hint = f"\n\nTechnical details: {last_error[:ERROR_HINT_LENGTH]}" if last_error else ""
        super().__init__(
            f'Unable to find company "{term}".\n\n'
            "The search functionality may not be available in your API plan, "
            "or the company may not be in the database.\n\n"
            "Please try:\n"
            '- Using the stock symbol instead (e.g. "MSFT" for Microsoft, "AAPL" for Apple)\n'
            "- Checking the spelling of the company name\n"
            f"- Using a different company name or symbol{hint}"
        )


def _candidates(records: list) -> list[SearchCandidate]:
    return [c for c in (SearchCandidate.from_record(r) for r in records) if c is not None]


def best_match(candidates: list[SearchCandidate], term: QueryTerm) -> SearchCandidate | None:
    """Pick the winning search result.

    Precedence: exact symbol, exact name, name contains term, symbol
    contains term, then the first candidate.
    """
    if not candidates:
        return None
    tiers = (
        lambda c: c.symbol == term.upper,
        lambda c: c.name.lower() == term.lower,
        lambda c: term.lower in c.name.lower(),
        lambda c: term.upper in c.symbol,
    )
    for matches in tiers:
        for candidate in candidates:
            if matches(candidate):
                return candidate
    return candidates[0]


class ResolutionStrategy:
    """One step of the cascade. ``attempt`` returns None on a clean miss."""

    name = "strategy"

    def __init__(self, client: FMPClient):
        self.client = client

    async def attempt(self, term: QueryTerm) -> ResolvedIdentity | None:
        raise NotImplementedError


class _ProfileProbe(ResolutionStrategy):
    async def probe(self, candidate: str) -> ResolvedIdentity | None:
        profile = as_profile(await self.client.get("/stable/profile", params={"symbol": candidate}))
        if not (profile.get("symbol") or profile.get("companyName") or profile.get("name")):
            return None
        symbol = str(profile.get("symbol") or candidate).upper()
        company_name = profile.get("companyName") or profile.get("name") or profile.get("symbol") or candidate
        return ResolvedIdentity(symbol=symbol, company_name=str(company_name))


class DirectSymbolProbe(_ProfileProbe):
    name = "direct symbol"

    async def attempt(self, term: QueryTerm) -> ResolvedIdentity | None:
        if not SYMBOL_PATTERN.match(term.upper):
            return None
        return await self.probe(term.upper)


class StaticMappingProbe(_ProfileProbe):
    name = "static mapping"

    async def attempt(self, term: QueryTerm) -> ResolvedIdentity | None:
        symbol = mapped_symbol(term.lower)
        if symbol is None:
            return None
        return await self.probe(symbol)


class SearchStrategy(ResolutionStrategy):
    def __init__(self, client: FMPClient, name: str, path: str, param: str, *, use_upper: bool = False):
        super().__init__(client)
        self.name = name
        self.path = path
        self.param = param
        self.use_upper = use_upper

    async def attempt(self, term: QueryTerm) -> ResolvedIdentity | None:
        query = term.upper if self.use_upper else term.raw
        records = unwrap(await self.client.get(self.path, params={self.param: query}))
        winner = best_match(_candidates(records), term)
        return winner.to_identity() if winner else None


class StockListScan(ResolutionStrategy):
    name = "stock-list"

    async def attempt(self, term: QueryTerm) -> ResolvedIdentity | None:
        records = unwrap(await self.client.get("/stable/stock-list"))
        for candidate in _candidates(records):
            if (
                term.lower in candidate.name.lower()
                or candidate.symbol == term.upper
                or term.upper in candidate.symbol
            ):
                return candidate.to_identity()
        return None


def default_strategies(client: FMPClient) -> list[ResolutionStrategy]:
    return [
        DirectSymbolProbe(client),
        StaticMappingProbe(client),
        SearchStrategy(client, "search-name (query)", "/stable/search-name", "query"),
        SearchStrategy(client, "search-name (_query_)", "/stable/search-name", "_query_"),
        SearchStrategy(client, "search", "/stable/search", "query"),
        SearchStrategy(client, "search-symbol", "/stable/search-symbol", "query", use_upper=True),
        StockListScan(client),
    ]


@dataclass
class SymbolResolver:
    """Run strategies in order and return the first resolved identity."""

    client: FMPClient
    strategies: list[ResolutionStrategy] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.strategies:
            self.strategies = default_strategies(self.client)

    async def resolve(self, value: str) -> ResolvedIdentity:
        term = QueryTerm.parse(value)
        if not term.raw:
            raise ResolutionError(term.raw)

        failures: list[str] = []
        for strategy in self.strategies:
            try:
                identity = await strategy.attempt(term)
            except Exception as e:
                logger.debug("Strategy %s failed for %r: %s", strategy.name, term.raw, e)
                failures.append(str(e))
                continue
            if identity is not None and identity.symbol:
                logger.info("Resolved %r to %s via %s", term.raw, identity.symbol, strategy.name)
                return identity

        raise ResolutionError(term.raw, failures[-1] if failures else None, failures)
