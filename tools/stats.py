"""Display statistics derived from price history and profile."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from tools.prices import PricePoint


@dataclass(frozen=True)
class BasicStats:
    price: float | None = None
    currency: str = "USD"
    fifty_two_week_low: float | None = None
    fifty_two_week_high: float | None = None
    market_cap: float | None = None
    shares_outstanding: float | None = None
    free_float: float | None = None
    avg_trading_volume: float | None = None

    def to_dict(self) -> dict:
        return {
            "price": self.price,
            "currency": self.currency,
            "fiftyTwoWeekLow": self.fifty_two_week_low,
            "fiftyTwoWeekHigh": self.fifty_two_week_high,
            "marketCap": self.market_cap,
            "sharesOutstanding": self.shares_outstanding,
            "freeFloat": self.free_float,
            "avgTradingVolume": self.avg_trading_volume,
        }


def _one_year_before(today: date) -> date:
    try:
        return today.replace(year=today.year - 1)
    except ValueError:
        # Feb 29
        return today.replace(year=today.year - 1, day=28)


def _first_not_none(*values):
    return next((v for v in values if v is not None), None)


def latest_close(prices: list[PricePoint], profile: dict) -> float | None:
    ordered = sorted(prices, key=lambda p: p.date, reverse=True)
    return _first_not_none(
        ordered[0].close if ordered else None,
        prices[0].close if prices else None,
        profile.get("price"),
    )


def trailing_window(prices: list[PricePoint], today: date | None = None) -> list[PricePoint]:
    """Points from the last year, or the whole series if none fall in it."""
    cutoff = _one_year_before(today or date.today())
    window = [p for p in prices if p.date >= cutoff]
    return window or list(prices)


def aggregate_stats(prices: list[PricePoint], profile: dict, today: date | None = None) -> BasicStats:
    closes = [p.close for p in trailing_window(prices, today) if isinstance(p.close, int | float)]
    return BasicStats(
        price=_first_not_none(profile.get("price"), latest_close(prices, profile)),
        currency=_first_not_none(profile.get("currency"), "USD"),
        fifty_two_week_low=min(closes) if closes else None,
        fifty_two_week_high=max(closes) if closes else None,
        market_cap=_first_not_none(profile.get("mktCap"), profile.get("marketCap")),
        shares_outstanding=profile.get("sharesOutstanding"),
        free_float=profile.get("floatShares"),
        avg_trading_volume=_first_not_none(profile.get("volAvg"), profile.get("averageVolume")),
    )
