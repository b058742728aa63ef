"""Historical price normalization for the EOD light endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any

from tools._helpers import _to_date, coerce_non_negative_number, extract_historical

if TYPE_CHECKING:
    from fmp_client import FMPClient


@dataclass(frozen=True)
class PricePoint:
    date: date
    close: float

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "close": self.close}


def _to_point(record: Any) -> PricePoint | None:
    if isinstance(record, PricePoint):
        record = {"date": record.date, "price": record.close}
    if not isinstance(record, dict):
        return None
    point_date = _to_date(record.get("date") or None)
    # /light reports a generic "price" field instead of "close"
    close = coerce_non_negative_number(record.get("price"))
    if point_date is None or not close:
        return None
    return PricePoint(date=point_date, close=close)


def normalize_price_history(raw: list) -> list[PricePoint]:
    """Convert raw price records to points, keeping input order.

    Records without a usable date or with a close that is missing,
    non-numeric or not strictly positive are dropped.
    """
    return [point for point in map(_to_point, raw or []) if point is not None]


async def fetch_price_history(client: FMPClient, symbol: str) -> list[PricePoint]:
    data = await client.get("/stable/historical-price-eod/light", params={"symbol": symbol})
    return normalize_price_history(extract_historical(data))
