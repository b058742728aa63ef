"""FMP Company Lookup - resolve companies and load their price, profile and ownership data."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastmcp import FastMCP

from fmp_client import FMPClient
from tools import company, ownership

load_dotenv()


@asynccontextmanager
async def lifespan(server):
    """Manage client lifecycles."""
    yield
    await client.close()


mcp = FastMCP(
    "FMP Company Lookup",
    instructions=(
        "Company lookup over Financial Modeling Prep. Use company_data with a "
        "company name or ticker to get price history, 52-week stats and "
        "beneficial ownership in one call. Use resolve_company when only the "
        "symbol is needed, and beneficial_ownership for 13D/13G filings of a "
        "known symbol."
    ),
    lifespan=lifespan,
)

# Initialize shared FMP client
api_key = os.environ.get("FMP_API_KEY", "")
if not api_key:
    raise RuntimeError("FMP_API_KEY is required")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


client = FMPClient(api_key=api_key, timeout=_env_int("FMP_HTTP_TIMEOUT", 30))

# Register tool modules
company.register(mcp, client)
ownership.register(mcp, client)


if __name__ == "__main__":
    mcp.run()
