# =============================================================================
# core/stocks.py  —  Stock quotes
# =============================================================================
#
# Same toggle as core/weather.py:
#   USE_LIVE_DATA=true   → (default) Yahoo Finance chart API (no key), then Alpha
#                          Vantage when ALPHA_VANTAGE_API_KEY is set,
#                          then simulated data
#   USE_LIVE_DATA=false  → simulated data only
#
# Payload: {symbol, price, change, changePercent, volume, marketCap, sector,
#           marketStatus, dayHigh, dayLow, source, simulated}
# Prices are strings with two decimals, as quote services display them.
# =============================================================================

from datetime import datetime
import logging
import random
import zlib
from typing import Optional

from core.config import Settings
from core.errors import ProviderError
from core.http import fetch_json

logger = logging.getLogger(__name__)

SIMULATED_SOURCE = "Simulated Data"

# base price, daily volatility, sector, market cap (billions)
_PROFILES: dict[str, tuple[float, float, str, int]] = {
    "AAPL": (175, 0.02, "Technology", 2800),
    "GOOGL": (140, 0.025, "Technology", 1800),
    "MSFT": (380, 0.018, "Technology", 2900),
    "TSLA": (250, 0.04, "Automotive", 800),
    "AMZN": (145, 0.022, "E-commerce", 1500),
    "NVDA": (450, 0.035, "Semiconductors", 1100),
    "META": (320, 0.028, "Social Media", 850),
}
_DEFAULT_PROFILE = (100, 0.025, "Technology", 500)


def format_market_cap(value: Optional[float]) -> str:
    if not value:
        return "N/A"
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M")):
        if value >= threshold:
            return f"{value / threshold:.1f}{suffix}"
    return str(int(value))


def get_stock_price(symbol: str, settings: Optional[Settings] = None) -> dict:
    """Quote for `symbol`: live when enabled and reachable, else simulated."""
    settings = settings or Settings()
    symbol = (symbol or "").strip().upper()
    if not symbol:
        raise ValueError("symbol is required")

    if settings.use_live_data:
        try:
            return get_stock_live(symbol, settings.alpha_vantage_api_key)
        except ProviderError as e:
            logger.warning(f"⚠ live quote failed for {symbol}: {e}. Using simulated data.")
    return get_stock_simulated(symbol)


def get_stock_live(symbol: str, alpha_vantage_api_key: Optional[str] = None) -> dict:
    try:
        return _from_yahoo(symbol)
    except ProviderError as e:
        if not alpha_vantage_api_key:
            raise
        logger.info(f"Yahoo Finance failed ({e}), trying Alpha Vantage")
    return _from_alpha_vantage(symbol, alpha_vantage_api_key)


def _from_yahoo(symbol: str) -> dict:
    data = fetch_json(f"https://query1.finance.yahoo.com/v8/finance/chart/{symbol}")
    try:
        meta = data["chart"]["result"][0]["meta"]
        price = float(meta["regularMarketPrice"])
        previous = float(meta["previousClose"])
        change = price - previous
        return {
            "symbol": symbol,
            "price": f"{price:.2f}",
            "change": f"{change:.2f}",
            "changePercent": f"{change / previous * 100:.2f}",
            "volume": f"{meta['regularMarketVolume']:,}" if meta.get("regularMarketVolume") else "N/A",
            "marketCap": format_market_cap(meta.get("marketCap")),
            "sector": "N/A",
            "marketStatus": "Open" if meta.get("marketState") == "REGULAR" else "Closed",
            "dayHigh": f"{meta['regularMarketDayHigh']:.2f}" if meta.get("regularMarketDayHigh") else "N/A",
            "dayLow": f"{meta['regularMarketDayLow']:.2f}" if meta.get("regularMarketDayLow") else "N/A",
            "source": "Yahoo Finance (Live)",
            "simulated": False,
        }
    except (KeyError, IndexError, TypeError, ValueError, ZeroDivisionError) as e:
        raise ProviderError(f"unexpected Yahoo Finance payload: {e}") from e


def _from_alpha_vantage(symbol: str, api_key: str) -> dict:
    data = fetch_json(
        "https://www.alphavantage.co/query",
        params={"function": "GLOBAL_QUOTE", "symbol": symbol, "apikey": api_key},
    )
    quote = data.get("Global Quote") if isinstance(data, dict) else None
    if not quote or not quote.get("05. price"):
        raise ProviderError(f"Alpha Vantage returned no quote for {symbol}")
    try:
        return {
            "symbol": symbol,
            "price": f"{float(quote['05. price']):.2f}",
            "change": f"{float(quote['09. change']):.2f}",
            "changePercent": quote["10. change percent"].rstrip("%"),
            "volume": f"{int(quote['06. volume']):,}",
            "marketCap": "N/A",
            "sector": "N/A",
            "marketStatus": "N/A",
            "dayHigh": f"{float(quote['03. high']):.2f}",
            "dayLow": f"{float(quote['04. low']):.2f}",
            "source": "Alpha Vantage (Live)",
            "simulated": False,
        }
    except (KeyError, TypeError, ValueError) as e:
        raise ProviderError(f"unexpected Alpha Vantage payload: {e}") from e


def get_stock_simulated(symbol: str, now: Optional[datetime] = None) -> dict:
    """Plausible quote; the price depends only on the symbol."""
    base, volatility, sector, market_cap = _PROFILES.get(symbol, _DEFAULT_PROFILE)
    rng = random.Random(zlib.crc32(symbol.encode()))

    price = base + (rng.random() - 0.5) * 2 * volatility * base
    change = price - base
    hour = (now or datetime.now()).hour

    return {
        "symbol": symbol,
        "price": f"{price:.2f}",
        "change": f"{change:.2f}",
        "changePercent": f"{change / base * 100:.2f}",
        "volume": f"{int(market_cap * 1000 * (0.5 + rng.random() * 1.5)):,}",
        "marketCap": f"{market_cap}B",
        "sector": sector,
        "marketStatus": "Open" if 9 <= hour < 16 else "Closed",
        "dayHigh": f"{price * (1 + rng.random() * 0.02):.2f}",
        "dayLow": f"{price * (1 - rng.random() * 0.02):.2f}",
        "source": SIMULATED_SOURCE,
        "simulated": True,
    }
