"""
Coin Seed Table

Minimal id → (symbol, Binance pair) map for the top caps. Ids are the
lowercase names callers use ("bitcoin", "shiba-inu"). Add more over time.
"""

from typing import NamedTuple, Optional


class CoinInfo(NamedTuple):
    symbol: str
    binance_pair: Optional[str] = None


COINS: dict[str, CoinInfo] = {
    "bitcoin": CoinInfo("BTC", "BTCUSDT"),
    "ethereum": CoinInfo("ETH", "ETHUSDT"),
    "tether": CoinInfo("USDT", "USDTUSD"),  # rarely listed; probe usually fails
    "bnb": CoinInfo("BNB", "BNBUSDT"),
    "binancecoin": CoinInfo("BNB", "BNBUSDT"),
    "solana": CoinInfo("SOL", "SOLUSDT"),
    "xrp": CoinInfo("XRP", "XRPUSDT"),
    "ripple": CoinInfo("XRP", "XRPUSDT"),
    "cardano": CoinInfo("ADA", "ADAUSDT"),
    "dogecoin": CoinInfo("DOGE", "DOGEUSDT"),
    "tron": CoinInfo("TRX", "TRXUSDT"),
    "polkadot": CoinInfo("DOT", "DOTUSDT"),
    "polygon": CoinInfo("MATIC", "MATICUSDT"),
    "litecoin": CoinInfo("LTC", "LTCUSDT"),
    "chainlink": CoinInfo("LINK", "LINKUSDT"),
    "avalanche": CoinInfo("AVAX", "AVAXUSDT"),
    "avalanche-2": CoinInfo("AVAX", "AVAXUSDT"),
    "stellar": CoinInfo("XLM", "XLMUSDT"),
    "vechain": CoinInfo("VET", "VETUSDT"),
    "cosmos": CoinInfo("ATOM", "ATOMUSDT"),
    "filecoin": CoinInfo("FIL", "FILUSDT"),
    "aptos": CoinInfo("APT", "APTUSDT"),
    "arbitrum": CoinInfo("ARB", "ARBUSDT"),
    "optimism": CoinInfo("OP", "OPUSDT"),
    "pepe": CoinInfo("PEPE", "PEPEUSDT"),
    "shiba-inu": CoinInfo("SHIB", "SHIBUSDT"),
    "render-token": CoinInfo("RNDR", "RNDRUSDT"),
}


def get_coin(asset_id: str) -> Optional[CoinInfo]:
    """Look up a seeded coin by id (case-insensitive)."""
    return COINS.get(asset_id.lower().strip())


def guess_binance_pair(asset_id: str) -> Optional[str]:
    """Explicit pair if seeded, else {SYMBOL}USDT, else None."""
    coin = get_coin(asset_id)
    if coin is None:
        return None
    return coin.binance_pair or f"{coin.symbol}USDT"
