"""
Price API Endpoints

Batch spot prices and history comparison in any quote currency.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from pricehub.api.deps import get_market_service, split_csv
from pricehub.core.config import settings
from pricehub.schemas.market import CompareResponse, PriceResponse
from pricehub.services.data_ingestion import MarketDataService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/price", response_model=PriceResponse, response_model_exclude_none=True)
async def get_price(
    ids: str = Query(default=settings.default_ids, description="Comma-separated coin ids"),
    vs: str = Query(default=settings.default_vs, description="Quote currency"),
    market: MarketDataService = Depends(get_market_service),
):
    """
    Spot price per coin in vs (and usd).

    A coin no provider can price comes back as {"error": "unavailable"}.
    """
    id_list = split_csv(ids) or split_csv(settings.default_ids)
    vs = vs.lower().strip() or settings.default_vs
    data, cached = await market.get_prices(id_list, vs)
    return PriceResponse(data=data, cached=cached or None)


@router.get("/compare", response_model=CompareResponse, response_model_exclude_none=True)
async def compare(
    symbols: str = Query(default=settings.default_ids, description="Comma-separated coin ids"),
    days: Optional[int] = Query(default=None, ge=1),
    vs: str = Query(default=settings.default_vs, description="Quote currency"),
    market: MarketDataService = Depends(get_market_service),
):
    """
    History series per coin in vs, [[ts_ms, price], ...].

    A coin with no history comes back with an error and an empty series.
    """
    symbol_list = split_csv(symbols) or split_csv(settings.default_ids)
    days = days or settings.default_days
    vs = vs.lower().strip() or settings.default_vs

    items, cached = await market.compare(symbol_list, days, vs)
    return CompareResponse(items=items, vs=vs, days=days, cached=cached or None)
