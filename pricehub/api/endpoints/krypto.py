"""
Krypto Analyzer Endpoints

GET  /api/krypto/analyze      resolve + analyze one coin
POST /api/krypto/analyze/raw  analyze a caller-supplied series
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from pricehub.api.deps import get_analysis_service
from pricehub.core.config import settings
from pricehub.schemas.analysis import RawAnalysisRequest
from pricehub.services.analysis import AnalysisService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/analyze")
async def analyze(
    symbol: str = Query(default=settings.default_symbol, description="Coin id"),
    vs: str = Query(default=settings.default_vs, description="Quote currency"),
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """
    Indicators, signal, confidence and 24h band for one coin.

    Fails with 500 {ok: false, error} when no provider serves the history
    or the FX rate is unavailable.
    """
    result = await analysis.analyze_symbol(
        symbol.lower().strip() or settings.default_symbol,
        vs.lower().strip() or settings.default_vs,
    )
    return result.to_response()


@router.post("/analyze/raw")
async def analyze_raw(
    request: Optional[RawAnalysisRequest] = None,
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """
    Same analysis over the supplied prices (>= 40 rows). Deterministic:
    no network, no narrative.
    """
    request = request or RawAnalysisRequest()
    result = analysis.analyze_raw(request.symbol, request.vs, request.prices)
    return result.to_response()
