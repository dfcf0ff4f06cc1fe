"""
API Router

All public endpoints live under /api.
"""

from fastapi import APIRouter

from pricehub.api.endpoints import prices, krypto

router = APIRouter()

router.include_router(prices.router, tags=["Prices"])
router.include_router(krypto.router, prefix="/krypto", tags=["Krypto Analyzer"])
