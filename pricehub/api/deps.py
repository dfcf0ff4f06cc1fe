"""
Request-scoped access to the service container built at start-up.
"""

from fastapi import Request

from pricehub.services.analysis import AnalysisService
from pricehub.services.container import ServiceContainer
from pricehub.services.data_ingestion import MarketDataService


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_market_service(request: Request) -> MarketDataService:
    return get_container(request).market


def get_analysis_service(request: Request) -> AnalysisService:
    return get_container(request).analysis


def split_csv(raw: str) -> list[str]:
    """'Bitcoin, ethereum,' → ['bitcoin', 'ethereum']"""
    return [s.strip() for s in raw.lower().split(",") if s.strip()]
