"""Shared test fixtures for PriceHub."""

from typing import Any, Callable, Optional, Union

import pytest
from fastapi.testclient import TestClient

from pricehub.core.config import Settings
from pricehub.main import create_app
from pricehub.schemas.market import PricePoint, PriceSeries
from pricehub.services.analysis import AnalysisService
from pricehub.services.base import ConversionError, SourceError
from pricehub.services.cache import TTLCache
from pricehub.services.container import ServiceContainer
from pricehub.services.data_ingestion import MarketDataService, PriceResolver, PriceSource
from pricehub.services.fx import CurrencyConverter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHTTP:
    """
    Stand-in for PriceSource._get_json.

    Routes map a URL suffix to a payload, an exception, or a callable taking
    params. Unrouted URLs raise SourceError like a 404 would.
    """

    def __init__(self, provider: str, routes: dict[str, Any]):
        self.provider = provider
        self.routes = routes
        self.calls: list[tuple[str, Optional[dict]]] = []

    async def __call__(self, url: str, params: Optional[dict] = None) -> Any:
        self.calls.append((url, params))
        for suffix, response in self.routes.items():
            if url.endswith(suffix):
                if isinstance(response, Exception):
                    raise response
                if callable(response):
                    return response(params or {})
                return response
        raise SourceError(self.provider, "http_404", {"url": url})

    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


def make_series(
    prices: list[float],
    asset_id: str = "bitcoin",
    source: str = "stub",
    days: int = 30,
    start_ms: int = 1_700_000_000_000,
    step_ms: int = 3_600_000,
) -> PriceSeries:
    return PriceSeries(
        asset_id=asset_id,
        currency="usd",
        days=days,
        source=source,
        points=[
            PricePoint(timestamp=start_ms + i * step_ms, price=p) for i, p in enumerate(prices)
        ],
    )


Outcome = Union[float, PriceSeries, Exception, Callable[[str], Any]]


class StubSource(PriceSource):
    """
    Scripted adapter. Per-asset outcomes; missing assets fail with
    SourceError. Counts calls so fallback order can be asserted.
    """

    def __init__(
        self,
        name: str,
        spot: Optional[dict[str, Outcome]] = None,
        history: Optional[dict[str, Outcome]] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(settings or Settings(_env_file=None), TTLCache())
        self._name = name
        self._spot = spot or {}
        self._history = history or {}
        self.spot_calls: list[str] = []
        self.history_calls: list[tuple[str, int]] = []

    @property
    def name(self) -> str:
        return self._name

    async def spot_price(self, asset_id: str) -> float:
        self.spot_calls.append(asset_id)
        return self._resolve(self._spot.get(asset_id), asset_id)

    async def history_series(self, asset_id: str, days: int) -> PriceSeries:
        self.history_calls.append((asset_id, days))
        return self._resolve(self._history.get(asset_id), asset_id)

    def _resolve(self, outcome: Optional[Outcome], asset_id: str) -> Any:
        if outcome is None:
            raise SourceError(self._name, "not_scripted", {"asset_id": asset_id})
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(asset_id)
        return outcome


class StaticConverter(CurrencyConverter):
    """CurrencyConverter with a fixed rate table instead of HTTP."""

    def __init__(self, settings: Settings, cache: TTLCache, rates: dict[str, float]):
        super().__init__(settings, cache)
        self.rates = rates
        self.fetches: list[str] = []

    async def _fetch_rate(self, quote: str) -> float:
        self.fetches.append(quote)
        if quote not in self.rates:
            raise ConversionError(quote, "fx_rate_missing")
        return self.rates[quote]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(clock=clock)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no pauses and no narrative keys."""
    return Settings(
        _env_file=None,
        batch_delay_seconds=0,
        coingecko_delay_seconds=0,
        openai_api_key=None,
        anthropic_api_key=None,
    )


@pytest.fixture
def rising_prices() -> list[float]:
    return [100.0 + i for i in range(100)]


@pytest.fixture
def make_container(test_settings: Settings, cache: TTLCache):
    """Factory: container around stub sources and a static FX table."""

    def _make(
        sources: list[PriceSource],
        rates: Optional[dict[str, float]] = None,
        annotator=None,
    ) -> ServiceContainer:
        converter = StaticConverter(test_settings, cache, rates or {"inr": 83.0})
        market = MarketDataService(PriceResolver(sources), converter, cache, test_settings)
        analysis = AnalysisService(market, annotator=annotator, analyze_days=60)
        return ServiceContainer(
            settings=test_settings,
            cache=cache,
            market=market,
            analysis=analysis,
            annotator=annotator,
        )

    return _make


@pytest.fixture
def make_client(test_settings: Settings):
    """Factory: TestClient over create_app with an injected container."""
    clients = []

    def _make(container: ServiceContainer) -> TestClient:
        app = create_app(settings=test_settings, services=container)
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
