"""
CONTRACT 1: Price Resolution Layer

Output of every Source Adapter: a canonical PriceSeries of
(timestamp ms, price) points in the reference currency.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """Single (timestamp, price) sample."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., description="Milliseconds since epoch")
    price: float = Field(..., gt=0)


class PriceSeries(BaseModel):
    """
    Ordered price points for one asset, one currency, one lookback window.

    Never mutated after creation; derived views come from prices(),
    as_pairs() and scaled().
    """

    model_config = ConfigDict(frozen=True)

    asset_id: str
    currency: str = "usd"
    days: int
    source: str = Field(..., description="Provider that served the series")
    points: list[PricePoint] = Field(..., min_length=1)

    def prices(self) -> list[float]:
        return [p.price for p in self.points]

    @property
    def latest(self) -> float:
        return self.points[-1].price

    def as_pairs(self) -> list[tuple[int, float]]:
        """[[ts_ms, price], ...] as served by /api/compare."""
        return [(p.timestamp, p.price) for p in self.points]

    def scaled(self, rate: float, currency: str) -> "PriceSeries":
        """Same series expressed in another currency."""
        if rate == 1.0 and currency == self.currency:
            return self
        return PriceSeries(
            asset_id=self.asset_id,
            currency=currency,
            days=self.days,
            source=self.source,
            points=[PricePoint(timestamp=p.timestamp, price=p.price * rate) for p in self.points],
        )


class ResolvedSpot(BaseModel):
    """Spot price in the reference currency plus the provider that served it."""

    model_config = ConfigDict(frozen=True)

    asset_id: str
    price: float = Field(..., gt=0)
    source: str


# =============================================================================
# HTTP payloads
# =============================================================================


class PriceResponse(BaseModel):
    """GET /api/price"""

    ok: bool = True
    data: dict[str, dict[str, Any]]
    cached: Optional[bool] = None


class CompareItem(BaseModel):
    """One asset in GET /api/compare."""

    id: str
    prices: list[tuple[int, float]] = Field(default_factory=list)
    error: Optional[str] = None


class CompareResponse(BaseModel):
    """GET /api/compare"""

    ok: bool = True
    items: list[CompareItem]
    vs: str
    days: int
    cached: Optional[bool] = None
