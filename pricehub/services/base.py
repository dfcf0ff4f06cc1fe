"""
Base Service Interface and error taxonomy.

All services inherit from BaseService. Every error the core raises derives
from ServiceError so the HTTP layer can render it uniformly.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseService(ABC):
    """
    Base class for all services.

    Each service:
    - Has a name used in logs and error messages
    - Can check its health
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if service is healthy and can process requests."""
        pass


class ServiceError(Exception):
    """Base exception for service errors."""

    http_status: int = 500

    def __init__(self, service_name: str, message: str, details: Optional[dict] = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class SourceError(ServiceError):
    """A single upstream provider failed. Recoverable: the resolver moves on."""

    def __init__(self, provider: str, reason: str, details: Optional[dict] = None):
        self.provider = provider
        self.reason = reason
        super().__init__(provider, reason, details)


class AllSourcesExhausted(ServiceError):
    """Every adapter in the fallback chain failed for one asset."""

    def __init__(self, asset_id: str, capability: str = "price", details: Optional[dict] = None):
        self.asset_id = asset_id
        self.capability = capability
        super().__init__(
            "PriceResolver",
            f"all_{capability}_sources_failed for {asset_id}",
            details,
        )


class ConversionError(ServiceError):
    """FX rate for the quote currency is unavailable."""

    def __init__(self, currency: str, reason: str = "fx_failed"):
        self.currency = currency
        super().__init__("CurrencyConverter", f"{reason} ({currency})")


class ValidationError(ServiceError):
    """Malformed caller input. Never retried."""

    http_status = 400

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Validation", message, details)


class NarrativeError(ServiceError):
    """Text generation failed. Always recovered by the annotator."""

    def __init__(self, message: str):
        super().__init__("NarrativeAnnotator", message)
