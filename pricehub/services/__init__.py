"""
PriceHub Services

Service layer containing all business logic.
"""

from pricehub.services.base import (
    BaseService,
    ServiceError,
    SourceError,
    AllSourcesExhausted,
    ConversionError,
    ValidationError,
    NarrativeError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "SourceError",
    "AllSourcesExhausted",
    "ConversionError",
    "ValidationError",
    "NarrativeError",
]
