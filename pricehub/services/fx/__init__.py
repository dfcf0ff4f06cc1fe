"""FX conversion from the reference currency into quote currencies."""

from pricehub.services.fx.converter import CurrencyConverter

__all__ = ["CurrencyConverter"]
