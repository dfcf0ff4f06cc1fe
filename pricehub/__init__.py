"""
PriceHub

Multi-source crypto price resolution plus the Krypto technical-analysis
signal engine.
"""

__version__ = "0.1.0"
