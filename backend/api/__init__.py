"""API route handlers."""
from . import assets, market_data, portfolio

__all__ = ["assets", "market_data", "portfolio"]
