"""SQLAlchemy ORM models."""

from .holding import Holding
from .portfolio_asset import PortfolioAsset
from .stock_price import StockPrice
from .transaction import Transaction
from .utils import generate_uuid

__all__ = ["Holding", "PortfolioAsset", "StockPrice", "Transaction", "generate_uuid"]
