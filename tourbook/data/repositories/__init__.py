"""Data repositories for products, booking requests and request logs."""

from __future__ import annotations

from .product_repository import ProductFilters, ProductRepository
from .request_log_repository import RequestLogRepository
from .request_repository import RequestRepository

__all__ = [
    "ProductFilters",
    "ProductRepository",
    "RequestLogRepository",
    "RequestRepository",
]
