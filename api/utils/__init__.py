"""API utility modules."""

from .http_errors import to_http_exception

__all__ = ["to_http_exception"]
