"""
ConnectionManager - Centralized PocketBase connection management.

Provides a shared, authenticated PocketBaseStore for scripts and services
that run outside the API process.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from pocketbase import PocketBase

from .pocketbase_store import PocketBaseStore

logger = logging.getLogger(__name__)


@dataclass
class ConnectionConfig:
    """Configuration for PocketBase connections."""

    url: str = "http://127.0.0.1:8090"
    admin_email: str | None = None
    admin_password: str | None = None

    @classmethod
    def from_env(cls) -> ConnectionConfig:
        """Load configuration from environment variables."""
        return cls(
            url=os.environ.get("POCKETBASE_URL", "http://127.0.0.1:8090"),
            admin_email=os.environ.get("POCKETBASE_ADMIN_EMAIL"),
            admin_password=os.environ.get("POCKETBASE_ADMIN_PASSWORD"),
        )


class ConnectionManager:
    """
    Manages the shared PocketBase connection.

    Usage:
        manager = ConnectionManager.get_instance()
        store = manager.get_store()

        # Reset singleton (for testing)
        ConnectionManager.reset()
    """

    _instance: ConnectionManager | None = None

    def __init__(self, config: ConnectionConfig | None = None):
        self._config = config or ConnectionConfig.from_env()
        self._store: PocketBaseStore | None = None

    @classmethod
    def get_instance(cls, config: ConnectionConfig | None = None) -> ConnectionManager:
        """
        Get the singleton instance.

        Args:
            config: Optional config for first initialization only.
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance. Used for testing."""
        cls._instance = None

    def get_store(self) -> PocketBaseStore:
        """Get the shared store, connecting on first use."""
        if self._store is None:
            self._store = PocketBaseStore(self._create_client())
        return self._store

    def _create_client(self) -> PocketBase:
        pb = PocketBase(self._config.url)
        if self._config.admin_email and self._config.admin_password:
            self._authenticate(pb)
        else:
            logger.warning("Admin credentials not provided, skipping authentication")
        return pb

    def _authenticate(self, pb: PocketBase) -> None:
        """Authenticate through the _superusers collection (PocketBase 0.23+)."""
        try:
            pb.collection("_superusers").auth_with_password(self._config.admin_email, self._config.admin_password)
            logger.debug("Authenticated via _superusers collection")
        except Exception as e:
            logger.error(f"Authentication failed: {e}")
            raise
