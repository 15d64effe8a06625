"""
HTTP client utilities with connection pooling.
Provides the shared httpx client used for the external context and image search services.
"""
import httpx
from config import Config


class HTTPClientManager:
    """Manages the shared httpx client for upstream services."""

    _upstream_client: httpx.AsyncClient | None = None

    @classmethod
    def get_upstream_client(cls) -> httpx.AsyncClient:
        """
        Get or create the shared client for the context and image search services.

        The client only pools connections; every call carries its own payload,
        so requests never share state through it.

        Returns:
            Configured httpx.AsyncClient
        """
        if cls._upstream_client is None:
            limits = httpx.Limits(
                max_connections=Config.MAX_UPSTREAM_CONNECTIONS,
                max_keepalive_connections=5,
                keepalive_expiry=30.0
            )

            cls._upstream_client = httpx.AsyncClient(
                timeout=Config.UPSTREAM_TIMEOUT,
                follow_redirects=True,
                limits=limits,
                headers={"Content-Type": "application/json"},
                http2=True
            )

        return cls._upstream_client

    @classmethod
    async def close_all(cls) -> None:
        """Close managed clients and clean up connections."""
        if cls._upstream_client is not None:
            await cls._upstream_client.aclose()
            cls._upstream_client = None
