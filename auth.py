"""
Optional shared-key middleware.
When API_KEY is configured every request must carry it in the X-API-Key header;
when it is not, the service stays open like the browser app expects.
"""
import os
import secrets
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from utils.logger import app_logger


class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Checks X-API-Key header against configured API_KEY.
    """

    EXCLUDED_PATHS = {"/", "/docs", "/openapi.json", "/redoc"}
    API_KEY: str = os.getenv("API_KEY", "")

    async def dispatch(self, request: Request, call_next):
        """
        Process each request and verify API key.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from next handler or error response
        """
        if not self.API_KEY:
            return await call_next(request)

        # CORS preflight requests never carry custom headers
        if request.url.path in self.EXCLUDED_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        client_host = request.client.host if request.client else "unknown"

        if not api_key:
            app_logger.warning(f"Unauthorized request from {client_host} - Missing API key")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "detail": "Missing API key. Include 'X-API-Key' header in your request.",
                    "error": "unauthorized"
                },
                headers={"WWW-Authenticate": "ApiKey"},
            )

        if not secrets.compare_digest(api_key, self.API_KEY):
            app_logger.warning(f"Forbidden request from {client_host} - Invalid API key")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={
                    "detail": "Invalid API key",
                    "error": "forbidden"
                },
            )

        return await call_next(request)
