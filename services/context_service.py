"""
Context service for grounding answers with reference material.
Asks the external "find similar context" service for artifacts similar to the uploaded image.
"""
from typing import Any

import httpx

from config import Config
from models.chat_models import ContextResult
from utils.data_uri import strip_data_uri_header
from utils.exceptions import ContextFetchError, MalformedAttachmentError
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


class ContextService:
    """Service for fetching similar-artifact context."""

    @staticmethod
    async def fetch_context(base64_image: str) -> list[Any]:
        """
        Fetch ranked context for one image.

        Args:
            base64_image: Image in data-URI form

        Returns:
            Parsed JSON array from the context service, best match first

        Raises:
            ContextFetchError: on transport failure or a non-success status
        """
        payload = {
            "question": Config.CONTEXT_QUESTION,
            "image_data": strip_data_uri_header(base64_image),
        }

        try:
            client = HTTPClientManager.get_upstream_client()
            response = await client.post(Config.CONTEXT_SERVICE_URL, json=payload)
        except httpx.HTTPError as e:
            app_logger.error(f"Error fetching context messages: {e!r}")
            raise ContextFetchError("Failed to fetch context messages") from e

        if not response.is_success:
            status_text = response.reason_phrase or str(response.status_code)
            app_logger.error(f"Context service returned {response.status_code} {status_text}")
            raise ContextFetchError(
                f"Network response was not ok: {status_text}",
                status_text=status_text
            )

        try:
            data = response.json()
        except ValueError as e:
            app_logger.error(f"Context service returned invalid JSON: {e}")
            raise ContextFetchError("Failed to fetch context messages") from e

        app_logger.info(f"Context service returned {len(data) if isinstance(data, list) else 0} results")
        return data

    @staticmethod
    def top_context(results: Any) -> ContextResult:
        """
        Select the best-ranked context.

        Raises:
            MalformedAttachmentError: when the result is not a non-empty list whose
                first element has both 'text' and 'image'
        """
        if not isinstance(results, list) or not results:
            app_logger.error("Context service returned no results for the attached image")
            raise MalformedAttachmentError("No reference context was found for the attached image")

        best = results[0]
        if not isinstance(best, dict) or "text" not in best or "image" not in best:
            app_logger.error(f"Context result has an unexpected shape: {str(best)[:200]}")
            raise MalformedAttachmentError("Reference context for the attached image is malformed")

        return ContextResult(text=best["text"], image=best["image"])
