"""
Image similarity service.
Finds artworks that look like the uploaded image using the external image search API.
"""
import httpx
from pydantic import ValidationError

from config import Config
from models.api_models import SimilarImage
from utils.data_uri import strip_data_uri_header
from utils.exceptions import ImageSearchError
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


class ImageSearchService:
    """Service for image similarity search."""

    @staticmethod
    async def search(image_data: str) -> list[SimilarImage]:
        """
        Search for artworks similar to an image.

        Args:
            image_data: Data URI or bare base64 image

        Returns:
            Matches in the order returned by the service (best first)
        """
        payload = {"question": "", "image_data": strip_data_uri_header(image_data)}

        try:
            client = HTTPClientManager.get_upstream_client()
            response = await client.post(Config.IMAGE_SEARCH_URL, json=payload)
        except httpx.HTTPError as e:
            app_logger.error(f"Error fetching similar images: {e!r}")
            raise ImageSearchError("Failed to fetch similar images") from e

        if not response.is_success:
            app_logger.error(f"Image search returned {response.status_code} {response.reason_phrase}")
            raise ImageSearchError(f"Failed to fetch similar images: {response.reason_phrase or response.status_code}")

        try:
            data = response.json()
            if not isinstance(data, list):
                raise ImageSearchError("Image search returned an unexpected payload")
            results = [SimilarImage.model_validate(item) for item in data]
        except (ValueError, ValidationError) as e:
            app_logger.error(f"Image search returned an invalid payload: {e}")
            raise ImageSearchError("Image search returned an unexpected payload") from e

        app_logger.info(f"Image search returned {len(results)} matches")
        return results
