"""
Route handlers for image similarity search.
"""
from fastapi import APIRouter

from models.api_models import ImageSearchRequest, ImageSearchResponse
from services.image_search import ImageSearchService

router = APIRouter()


@router.post("/api/image-search", response_model=ImageSearchResponse)
async def image_search(request: ImageSearchRequest):
    """Find artworks similar to the uploaded image."""
    results = await ImageSearchService.search(request.image_data)
    return ImageSearchResponse(results=results)
