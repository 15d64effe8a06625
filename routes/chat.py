"""
Route handlers for the vision chat endpoint.
Handles /api/chat-with-vision, which relays the answer as a plain text stream.
"""
from fastapi import APIRouter
from fastapi.responses import StreamingResponse
import openai

from config import Config
from models.api_models import ChatRequest
from services.chat_service import ChatService
from services.stream_service import StreamService
from utils.exceptions import BridgeError
from utils.logger import app_logger

router = APIRouter()

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no"
}


def create_completion_client() -> openai.AsyncOpenAI:
    """Create an independent provider client for one request."""
    if not Config.OPENAI_API_KEY:
        app_logger.error("CRITICAL: OPENAI_API_KEY not set in .env file!")
        raise BridgeError(
            "Server misconfiguration: OPENAI_API_KEY not set.",
            status_code=500,
            error_code="server_error"
        )
    return openai.AsyncOpenAI(api_key=Config.OPENAI_API_KEY, timeout=Config.COMPLETION_TIMEOUT)


@router.post("/api/chat-with-vision")
async def chat_with_vision(request: ChatRequest):
    """
    Chat about the attached images.

    The context fetch and the provider call are both set up before the response
    starts, so their failures are returned as JSON errors with no streamed bytes.
    The provider client is only created once the context is ready and is closed
    by the relay.
    """
    context = await ChatService.prepare_chat(request)
    client = create_completion_client()
    stream = await StreamService.open_completion_stream(client, context.messages)
    app_logger.info(f"Streaming answer for {len(context.images)} images ({len(context.messages)} messages)")

    return StreamingResponse(
        StreamService.stream_text(stream, client),
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS
    )
