"""
Route handlers for streaming chat with structured events.
Handles the /api/chat-with-vision/stream endpoint (Server-Sent Events).
"""
from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from models.api_models import ChatRequest
from routes.chat import STREAM_HEADERS, create_completion_client
from services.chat_service import ChatService
from services.stream_service import StreamService

router = APIRouter()


@router.post("/api/chat-with-vision/stream")
async def chat_with_vision_stream(request: ChatRequest):
    """
    Streaming chat endpoint with section and error events.
    """
    context = await ChatService.prepare_chat(request)
    client = create_completion_client()
    stream = await StreamService.open_completion_stream(client, context.messages)

    return StreamingResponse(
        StreamService.stream_events(stream, context, client),
        media_type="text/event-stream",
        headers={**STREAM_HEADERS, "Connection": "keep-alive"}
    )
