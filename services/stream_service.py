"""
Streaming service containing core streaming logic.
Opens the provider completion stream and relays it as plain text or SSE events.
"""
import json
from contextlib import aclosing
from typing import AsyncIterator

import anyio
import httpx
import openai

from config import Config
from models.chat_models import ChatContext
from services.chat_service import ChatService
from utils.exceptions import UpstreamStreamError
from utils.logger import app_logger
from utils.section_parser import StreamingSectionTracker, parse_sections


class StreamService:
    """Service for handling streaming chat operations."""

    @staticmethod
    def send_sse_event(event_type: str, data: dict) -> str:
        """Format data as Server-Sent Events (SSE) format."""
        return f"event: {event_type}\ndata: {json.dumps(data, separators=(',', ':'))}\n\n"

    @staticmethod
    async def close_client(client) -> None:
        """Close a per-request provider client, even while the request is being cancelled."""
        try:
            with anyio.CancelScope(shield=True):
                await client.close()
        except Exception as e:
            app_logger.warning(f"Error closing completion client: {e}")

    @staticmethod
    async def open_completion_stream(client: openai.AsyncOpenAI, messages: list):
        """
        Start a streamed chat completion.

        Called before the HTTP response starts, so a provider refusal still
        reaches the client as an error status. The provider client is closed
        when the stream cannot be opened.

        Raises:
            UpstreamStreamError: the provider rejected the request or was unreachable
        """
        try:
            return await client.chat.completions.create(
                model=Config.OPENAI_MODEL,
                messages=messages,
                max_tokens=Config.MAX_OUTPUT_TOKENS,
                stream=True
            )
        except openai.APIError as e:
            app_logger.error(f"Completion request failed: {e}")
            await StreamService.close_client(client)
            raise UpstreamStreamError(f"Completion provider error: {e}") from e

    @staticmethod
    async def relay_tokens(stream, client=None) -> AsyncIterator[str]:
        """
        Yield text deltas from the provider stream as they arrive.

        The provider stream, and the per-request client that opened it, are closed
        however the relay ends, including when the client disconnects and the
        surrounding task is cancelled.

        Raises:
            UpstreamStreamError: the provider failed after streaming started
        """
        token_count = 0
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                token = chunk.choices[0].delta.content
                if token:
                    token_count += 1
                    yield token
        except (openai.APIError, httpx.HTTPError) as e:
            app_logger.error(f"Completion stream failed after {token_count} tokens: {e}")
            raise UpstreamStreamError(f"Completion stream interrupted: {e}") from e
        finally:
            try:
                with anyio.CancelScope(shield=True):
                    await stream.close()
            except Exception as e:
                app_logger.warning(f"Error closing stream: {e}")
            if client is not None:
                await StreamService.close_client(client)
            app_logger.info(f"Completion stream closed after {token_count} tokens")

    @staticmethod
    async def stream_text(stream, client=None) -> AsyncIterator[str]:
        """Relay the answer as plain text. A mid-stream failure ends the stream early."""
        try:
            async with aclosing(StreamService.relay_tokens(stream, client)) as tokens:
                async for token in tokens:
                    yield token
        except UpstreamStreamError as e:
            app_logger.warning(f"Plain-text stream truncated: {e}")

    @staticmethod
    async def stream_events(stream, context: ChatContext, client=None) -> AsyncIterator[str]:
        """
        Relay the answer as SSE events.

        Yields:
            status, section and token events, then done with the parsed answer,
            or error if the provider fails mid-stream
        """
        yield StreamService.send_sse_event("status", {"stage": "generating"})

        tracker = StreamingSectionTracker()
        full_response = ""

        try:
            async with aclosing(StreamService.relay_tokens(stream, client)) as tokens:
                async for token in tokens:
                    for kind, value in tracker.process_token(token):
                        if kind == "section":
                            yield StreamService.send_sse_event("section", {"name": value})
                        else:
                            full_response += value
                            yield StreamService.send_sse_event("token", {"content": value})
        except UpstreamStreamError as e:
            yield StreamService.send_sse_event("error", {
                "error": e.error_code,
                "message": e.message,
                "partial_response": full_response
            })
            return

        remaining = tracker.flush()
        if remaining:
            full_response += remaining
            yield StreamService.send_sse_event("token", {"content": remaining})

        metadata = ChatService.build_response_metadata(context)
        metadata["full_response"] = full_response
        metadata["sections"] = parse_sections(full_response).to_dict()
        yield StreamService.send_sse_event("done", metadata)
