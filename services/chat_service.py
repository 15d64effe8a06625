"""
Chat service containing core chat processing logic.
Handles system prompt composition, message assembly and request preparation.
"""
import json
from typing import Optional

from config import Config
from models.api_models import ChatRequest, ChatMessage, UserProfile
from models.chat_models import ChatContext, ContextResult
from services.context_service import ContextService
from utils.constants import (
    BASE_SYSTEM_PROMPT,
    OUTPUT_FORMAT_PROMPT,
    PERSONALIZATION_PROMPT,
    INTERESTS_LINE,
    CONTEXT_MESSAGE_PREFIX,
)
from utils.data_uri import split_data_uri
from utils.exceptions import MalformedAttachmentError
from utils.logger import app_logger


class ChatService:
    """Service for handling chat logic."""

    @staticmethod
    def get_system_prompt(profile: Optional[UserProfile]) -> str:
        """Build the system prompt, personalised when a profile is given."""
        prompt = BASE_SYSTEM_PROMPT + "\n" + OUTPUT_FORMAT_PROMPT
        personalization = ChatService._format_user_context(profile)
        if personalization:
            prompt += "\n" + personalization
        return prompt

    @staticmethod
    def build_context_message(context: ContextResult) -> dict:
        """Synthetic user turn carrying the top reference description and image."""
        return {
            "role": "user",
            "content": [
                {
                    "type": "text",
                    "text": CONTEXT_MESSAGE_PREFIX + json.dumps(context.text, ensure_ascii=False)
                },
                {
                    "type": "image_url",
                    "image_url": ChatService._image_url(context.image)
                }
            ]
        }

    @staticmethod
    def build_user_message(prompt: str, images: list[str]) -> dict:
        """Current user turn: the text part followed by one image part per attachment."""
        return {
            "role": "user",
            "content": [{"type": "text", "text": prompt}] + [
                {"type": "image_url", "image_url": {"url": image}} for image in images
            ]
        }

    @staticmethod
    def prepare_messages(
        request: ChatRequest,
        system_prompt: str,
        context: ContextResult
    ) -> list:
        """
        Assemble the provider message list.

        Order: system prompt, synthetic context message, prior turns verbatim,
        then the current turn with every pending image attached.
        """
        messages = [{"role": "system", "content": system_prompt}]
        messages.append(ChatService.build_context_message(context))
        messages.extend(ChatService._format_history(request.history))
        messages.append(ChatService.build_user_message(request.prompt, request.data.base64_images))
        return messages

    @staticmethod
    async def prepare_chat(request: ChatRequest) -> ChatContext:
        """
        Run everything that must succeed before the first byte is streamed:
        attachment validation, the context fetch and prompt composition.

        Raises:
            MalformedAttachmentError: no usable attachment or context result
            ContextFetchError: the context service failed
        """
        images = request.data.base64_images
        if not images:
            raise MalformedAttachmentError(
                "At least one image attachment is required",
                status_code=422,
                error_code="malformed_attachment"
            )
        for image in images:
            split_data_uri(image)

        profile = request.data.user_profile
        app_logger.info(
            f"Preparing chat turn: {len(request.history)} prior messages, "
            f"{len(images)} images, profile={'yes' if profile else 'no'}"
        )

        results = await ContextService.fetch_context(images[0])
        context_result = ContextService.top_context(results)

        system_prompt = ChatService.get_system_prompt(profile)
        messages = ChatService.prepare_messages(request, system_prompt, context_result)

        return ChatContext(
            request=request,
            messages=messages,
            system_prompt=system_prompt,
            context_result=context_result,
            profile=profile
        )

    @staticmethod
    def build_response_metadata(context: ChatContext) -> dict:
        """Build response metadata dictionary."""
        return {
            "model": Config.OPENAI_MODEL,
            "context_messages_count": len(context.messages) - 1,
            "images_count": len(context.images),
            "personalized": context.profile is not None,
        }

    @staticmethod
    def _format_user_context(profile: Optional[UserProfile]) -> str:
        """Format the profile into the personalization block."""
        if profile is None:
            return ""
        interests = ", ".join(sorted(i.strip() for i in profile.interests if i.strip()))
        return PERSONALIZATION_PROMPT.format(
            region=profile.region,
            cultural_background=profile.cultural_background,
            interests_line=INTERESTS_LINE.format(interests=interests) if interests else ""
        )

    @staticmethod
    def _format_history(history: list[ChatMessage]) -> list[dict]:
        return [message.to_provider() for message in history]

    @staticmethod
    def _image_url(image) -> dict:
        """The context service returns the image either as a URL string or as {url: ...}."""
        if isinstance(image, dict):
            return image
        return {"url": image}
