"""
Models package exports.
"""
from models.api_models import (
    ChatMessage,
    ChatData,
    ChatRequest,
    UserProfile,
    ImageSearchRequest,
    ImageSearchResponse,
    SimilarImage,
)
from models.chat_models import ChatContext, ContextResult, ParsedAnswer, Section

__all__ = [
    'ChatMessage',
    'ChatData',
    'ChatRequest',
    'UserProfile',
    'ImageSearchRequest',
    'ImageSearchResponse',
    'SimilarImage',
    'ChatContext',
    'ContextResult',
    'ParsedAnswer',
    'Section'
]
