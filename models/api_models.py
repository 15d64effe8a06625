"""
Pydantic data models for API requests and responses.
"""
import json
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TextPart(BaseModel):
    """Text content part of a chat message."""
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ImageURL(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class ImagePart(BaseModel):
    """Image content part of a chat message."""
    model_config = ConfigDict(frozen=True)

    type: Literal["image_url"] = "image_url"
    image_url: ImageURL


ContentPart = Union[TextPart, ImagePart]


class ChatMessage(BaseModel):
    """Chat message model. Messages are immutable once created."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant", "system"]
    content: Union[str, List[ContentPart]]

    def to_provider(self) -> dict:
        """Dump the message in the provider's chat-completion format."""
        return self.model_dump(mode="json")


class UserProfile(BaseModel):
    """Coarse user profile used to personalise the system prompt."""
    model_config = ConfigDict(populate_by_name=True)

    region: str
    cultural_background: str = Field(alias="culturalBackground")
    interests: set[str] = Field(default_factory=set)


def _decode_json_string(value):
    """Fields arrive JSON-encoded inside the data object; accept decoded JSON too."""
    if isinstance(value, str):
        return json.loads(value)
    return value


class ChatData(BaseModel):
    """Side-channel data sent with every chat turn."""
    model_config = ConfigDict(populate_by_name=True)

    base64_images: List[str] = Field(default_factory=list, alias="base64Images")
    user_profile: Optional[UserProfile] = Field(None, alias="userProfile")

    @field_validator("base64_images", mode="before")
    @classmethod
    def decode_images(cls, value):
        if value is None:
            return []
        return _decode_json_string(value)

    @field_validator("user_profile", mode="before")
    @classmethod
    def decode_profile(cls, value):
        if value in (None, "", "null"):
            return None
        return _decode_json_string(value)


class ChatRequest(BaseModel):
    """Chat request: conversation so far, ending with the new user turn."""
    messages: List[ChatMessage] = Field(..., min_length=1)
    data: ChatData = Field(default_factory=ChatData)

    @field_validator("messages")
    @classmethod
    def last_message_from_user(cls, messages: List[ChatMessage]) -> List[ChatMessage]:
        if messages[-1].role != "user":
            raise ValueError("the last message must be a user turn")
        if not isinstance(messages[-1].content, str):
            raise ValueError("the last user turn must be plain text")
        return messages

    @property
    def history(self) -> List[ChatMessage]:
        return self.messages[:-1]

    @property
    def prompt(self) -> str:
        return self.messages[-1].content


class ImageSearchRequest(BaseModel):
    """Image similarity search request."""
    image_data: str = Field(..., min_length=1, description="Data URI or bare base64 image")


class ArtworkMetadata(BaseModel):
    """Descriptive metadata returned for each similar image."""
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    name: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    school: Optional[str] = None
    technique: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None


class SimilarImage(BaseModel):
    """One ranked match from the image similarity service."""
    model_config = ConfigDict(extra="allow")

    image: str
    score: float
    text: ArtworkMetadata = Field(default_factory=ArtworkMetadata)


class ImageSearchResponse(BaseModel):
    results: List[SimilarImage]
