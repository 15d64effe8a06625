"""
Data models for chat processing.
Contains the request-scoped context object, context results and parsed answers.
"""
from dataclasses import dataclass, field
from typing import Any, Optional

from models.api_models import ChatRequest, UserProfile
from utils.constants import UNSTRUCTURED_SECTION


@dataclass(frozen=True)
class ContextResult:
    """Top-ranked reference returned by the context service."""
    text: Any
    image: Any


@dataclass
class ChatContext:
    """
    Context object containing all chat processing state for one request.
    Built completely before the first byte is streamed.
    """
    request: ChatRequest
    messages: list
    system_prompt: str
    context_result: ContextResult
    profile: Optional[UserProfile] = None

    @property
    def images(self) -> list[str]:
        return self.request.data.base64_images

    @property
    def prompt(self) -> str:
        return self.request.prompt


@dataclass
class Section:
    name: str
    content: str


@dataclass
class ParsedAnswer:
    """Model answer split into labelled sections, or a single unstructured section."""
    structured: bool
    sections: list[Section] = field(default_factory=list)
    preamble: str = ""

    @classmethod
    def unstructured(cls, text: str) -> "ParsedAnswer":
        return cls(structured=False, sections=[Section(UNSTRUCTURED_SECTION, text.strip())])

    def get(self, name: str) -> str | None:
        """Content of the first section with this name."""
        for section in self.sections:
            if section.name == name:
                return section.content
        return None

    def to_dict(self) -> dict:
        return {
            "structured": self.structured,
            "preamble": self.preamble,
            "sections": [{"name": s.name, "content": s.content} for s in self.sections],
        }
