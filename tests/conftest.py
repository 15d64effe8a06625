import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fixtures.responses import SAMPLE_IMAGE_DATA_URI, CONTEXT_SERVICE_RESPONSE


@pytest.fixture
def image_data_uri():
    return SAMPLE_IMAGE_DATA_URI


@pytest.fixture
def user_profile():
    from models.api_models import UserProfile
    return UserProfile(region="Kerala", culturalBackground="Malayali", interests={"bronzes", "temple art"})


@pytest.fixture
def chat_request(image_data_uri):
    """Standard ChatRequest for testing: one image, no history, no profile."""
    from models.api_models import ChatRequest
    return ChatRequest.model_validate({
        "messages": [{"role": "user", "content": "Classify this artefact"}],
        "data": {"base64Images": f'["{image_data_uri}"]'}
    })


@pytest.fixture
def context_result():
    from models.chat_models import ContextResult
    top = CONTEXT_SERVICE_RESPONSE[0]
    return ContextResult(text=top["text"], image=top["image"])


@pytest.fixture
def chat_context(chat_request, context_result):
    """Standard ChatContext for testing."""
    from models.chat_models import ChatContext
    from services.chat_service import ChatService
    system_prompt = ChatService.get_system_prompt(None)
    return ChatContext(
        request=chat_request,
        messages=ChatService.prepare_messages(chat_request, system_prompt, context_result),
        system_prompt=system_prompt,
        context_result=context_result,
    )


@pytest.fixture
def completion_client_builder():
    from tests.fixtures.mock_clients import CompletionClientBuilder
    return CompletionClientBuilder()


@pytest.fixture
def mock_upstream_client():
    """Mock pooled httpx client for the context / image search services."""
    client = MagicMock()
    client.post = AsyncMock()
    return client


@pytest.fixture
def auth_headers():
    """Authentication headers for API requests."""
    return {"X-API-Key": "test-key"}


@pytest.fixture
def build_app(monkeypatch):
    """Build an app with the chat routers, error handlers and a mocked provider client."""
    from fastapi import FastAPI
    from fastapi.exceptions import RequestValidationError
    from fastapi.testclient import TestClient
    from auth import APIKeyMiddleware
    from config import Config
    from main import bridge_error_handler, validation_exception_handler
    from routes import chat, chat_stream, image_search
    from utils.exceptions import BridgeError

    monkeypatch.setattr(Config, "OPENAI_API_KEY", "sk-test")

    def _build(completion_client=None, api_key=""):
        monkeypatch.setattr(APIKeyMiddleware, "API_KEY", api_key)
        if completion_client is not None:
            monkeypatch.setattr("routes.chat.openai.AsyncOpenAI", lambda **kwargs: completion_client)

        app = FastAPI()
        app.add_middleware(APIKeyMiddleware)
        app.add_exception_handler(RequestValidationError, validation_exception_handler)
        app.add_exception_handler(BridgeError, bridge_error_handler)
        app.include_router(chat.router)
        app.include_router(chat_stream.router)
        app.include_router(image_search.router)
        return TestClient(app)

    return _build
