import pytest
from pydantic import ValidationError

from models.api_models import ChatMessage, ChatRequest, UserProfile


def test_chat_request_decodes_json_encoded_data(image_data_uri):
    """base64Images and userProfile arrive as JSON strings inside the data object."""
    request = ChatRequest.model_validate({
        "messages": [{"role": "user", "content": "Classify this artefact", "id": "abc"}],
        "data": {
            "base64Images": f'["{image_data_uri}"]',
            "userProfile": '{"region": "Kerala", "culturalBackground": "Malayali", "interests": ["bronzes", "bronzes"]}'
        }
    })

    assert request.data.base64_images == [image_data_uri]
    assert request.data.user_profile == UserProfile(region="Kerala", culturalBackground="Malayali", interests={"bronzes"})
    assert request.prompt == "Classify this artefact"
    assert request.history == []


def test_chat_request_accepts_decoded_data(image_data_uri):
    request = ChatRequest.model_validate({
        "messages": [{"role": "user", "content": "hi"}],
        "data": {"base64Images": [image_data_uri], "userProfile": None}
    })
    assert request.data.base64_images == [image_data_uri]
    assert request.data.user_profile is None


@pytest.mark.parametrize("payload", [
    {"messages": []},
    {"messages": [{"role": "assistant", "content": "hello"}]},
    {"messages": [{"role": "robot", "content": "hello"}]},
    {"messages": [{"role": "user", "content": "hi"}], "data": {"base64Images": "not json"}},
    {"messages": [{"role": "user", "content": "hi"}], "data": {"userProfile": '{"region": "Kerala"}'}},
])
def test_chat_request_rejects_invalid_payloads(payload):
    with pytest.raises(ValidationError):
        ChatRequest.model_validate(payload)


def test_chat_message_role_is_immutable():
    message = ChatMessage(role="user", content="hi")
    with pytest.raises(ValidationError):
        message.role = "assistant"


def test_chat_message_dumps_parts_in_provider_format():
    message = ChatMessage.model_validate({
        "role": "user",
        "content": [
            {"type": "text", "text": "look"},
            {"type": "image_url", "image_url": {"url": "https://example.com/a.jpg"}}
        ]
    })
    assert message.to_provider() == {
        "role": "user",
        "content": [
            {"type": "text", "text": "look"},
            {"type": "image_url", "image_url": {"url": "https://example.com/a.jpg"}}
        ]
    }
