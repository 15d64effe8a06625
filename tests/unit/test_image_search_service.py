import httpx
import pytest

from config import Config
from services.image_search import ImageSearchService
from tests.fixtures.responses import IMAGE_SEARCH_RESPONSE, SAMPLE_IMAGE_BYTES_B64
from utils.exceptions import ImageSearchError


@pytest.fixture(autouse=True)
def use_mock_upstream(monkeypatch, mock_upstream_client):
    monkeypatch.setattr("utils.http_client.HTTPClientManager.get_upstream_client", lambda: mock_upstream_client)
    return mock_upstream_client


@pytest.mark.anyio
async def test_search_returns_ranked_matches(mock_upstream_client, image_data_uri):
    """Given a successful response, search should return matches in upstream order."""
    mock_upstream_client.post.return_value = httpx.Response(200, json=IMAGE_SEARCH_RESPONSE)

    results = await ImageSearchService.search(image_data_uri)

    assert [r.score for r in results] == [0.93, 0.71]
    assert results[0].text.title == "Nataraja, Lord of the Dance"
    assert results[0].text.model_extra["museum"] == "Government Museum, Chennai"
    assert results[1].text.name == "Somaskanda"
    mock_upstream_client.post.assert_awaited_once_with(
        Config.IMAGE_SEARCH_URL,
        json={"question": "", "image_data": SAMPLE_IMAGE_BYTES_B64}
    )


@pytest.mark.parametrize("response, exception", [
    (httpx.Response(500), None),
    (httpx.Response(200, json={"error": "not a list"}), None),
    (httpx.Response(200, json=[{"score": 0.5}]), None),
    (None, httpx.ReadTimeout("timed out")),
])
@pytest.mark.anyio
async def test_search_raises_image_search_error(mock_upstream_client, image_data_uri, response, exception):
    """Upstream failures and unexpected payloads should raise ImageSearchError."""
    if exception:
        mock_upstream_client.post.side_effect = exception
    else:
        mock_upstream_client.post.return_value = response

    with pytest.raises(ImageSearchError) as exc_info:
        await ImageSearchService.search(image_data_uri)

    assert exc_info.value.error_code == "image_search_failed"
