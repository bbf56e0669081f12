"""Tests for the RAWG API service request building and decoding."""

import httpx
import pytest

from gamehunt.models import AppConfig
from gamehunt.services import DecodeError, HttpClientService, HttpError, RawgApiService

BASE_URL = "https://api.example.test/api/"

GAMES_PAGE = {
    "count": 1,
    "next": None,
    "previous": None,
    "results": [
        {
            "id": 1,
            "name": "Portal",
            "slug": "portal",
            "background_image": None,
            "rating": 4.5,
            "released": "2007-10-09",
            "genres": [{"id": 7, "name": "Puzzle"}],
        }
    ],
}


class RecordingHandler:
    """MockTransport handler that records requests and answers with fixed JSON."""

    def __init__(self, payload: object, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload, request=request)

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
async def make_api():
    clients: list[HttpClientService] = []

    def factory(handler: RecordingHandler, api_key: str = "secret") -> RawgApiService:
        client = HttpClientService(base_url=BASE_URL, transport=httpx.MockTransport(handler))
        clients.append(client)
        return RawgApiService(http_client=client, config=AppConfig(api_key=api_key, base_url=BASE_URL))

    yield factory

    for client in clients:
        await client.close()


async def test_fetch_games_omits_unset_filters(make_api) -> None:
    handler = RecordingHandler(GAMES_PAGE)
    api = make_api(handler)

    response = await api.fetch_games(page=1, page_size=20)

    assert handler.requests[0].url.path == "/api/games"
    assert handler.last_params == {"key": "secret", "page": "1", "page_size": "20"}
    assert response.results[0].slug == "portal"


async def test_fetch_games_sends_every_filter(make_api) -> None:
    handler = RecordingHandler(GAMES_PAGE)
    api = make_api(handler)

    await api.fetch_games(metacritic="90,100", genre_slug="action", search="zelda", page=3, page_size=10)

    assert handler.last_params == {
        "key": "secret",
        "page": "3",
        "page_size": "10",
        "metacritic": "90,100",
        "genres": "action",
        "search": "zelda",
    }


async def test_fetch_genres(make_api) -> None:
    handler = RecordingHandler({
        "count": 1,
        "next": None,
        "previous": None,
        "results": [{"id": 4, "name": "Action", "slug": "action"}],
    })
    api = make_api(handler)

    response = await api.fetch_genres()

    assert handler.requests[0].url.path == "/api/genres"
    assert handler.last_params == {"key": "secret"}
    assert [genre.slug for genre in response.results] == ["action"]


async def test_fetch_game_detail_uses_slug_in_path(make_api) -> None:
    handler = RecordingHandler({
        "id": 42,
        "slug": "portal-2",
        "name": "Portal 2",
        "rating": 4.6,
    })
    api = make_api(handler)

    response = await api.fetch_game_detail("portal-2")

    assert handler.requests[0].url.path == "/api/games/portal-2"
    assert response.id == 42
    assert response.website is None


async def test_fetch_screenshots(make_api) -> None:
    handler = RecordingHandler({"results": [{"id": 1, "image": "https://media.example.test/1.jpg"}]})
    api = make_api(handler)

    response = await api.fetch_screenshots(42, page_size=10)

    assert handler.requests[0].url.path == "/api/games/42/screenshots"
    assert handler.last_params == {"key": "secret", "page_size": "10"}
    assert len(response.results) == 1


async def test_unexpected_shape_raises_decode_error(make_api) -> None:
    api = make_api(RecordingHandler({"results": "nope"}))

    with pytest.raises(DecodeError) as exc_info:
        await api.fetch_games(page=1, page_size=20)

    assert exc_info.value.url == "games"
    assert isinstance(exc_info.value.original_error, (KeyError, TypeError))


async def test_http_errors_propagate(make_api) -> None:
    api = make_api(RecordingHandler({"detail": "Not found."}, status_code=404))

    with pytest.raises(HttpError) as exc_info:
        await api.fetch_game_detail("missing")

    assert exc_info.value.status_code == 404
