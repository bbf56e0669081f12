"""Tests for repositories, use cases and the Result container."""

from unittest.mock import AsyncMock

import pytest

from gamehunt.models import Game, GameDetail, Genre, Result, Screenshot
from gamehunt.models.responses import (
    GameDetailResponse,
    GameListResponse,
    GameResponse,
    GenreListResponse,
    GenreModel,
    ScreenshotItemResponse,
    ScreenshotListResponse,
)
from gamehunt.services.errors import DecodeError, HttpError, NetworkError
from gamehunt.services.repositories import (
    POPULAR_METACRITIC_RANGE,
    GameDetailRepository,
    GameRepository,
    GenreRepository,
)
from gamehunt.services.usecases import (
    GetGameDetailUseCase,
    GetGameScreenshotsUseCase,
    GetGenresUseCase,
    GetPopularGamesUseCase,
    SearchGamesUseCase,
)


def game_response(game_id: int) -> GameResponse:
    return GameResponse(
        id=game_id,
        name=f"Game {game_id}",
        slug=f"game-{game_id}",
        background_image=None,
        rating=4.0,
        released="2020-01-02",
    )


@pytest.fixture
def api() -> AsyncMock:
    return AsyncMock()


class TestGenreRepository:
    async def test_genres_keep_server_order(self, api: AsyncMock) -> None:
        api.fetch_genres.return_value = GenreListResponse(
            count=2,
            next=None,
            previous=None,
            results=[
                GenreModel(id=5, name="RPG", slug="role-playing-games-rpg"),
                GenreModel(id=4, name="Action", slug="action", image_background="https://img/a.jpg"),
            ],
        )

        result = await GenreRepository(api).get_genres()

        assert result.is_success
        assert result.value == [
            Genre(5, "RPG", "role-playing-games-rpg", ""),
            Genre(4, "Action", "action", "https://img/a.jpg"),
        ]

    @pytest.mark.parametrize(
        "error",
        [
            NetworkError("Unable to connect"),
            HttpError("Authentication failed", status_code=401),
            DecodeError("Unexpected format"),
        ],
    )
    async def test_failures_become_results(self, api: AsyncMock, error: Exception) -> None:
        api.fetch_genres.side_effect = error

        result = await GenreRepository(api).get_genres()

        assert result.is_failure
        assert result.error is error
        assert result.get_or_none() is None

    async def test_genres_are_fetched_on_every_call(self, api: AsyncMock) -> None:
        api.fetch_genres.return_value = GenreListResponse(count=0, next=None, previous=None, results=[])
        repository = GenreRepository(api)

        await repository.get_genres()
        await repository.get_genres()

        assert api.fetch_genres.await_count == 2


class TestGameRepository:
    async def test_popular_games_request(self, api: AsyncMock) -> None:
        api.fetch_games.return_value = GameListResponse(
            count=2, next=None, previous=None, results=[game_response(1), game_response(2)]
        )

        result = await GameRepository(api).get_popular_games()

        api.fetch_games.assert_awaited_once_with(metacritic="90,100", page=1, page_size=10)
        assert POPULAR_METACRITIC_RANGE == "90,100"
        assert [game.id for game in result.value or []] == [1, 2]

    async def test_popular_games_failure(self, api: AsyncMock) -> None:
        api.fetch_games.side_effect = NetworkError("timeout")

        result = await GameRepository(api).get_popular_games()

        assert result.is_failure
        assert str(result.error) == "timeout"

    async def test_search_is_lazy_and_pages_with_filters(self, api: AsyncMock) -> None:
        api.fetch_games.return_value = GameListResponse(
            count=1, next=None, previous=None, results=[game_response(7)]
        )

        pager = GameRepository(api).search_games(genre_slug="action", search="zelda")
        api.fetch_games.assert_not_awaited()

        data = await pager.refresh()

        api.fetch_games.assert_awaited_once_with(genre_slug="action", search="zelda", page=1, page_size=20)
        assert [game.slug for game in data.items] == ["game-7"]


class TestGameDetailRepository:
    async def test_detail_is_mapped(self, api: AsyncMock) -> None:
        api.fetch_game_detail.return_value = GameDetailResponse(
            id=42,
            slug="portal-2",
            name="Portal 2",
            description_raw="Portals.",
            background_image=None,
            rating=4.6,
            dominant_color="0f0f0f",
            genres=None,
            website=None,
        )

        result = await GameDetailRepository(api).get_game_detail("portal-2")

        api.fetch_game_detail.assert_awaited_once_with("portal-2")
        assert result.value == GameDetail(
            id=42,
            slug="portal-2",
            name="Portal 2",
            description="Portals.",
            background_image="",
            rating=4.6,
            dominant_color="0f0f0f",
            genres=[],
            website="",
        )

    async def test_screenshots_request_ten(self, api: AsyncMock) -> None:
        api.fetch_screenshots.return_value = ScreenshotListResponse(
            results=[ScreenshotItemResponse(id=1, image="https://img/1.jpg")]
        )

        result = await GameDetailRepository(api).get_game_screenshots(42)

        api.fetch_screenshots.assert_awaited_once_with(42, page_size=10)
        assert result.value == [Screenshot(1, "https://img/1.jpg")]

    async def test_detail_failure(self, api: AsyncMock) -> None:
        api.fetch_game_detail.side_effect = HttpError("The requested game was not found.", status_code=404)

        result = await GameDetailRepository(api).get_game_detail("missing")

        assert result.is_failure
        assert isinstance(result.error, HttpError)

    async def test_detail_is_fetched_on_every_call(self, api: AsyncMock) -> None:
        api.fetch_game_detail.side_effect = NetworkError("timeout")
        repository = GameDetailRepository(api)

        await repository.get_game_detail("portal-2")
        await repository.get_game_detail("portal-2")

        assert api.fetch_game_detail.await_count == 2


class TestUseCases:
    async def test_use_cases_forward_to_repositories(self) -> None:
        genres = AsyncMock()
        genres.get_genres.return_value = Result.success([])
        games = AsyncMock()
        games.get_popular_games.return_value = Result.success([])
        games.search_games = lambda genre_slug=None, search=None: ("pager", genre_slug, search)
        details = AsyncMock()
        details.get_game_detail.return_value = Result.failure(NetworkError("down"))
        details.get_game_screenshots.return_value = Result.success([])

        assert (await GetGenresUseCase(genres)()).is_success
        assert (await GetPopularGamesUseCase(games)()).value == []
        assert SearchGamesUseCase(games)(genre_slug="rpg", search="") == ("pager", "rpg", "")
        assert (await GetGameDetailUseCase(details)("x")).is_failure
        assert (await GetGameScreenshotsUseCase(details)(42)).is_success

        details.get_game_detail.assert_awaited_once_with("x")
        details.get_game_screenshots.assert_awaited_once_with(42)


class TestResult:
    def test_success(self) -> None:
        result: Result[int] = Result.success(3)
        assert result.is_success and not result.is_failure
        assert result.get_or_none() == 3
        assert result.exception_or_none() is None
        assert result.fold(lambda v: v * 2, lambda e: -1) == 6

    def test_failure(self) -> None:
        error = NetworkError("down")
        result: Result[int] = Result.failure(error)
        assert result.is_failure
        assert result.get_or_none() is None
        assert result.exception_or_none() is error
        assert result.fold(lambda v: "ok", lambda e: str(e)) == "down"

    def test_success_may_hold_none(self) -> None:
        result: Result[None] = Result.success(None)
        assert result.is_success
        assert result.fold(lambda v: "ok", lambda e: "error") == "ok"


def test_game_defaults() -> None:
    game = Game(1, "X", "x", "", 4.5)
    assert game.release_date is None
    assert game.genres == []
