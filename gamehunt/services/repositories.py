"""Repositories wrapping catalog API calls.

Single-shot operations issue exactly one request, map the response to
domain models and return a ``Result``. Errors never escape: they are
handed to the error handling service for logging and returned as a
failure carrying the original exception.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from ..models import Game, GameDetail, Genre, Result, Screenshot
from .errors import handle_error
from .mappers import game_detail_to_domain, game_to_domain, genre_to_domain, screenshot_to_domain
from .pagination import SEARCH_PAGE_SIZE, GamesPagingSource, Pager, PagingConfig
from .rawg_api import RawgApiService

log = structlog.stdlib.get_logger()

T = TypeVar("T")

POPULAR_METACRITIC_RANGE = "90,100"
POPULAR_PAGE_SIZE = 10
SCREENSHOT_PAGE_SIZE = 10


async def _run_catching(
    operation: str,
    component: str,
    call: Callable[[], Awaitable[T]],
    context: dict[str, str | int] | None = None,
) -> Result[T]:
    try:
        value = await call()
    except Exception as e:
        handle_error(e, operation=operation, component=component, context=context)
        return Result.failure(e)
    return Result.success(value)


class GenreRepository:
    """Access to the genre list."""

    def __init__(self, api: RawgApiService) -> None:
        self.api = api

    async def get_genres(self) -> Result[list[Genre]]:
        """Fetch all genres in server order."""
        async def call() -> list[Genre]:
            response = await self.api.fetch_genres()
            return [genre_to_domain(genre) for genre in response.results]

        result = await _run_catching("get_genres", "genre_repository", call)
        if result.is_success:
            log.info("Genres loaded", count=len(result.value or []))
        return result


class GameDetailRepository:
    """Access to game details and screenshots."""

    def __init__(self, api: RawgApiService) -> None:
        self.api = api

    async def get_game_detail(self, slug: str) -> Result[GameDetail]:
        """Fetch the detail of the game identified by ``slug``."""
        async def call() -> GameDetail:
            return game_detail_to_domain(await self.api.fetch_game_detail(slug))

        return await _run_catching("get_game_detail", "game_detail_repository", call, {"slug": slug})

    async def get_game_screenshots(self, game_id: int) -> Result[list[Screenshot]]:
        """Fetch the first screenshots of the game with id ``game_id``."""
        async def call() -> list[Screenshot]:
            response = await self.api.fetch_screenshots(game_id, page_size=SCREENSHOT_PAGE_SIZE)
            return [screenshot_to_domain(item) for item in response.results]

        return await _run_catching(
            "get_game_screenshots", "game_detail_repository", call, {"game_id": game_id}
        )


class GameRepository:
    """Access to game lists: the popular selection and filtered search."""

    def __init__(self, api: RawgApiService, search_page_size: int = SEARCH_PAGE_SIZE) -> None:
        self.api = api
        self.search_page_size = search_page_size

    async def get_popular_games(self) -> Result[list[Game]]:
        """Fetch the first page of games rated 90-100 on Metacritic."""
        async def call() -> list[Game]:
            response = await self.api.fetch_games(
                metacritic=POPULAR_METACRITIC_RANGE,
                page=1,
                page_size=POPULAR_PAGE_SIZE,
            )
            return [game_to_domain(item) for item in response.results]

        return await _run_catching("get_popular_games", "game_repository", call)

    def search_games(self, genre_slug: str | None = None, search: str | None = None) -> Pager[Game]:
        """Create a pager over games matching the genre and/or search text.

        Nothing is fetched until the pager is refreshed.
        """
        log.debug("Creating game search pager", genre_slug=genre_slug, search=search)
        return Pager(
            source_factory=lambda: GamesPagingSource(self.api, genre_slug, search),
            config=PagingConfig(page_size=self.search_page_size),
        )
