"""RAWG catalog API service."""

from collections.abc import Callable
from typing import Any, TypeVar

import structlog

from ..models import AppConfig
from ..models.responses import (
    GameDetailResponse,
    GameListResponse,
    GenreListResponse,
    ScreenshotListResponse,
)
from .errors import DecodeError
from .http_client import HttpClientService

log = structlog.stdlib.get_logger()

T = TypeVar("T")


class RawgApiService:
    """Read-only access to the RAWG endpoints used by the application.

    Every request carries the API key as the ``key`` query parameter.
    Payloads are parsed into response models; a payload of unexpected shape
    raises ``DecodeError``.
    """

    def __init__(self, http_client: HttpClientService, config: AppConfig) -> None:
        """Initialize the API service.

        Args:
            http_client: HTTP client bound to the catalog base URL
            config: Application configuration holding the API key
        """
        self.http_client = http_client
        self._api_key = config.api_key

    async def fetch_genres(self) -> GenreListResponse:
        """Retrieve the list of available game genres."""
        return await self._get("genres", {}, GenreListResponse.from_dict)

    async def fetch_games(
        self,
        metacritic: str | None = None,
        genre_slug: str | None = None,
        search: str | None = None,
        *,
        page: int,
        page_size: int,
    ) -> GameListResponse:
        """Retrieve one page of games with optional filters.

        Args:
            metacritic: Metacritic score range, e.g. "90,100"
            genre_slug: Genre slug to filter by
            search: Free-text search query
            page: Page number, starting at 1
            page_size: Number of games per page

        Returns:
            The page of games
        """
        params: dict[str, Any] = {"page": page, "page_size": page_size}
        if metacritic is not None:
            params["metacritic"] = metacritic
        if genre_slug is not None:
            params["genres"] = genre_slug
        if search is not None:
            params["search"] = search
        return await self._get("games", params, GameListResponse.from_dict)

    async def fetch_game_detail(self, slug: str) -> GameDetailResponse:
        """Retrieve detailed information for the game with the given slug."""
        return await self._get(f"games/{slug}", {}, GameDetailResponse.from_dict)

    async def fetch_screenshots(self, game_id: int, page_size: int) -> ScreenshotListResponse:
        """Retrieve screenshots for the game with the given id."""
        return await self._get(
            f"games/{game_id}/screenshots",
            {"page_size": page_size},
            ScreenshotListResponse.from_dict,
        )

    async def _get(
        self,
        path: str,
        params: dict[str, Any],
        parse: Callable[[Any], T],
    ) -> T:
        data = await self.http_client.get_json(path, params={"key": self._api_key, **params})
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError) as e:
            log.warning("Unexpected response shape", path=path, error=str(e), error_type=type(e).__name__)
            raise DecodeError(
                message="The server sent data in an unexpected format.",
                original_error=e,
                url=path,
            ) from e
