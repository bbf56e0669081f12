"""Use cases: one per user-visible operation, each forwarding to a repository."""

from ..models import Game, GameDetail, Genre, Result, Screenshot
from .pagination import Pager
from .repositories import GameDetailRepository, GameRepository, GenreRepository


class GetGenresUseCase:
    def __init__(self, repository: GenreRepository) -> None:
        self.repository = repository

    async def __call__(self) -> Result[list[Genre]]:
        return await self.repository.get_genres()


class GetPopularGamesUseCase:
    def __init__(self, repository: GameRepository) -> None:
        self.repository = repository

    async def __call__(self) -> Result[list[Game]]:
        return await self.repository.get_popular_games()


class SearchGamesUseCase:
    def __init__(self, repository: GameRepository) -> None:
        self.repository = repository

    def __call__(self, genre_slug: str | None = None, search: str | None = None) -> Pager[Game]:
        return self.repository.search_games(genre_slug=genre_slug, search=search)


class GetGameDetailUseCase:
    def __init__(self, repository: GameDetailRepository) -> None:
        self.repository = repository

    async def __call__(self, slug: str) -> Result[GameDetail]:
        return await self.repository.get_game_detail(slug)


class GetGameScreenshotsUseCase:
    def __init__(self, repository: GameDetailRepository) -> None:
        self.repository = repository

    async def __call__(self, game_id: int) -> Result[list[Screenshot]]:
        return await self.repository.get_game_screenshots(game_id)
