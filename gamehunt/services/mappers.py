"""Mapping from API response models to domain models.

All functions are total: absent optional strings become "" and absent
lists become []. Only ``Game.release_date`` keeps None for "unknown".
"""

from ..models import Game, GameDetail, Genre, Screenshot
from ..models.responses import (
    GameDetailResponse,
    GameResponse,
    GenreModel,
    ScreenshotItemResponse,
)


def genre_to_domain(response: GenreModel) -> Genre:
    return Genre(
        id=response.id,
        name=response.name,
        slug=response.slug,
        image_url=response.image_background or "",
    )


def game_to_domain(response: GameResponse) -> Game:
    return Game(
        id=response.id,
        name=response.name,
        slug=response.slug,
        image_url=response.background_image or "",
        rating=response.rating,
        release_date=response.released,
        genres=[genre.name for genre in response.genres or []],
    )


def game_detail_to_domain(response: GameDetailResponse) -> GameDetail:
    return GameDetail(
        id=response.id,
        slug=response.slug,
        name=response.name,
        description=response.description_raw or "",
        background_image=response.background_image or "",
        rating=response.rating,
        dominant_color=response.dominant_color or "",
        genres=[genre_to_domain(genre) for genre in response.genres or []],
        website=response.website or "",
    )


def screenshot_to_domain(response: ScreenshotItemResponse) -> Screenshot:
    return Screenshot(id=response.id, image_url=response.image)
