"""Tests for response parsing and mapping to domain models."""

import pytest
from hypothesis import given, strategies as st

from gamehunt.models import Game, GameDetail, Genre, Screenshot
from gamehunt.models.responses import (
    GameDetailResponse,
    GameListResponse,
    GameResponse,
    GenreListResponse,
    GenreModel,
    ScreenshotItemResponse,
    ScreenshotListResponse,
)
from gamehunt.services.mappers import (
    game_detail_to_domain,
    game_to_domain,
    genre_to_domain,
    screenshot_to_domain,
)


names = st.text(min_size=1, max_size=30)
optional_urls = st.one_of(st.none(), st.just("https://media.example.test/a.jpg"))
ratings = st.one_of(
    st.integers(min_value=0, max_value=5),
    st.floats(min_value=0.0, max_value=5.0, allow_nan=False),
)

game_payloads = st.fixed_dictionaries(
    {
        "id": st.integers(min_value=1, max_value=10**9),
        "name": names,
        "slug": names,
        "background_image": optional_urls,
        "rating": ratings,
        "released": st.one_of(st.none(), st.dates().map(lambda d: d.isoformat())),
        "genres": st.lists(
            st.fixed_dictionaries({"id": st.integers(min_value=1, max_value=1000), "name": names}),
            max_size=4,
        ),
    }
)


def test_game_mapping_example() -> None:
    """A game with null image and release date maps to empty defaults."""
    response = GameResponse.from_dict({
        "id": 1,
        "name": "X",
        "slug": "x",
        "background_image": None,
        "rating": 4.5,
        "released": None,
        "genres": [{"id": 9, "name": "Action"}],
    })

    assert game_to_domain(response) == Game(1, "X", "x", "", 4.5, None, ["Action"])


@given(game_payloads)
def test_game_mapping_keeps_fields(payload: dict) -> None:
    game = game_to_domain(GameResponse.from_dict(payload))

    assert game.id == payload["id"]
    assert game.name == payload["name"]
    assert game.slug == payload["slug"]
    assert game.image_url == (payload["background_image"] or "")
    assert game.rating == float(payload["rating"])
    assert game.release_date == payload["released"]
    assert game.genres == [genre["name"] for genre in payload["genres"]]


def test_game_without_genres_field() -> None:
    response = GameResponse.from_dict({"id": 3, "name": "Y", "slug": "y", "rating": 3})

    game = game_to_domain(response)
    assert game.genres == []
    assert game.image_url == ""
    assert game.rating == 3.0
    assert isinstance(game.rating, float)


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "X", "slug": "x", "rating": 1.0},
        {"id": "1", "name": "X", "slug": "x", "rating": 1.0},
        {"id": 1, "name": "X", "slug": "x", "rating": "high"},
        {"id": 1, "name": "X", "slug": "x", "rating": True},
        {"id": 1, "name": "X", "slug": "x", "rating": 1.0, "genres": ["Action"]},
    ],
)
def test_malformed_game_is_rejected(payload: dict) -> None:
    with pytest.raises((KeyError, TypeError, ValueError)):
        GameResponse.from_dict(payload)


def test_game_list_requires_an_object() -> None:
    with pytest.raises(TypeError):
        GameListResponse.from_dict([])


def test_genre_mapping() -> None:
    genres = GenreListResponse.from_dict({
        "count": 2,
        "next": None,
        "previous": None,
        "results": [
            {
                "id": 4,
                "name": "Action",
                "slug": "action",
                "games_count": 100,
                "image_background": "https://media.example.test/action.jpg",
                "games": [{"id": 1, "slug": "a", "name": "A", "added": 5}],
            },
            {"id": 5, "name": "RPG", "slug": "role-playing-games-rpg", "image_background": None},
        ],
    })

    mapped = [genre_to_domain(item) for item in genres.results]
    assert mapped == [
        Genre(4, "Action", "action", "https://media.example.test/action.jpg"),
        Genre(5, "RPG", "role-playing-games-rpg", ""),
    ]
    assert genres.results[0].games is not None
    assert genres.results[0].games[0].added == 5


def test_game_detail_mapping_defaults() -> None:
    response = GameDetailResponse.from_dict({
        "id": 42,
        "slug": "portal-2",
        "name": "Portal 2",
        "description_raw": None,
        "background_image": None,
        "rating": 4.6,
        "dominant_color": None,
        "website": None,
    })

    assert game_detail_to_domain(response) == GameDetail(
        id=42,
        slug="portal-2",
        name="Portal 2",
        description="",
        background_image="",
        rating=4.6,
        dominant_color="",
        genres=[],
        website="",
    )


def test_game_detail_mapping_full() -> None:
    response = GameDetailResponse.from_dict({
        "id": 42,
        "slug": "portal-2",
        "name": "Portal 2",
        "description_raw": "Think with portals.",
        "background_image": "https://media.example.test/p2.jpg",
        "rating": 5,
        "dominant_color": "0f0f0f",
        "genres": [{"id": 2, "name": "Puzzle", "slug": "puzzle", "image_background": None}],
        "website": "http://www.thinkwithportals.com/",
    })

    detail = game_detail_to_domain(response)
    assert detail.description == "Think with portals."
    assert detail.rating == 5.0
    assert detail.genres == [Genre(2, "Puzzle", "puzzle", "")]
    assert detail.website == "http://www.thinkwithportals.com/"


def test_screenshot_mapping() -> None:
    response = ScreenshotListResponse.from_dict({
        "count": 1,
        "results": [{"id": 7, "image": "https://media.example.test/s.jpg", "width": 1280}],
    })

    assert [screenshot_to_domain(item) for item in response.results] == [
        Screenshot(7, "https://media.example.test/s.jpg")
    ]


def test_screenshot_without_image_is_rejected() -> None:
    with pytest.raises(KeyError):
        ScreenshotItemResponse.from_dict({"id": 7})


def test_genre_model_rejects_non_object() -> None:
    with pytest.raises(TypeError):
        GenreModel.from_dict("action")  # type: ignore[arg-type]
