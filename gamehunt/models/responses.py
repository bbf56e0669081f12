"""Wire-format models for RAWG API responses.

Each ``from_dict`` constructor checks the payload shape and raises
``KeyError``, ``TypeError`` or ``ValueError`` when it does not match. The
API service turns those into ``DecodeError``.
"""

from dataclasses import dataclass, field
from typing import Any


def _field(data: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    """Get a required field and check its type."""
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, kind):
        raise TypeError(f"Field '{key}' has unexpected type {type(value).__name__}")
    return value


def _optional(data: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    """Get an optional field; absent and null both map to None."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, kind):
        raise TypeError(f"Field '{key}' has unexpected type {type(value).__name__}")
    return value


def _objects(data: dict[str, Any], key: str, required: bool = True) -> list[dict[str, Any]] | None:
    """Get a list of JSON objects."""
    items = _field(data, key, list) if required else _optional(data, key, list)
    if items is None:
        return None
    for item in items:
        if not isinstance(item, dict):
            raise TypeError(f"Field '{key}' must contain objects")
    return items


def _ensure_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class GamePreviewModel:
    """Short game reference embedded in a genre."""
    id: int
    slug: str
    name: str
    added: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GamePreviewModel":
        return cls(
            id=_field(data, "id", int),
            slug=_field(data, "slug", str),
            name=_field(data, "name", str),
            added=_optional(data, "added", int) or 0,
        )


@dataclass(frozen=True)
class GenreModel:
    """Genre entry of the genres endpoint, also embedded in game details."""
    id: int
    name: str
    slug: str
    games_count: int | None = None
    image_background: str | None = None
    games: list[GamePreviewModel] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenreModel":
        data = _ensure_object(data)
        games = _objects(data, "games", required=False)
        return cls(
            id=_field(data, "id", int),
            name=_field(data, "name", str),
            slug=_field(data, "slug", str),
            games_count=_optional(data, "games_count", int),
            image_background=_optional(data, "image_background", str),
            games=[GamePreviewModel.from_dict(g) for g in games] if games is not None else None,
        )


@dataclass(frozen=True)
class GenreListResponse:
    """Response of ``GET genres``."""
    count: int
    next: str | None
    previous: str | None
    results: list[GenreModel] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "GenreListResponse":
        data = _ensure_object(data)
        return cls(
            count=_field(data, "count", int),
            next=_optional(data, "next", str),
            previous=_optional(data, "previous", str),
            results=[GenreModel.from_dict(item) for item in _objects(data, "results") or []],
        )


@dataclass(frozen=True)
class GenreTagResponse:
    """Genre reference embedded in a game list item."""
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenreTagResponse":
        return cls(id=_field(data, "id", int), name=_field(data, "name", str))


@dataclass(frozen=True)
class GameResponse:
    """Game list item."""
    id: int
    name: str
    slug: str
    background_image: str | None
    rating: float
    released: str | None
    genres: list[GenreTagResponse] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "GameResponse":
        data = _ensure_object(data)
        genres = _objects(data, "genres", required=False)
        return cls(
            id=_field(data, "id", int),
            name=_field(data, "name", str),
            slug=_field(data, "slug", str),
            background_image=_optional(data, "background_image", str),
            rating=float(_field(data, "rating", (int, float))),
            released=_optional(data, "released", str),
            genres=[GenreTagResponse.from_dict(g) for g in genres] if genres is not None else None,
        )


@dataclass(frozen=True)
class GameListResponse:
    """Response of ``GET games``."""
    count: int
    next: str | None
    previous: str | None
    results: list[GameResponse] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "GameListResponse":
        data = _ensure_object(data)
        return cls(
            count=_field(data, "count", int),
            next=_optional(data, "next", str),
            previous=_optional(data, "previous", str),
            results=[GameResponse.from_dict(item) for item in _objects(data, "results") or []],
        )


@dataclass(frozen=True)
class GameDetailResponse:
    """Response of ``GET games/{slug}``."""
    id: int
    slug: str
    name: str
    description_raw: str | None
    background_image: str | None
    rating: float
    dominant_color: str | None
    genres: list[GenreModel] | None
    website: str | None

    @classmethod
    def from_dict(cls, data: Any) -> "GameDetailResponse":
        data = _ensure_object(data)
        genres = _objects(data, "genres", required=False)
        return cls(
            id=_field(data, "id", int),
            slug=_field(data, "slug", str),
            name=_field(data, "name", str),
            description_raw=_optional(data, "description_raw", str),
            background_image=_optional(data, "background_image", str),
            rating=float(_field(data, "rating", (int, float))),
            dominant_color=_optional(data, "dominant_color", str),
            genres=[GenreModel.from_dict(g) for g in genres] if genres is not None else None,
            website=_optional(data, "website", str),
        )


@dataclass(frozen=True)
class ScreenshotItemResponse:
    """Single screenshot entry."""
    id: int
    image: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScreenshotItemResponse":
        return cls(id=_field(data, "id", int), image=_field(data, "image", str))


@dataclass(frozen=True)
class ScreenshotListResponse:
    """Response of ``GET games/{id}/screenshots``."""
    results: list[ScreenshotItemResponse] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ScreenshotListResponse":
        data = _ensure_object(data)
        return cls(
            results=[ScreenshotItemResponse.from_dict(item) for item in _objects(data, "results") or []],
        )
