"""Game catalog domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Genre:
    """A game genre as listed by the catalog."""
    id: int
    name: str
    slug: str
    image_url: str


@dataclass(frozen=True)
class Game:
    """A game as shown in lists and carousels."""
    id: int
    name: str
    slug: str
    image_url: str
    rating: float  # 0.0-5.0
    release_date: str | None = None  # ISO date, None if unknown
    genres: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GameDetail:
    """Full information about a single game."""
    id: int
    slug: str
    name: str
    description: str
    background_image: str
    rating: float
    dominant_color: str  # Hex string, may be empty
    genres: list[Genre] = field(default_factory=list)
    website: str = ""


@dataclass(frozen=True)
class Screenshot:
    """A screenshot belonging to a game."""
    id: int
    image_url: str


@dataclass(frozen=True)
class FilterState:
    """Genre and search text driving the filtered game list."""
    genre_slug: str | None = None
    search_query: str = ""
