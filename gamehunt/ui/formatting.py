"""Display helpers for catalog data."""

import re
from datetime import date

from bs4 import BeautifulSoup

from gamehunt.models import Game, Genre

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
DEFAULT_COLOR = "#000000"

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def format_release_date(release_date: str | None) -> str:
    """Format an ISO date as "Mon YYYY".

    Args:
        release_date: ISO date such as "2013-09-17", or None

    Returns:
        The formatted date, the input unchanged if it cannot be parsed,
        or "" when there is no date
    """
    if not release_date:
        return ""
    try:
        parsed = date.fromisoformat(release_date)
    except ValueError:
        return release_date
    return f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"


def strip_html(text: str) -> str:
    """Turn an HTML description into plain text, one block per line."""
    if not text:
        return ""
    soup = BeautifulSoup(text, "html.parser")
    return soup.get_text("\n", strip=True)


def parse_color(value: str, default: str = DEFAULT_COLOR) -> str:
    """Normalize a hex color to "#rrggbb", falling back to ``default``."""
    match = _HEX_COLOR.match(value.strip()) if value else None
    if not match:
        return default
    digits = match.group(1).lower()
    # RRGGBBAA from the API: drop alpha
    return f"#{digits[:6]}"


def format_rating(rating: float) -> str:
    return f"★ {rating:.1f}"


def join_genre_names(genres: list[Genre]) -> str:
    return " | ".join(genre.name for genre in genres)


def game_card_text(game: Game) -> str:
    """Single-line summary of a game for lists."""
    parts = [game.name, format_rating(game.rating)]
    released = format_release_date(game.release_date)
    if released:
        parts.append(released)
    if game.genres:
        parts.append(", ".join(game.genres))
    return "  ·  ".join(parts)
