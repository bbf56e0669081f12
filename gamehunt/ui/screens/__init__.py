"""Screen components for the TUI application."""

from typing import Any

from .base import BaseScreen
from .detail import GameDetailScreen
from .home import HomeScreen

# Screen registry for navigation
_SCREEN_REGISTRY: dict[str, type[BaseScreen]] = {
    "home": HomeScreen,
    "detail": GameDetailScreen,
}


def get_screen_by_name(name: str, **kwargs: Any) -> BaseScreen | None:
    """Get a screen instance by its registered name.

    Args:
        name: The registered name of the screen
        **kwargs: Arguments for the screen constructor (e.g. ``slug``)

    Returns:
        A new instance of the screen, or None if not found
    """
    screen_class = _SCREEN_REGISTRY.get(name)
    if screen_class:
        return screen_class(**kwargs)
    return None


def get_registered_screens() -> list[str]:
    return list(_SCREEN_REGISTRY.keys())


__all__ = [
    "BaseScreen",
    "GameDetailScreen",
    "HomeScreen",
    "get_registered_screens",
    "get_screen_by_name",
]
