"""User interface components using Textual framework."""

from .app import GameHuntApp
from .screens import (
    BaseScreen,
    GameDetailScreen,
    HomeScreen,
    get_registered_screens,
    get_screen_by_name,
)

__all__ = [
    "BaseScreen",
    "GameDetailScreen",
    "GameHuntApp",
    "HomeScreen",
    "get_registered_screens",
    "get_screen_by_name",
]
