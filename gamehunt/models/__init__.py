"""Data models for the GameHunt catalog client."""

from .config import AppConfig
from .game import FilterState, Game, GameDetail, Genre, Screenshot
from .result import Result

__all__ = [
    "AppConfig",
    "FilterState",
    "Game",
    "GameDetail",
    "Genre",
    "Result",
    "Screenshot",
]
