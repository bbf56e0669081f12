"""View-models holding per-screen UI state."""

from .base import BaseViewModel, EffectChannel, StateHolder, ViewModelScope
from .detail import GameDetailUiState, GameDetailViewModel, ScreenshotUiState, ShareIntent
from .home import (
    FilteredGamesUiState,
    GamesUiState,
    GenresUiState,
    HomeViewModel,
    NavigateToDetail,
)

__all__ = [
    "BaseViewModel",
    "EffectChannel",
    "FilteredGamesUiState",
    "GameDetailUiState",
    "GameDetailViewModel",
    "GamesUiState",
    "GenresUiState",
    "HomeViewModel",
    "NavigateToDetail",
    "ScreenshotUiState",
    "ShareIntent",
    "StateHolder",
    "ViewModelScope",
]
