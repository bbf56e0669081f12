"""Service layer: catalog API access, repositories and use cases."""

from .config import ConfigurationService, ValidationResult
from .errors import (
    AppError,
    ConfigurationError,
    DecodeError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    HttpError,
    NetworkError,
    UserFriendlyError,
    ValidationError,
    error_message,
    get_error_service,
    handle_error,
)
from .http_client import HttpClientService
from .pagination import (
    GamesPagingSource,
    LoadError,
    LoadParams,
    LoadState,
    LoadStates,
    Page,
    Pager,
    PagingConfig,
    PagingData,
    PagingSource,
    PagingState,
)
from .rawg_api import RawgApiService
from .repositories import GameDetailRepository, GameRepository, GenreRepository
from .usecases import (
    GetGameDetailUseCase,
    GetGameScreenshotsUseCase,
    GetGenresUseCase,
    GetPopularGamesUseCase,
    SearchGamesUseCase,
)

__all__ = [
    "AppError",
    "ConfigurationError",
    "ConfigurationService",
    "DecodeError",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "GameDetailRepository",
    "GameRepository",
    "GamesPagingSource",
    "GenreRepository",
    "GetGameDetailUseCase",
    "GetGameScreenshotsUseCase",
    "GetGenresUseCase",
    "GetPopularGamesUseCase",
    "HttpClientService",
    "HttpError",
    "LoadError",
    "LoadParams",
    "LoadState",
    "LoadStates",
    "NetworkError",
    "Page",
    "Pager",
    "PagingConfig",
    "PagingData",
    "PagingSource",
    "PagingState",
    "RawgApiService",
    "SearchGamesUseCase",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "error_message",
    "get_error_service",
    "handle_error",
]
