"""Main entry point for the GameHunt catalog client.

This module provides the application entry point with:
- Command-line argument parsing
- Application initialization and dependency injection
- Graceful shutdown handling
"""

import argparse
import asyncio
import dataclasses
import signal
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from gamehunt import __version__
from gamehunt.models import AppConfig
from gamehunt.services.config import VALID_LOG_LEVELS, ConfigurationService
from gamehunt.services.errors import ConfigurationError, error_message
from gamehunt.services.http_client import HttpClientService
from gamehunt.services.logging import setup_logging
from gamehunt.services.rawg_api import RawgApiService
from gamehunt.services.repositories import GameDetailRepository, GameRepository, GenreRepository
from gamehunt.services.usecases import (
    GetGameDetailUseCase,
    GetGameScreenshotsUseCase,
    GetGenresUseCase,
    GetPopularGamesUseCase,
    SearchGamesUseCase,
)
from gamehunt.viewmodels import GameDetailViewModel, HomeViewModel

if TYPE_CHECKING:
    from gamehunt.ui.app import GameHuntApp

VERSION = __version__

log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services and state.

    This class manages the lifecycle of all application services
    and builds the view-models handed to the screens.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        api_key: str | None = None,
        config_service: ConfigurationService | None = None,
        http_client: HttpClientService | None = None,
    ) -> None:
        """Initialize the application context.

        Args:
            config_path: Path to configuration file
            api_key: API key overriding the stored one
            config_service: Pre-built configuration service (tests)
            http_client: Pre-built HTTP client (tests)
        """
        self._config_path: Path | None = config_path
        self._api_key_override: str | None = api_key

        # Services (initialized lazily)
        self._config_service: ConfigurationService | None = config_service
        self._http_client: HttpClientService | None = http_client
        self._api: RawgApiService | None = None
        self._genre_repository: GenreRepository | None = None
        self._game_repository: GameRepository | None = None
        self._detail_repository: GameDetailRepository | None = None

        self._config: AppConfig | None = None
        self._shutdown_requested: bool = False

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        """Get the configuration, with the command-line API key applied."""
        if self._config is None:
            config = self.config_service.load_config()
            if self._api_key_override:
                config = dataclasses.replace(config, api_key=self._api_key_override.strip())
            self._config = config
        return self._config

    @property
    def http_client(self) -> HttpClientService:
        if self._http_client is None:
            self._http_client = HttpClientService(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                connection_retries=self.config.connection_retries,
            )
        return self._http_client

    @property
    def api(self) -> RawgApiService:
        """Get the catalog API service.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if self._api is None:
            if not self.config.api_key:
                raise ConfigurationError(
                    message="No RAWG API key configured",
                    setting="api_key",
                    expected="a key from https://rawg.io/apidocs",
                )
            self._api = RawgApiService(http_client=self.http_client, config=self.config)
        return self._api

    @property
    def genre_repository(self) -> GenreRepository:
        if self._genre_repository is None:
            self._genre_repository = GenreRepository(self.api)
        return self._genre_repository

    @property
    def game_repository(self) -> GameRepository:
        if self._game_repository is None:
            self._game_repository = GameRepository(self.api)
        return self._game_repository

    @property
    def detail_repository(self) -> GameDetailRepository:
        if self._detail_repository is None:
            self._detail_repository = GameDetailRepository(self.api)
        return self._detail_repository

    def create_home_view_model(self) -> HomeViewModel:
        return HomeViewModel(
            get_genres=GetGenresUseCase(self.genre_repository),
            get_popular_games=GetPopularGamesUseCase(self.game_repository),
            search_games=SearchGamesUseCase(self.game_repository),
        )

    def create_detail_view_model(self) -> GameDetailViewModel:
        return GameDetailViewModel(
            get_game_detail=GetGameDetailUseCase(self.detail_repository),
            get_game_screenshots=GetGameScreenshotsUseCase(self.detail_repository),
        )

    def save_api_key(self) -> None:
        """Persist the command-line API key in the configuration file.

        Raises:
            ConfigurationError: If no key was given on the command line
        """
        key = (self._api_key_override or "").strip()
        if not key:
            raise ConfigurationError(message="--save-key needs a key passed with --api-key", setting="api_key")
        stored = self.config_service.load_config()
        self.config_service.save_config(dataclasses.replace(stored, api_key=key))
        log.info("API key saved", config_path=str(self.config_service.config_path))

    def request_shutdown(self) -> None:
        self._shutdown_requested = True
        log.info("Shutdown requested")

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_requested

    async def cleanup(self) -> None:
        """Clean up resources and close connections."""
        log.info("Cleaning up application resources")
        if self._http_client is not None:
            await self._http_client.close()
        log.info("Application cleanup complete")


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
        api_key: str | None,
        no_tui: bool,
        save_key: bool = False,
    ) -> None:
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir
        self.api_key: str | None = api_key
        self.no_tui: bool = no_tui
        self.save_key: bool = save_key


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse (defaults to ``sys.argv[1:]``)

    Returns:
        Parsed arguments container
    """
    parser = argparse.ArgumentParser(
        prog="gamehunt",
        description="Browse the RAWG video game catalog from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gamehunt --api-key YOUR_KEY          Start the TUI with an API key
  gamehunt --log-level DEBUG           Start with debug logging
  gamehunt --api-key YOUR_KEY --save-key  Store the key in the configuration file
  gamehunt --no-tui                    Print popular games and exit
        """
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}"
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/gamehunt/config.json)"
    )

    _ = parser.add_argument(
        "--log-level",
        choices=list(VALID_LOG_LEVELS),
        default=None,
        help="Set the logging level (default: log_level from the configuration file)"
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: ./logs when running the TUI)"
    )

    _ = parser.add_argument(
        "--api-key",
        default=None,
        help="RAWG API key, overrides the one in the configuration file"
    )

    _ = parser.add_argument(
        "--no-tui",
        action="store_true",
        help="Print the configuration and popular games instead of starting the TUI"
    )

    _ = parser.add_argument(
        "--save-key",
        action="store_true",
        help="Store the --api-key value in the configuration file"
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
        api_key=ns.api_key,
        no_tui=bool(ns.no_tui),
        save_key=bool(ns.save_key),
    )


def setup_signal_handlers(context: ApplicationContext, app: "GameHuntApp") -> None:
    """Exit the TUI cleanly on SIGTERM; Ctrl+C is handled by Textual."""
    def signal_handler() -> None:
        log.info("Received signal", signal=signal.SIGTERM.name)
        context.request_shutdown()
        app.exit()

    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGTERM, signal_handler)
    except NotImplementedError:
        log.debug("Signal handlers not supported on this platform")
        return
    log.debug("Signal handlers registered")


async def run_tui(context: ApplicationContext) -> int:
    """Run the TUI application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    from gamehunt.ui.app import GameHuntApp

    log.info("Starting TUI application")

    try:
        app = GameHuntApp()
        app.set_app_context(context)
        setup_signal_handlers(context, app)
        await app.run_async()

        if context.shutdown_requested:
            log.info("TUI application stopped by signal")
        else:
            log.info("TUI application exited normally")
        return 0

    except Exception as e:
        log.error("TUI application error", error=str(e), exc_info=True)
        return 1
    finally:
        await context.cleanup()


async def run_headless(context: ApplicationContext) -> int:
    """Print the configuration summary and the popular games."""
    print("GameHunt - Non-TUI mode")
    print(f"Configuration loaded from: {context.config_service.config_path}")
    print(f"API base URL: {context.config.base_url}")

    try:
        result = await context.game_repository.get_popular_games()
    finally:
        await context.cleanup()

    if result.is_failure:
        print(f"Could not load popular games: {error_message(result.error)}", file=sys.stderr)
        return 1

    print("Popular games:")
    for game in result.value or []:
        released = game.release_date or "TBA"
        print(f"  {game.name} ({released}) - {game.rating:.1f}")
    return 0


def main() -> None:
    """Main entry point for the application."""
    args = parse_arguments()

    log_dir = args.log_dir
    if log_dir is None and not args.no_tui:
        log_dir = Path("logs")

    logging_service = setup_logging(
        log_level=args.log_level or "INFO",
        log_dir=log_dir,
        tui_mode=not args.no_tui,
    )

    log.info(
        "Starting GameHunt",
        version=VERSION,
        log_level=logging_service.log_level,
        config_path=str(args.config) if args.config else "default"
    )

    context = ApplicationContext(config_path=args.config, api_key=args.api_key)

    try:
        if args.log_level is None and context.config.log_level != logging_service.log_level:
            logging_service.set_level(context.config.log_level)
            log.info("Log level set from configuration", log_level=context.config.log_level)

        if args.save_key:
            context.save_api_key()

        # Fail before the UI starts when no key is configured
        _ = context.api
        if args.no_tui:
            log.info("Running in non-TUI mode")
            exit_code = asyncio.run(run_headless(context))
        else:
            exit_code = asyncio.run(run_tui(context))

    except ConfigurationError as e:
        log.error("Configuration error", error=e.message)
        print(f"Configuration error: {e.message}", file=sys.stderr)
        for action in e.suggested_actions:
            print(f"  - {action}", file=sys.stderr)
        exit_code = 2

    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
