"""Main Textual application with screen management."""

from typing import Any, ClassVar, override

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.widgets import Footer, Header

import structlog

from gamehunt.services.errors import get_error_service
from gamehunt.viewmodels import GameDetailViewModel, HomeViewModel


log = structlog.stdlib.get_logger()

HELP_TEXT = (
    "Type to search (more than 3 letters), Enter on a genre to filter, "
    "Enter on a game for details, 'r' to retry, 'q' to quit"
)


def help_message() -> str:
    """Key help, followed by the most recent error when there is one."""
    recent = get_error_service().get_recent_errors(count=1)
    if not recent:
        return HELP_TEXT
    return f"{HELP_TEXT}\n\nLast error: {recent[-1].message}"


class GameHuntApp(App[None]):
    """Terminal client for browsing the RAWG game catalog.

    The root application manages the screen stack and hands each screen a
    view-model built by the application context.
    """

    CSS: ClassVar[str] = """
    Screen {
        background: $surface;
    }

    .section-title {
        text-style: bold;
        color: $secondary;
        margin-top: 1;
    }

    .error {
        color: $error;
    }

    .muted {
        color: $text-muted;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True, priority=True),
        Binding("escape", "go_back", "Back", show=True),
        Binding("?", "show_help", "Help", show=True),
    ]

    _navigation_stack: list[str]
    _app_context: Any  # ApplicationContext from gamehunt.main (avoid circular import)

    def __init__(self, app_context: Any = None) -> None:
        """Initialize the application.

        Args:
            app_context: Application context that builds view-models
        """
        super().__init__()
        self.title = "GameHunt"  # type: ignore[assignment]
        self.sub_title = "Video game catalog"  # type: ignore[assignment]
        self._navigation_stack = []
        self._app_context = app_context

        log.info("GameHuntApp initialized")

    @property
    def app_context(self) -> Any:
        return self._app_context

    def set_app_context(self, context: Any) -> None:
        self._app_context = context

    @property
    def navigation_stack(self) -> list[str]:
        """Get the current navigation stack."""
        return self._navigation_stack.copy()

    def create_home_view_model(self) -> HomeViewModel:
        if self._app_context is None:
            raise RuntimeError("Application context is not set")
        return self._app_context.create_home_view_model()

    def create_detail_view_model(self) -> GameDetailViewModel:
        if self._app_context is None:
            raise RuntimeError("Application context is not set")
        return self._app_context.create_detail_view_model()

    @override
    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    async def on_mount(self) -> None:
        log.info("Application mounted")
        await self.push_screen_with_tracking("home")

    async def push_screen_with_tracking(self, screen_name: str, **kwargs: Any) -> None:
        """Push a screen and track it in the navigation stack.

        Args:
            screen_name: Registered name of the screen
            **kwargs: Arguments for the screen constructor
        """
        from gamehunt.ui.screens import get_screen_by_name

        screen = get_screen_by_name(screen_name, **kwargs)
        if screen:
            self._navigation_stack.append(screen_name)
            await self.push_screen(screen)
            log.info("Screen pushed", screen=screen_name, stack_depth=len(self._navigation_stack))
        else:
            log.warning("Unknown screen requested", screen=screen_name)

    async def action_go_back(self) -> None:
        """Navigate back to the previous screen."""
        if len(self._navigation_stack) > 1:
            current = self._navigation_stack.pop()
            log.info("Navigating back", from_screen=current, stack_depth=len(self._navigation_stack))
            _ = self.pop_screen()
        else:
            log.debug("Already at root screen, cannot go back")

    async def action_show_help(self) -> None:
        log.info("Help requested")
        self.notify(help_message(), markup=False)
