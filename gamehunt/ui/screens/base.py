"""Base screen class with common functionality for all screens."""

from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar

from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Static

import structlog

from gamehunt.services.errors import (
    ErrorSeverity,
    UserFriendlyError,
    get_error_service,
    handle_error,
)

if TYPE_CHECKING:
    from gamehunt.ui.app import GameHuntApp

log = structlog.stdlib.get_logger()


class BaseScreen(Screen[None]):
    """Base screen class providing common functionality for all application screens.

    This class provides:
    - Common key bindings (escape for back navigation)
    - Access to the parent application and its view-model factories
    - View-model subscription bookkeeping
    - Error notifications
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=True),
    ]

    SCREEN_TITLE: ClassVar[str] = "Screen"
    SCREEN_NAME: ClassVar[str] = "base"

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name=name or self.SCREEN_NAME)
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def game_app(self) -> "GameHuntApp":
        """Get the parent GameHuntApp instance.

        Raises:
            RuntimeError: If the screen is not attached to a GameHuntApp
        """
        from gamehunt.ui.app import GameHuntApp

        if isinstance(self.app, GameHuntApp):
            return self.app
        raise RuntimeError("Screen is not attached to a GameHuntApp")

    async def on_mount(self) -> None:
        log.info("Screen mounted", screen=self.SCREEN_NAME, title=self.SCREEN_TITLE)

    async def on_unmount(self) -> None:
        log.info("Screen unmounted", screen=self.SCREEN_NAME)
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def track_subscription(self, unsubscribe: Callable[[], None]) -> None:
        """Remember a view-model subscription so it is dropped on unmount."""
        self._unsubscribers.append(unsubscribe)

    async def action_go_back(self) -> None:
        await self.game_app.action_go_back()

    def create_text_widget(self, widget_id: str, classes: str = "") -> Static:
        """Static for API-provided text, which is never parsed as markup."""
        return Static("", id=widget_id, classes=classes, markup=False)

    def set_status(self, widget: Static, text: str, is_error: bool = False) -> None:
        widget.update(text)
        widget.set_class(is_error, "error")

    def notify_error(self, message: str) -> None:
        self.notify(message, severity="error")
        log.error("User notification", message=message, screen=self.SCREEN_NAME)

    def notify_success(self, message: str) -> None:
        self.notify(message, severity="information")
        log.info("User notification", message=message, screen=self.SCREEN_NAME)

    def notify_warning(self, message: str) -> None:
        self.notify(message, severity="warning")
        log.warning("User notification", message=message, screen=self.SCREEN_NAME)

    def handle_exception(
        self,
        error: Exception,
        operation: str,
        context: dict[str, str | int | float | bool] | None = None,
    ) -> UserFriendlyError:
        """Handle an exception and display a user-friendly error message.

        Args:
            error: The exception that occurred
            operation: Description of the operation that failed
            context: Additional context information

        Returns:
            UserFriendlyError with message and suggested actions
        """
        user_error = handle_error(
            error=error,
            operation=operation,
            component=self.SCREEN_NAME,
            context=context,
        )

        message = get_error_service().create_user_message(user_error, include_suggestions=False)
        if user_error.severity == ErrorSeverity.WARNING:
            self.notify_warning(message)
        else:
            self.notify_error(message)

        return user_error
