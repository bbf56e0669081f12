"""Game detail view-model: detail, dependent screenshots and sharing."""

from dataclasses import dataclass, field, replace

import structlog

from ..models import GameDetail, Screenshot
from ..services.errors import error_message
from ..services.usecases import GetGameDetailUseCase, GetGameScreenshotsUseCase
from .base import BaseViewModel, EffectChannel, StateHolder, ViewModelScope

log = structlog.stdlib.get_logger()

SHARE_TITLE = "Check out this game!"


def share_text(name: str, website: str) -> str:
    return f"Take a look at {name} on GameHunt!\n{website}"


@dataclass(frozen=True)
class GameDetailUiState:
    is_loading: bool = False
    detail: GameDetail | None = None
    error: str = ""


@dataclass(frozen=True)
class ScreenshotUiState:
    is_loading: bool = False
    screenshots: list[Screenshot] = field(default_factory=list)
    error: str = ""


@dataclass(frozen=True)
class Load:
    slug: str


@dataclass(frozen=True)
class Retry:
    pass


@dataclass(frozen=True)
class ShareGame:
    name: str
    website: str


GameDetailEvent = Load | Retry | ShareGame


@dataclass(frozen=True)
class ShareIntent:
    """Payload handed to the platform share mechanism."""
    title: str
    text: str


GameDetailEffect = ShareIntent


class GameDetailViewModel(BaseViewModel):
    """State and events of the game detail screen.

    Screenshots are fetched only after the detail loaded, using its id.
    """

    def __init__(
        self,
        get_game_detail: GetGameDetailUseCase,
        get_game_screenshots: GetGameScreenshotsUseCase,
        scope: ViewModelScope | None = None,
    ) -> None:
        super().__init__(scope)
        self._get_game_detail = get_game_detail
        self._get_game_screenshots = get_game_screenshots

        self.detail_state: StateHolder[GameDetailUiState] = StateHolder(GameDetailUiState())
        self.screenshot_state: StateHolder[ScreenshotUiState] = StateHolder(ScreenshotUiState())
        self.effects: EffectChannel[GameDetailEffect] = EffectChannel()

        self._slug: str | None = None

    @property
    def slug(self) -> str | None:
        """Slug of the last requested game."""
        return self._slug

    def on_event(self, event: GameDetailEvent) -> None:
        """Handle a user intent from the detail screen."""
        if isinstance(event, Load):
            self._load_game_detail(event.slug)
        elif isinstance(event, Retry):
            if self._slug is not None:
                self._load_game_detail(self._slug)
        elif isinstance(event, ShareGame):
            self.effects.emit(ShareIntent(title=SHARE_TITLE, text=share_text(event.name, event.website)))
        else:
            log.warning("Unknown detail event", event=repr(event))

    def _load_game_detail(self, slug: str) -> None:
        self._slug = slug
        generation = self.next_generation("detail")
        # Screenshots of a previous game must not land on this one
        self.next_generation("screenshots")
        self.cancel_slice("screenshots")
        self.screenshot_state.value = ScreenshotUiState()

        self.detail_state.update(lambda s: replace(s, is_loading=True, error="", detail=None))
        log.info("Loading game detail", slug=slug, generation=generation)
        self.launch_slice("detail", self._collect_game_detail(slug, generation))

    async def _collect_game_detail(self, slug: str, generation: int) -> None:
        result = await self._get_game_detail(slug)
        if not self.is_current("detail", generation):
            return
        detail = result.get_or_none()
        if detail is not None:
            self.detail_state.update(lambda s: replace(s, detail=detail, is_loading=False, error=""))
            self._load_screenshots(detail.id)
        else:
            message = error_message(result.error) if result.error else ""
            self.detail_state.update(lambda s: replace(s, error=message, is_loading=False, detail=None))

    def _load_screenshots(self, game_id: int) -> None:
        generation = self.next_generation("screenshots")
        self.screenshot_state.update(lambda s: replace(s, is_loading=True, screenshots=[], error=""))
        self.launch_slice("screenshots", self._collect_screenshots(game_id, generation))

    async def _collect_screenshots(self, game_id: int, generation: int) -> None:
        result = await self._get_game_screenshots(game_id)
        if not self.is_current("screenshots", generation):
            return
        if result.is_success:
            screenshots = result.value or []
            self.screenshot_state.update(
                lambda s: replace(s, screenshots=screenshots, is_loading=False, error="")
            )
        else:
            message = error_message(result.error) if result.error else ""
            self.screenshot_state.update(
                lambda s: replace(s, error=message, is_loading=False, screenshots=[])
            )
