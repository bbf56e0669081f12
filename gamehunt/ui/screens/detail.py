"""Game detail screen."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static

import structlog

from gamehunt.ui.formatting import format_rating, join_genre_names, parse_color, strip_html
from gamehunt.viewmodels import GameDetailViewModel, ShareIntent
from gamehunt.viewmodels.detail import Load, Retry, ShareGame

from .base import BaseScreen

log = structlog.stdlib.get_logger()


class GameDetailScreen(BaseScreen):
    """Shows one game: rating, genres, description, screenshots and website."""

    SCREEN_TITLE: ClassVar[str] = "Game"
    SCREEN_NAME: ClassVar[str] = "detail"

    CSS: ClassVar[str] = """
    #detail-scroll {
        padding: 1 2;
    }

    #detail-name {
        text-style: bold;
        padding: 0 1;
        border: heavy $primary;
    }

    #detail-description {
        margin-top: 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=True),
        Binding("s", "share", "Share", show=True),
        Binding("r", "retry", "Retry", show=True),
    ]

    def __init__(self, slug: str) -> None:
        super().__init__()
        self.slug = slug
        self._view_model: GameDetailViewModel | None = None

    @property
    def view_model(self) -> GameDetailViewModel:
        if self._view_model is None:
            raise RuntimeError("Detail view-model is not created yet")
        return self._view_model

    @override
    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="detail-scroll"):
            yield self.create_text_widget("detail-status", classes="status")
            yield self.create_text_widget("detail-name")
            yield self.create_text_widget("detail-meta", classes="muted")
            yield self.create_text_widget("detail-website")
            yield self.create_text_widget("detail-description")
            yield Static("Screenshots", classes="section-title")
            yield self.create_text_widget("detail-screenshots")
        yield Footer()

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        view_model = self.game_app.create_detail_view_model()
        self._view_model = view_model

        self.track_subscription(view_model.detail_state.subscribe(lambda _: self.call_later(self._render_detail)))
        self.track_subscription(
            view_model.screenshot_state.subscribe(lambda _: self.call_later(self._render_screenshots))
        )

        self.run_worker(self._consume_effects(), name="detail-effects", group="effects")
        view_model.on_event(Load(self.slug))

    @override
    async def on_unmount(self) -> None:
        await super().on_unmount()
        if self._view_model is not None:
            self._view_model.close()

    async def _consume_effects(self) -> None:
        async for effect in self.view_model.effects:
            if isinstance(effect, ShareIntent):
                try:
                    self.app.copy_to_clipboard(effect.text)
                except Exception as e:
                    _ = self.handle_exception(e, "share game", context={"slug": self.slug})
                    continue
                self.notify_success(f"{effect.title} Link copied to clipboard")

    def _render_detail(self) -> None:
        state = self.view_model.detail_state.value
        status = self.query_one("#detail-status", Static)
        name = self.query_one("#detail-name", Static)
        meta = self.query_one("#detail-meta", Static)
        website = self.query_one("#detail-website", Static)
        description = self.query_one("#detail-description", Static)

        if state.is_loading:
            self.set_status(status, "Loading game...")
        elif state.error:
            self.set_status(status, f"{state.error} (press r to retry)", is_error=True)
        else:
            self.set_status(status, "")

        detail = state.detail
        if detail is None:
            for widget in (name, meta, website, description):
                widget.update("")
            return

        name.update(detail.name)
        name.styles.border = ("heavy", parse_color(detail.dominant_color))
        meta_parts = [format_rating(detail.rating)]
        if detail.genres:
            meta_parts.append(join_genre_names(detail.genres))
        meta.update("  ·  ".join(meta_parts))
        website.update(detail.website)
        description.update(strip_html(detail.description))
        self.sub_title = detail.name

    def _render_screenshots(self) -> None:
        state = self.view_model.screenshot_state.value
        screenshots = self.query_one("#detail-screenshots", Static)
        if state.is_loading:
            self.set_status(screenshots, "Loading screenshots...")
        elif state.error:
            self.set_status(screenshots, state.error, is_error=True)
        elif not state.screenshots:
            self.set_status(screenshots, "No screenshots")
        else:
            self.set_status(screenshots, "\n".join(shot.image_url for shot in state.screenshots))

    async def action_share(self) -> None:
        detail = self.view_model.detail_state.value.detail
        if detail is None or not detail.website:
            self.notify_warning("This game has no website to share")
            return
        self.view_model.on_event(ShareGame(detail.name, detail.website))

    async def action_retry(self) -> None:
        self.view_model.on_event(Retry())
