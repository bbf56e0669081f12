"""Home screen: search, genre filter, popular games and the filtered list."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, Label, ListItem, ListView, OptionList, Static
from textual.widgets.option_list import Option

import structlog

from gamehunt.models import Game
from gamehunt.ui.formatting import game_card_text
from gamehunt.viewmodels import HomeViewModel, NavigateToDetail
from gamehunt.viewmodels.home import (
    FilteredGamesUiState,
    GamesUiState,
    GameSelected,
    GenreSelected,
    GenresUiState,
    LoadMore,
    Retry,
    RetryPage,
    SearchChanged,
)

from .base import BaseScreen

log = structlog.stdlib.get_logger()

# Highlighting one of the last rows requests the next page
LOAD_MORE_THRESHOLD = 3

ALL_GAMES_TITLE = "All games"
RESULTS_TITLE = "Results"


def _game_item(game: Game) -> ListItem:
    return ListItem(Label(game_card_text(game), markup=False), name=game.slug)


class HomeScreen(BaseScreen):
    """Browse the catalog.

    Popular games are shown until a genre is selected or the search text
    is longer than three characters; from then on the paged search list
    takes over.
    """

    SCREEN_TITLE: ClassVar[str] = "GameHunt"
    SCREEN_NAME: ClassVar[str] = "home"

    CSS: ClassVar[str] = """
    #search-input {
        margin: 0 1;
    }

    #home-body {
        height: 1fr;
    }

    #genre-panel {
        width: 30;
        border: solid $primary;
    }

    #genre-list {
        height: 1fr;
    }

    #games-panel {
        width: 1fr;
        border: solid $secondary;
    }

    #popular-list {
        height: auto;
        max-height: 12;
    }

    #games-list {
        height: 1fr;
    }

    .status {
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("r", "retry", "Retry", show=True),
        Binding("m", "load_more", "More", show=True),
        Binding("slash", "focus_search", "Search", show=True),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._view_model: HomeViewModel | None = None

    @property
    def view_model(self) -> HomeViewModel:
        if self._view_model is None:
            raise RuntimeError("Home view-model is not created yet")
        return self._view_model

    @override
    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Search games (more than 3 letters)", id="search-input")
        with Horizontal(id="home-body"):
            with Vertical(id="genre-panel"):
                yield Static("Genres", classes="section-title")
                yield self.create_text_widget("genre-status", classes="status")
                yield OptionList(id="genre-list")
            with Vertical(id="games-panel"):
                yield Static("Popular games", id="popular-title", classes="section-title")
                yield self.create_text_widget("popular-status", classes="status")
                yield ListView(id="popular-list")
                yield Static(ALL_GAMES_TITLE, id="games-title", classes="section-title")
                yield self.create_text_widget("games-status", classes="status")
                yield ListView(id="games-list")
        yield Footer()

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        view_model = self.game_app.create_home_view_model()
        self._view_model = view_model

        self.track_subscription(view_model.genres_state.subscribe(lambda _: self.call_later(self._render_genres)))
        self.track_subscription(view_model.games_state.subscribe(lambda _: self.call_later(self._render_popular)))
        self.track_subscription(view_model.search_query.subscribe(lambda _: self.call_later(self._render_popular)))
        self.track_subscription(
            view_model.filtered_state.subscribe(lambda _: self.call_later(self._render_filtered))
        )

        self.run_worker(self._consume_effects(), name="home-effects", group="effects")
        view_model.start()

    @override
    async def on_unmount(self) -> None:
        await super().on_unmount()
        if self._view_model is not None:
            self._view_model.close()

    async def _consume_effects(self) -> None:
        async for effect in self.view_model.effects:
            if isinstance(effect, NavigateToDetail):
                log.info("Opening game detail", slug=effect.slug)
                await self.game_app.push_screen_with_tracking("detail", slug=effect.slug)

    async def _render_genres(self) -> None:
        state: GenresUiState = self.view_model.genres_state.value
        status = self.query_one("#genre-status", Static)
        if state.is_loading and not state.genres:
            self.set_status(status, "Loading genres...")
        elif state.error:
            self.set_status(status, state.error, is_error=True)
        else:
            self.set_status(status, "")

        option_list = self.query_one("#genre-list", OptionList)
        highlighted = option_list.highlighted
        option_list.clear_options()
        option_list.add_options(
            [
                Option(
                    f"● {genre.name}" if genre.id == state.selected_genre_id else f"  {genre.name}",
                    id=genre.slug,
                )
                for genre in state.genres
            ]
        )
        if highlighted is not None and highlighted < len(state.genres):
            option_list.highlighted = highlighted

    async def _render_popular(self) -> None:
        view_model = self.view_model
        state: GamesUiState = view_model.games_state.value
        visible = view_model.show_popular_games
        title = self.query_one("#popular-title", Static)
        status = self.query_one("#popular-status", Static)
        popular_list = self.query_one("#popular-list", ListView)

        title.display = visible or state.is_loading or bool(state.error)
        self.query_one("#games-title", Static).update(RESULTS_TITLE if view_model.is_filtering else ALL_GAMES_TITLE)
        popular_list.display = visible
        if state.is_loading and not state.popular_games:
            self.set_status(status, "Loading popular games...")
        elif state.error:
            self.set_status(status, f"{state.error} (press r to retry)", is_error=True)
        else:
            self.set_status(status, "")

        await popular_list.clear()
        if visible:
            await popular_list.extend(_game_item(game) for game in state.popular_games)

    async def _render_filtered(self) -> None:
        state: FilteredGamesUiState = self.view_model.filtered_state.value
        status = self.query_one("#games-status", Static)
        games_list = self.query_one("#games-list", ListView)

        if state.is_loading:
            self.set_status(status, "Loading games...")
        elif state.error:
            self.set_status(status, f"{state.error} (press r to retry)", is_error=True)
        elif state.is_empty:
            self.set_status(status, "No games found")
        elif state.page_error:
            self.set_status(status, f"{state.page_error} (press r to retry the page)", is_error=True)
        elif state.is_loading_more:
            self.set_status(status, f"{len(state.items)} games, loading more...")
        else:
            self.set_status(status, f"{len(state.items)} games")

        # Appends keep the existing rows; any other change rebuilds the list
        shown = [item.name for item in games_list.query(ListItem)]
        slugs = [game.slug for game in state.items]
        if shown == slugs[: len(shown)] and shown:
            new_games = state.items[len(shown):]
        else:
            await games_list.clear()
            new_games = state.items
        if new_games:
            await games_list.extend(_game_item(game) for game in new_games)

        self.call_later(self._render_popular)

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self.view_model.on_event(SearchChanged(event.value))

    async def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id == "genre-list":
            self.view_model.on_event(GenreSelected(event.option.id))

    async def on_list_view_selected(self, event: ListView.Selected) -> None:
        slug = event.item.name
        if slug:
            self.view_model.on_event(GameSelected(slug))

    async def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        if event.list_view.id != "games-list" or event.list_view.index is None:
            return
        if event.list_view.index >= len(event.list_view) - LOAD_MORE_THRESHOLD:
            self.view_model.on_event(LoadMore())

    async def action_retry(self) -> None:
        filtered = self.view_model.filtered_state.value
        if filtered.page_error and not filtered.error:
            self.view_model.on_event(RetryPage())
        else:
            self.view_model.on_event(Retry())

    async def action_load_more(self) -> None:
        self.view_model.on_event(LoadMore())

    async def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    @override
    async def action_go_back(self) -> None:
        """The home screen is the root: back quits."""
        log.info("Quit requested from home screen")
        self.game_app.exit()
