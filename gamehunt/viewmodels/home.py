"""Home screen view-model: genres, popular games and the filtered game list."""

from dataclasses import dataclass, field, replace

import structlog

from ..models import FilterState, Game, Genre
from ..services.errors import error_message
from ..services.pagination import LoadState, LoadStates, Pager, PagingData
from ..services.usecases import GetGenresUseCase, GetPopularGamesUseCase, SearchGamesUseCase
from .base import BaseViewModel, EffectChannel, StateHolder, ViewModelScope

log = structlog.stdlib.get_logger()

# Search text reloads the list only above this length (or when cleared)
SEARCH_MIN_LENGTH = 3


def should_reload_search(query: str) -> bool:
    """Check whether a new search text should reload the filtered list."""
    return len(query) > SEARCH_MIN_LENGTH or query == ""


def is_filtering(search_query: str, selected_genre_id: int | None) -> bool:
    """Check whether the filtered list replaces the popular carousel."""
    return len(search_query) > SEARCH_MIN_LENGTH or selected_genre_id is not None


@dataclass(frozen=True)
class GenresUiState:
    genres: list[Genre] = field(default_factory=list)
    selected_genre_id: int | None = None
    is_loading: bool = False
    error: str = ""

    @property
    def selected_genre(self) -> Genre | None:
        if self.selected_genre_id is None:
            return None
        return next((g for g in self.genres if g.id == self.selected_genre_id), None)


@dataclass(frozen=True)
class GamesUiState:
    popular_games: list[Game] = field(default_factory=list)
    is_loading: bool = False
    error: str = ""


@dataclass(frozen=True)
class FilteredGamesUiState:
    """Filtered list: the filter it was loaded for and the pager snapshot."""
    filter: FilterState = field(default_factory=FilterState)
    paging: PagingData[Game] = field(default_factory=PagingData)
    generation: int = 0

    @property
    def items(self) -> list[Game]:
        return self.paging.items

    @property
    def is_loading(self) -> bool:
        return self.paging.load_states.refresh.is_loading

    @property
    def is_loading_more(self) -> bool:
        return self.paging.load_states.append.is_loading

    @property
    def error(self) -> str:
        refresh_error = self.paging.load_states.refresh.error
        return error_message(refresh_error) if refresh_error is not None else ""

    @property
    def page_error(self) -> str:
        append_error = self.paging.load_states.append.error
        return error_message(append_error) if append_error is not None else ""

    @property
    def end_reached(self) -> bool:
        return self.paging.load_states.append.end_of_pagination_reached

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.is_loading and not self.error


@dataclass(frozen=True)
class SearchChanged:
    query: str


@dataclass(frozen=True)
class GenreSelected:
    genre_slug: str | None


@dataclass(frozen=True)
class Retry:
    pass


@dataclass(frozen=True)
class GameSelected:
    slug: str


@dataclass(frozen=True)
class LoadMore:
    """The user scrolled to the end of the filtered list."""


@dataclass(frozen=True)
class RetryPage:
    """Retry the page of the filtered list that failed to load."""


HomeEvent = SearchChanged | GenreSelected | Retry | GameSelected | LoadMore | RetryPage


@dataclass(frozen=True)
class NavigateToDetail:
    slug: str


HomeEffect = NavigateToDetail


class HomeViewModel(BaseViewModel):
    """State and events of the home screen.

    Three slices load independently: genres and popular games once at
    start, and the filtered game list whenever the genre selection or a
    qualifying search text changes.
    """

    def __init__(
        self,
        get_genres: GetGenresUseCase,
        get_popular_games: GetPopularGamesUseCase,
        search_games: SearchGamesUseCase,
        scope: ViewModelScope | None = None,
    ) -> None:
        super().__init__(scope)
        self._get_genres = get_genres
        self._get_popular_games = get_popular_games
        self._search_games = search_games

        self.genres_state: StateHolder[GenresUiState] = StateHolder(GenresUiState())
        self.games_state: StateHolder[GamesUiState] = StateHolder(GamesUiState())
        self.search_query: StateHolder[str] = StateHolder("")
        self.filtered_state: StateHolder[FilteredGamesUiState] = StateHolder(FilteredGamesUiState())
        self.effects: EffectChannel[HomeEffect] = EffectChannel()

        self._pager: Pager[Game] | None = None

    @property
    def is_filtering(self) -> bool:
        return is_filtering(self.search_query.value, self.genres_state.value.selected_genre_id)

    @property
    def show_popular_games(self) -> bool:
        return not self.is_filtering and bool(self.games_state.value.popular_games)

    def start(self) -> None:
        """Load every slice; call once the event loop is running."""
        log.info("Home view-model starting")
        self._reload_all()

    def on_event(self, event: HomeEvent) -> None:
        """Handle a user intent from the home screen."""
        if isinstance(event, SearchChanged):
            self.search_query.value = event.query
            if should_reload_search(event.query):
                self._load_filtered_games()
        elif isinstance(event, GenreSelected):
            self.genres_state.update(lambda state: _toggle_genre(state, event.genre_slug))
            log.info(
                "Genre selection changed",
                genre_slug=event.genre_slug,
                selected_genre_id=self.genres_state.value.selected_genre_id,
            )
            self._load_filtered_games()
        elif isinstance(event, Retry):
            self._reload_all()
        elif isinstance(event, GameSelected):
            self.effects.emit(NavigateToDetail(event.slug))
        elif isinstance(event, LoadMore):
            self._load_more()
        elif isinstance(event, RetryPage):
            self._retry_page()
        else:
            log.warning("Unknown home event", event=repr(event))

    def _reload_all(self) -> None:
        self._load_genres()
        self._load_popular_games()
        self._load_filtered_games()

    def _load_genres(self) -> None:
        generation = self.next_generation("genres")
        self.genres_state.update(lambda s: replace(s, is_loading=True))
        self.launch_slice("genres", self._collect_genres(generation))

    async def _collect_genres(self, generation: int) -> None:
        result = await self._get_genres()
        if not self.is_current("genres", generation):
            return
        if result.is_success:
            genres = result.value or []
            self.genres_state.update(lambda s: replace(s, genres=genres, is_loading=False, error=""))
        else:
            message = error_message(result.error) if result.error else ""
            self.genres_state.update(lambda s: replace(s, error=message, is_loading=False))

    def _load_popular_games(self) -> None:
        generation = self.next_generation("popular")
        self.games_state.update(lambda s: replace(s, is_loading=True))
        self.launch_slice("popular", self._collect_popular_games(generation))

    async def _collect_popular_games(self, generation: int) -> None:
        result = await self._get_popular_games()
        if not self.is_current("popular", generation):
            return
        if result.is_success:
            games = result.value or []
            self.games_state.update(lambda s: replace(s, popular_games=games, is_loading=False, error=""))
        else:
            message = error_message(result.error) if result.error else ""
            self.games_state.update(lambda s: replace(s, error=message, is_loading=False))

    def _load_filtered_games(self) -> None:
        selected = self.genres_state.value.selected_genre
        filter_state = FilterState(
            genre_slug=selected.slug if selected else None,
            search_query=self.search_query.value,
        )
        pager = self._search_games(genre_slug=filter_state.genre_slug, search=filter_state.search_query)
        self._pager = pager
        self.cancel_slice("filtered_more")

        generation = self.next_generation("filtered")
        self.filtered_state.value = FilteredGamesUiState(
            filter=filter_state,
            paging=PagingData(load_states=LoadStates(refresh=LoadState(is_loading=True))),
            generation=generation,
        )
        log.info(
            "Loading filtered games",
            genre_slug=filter_state.genre_slug,
            search_query=filter_state.search_query,
            generation=generation,
        )
        self.launch_slice("filtered", self._collect_filtered_games(pager, generation))

    async def _collect_filtered_games(self, pager: Pager[Game], generation: int) -> None:
        def on_change(data: PagingData[Game]) -> None:
            if not self.is_current("filtered", generation):
                return
            self.filtered_state.update(
                lambda s: replace(s, paging=data) if s.generation == generation else s
            )

        pager.add_listener(on_change)
        await pager.refresh()

    def _load_more(self) -> None:
        pager = self._pager
        if pager is None:
            return
        states = pager.load_states
        if states.refresh.is_loading or states.refresh.is_error:
            return
        if states.append.is_loading or states.append.is_error or states.append.end_of_pagination_reached:
            return
        self.launch_slice("filtered_more", pager.load_next())

    def _retry_page(self) -> None:
        pager = self._pager
        if pager is None:
            return
        states = pager.load_states
        if not (states.refresh.is_error or states.append.is_error or states.prepend.is_error):
            return
        self.launch_slice("filtered_more", pager.retry())


def _toggle_genre(state: GenresUiState, genre_slug: str | None) -> GenresUiState:
    """Select the genre with ``genre_slug``, or clear it if it is already selected."""
    genre = next((g for g in state.genres if g.slug == genre_slug), None)
    if genre is None or genre.id == state.selected_genre_id:
        return replace(state, selected_genre_id=None)
    return replace(state, selected_genre_id=genre.id)
