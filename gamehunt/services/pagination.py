"""Incremental pagination of catalog results.

A ``PagingSource`` loads one page for a page key and tells the ``Pager``
which keys come before and after it. The ``Pager`` keeps the loaded pages
for one filter configuration, tracks a load state per direction (refresh,
append, prepend) and exposes the merged item list.

Page keys are integers starting at 1. A key of None means there is no
further page in that direction.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

import structlog

from ..models import Game
from .mappers import game_to_domain
from .rawg_api import RawgApiService

log = structlog.stdlib.get_logger()

T = TypeVar("T")

SEARCH_PAGE_SIZE = 20


@dataclass(frozen=True)
class LoadParams:
    """Parameters of a single page load."""
    key: int | None
    load_size: int


@dataclass(frozen=True)
class Page(Generic[T]):
    """A successfully loaded page."""
    data: list[T]
    prev_key: int | None
    next_key: int | None


@dataclass(frozen=True)
class LoadError:
    """A failed page load, scoped to the requested key."""
    key: int
    error: Exception


LoadResult = Page[T] | LoadError


@dataclass(frozen=True)
class PagingState(Generic[T]):
    """Loaded pages plus the item position the user is looking at."""
    pages: list[Page[T]]
    anchor_position: int | None = None

    def closest_page_to_position(self, position: int) -> Page[T] | None:
        """Find the page holding the item at ``position``.

        Positions before the first item resolve to the first page and
        positions past the last item resolve to the last page.
        """
        if not self.pages:
            return None
        remaining = position
        for page in self.pages:
            if remaining < len(page.data):
                return page
            remaining -= len(page.data)
        return self.pages[-1]


class PagingSource(ABC, Generic[T]):
    """Loads pages of ``T`` for one fixed query."""

    @abstractmethod
    async def load(self, params: LoadParams) -> LoadResult[T]:
        """Load the page for ``params.key``; failures are returned, not raised."""

    @abstractmethod
    def get_refresh_key(self, state: PagingState[T]) -> int | None:
        """Key to restart from when the data is refreshed."""


class GamesPagingSource(PagingSource[Game]):
    """Pages through the games endpoint, optionally filtered by genre and search text."""

    def __init__(
        self,
        api: RawgApiService,
        genre_slug: str | None = None,
        query: str | None = None,
    ) -> None:
        self.api = api
        self.genre_slug = genre_slug if genre_slug and genre_slug.strip() else None
        self.query = query if query and query.strip() else None

    async def load(self, params: LoadParams) -> LoadResult[Game]:
        page = params.key if params.key is not None else 1
        try:
            response = await self.api.fetch_games(
                genre_slug=self.genre_slug,
                search=self.query,
                page=page,
                page_size=params.load_size,
            )
        except Exception as e:
            log.warning(
                "Page load failed",
                page=page,
                genre_slug=self.genre_slug,
                query=self.query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return LoadError(key=page, error=e)

        games = [game_to_domain(item) for item in response.results]
        log.debug("Page loaded", page=page, items=len(games), genre_slug=self.genre_slug, query=self.query)
        return Page(
            data=games,
            prev_key=None if page == 1 else page - 1,
            next_key=None if not games else page + 1,
        )

    def get_refresh_key(self, state: PagingState[Game]) -> int | None:
        if state.anchor_position is None:
            return None
        closest = state.closest_page_to_position(state.anchor_position)
        if closest is None:
            return None
        if closest.prev_key is not None:
            return closest.prev_key + 1
        if closest.next_key is not None:
            return closest.next_key - 1
        return None


class LoadType(Enum):
    """Direction of a page load."""
    REFRESH = "refresh"
    APPEND = "append"
    PREPEND = "prepend"


@dataclass(frozen=True)
class LoadState:
    """Load status of one direction."""
    is_loading: bool = False
    error: Exception | None = None
    end_of_pagination_reached: bool = False

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class LoadStates:
    """Load status of every direction."""
    refresh: LoadState = field(default_factory=LoadState)
    append: LoadState = field(default_factory=LoadState)
    prepend: LoadState = field(default_factory=LoadState)


@dataclass(frozen=True)
class PagingData(Generic[T]):
    """Immutable snapshot of a pager: merged items and load states."""
    items: list[T] = field(default_factory=list)
    load_states: LoadStates = field(default_factory=LoadStates)

    @classmethod
    def empty(cls) -> "PagingData[T]":
        return cls()


@dataclass(frozen=True)
class PagingConfig:
    """Pager settings."""
    page_size: int = SEARCH_PAGE_SIZE
    initial_key: int = 1


class Pager(Generic[T]):
    """Caches pages of one filter configuration and loads more on demand.

    Pages are stored by key, so results that complete out of order still
    merge into ascending key order. A failed load only changes the state of
    its own direction; already loaded pages are kept and the same key can
    be retried.
    """

    def __init__(
        self,
        source_factory: Callable[[], PagingSource[T]],
        config: PagingConfig | None = None,
    ) -> None:
        """Initialize the pager.

        Args:
            source_factory: Creates a fresh paging source on every refresh
            config: Page size and initial key
        """
        self.config = config or PagingConfig()
        self._source_factory = source_factory
        self._source: PagingSource[T] | None = None
        self._pages: dict[int, Page[T]] = {}
        self._states: dict[LoadType, LoadState] = {load_type: LoadState() for load_type in LoadType}
        self._failed_keys: dict[LoadType, int] = {}
        self._in_flight: set[LoadType] = set()
        self._generation = 0
        self._listeners: list[Callable[[PagingData[T]], None]] = []

    @property
    def pages(self) -> list[Page[T]]:
        """Loaded pages in ascending key order."""
        return [self._pages[key] for key in sorted(self._pages)]

    @property
    def items(self) -> list[T]:
        """All loaded items in page order."""
        return [item for page in self.pages for item in page.data]

    @property
    def load_states(self) -> LoadStates:
        return LoadStates(
            refresh=self._states[LoadType.REFRESH],
            append=self._states[LoadType.APPEND],
            prepend=self._states[LoadType.PREPEND],
        )

    def snapshot(self) -> PagingData[T]:
        """Get the current items and load states."""
        return PagingData(items=self.items, load_states=self.load_states)

    def add_listener(self, listener: Callable[[PagingData[T]], None]) -> None:
        """Register a callback invoked with a snapshot after every change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[PagingData[T]], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def refresh(self, anchor_position: int | None = None) -> PagingData[T]:
        """Drop all pages and load again from a single key.

        The key is derived from ``anchor_position`` through the current
        source when pages are loaded, otherwise the initial key is used.

        Args:
            anchor_position: Index of the item the user is looking at

        Returns:
            Snapshot after the refresh load completed
        """
        key: int | None = None
        if anchor_position is not None and self._source is not None and self._pages:
            key = self._source.get_refresh_key(PagingState(self.pages, anchor_position))

        self._source = self._source_factory()
        self._generation += 1
        self._pages.clear()
        self._failed_keys.clear()
        self._in_flight.clear()
        self._states[LoadType.APPEND] = LoadState()
        self._states[LoadType.PREPEND] = LoadState()

        start_key = key if key is not None else self.config.initial_key
        log.debug("Refreshing pager", start_key=start_key, anchor_position=anchor_position)
        await self._load(LoadType.REFRESH, start_key)
        return self.snapshot()

    async def load_next(self) -> PagingData[T]:
        """Load the page after the last loaded one, if there is one."""
        pages = self.pages
        if not pages or LoadType.APPEND in self._in_flight:
            return self.snapshot()
        key = pages[-1].next_key
        if key is None or key in self._pages:
            return self.snapshot()
        await self._load(LoadType.APPEND, key)
        return self.snapshot()

    async def load_previous(self) -> PagingData[T]:
        """Load the page before the first loaded one, if there is one."""
        pages = self.pages
        if not pages or LoadType.PREPEND in self._in_flight:
            return self.snapshot()
        key = pages[0].prev_key
        if key is None or key in self._pages:
            return self.snapshot()
        await self._load(LoadType.PREPEND, key)
        return self.snapshot()

    async def retry(self) -> PagingData[T]:
        """Load again every key whose last load failed."""
        for load_type, key in list(self._failed_keys.items()):
            log.info("Retrying page load", load_type=load_type.value, key=key)
            await self._load(load_type, key)
        return self.snapshot()

    async def stream(self) -> AsyncIterator[PagingData[T]]:
        """Load pages forward from the start, yielding a snapshot per page.

        Stops after the last page or at the first error.
        """
        data = await self.refresh()
        yield data
        while True:
            states = data.load_states
            if states.refresh.is_error or states.append.is_error:
                return
            if states.append.end_of_pagination_reached:
                return
            data = await self.load_next()
            yield data

    async def _load(self, load_type: LoadType, key: int) -> None:
        if self._source is None:
            self._source = self._source_factory()
        source = self._source
        generation = self._generation

        self._in_flight.add(load_type)
        self._set_state(load_type, LoadState(is_loading=True))
        try:
            result = await source.load(LoadParams(key=key, load_size=self.config.page_size))
        finally:
            if generation == self._generation:
                self._in_flight.discard(load_type)

        if generation != self._generation:
            log.debug("Discarding page from a previous refresh", key=key, load_type=load_type.value)
            return

        if isinstance(result, LoadError):
            self._failed_keys[load_type] = result.key
            self._set_state(load_type, LoadState(error=result.error))
            return

        self._failed_keys.pop(load_type, None)
        self._pages[key] = result
        if load_type is LoadType.REFRESH:
            self._states[LoadType.APPEND] = LoadState(end_of_pagination_reached=result.next_key is None)
            self._states[LoadType.PREPEND] = LoadState(end_of_pagination_reached=result.prev_key is None)
            self._set_state(LoadType.REFRESH, LoadState())
        elif load_type is LoadType.APPEND:
            self._set_state(load_type, LoadState(end_of_pagination_reached=result.next_key is None))
        else:
            self._set_state(load_type, LoadState(end_of_pagination_reached=result.prev_key is None))

    def _set_state(self, load_type: LoadType, state: LoadState) -> None:
        self._states[load_type] = state
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
