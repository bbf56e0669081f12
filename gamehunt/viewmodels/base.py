"""Building blocks shared by the view-models.

- ``StateHolder``: observable value updated atomically
- ``EffectChannel``: one-shot effects consumed exactly once
- ``ViewModelScope``: owner of the tasks a view-model launches
- ``BaseViewModel``: per-slice generation counter and task tracking
"""

import asyncio
import threading
from collections.abc import AsyncIterator, Callable, Coroutine
from typing import Any, Generic, TypeVar

import structlog

log = structlog.stdlib.get_logger()

S = TypeVar("S")
E = TypeVar("E")


class StateHolder(Generic[S]):
    """Holds the current state of one UI slice and notifies subscribers.

    ``update`` applies a function to the current value under a lock, so
    concurrent completions never overwrite each other's changes.
    """

    def __init__(self, initial: S) -> None:
        self._value: S = initial
        self._lock = threading.Lock()
        self._listeners: list[Callable[[S], None]] = []

    @property
    def value(self) -> S:
        return self._value

    @value.setter
    def value(self, new_value: S) -> None:
        self.update(lambda _: new_value)

    def update(self, transform: Callable[[S], S]) -> S:
        """Replace the value with ``transform(current)``.

        Args:
            transform: Pure function computing the new state

        Returns:
            The new state
        """
        with self._lock:
            old_value = self._value
            new_value = transform(old_value)
            self._value = new_value
        if new_value != old_value:
            for listener in list(self._listeners):
                listener(new_value)
        return new_value

    def subscribe(self, listener: Callable[[S], None]) -> Callable[[], None]:
        """Register a listener called with each new state.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


class EffectChannel(Generic[E]):
    """Queue of one-shot UI effects; each effect is delivered once."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[E] = asyncio.Queue()

    def emit(self, effect: E) -> None:
        log.debug("Effect emitted", effect=type(effect).__name__)
        self._queue.put_nowait(effect)

    async def receive(self) -> E:
        """Wait for the next effect."""
        return await self._queue.get()

    def drain(self) -> list[E]:
        """Take every pending effect without waiting."""
        effects: list[E] = []
        while not self._queue.empty():
            effects.append(self._queue.get_nowait())
        return effects

    async def __aiter__(self) -> AsyncIterator[E]:
        while True:
            yield await self._queue.get()


class ViewModelScope:
    """Launches and tracks the tasks of a view-model.

    Injected into view-models so callers decide where work runs and tests
    can wait for it with ``join``.
    """

    def __init__(self, name: str = "viewmodel") -> None:
        self.name = name
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def active_tasks(self) -> int:
        return len(self._tasks)

    def launch(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task[Any]:
        """Schedule a coroutine on the running event loop."""
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            log.error(
                "View-model task failed",
                scope=self.name,
                task=task.get_name(),
                error=str(error),
                error_type=type(error).__name__,
            )

    async def join(self) -> None:
        """Wait until every launched task, including ones launched meanwhile, is done."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel(self) -> None:
        """Cancel every running task."""
        for task in list(self._tasks):
            task.cancel()
        log.debug("View-model scope cancelled", scope=self.name)


class BaseViewModel:
    """Common task and generation handling for view-models.

    Every UI slice has a generation number. Starting a new load for a slice
    bumps its generation and cancels the slice's previous task; a
    completion whose generation is no longer current is discarded.
    """

    def __init__(self, scope: ViewModelScope | None = None) -> None:
        self.scope = scope or ViewModelScope(type(self).__name__)
        self._generations: dict[str, int] = {}
        self._slice_tasks: dict[str, asyncio.Task[Any]] = {}

    def next_generation(self, slice_name: str) -> int:
        generation = self._generations.get(slice_name, 0) + 1
        self._generations[slice_name] = generation
        return generation

    def is_current(self, slice_name: str, generation: int) -> bool:
        return self._generations.get(slice_name) == generation

    def launch_slice(self, slice_name: str, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        """Run the load of a slice, superseding the slice's previous task."""
        self.cancel_slice(slice_name)
        task = self.scope.launch(coro, name=f"{type(self).__name__}.{slice_name}")
        self._slice_tasks[slice_name] = task
        return task

    def cancel_slice(self, slice_name: str) -> None:
        previous = self._slice_tasks.pop(slice_name, None)
        if previous is not None and not previous.done():
            previous.cancel()

    def close(self) -> None:
        """Cancel all work owned by the view-model."""
        self.scope.cancel()
        self._slice_tasks.clear()
