"""In-memory synchronization store for the cities collection.

This is the only component allowed to replace the store state. Each
public operation enters the loading phase, performs one remote call and
applies exactly one transition for its outcome.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, TypeVar

from pycitylog.client import CityRepository
from pycitylog.config import CityLogConfig
from pycitylog.exceptions import CityLogTransportError
from pycitylog.models.city import CityDraft, CityId, same_city_id
from pycitylog.state.access import CitiesHandle
from pycitylog.state.events import (
    CitiesLoaded,
    CityCreated,
    CityDeleted,
    CityLoaded,
    Operation,
    Rejected,
    StoreState,
    TransitionEvent,
)
from pycitylog.state.reducer import begin_loading, end_loading, reduce

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_orphaned_failure(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        _logger.warning("Store operation failed after its caller was cancelled: %r", exc, exc_info=exc)


class CitiesStore:
    """Keeps a local mirror of the remote cities collection.

    Usage::

        async with CitiesClient(config) as client:
            async with CitiesStore(client) as store:
                cities = store.handle()
                await cities.select(3)

    Network failures never escape an operation; they are recorded in
    :attr:`StoreState.error`. Started operations are never cancelled: if
    the awaiting task goes away, the remote call still completes and its
    transition is still applied.
    """

    def __init__(
        self,
        repository: CityRepository,
        *,
        serialize_operations: bool = True,
        auto_refresh: bool = True,
    ) -> None:
        self._repository = repository
        self._state = StoreState()
        self._lock: asyncio.Lock | None = asyncio.Lock() if serialize_operations else None
        self._auto_refresh = auto_refresh
        self._open = False
        self._inflight: set[asyncio.Task[None]] = set()

    @classmethod
    def from_config(cls, repository: CityRepository, config: CityLogConfig) -> CitiesStore:
        return cls(
            repository,
            serialize_operations=config.serialize_operations,
            auto_refresh=config.auto_refresh,
        )

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CitiesStore:
        self._open = True
        if self._auto_refresh:
            await self.refresh_all()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def state(self) -> StoreState:
        """Current snapshot. Always readable, even after the store closed."""
        return self._state

    def handle(self) -> CitiesHandle:
        """Access handle for collaborators; requires an open store."""
        return CitiesHandle(self)

    async def drain(self) -> None:
        """Wait until every started operation has applied its transition."""
        while self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def refresh_all(self) -> None:
        """Replace the collection with the server's list."""

        async def _body() -> None:
            await self._perform(
                Operation.REFRESH_ALL,
                self._repository.list_all,
                lambda cities: CitiesLoaded(cities=tuple(cities)),
            )

        await self._launch(_body)

    async def select(self, city_id: CityId) -> None:
        """Load *city_id* as the current city.

        No-op when it is already the current city.
        """

        async def _body() -> None:
            current = self._state.current_city
            if current is not None and same_city_id(current.id, city_id):
                _logger.debug("City %s already selected; skipping fetch", city_id)
                return
            await self._perform(
                Operation.SELECT,
                lambda: self._repository.get_one(city_id),
                lambda city: CityLoaded(city=city),
            )

        await self._launch(_body)

    async def add(self, draft: CityDraft) -> None:
        """Create a city, append it and make it current."""

        async def _body() -> None:
            await self._perform(
                Operation.ADD,
                lambda: self._repository.create(draft),
                lambda city: CityCreated(city=city),
            )

        await self._launch(_body)

    async def remove(self, city_id: CityId) -> None:
        """Delete a city and clear the current city."""

        async def _body() -> None:
            await self._perform(
                Operation.REMOVE,
                lambda: self._repository.remove(city_id),
                lambda _result: CityDeleted(city_id=city_id),
            )

        await self._launch(_body)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @contextlib.asynccontextmanager
    async def _exclusive(self) -> AsyncIterator[None]:
        if self._lock is None:
            yield
            return
        async with self._lock:
            yield

    async def _launch(self, body: Callable[[], Awaitable[None]]) -> None:
        """Run *body* in its own task, shielded from the caller's cancellation."""

        async def _run() -> None:
            async with self._exclusive():
                await body()

        task = asyncio.ensure_future(_run())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            # Nobody awaits the operation any more; surface its failure in the log.
            task.add_done_callback(_log_orphaned_failure)
            raise

    async def _perform(
        self,
        operation: Operation,
        call: Callable[[], Awaitable[T]],
        to_event: Callable[[T], TransitionEvent],
    ) -> None:
        self._state = begin_loading(self._state)
        _logger.debug("%s: loading", operation)
        try:
            try:
                result = await call()
            except CityLogTransportError as exc:
                _logger.warning("%s failed: %s", operation, exc)
                self._dispatch(Rejected(operation=operation, message=operation.failure_message))
                return
            self._dispatch(to_event(result))
        except BaseException:
            # Not a remote failure: leave loading and let the error propagate.
            if self._state.is_loading:
                self._state = end_loading(self._state)
            raise

    def _dispatch(self, event: TransitionEvent) -> None:
        self._state = reduce(self._state, event)
        _logger.debug(
            "Applied %s: cities=%d current=%s error=%r",
            type(event).__name__,
            len(self._state.cities),
            self._state.current_city.id if self._state.current_city is not None else None,
            self._state.error,
        )
