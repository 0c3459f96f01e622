"""Pure state transitions.

Nothing here performs I/O; every function maps a prior
:class:`StoreState` plus an event to the next state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from pycitylog.exceptions import CityLogStateError
from pycitylog.models.city import CityRecord, same_city_id
from pycitylog.state.events import (
    CitiesLoaded,
    CityCreated,
    CityDeleted,
    CityLoaded,
    Phase,
    Rejected,
    StoreState,
)


def _unique(cities: Iterable[CityRecord]) -> tuple[CityRecord, ...]:
    """Drop repeated ids, keeping the first occurrence and its position."""
    seen: set[str] = set()
    result: list[CityRecord] = []
    for city in cities:
        key = str(city.id)
        if key in seen:
            continue
        seen.add(key)
        result.append(city)
    return tuple(result)


def _settle(state: StoreState, **changes: Any) -> StoreState:
    """Apply a success: back to idle, previous error cleared."""
    return state.model_copy(
        update={
            **changes,
            "phase": Phase.IDLE,
            "error": "",
            "failed_operation": None,
        }
    )


def begin_loading(state: StoreState) -> StoreState:
    """Enter the loading phase. Data fields are untouched."""
    return state.model_copy(update={"phase": Phase.LOADING})


def end_loading(state: StoreState) -> StoreState:
    """Leave the loading phase without recording a result."""
    return state.model_copy(update={"phase": Phase.IDLE})


def _on_cities_loaded(state: StoreState, event: CitiesLoaded) -> StoreState:
    return _settle(state, cities=_unique(event.cities))


def _on_city_loaded(state: StoreState, event: CityLoaded) -> StoreState:
    return _settle(state, current_city=event.city)


def _on_city_created(state: StoreState, event: CityCreated) -> StoreState:
    kept = tuple(city for city in state.cities if not same_city_id(city.id, event.city.id))
    return _settle(state, cities=(*kept, event.city), current_city=event.city)


def _on_city_deleted(state: StoreState, event: CityDeleted) -> StoreState:
    kept = tuple(city for city in state.cities if not same_city_id(city.id, event.city_id))
    return _settle(state, cities=kept, current_city=None)


def _on_rejected(state: StoreState, event: Rejected) -> StoreState:
    return state.model_copy(
        update={
            "phase": Phase.IDLE,
            "error": event.message,
            "failed_operation": event.operation,
        }
    )


_TRANSITIONS: dict[type, Callable[[StoreState, Any], StoreState]] = {
    CitiesLoaded: _on_cities_loaded,
    CityLoaded: _on_city_loaded,
    CityCreated: _on_city_created,
    CityDeleted: _on_city_deleted,
    Rejected: _on_rejected,
}


def reduce(state: StoreState, event: object) -> StoreState:
    """Return the state that follows *event*.

    Raises
    ------
    CityLogStateError
        If *event* is not one of the known transition events.
    """
    transition = _TRANSITIONS.get(type(event))
    if transition is None:
        raise CityLogStateError(f"unknown transition: {type(event).__name__}")
    return transition(state, event)
