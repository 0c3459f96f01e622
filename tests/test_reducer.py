from __future__ import annotations

import pytest

from pycitylog.exceptions import CityLogStateError
from pycitylog.state.events import (
    CitiesLoaded,
    CityCreated,
    CityDeleted,
    CityLoaded,
    Operation,
    Phase,
    Rejected,
    StoreState,
)
from pycitylog.state.reducer import begin_loading, end_loading, reduce


def _loading(state: StoreState | None = None) -> StoreState:
    return begin_loading(state if state is not None else StoreState())


def test_initial_state_is_empty_and_idle() -> None:
    state = StoreState()
    assert state.cities == ()
    assert state.current_city is None
    assert state.phase is Phase.IDLE
    assert state.error == ""
    assert not state.is_loading


def test_begin_loading_only_flips_phase(make_city) -> None:
    before = StoreState(cities=(make_city(1),), current_city=make_city(1), error="old")
    after = begin_loading(before)
    assert after.is_loading
    assert after.cities == before.cities
    assert after.current_city == before.current_city
    assert after.error == "old"
    # snapshots are immutable; the prior state is untouched
    assert not before.is_loading


def test_end_loading_returns_to_idle_without_result(make_city) -> None:
    before = _loading(StoreState(cities=(make_city(1),), error="old"))
    after = end_loading(before)
    assert after.phase is Phase.IDLE
    assert after.cities == before.cities
    assert after.error == "old"


def test_cities_loaded_replaces_collection(make_city) -> None:
    state = _loading(StoreState(cities=(make_city(9, "Oslo"),)))
    state = reduce(state, CitiesLoaded(cities=(make_city(1), make_city(2, "Rome"))))
    assert [c.id for c in state.cities] == [1, 2]
    assert state.phase is Phase.IDLE


def test_cities_loaded_drops_repeated_ids(make_city) -> None:
    state = reduce(_loading(), CitiesLoaded(cities=(make_city(1), make_city(2, "Rome"), make_city(1, "Lyon"))))
    assert [c.id for c in state.cities] == [1, 2]
    assert state.cities[0].city_name == "Paris"


def test_city_loaded_sets_current_without_touching_collection(make_city) -> None:
    state = _loading(StoreState(cities=(make_city(1),)))
    state = reduce(state, CityLoaded(city=make_city(5, "Berlin")))
    assert state.current_city is not None
    assert state.current_city.id == 5
    assert [c.id for c in state.cities] == [1]


def test_city_created_appends_and_selects(make_city) -> None:
    state = _loading(StoreState(cities=(make_city(1),)))
    state = reduce(state, CityCreated(city=make_city(2, "Rome")))
    assert [c.id for c in state.cities] == [1, 2]
    assert state.current_city is not None
    assert state.current_city.id == 2
    assert state.phase is Phase.IDLE


def test_city_created_with_known_id_keeps_ids_unique(make_city) -> None:
    state = _loading(StoreState(cities=(make_city(1), make_city(2, "Rome"))))
    state = reduce(state, CityCreated(city=make_city("1", "Lyon")))
    assert [str(c.id) for c in state.cities] == ["2", "1"]
    assert state.cities[-1].city_name == "Lyon"


def test_city_deleted_removes_and_clears_current(make_city) -> None:
    state = _loading(StoreState(cities=(make_city(1), make_city(2, "Rome")), current_city=make_city(2, "Rome")))
    state = reduce(state, CityDeleted(city_id=1))
    assert [c.id for c in state.cities] == [2]
    assert state.current_city is None


def test_city_deleted_matches_string_ids(make_city) -> None:
    state = reduce(_loading(StoreState(cities=(make_city(1),))), CityDeleted(city_id="1"))
    assert state.cities == ()


def test_rejected_records_error_and_keeps_data(make_city) -> None:
    before = _loading(StoreState(cities=(make_city(1),), current_city=make_city(1)))
    state = reduce(
        before,
        Rejected(operation=Operation.SELECT, message=Operation.SELECT.failure_message),
    )
    assert state.phase is Phase.IDLE
    assert state.error == "fetching city failed"
    assert state.failed_operation is Operation.SELECT
    assert state.cities == before.cities
    assert state.current_city == before.current_city


def test_success_clears_previous_error(make_city) -> None:
    state = StoreState(error="fetching cities failed", failed_operation=Operation.REFRESH_ALL)
    state = reduce(_loading(state), CitiesLoaded(cities=(make_city(1),)))
    assert state.error == ""
    assert state.failed_operation is None


def test_unknown_transition_is_fatal() -> None:
    with pytest.raises(CityLogStateError, match="unknown transition"):
        reduce(StoreState(), {"type": "city/renamed"})


@pytest.mark.parametrize(
    ("operation", "message"),
    [
        (Operation.REFRESH_ALL, "fetching cities failed"),
        (Operation.SELECT, "fetching city failed"),
        (Operation.ADD, "creating city failed"),
        (Operation.REMOVE, "deleting city failed"),
    ],
)
def test_failure_messages(operation: Operation, message: str) -> None:
    assert operation.failure_message == message
