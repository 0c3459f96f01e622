"""Store state and the transition events that move it.

The event set is closed: one success event per operation plus a single
failure event. Anything else handed to the reducer is a programming error.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pycitylog.models.city import CityId, CityRecord


class Phase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"


class Operation(StrEnum):
    REFRESH_ALL = "refresh_all"
    SELECT = "select"
    ADD = "add"
    REMOVE = "remove"

    @property
    def failure_message(self) -> str:
        """Static, user-facing message recorded when this operation fails."""
        return _FAILURE_MESSAGES[self]


_FAILURE_MESSAGES: dict[Operation, str] = {
    Operation.REFRESH_ALL: "fetching cities failed",
    Operation.SELECT: "fetching city failed",
    Operation.ADD: "creating city failed",
    Operation.REMOVE: "deleting city failed",
}


class StoreState(BaseModel):
    """Immutable snapshot of the store.

    Parameters
    ----------
    cities : tuple of CityRecord
        The mirrored collection, unique by ``id``, in server order with
        local additions appended.
    current_city : CityRecord or None
        The currently viewed city. Not necessarily an entry of ``cities``.
    phase : Phase
        Shared busy flag for all operations.
    error : str
        Message of the last failure, ``""`` when there is none.
    failed_operation : Operation or None
        Which operation produced ``error``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cities: tuple[CityRecord, ...] = ()
    current_city: CityRecord | None = None
    phase: Phase = Phase.IDLE
    error: str = ""
    failed_operation: Operation | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class CitiesLoaded(_Event):
    """The whole collection was fetched."""

    cities: tuple[CityRecord, ...] = Field(default_factory=tuple)


class CityLoaded(_Event):
    """A single city was fetched for viewing."""

    city: CityRecord


class CityCreated(_Event):
    """The server stored a new city."""

    city: CityRecord


class CityDeleted(_Event):
    """The server removed a city."""

    city_id: CityId


class Rejected(_Event):
    """An operation failed; ``message`` is its static failure message."""

    operation: Operation
    message: str


TransitionEvent = CitiesLoaded | CityLoaded | CityCreated | CityDeleted | Rejected
