"""Synchronization store layer.

This package owns the single in-process copy of the remote cities
collection. Only the pure transitions in :mod:`pycitylog.state.reducer`
produce new states; readers get frozen snapshots through
:class:`~pycitylog.state.access.CitiesHandle`.
"""

from pycitylog.state.access import CitiesHandle
from pycitylog.state.events import (
    CitiesLoaded,
    CityCreated,
    CityDeleted,
    CityLoaded,
    Operation,
    Phase,
    Rejected,
    StoreState,
    TransitionEvent,
)
from pycitylog.state.reducer import begin_loading, end_loading, reduce
from pycitylog.state.store import CitiesStore

__all__ = [
    "CitiesHandle",
    "CitiesLoaded",
    "CitiesStore",
    "CityCreated",
    "CityDeleted",
    "CityLoaded",
    "Operation",
    "Phase",
    "Rejected",
    "StoreState",
    "TransitionEvent",
    "begin_loading",
    "end_loading",
    "reduce",
]
