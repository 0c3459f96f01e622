"""Base model for cities API payloads.

Every wire model inherits from :class:`CityLogBaseModel` which provides
``alias_generator=to_camel`` so camelCase JSON keys (``cityName``) map
automatically to snake_case fields (``city_name``). Instances are frozen
so snapshots handed to readers cannot be mutated behind the store.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CityLogBaseModel(BaseModel):
    """Frozen, camelCase-aliased base for wire models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
