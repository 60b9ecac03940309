# chargingcloud/api/api/schemas.py
"""Request bodies."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RoamingNetworkCreate(BaseModel):
    """Body of ``CREATE /RNs/{id}``; may be omitted entirely.

    ``name`` and ``description`` stay raw JSON here so the store can reject
    them with its own messages.
    """

    model_config = ConfigDict(extra="allow")

    name: Any = None
    description: Any = None


class PropertyUpdateRequest(BaseModel):
    """Body of ``SET .../{propertyName}``."""

    model_config = ConfigDict(populate_by_name=True)

    old_value: Any = Field(alias="oldValue")
    new_value: Any = Field(alias="newValue")
