# chargingcloud/api/api/properties.py
"""
Extension property endpoints shared by roaming networks and their members.
"""
from __future__ import annotations

from typing import Any

from fastapi import Response, status

from chargingcloud.api.api.schemas import PropertyUpdateRequest
from chargingcloud.api.core.model import Entity


def read_property(entity: Entity, property_name: str) -> dict[str, Any]:
    return {property_name: entity.properties.get(property_name)}


def write_property(
    entity: Entity,
    property_name: str,
    body: PropertyUpdateRequest,
    response: Response,
) -> dict[str, Any]:
    """Compare-and-swap ``property_name``; 201 when created, 200 when replaced."""
    update = entity.properties.set(property_name, body.old_value, body.new_value)
    response.status_code = status.HTTP_201_CREATED if update.created else status.HTTP_200_OK
    return update.to_dict()
