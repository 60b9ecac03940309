# chargingcloud/api/api/roaming_networks.py
"""
Roaming network endpoints.

URL structure::

    GET, COUNT            /RNs
    GET                   /RNs->AdminStatus, /RNs->Status
    GET, CREATE, DELETE   /RNs/{roaming_network_id}
    GET, SET              /RNs/{roaming_network_id}/{property_name}

``POST`` is accepted for ``CREATE`` and ``PUT`` for ``SET``. The property
routes live on ``property_router`` so the application can mount them after
the member collections, whose literal paths must win.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response, status

from chargingcloud.api.api.collections import RESERVED_PROPERTY_NAMES
from chargingcloud.api.api.context import (
    TOTAL_COUNT_HEADER,
    Window,
    get_engine,
    get_history_size,
    get_roaming_network,
    get_scope,
    get_store,
    get_window,
)
from chargingcloud.api.api.properties import read_property, write_property
from chargingcloud.api.api.schemas import PropertyUpdateRequest, RoamingNetworkCreate
from chargingcloud.api.core.errors import ValidationError
from chargingcloud.api.core.model import RoamingNetwork
from chargingcloud.api.core.projection import ProjectionEngine, StatusKind, status_report
from chargingcloud.api.core.store import RoamingNetworkStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["roaming-networks"])
property_router = APIRouter(tags=["properties"])


# -- collection ------------------------------------------------------------


@router.get("/RNs")
async def list_roaming_networks(
    response: Response,
    window: Window = Depends(get_window),
    scope: str = Depends(get_scope),
    store: RoamingNetworkStore = Depends(get_store),
    engine: ProjectionEngine = Depends(get_engine),
) -> list[dict[str, Any]]:
    page = store.list(scope, window.skip, window.take)
    response.headers[TOTAL_COUNT_HEADER] = str(page.total)
    return [engine.to_json(rn) for rn in page.items]


@router.api_route("/RNs", methods=["COUNT"], include_in_schema=False)
async def count_roaming_networks(
    scope: str = Depends(get_scope),
    store: RoamingNetworkStore = Depends(get_store),
) -> dict[str, int]:
    return {"count": store.count(scope)}


def _status(
    kind: StatusKind,
    response: Response,
    window: Window,
    history_size: int,
    scope: str,
    store: RoamingNetworkStore,
) -> dict[str, Any]:
    networks = store.list(scope).items
    page = status_report(
        networks, kind, skip=window.skip, take=window.take, history_size=history_size
    )
    response.headers[TOTAL_COUNT_HEADER] = str(page.total)
    return page.items[0]


@router.get("/RNs->AdminStatus")
async def roaming_networks_admin_status(
    response: Response,
    window: Window = Depends(get_window),
    history_size: int = Depends(get_history_size),
    scope: str = Depends(get_scope),
    store: RoamingNetworkStore = Depends(get_store),
) -> dict[str, Any]:
    return _status(StatusKind.ADMIN_STATUS, response, window, history_size, scope, store)


@router.get("/RNs->Status")
async def roaming_networks_status(
    response: Response,
    window: Window = Depends(get_window),
    history_size: int = Depends(get_history_size),
    scope: str = Depends(get_scope),
    store: RoamingNetworkStore = Depends(get_store),
) -> dict[str, Any]:
    return _status(StatusKind.STATUS, response, window, history_size, scope, store)


# -- single network --------------------------------------------------------


@router.get("/RNs/{roaming_network_id}")
async def get_roaming_network_json(
    network: RoamingNetwork = Depends(get_roaming_network),
    engine: ProjectionEngine = Depends(get_engine),
) -> dict[str, Any]:
    return engine.to_json(network)


@router.post("/RNs/{roaming_network_id}", status_code=status.HTTP_201_CREATED)
@router.api_route(
    "/RNs/{roaming_network_id}",
    methods=["CREATE"],
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_roaming_network(
    roaming_network_id: str,
    body: RoamingNetworkCreate | None = None,
    scope: str = Depends(get_scope),
    store: RoamingNetworkStore = Depends(get_store),
    engine: ProjectionEngine = Depends(get_engine),
) -> dict[str, Any]:
    network = store.create(
        scope,
        roaming_network_id,
        name=body.name if body else None,
        description=body.description if body else None,
    )
    return engine.to_json(network)


@router.delete("/RNs/{roaming_network_id}")
async def delete_roaming_network(
    roaming_network_id: str,
    scope: str = Depends(get_scope),
    store: RoamingNetworkStore = Depends(get_store),
    engine: ProjectionEngine = Depends(get_engine),
) -> dict[str, Any]:
    network = store.delete(scope, roaming_network_id)
    return engine.to_json(network)


# -- extension properties --------------------------------------------------


def _check_property_name(property_name: str) -> str:
    if property_name in RESERVED_PROPERTY_NAMES:
        raise ValidationError(f"Property name '{property_name}' is reserved!")
    return property_name


@property_router.get("/RNs/{roaming_network_id}/{property_name}")
async def get_roaming_network_property(
    property_name: str,
    network: RoamingNetwork = Depends(get_roaming_network),
) -> dict[str, Any]:
    return read_property(network, _check_property_name(property_name))


@property_router.put("/RNs/{roaming_network_id}/{property_name}")
@property_router.api_route(
    "/RNs/{roaming_network_id}/{property_name}", methods=["SET"], include_in_schema=False
)
async def set_roaming_network_property(
    property_name: str,
    body: PropertyUpdateRequest,
    response: Response,
    network: RoamingNetwork = Depends(get_roaming_network),
) -> dict[str, Any]:
    return write_property(network, _check_property_name(property_name), body, response)
