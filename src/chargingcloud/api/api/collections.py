# chargingcloud/api/api/collections.py
"""
Member collection router factory.

For each collection of a roaming network this module builds a router
with::

    GET, COUNT   /RNs/{roaming_network_id}/{Collection}
    GET          /RNs/{roaming_network_id}/{Collection}->AdminStatus
    GET          /RNs/{roaming_network_id}/{Collection}->Status
    GET          /RNs/{roaming_network_id}/{Collection}/{item_id}
    GET, SET     /RNs/{roaming_network_id}/{Collection}/{item_id}/{property_name}

Collection and item GETs answer with GeoJSON when the client accepts
``application/geo+json``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from chargingcloud.api.api.context import (
    TOTAL_COUNT_HEADER,
    Window,
    get_engine,
    get_history_size,
    get_roaming_network,
    get_window,
    wants_geojson,
)
from chargingcloud.api.api.properties import read_property, write_property
from chargingcloud.api.api.schemas import PropertyUpdateRequest
from chargingcloud.api.core.model import Entity, Relation, RoamingNetwork
from chargingcloud.api.core.projection import (
    GEOJSON_MEDIA_TYPE,
    ProjectionEngine,
    StatusKind,
    status_report,
    to_feature,
    to_feature_collection,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collection:
    """A member collection exposed below ``/RNs/{roaming_network_id}``."""

    path: str
    relation: Relation


COLLECTIONS: tuple[Collection, ...] = (
    Collection("ChargingStationOperators", Relation.OPERATOR),
    Collection("ChargingPools", Relation.CHARGING_POOL),
    Collection("ChargingStations", Relation.CHARGING_STATION),
    Collection("EVSEs", Relation.EVSE),
    Collection("GridOperators", Relation.GRID_OPERATOR),
    Collection("ParkingOperators", Relation.PARKING_OPERATOR),
    Collection("SmartCities", Relation.SMART_CITY),
)

# Path segments below /RNs/{roaming_network_id} that belong to a collection
# route and so cannot name a roaming network property.
RESERVED_PROPERTY_NAMES: frozenset[str] = frozenset(
    name
    for collection in COLLECTIONS
    for name in (
        collection.path,
        f"{collection.path}->AdminStatus",
        f"{collection.path}->Status",
    )
)


def build_collection_router(collection: Collection) -> APIRouter:
    relation = collection.relation
    prefix = f"/RNs/{{roaming_network_id}}/{collection.path}"
    router = APIRouter(tags=[collection.path])

    # -- helpers ---------------------------------------------------------

    def _resolve_item(
        item_id: str,
        network: RoamingNetwork = Depends(get_roaming_network),
    ) -> Entity:
        return network.get(relation, item_id)

    def _status(
        kind: StatusKind,
        network: RoamingNetwork,
        response: Response,
        window: Window,
        history_size: int,
    ) -> dict[str, Any]:
        page = status_report(
            network.members(relation),
            kind,
            skip=window.skip,
            take=window.take,
            history_size=history_size,
        )
        response.headers[TOTAL_COUNT_HEADER] = str(page.total)
        return page.items[0]

    # -- collection ------------------------------------------------------

    @router.get(prefix, name=f"list_{collection.path}")
    async def list_members(
        request: Request,
        response: Response,
        network: RoamingNetwork = Depends(get_roaming_network),
        window: Window = Depends(get_window),
        engine: ProjectionEngine = Depends(get_engine),
    ) -> Any:
        members = network.members(relation)
        if wants_geojson(request):
            page = to_feature_collection(members, engine, skip=window.skip, take=window.take)
            return JSONResponse(
                page.items[0],
                media_type=GEOJSON_MEDIA_TYPE,
                headers={TOTAL_COUNT_HEADER: str(page.total)},
            )
        page = engine.to_json_list(members, window.skip, window.take)
        response.headers[TOTAL_COUNT_HEADER] = str(page.total)
        return page.items

    @router.api_route(
        prefix, methods=["COUNT"], name=f"count_{collection.path}", include_in_schema=False
    )
    async def count_members(
        network: RoamingNetwork = Depends(get_roaming_network),
    ) -> dict[str, int]:
        return {"count": len(network.members(relation))}

    @router.get(prefix + "->AdminStatus", name=f"{collection.path}_admin_status")
    async def members_admin_status(
        response: Response,
        network: RoamingNetwork = Depends(get_roaming_network),
        window: Window = Depends(get_window),
        history_size: int = Depends(get_history_size),
    ) -> dict[str, Any]:
        return _status(StatusKind.ADMIN_STATUS, network, response, window, history_size)

    @router.get(prefix + "->Status", name=f"{collection.path}_status")
    async def members_status(
        response: Response,
        network: RoamingNetwork = Depends(get_roaming_network),
        window: Window = Depends(get_window),
        history_size: int = Depends(get_history_size),
    ) -> dict[str, Any]:
        return _status(StatusKind.STATUS, network, response, window, history_size)

    # -- single member ---------------------------------------------------

    @router.get(prefix + "/{item_id}", name=f"get_{collection.path}_item")
    async def get_member(
        request: Request,
        item: Entity = Depends(_resolve_item),
        engine: ProjectionEngine = Depends(get_engine),
    ) -> Any:
        if wants_geojson(request):
            return JSONResponse(to_feature(item, engine), media_type=GEOJSON_MEDIA_TYPE)
        return engine.to_json(item)

    @router.get(prefix + "/{item_id}/{property_name}", name=f"get_{collection.path}_property")
    async def get_member_property(
        property_name: str,
        item: Entity = Depends(_resolve_item),
    ) -> dict[str, Any]:
        return read_property(item, property_name)

    @router.put(prefix + "/{item_id}/{property_name}", name=f"put_{collection.path}_property")
    @router.api_route(
        prefix + "/{item_id}/{property_name}",
        methods=["SET"],
        name=f"set_{collection.path}_property",
        include_in_schema=False,
    )
    async def set_member_property(
        property_name: str,
        body: PropertyUpdateRequest,
        response: Response,
        item: Entity = Depends(_resolve_item),
    ) -> dict[str, Any]:
        return write_property(item, property_name, body, response)

    return router
