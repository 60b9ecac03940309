# chargingcloud/api/api/context.py
"""
Request context via FastAPI dependency injection.

The store and the settings live on ``app.state``; handlers receive them,
the hostname scope, the resolved roaming network and the parsed query
parameters through ``Depends``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Query, Request

from chargingcloud.api.core.config import Settings
from chargingcloud.api.core.model import RoamingNetwork
from chargingcloud.api.core.projection import (
    GEOJSON_MEDIA_TYPE,
    ExpansionPolicy,
    ProjectionEngine,
    parse_expand,
)
from chargingcloud.api.core.store import RoamingNetworkStore

logger = logging.getLogger(__name__)

TOTAL_COUNT_HEADER = "X-Expected-Total-Number-Of-Items"


def get_store(request: Request) -> RoamingNetworkStore:
    """Get the store from app state or raise 500."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        logger.error("Roaming network store not initialized")
        raise HTTPException(status_code=500, detail="Roaming network store not initialized")
    return store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_scope(request: Request, store: RoamingNetworkStore = Depends(get_store)) -> str:
    """Hostname scope of the request, port stripped."""
    return store.scope_for(request.headers.get("host"))


def get_roaming_network(
    roaming_network_id: str,
    scope: str = Depends(get_scope),
    store: RoamingNetworkStore = Depends(get_store),
) -> RoamingNetwork:
    return store.get(scope, roaming_network_id)


@dataclass(frozen=True)
class Window:
    skip: int = 0
    take: int | None = None


def get_window(
    skip: int = Query(0, ge=0),
    take: int | None = Query(None, ge=0),
) -> Window:
    return Window(skip, take)


def get_policy(expand: list[str] | None = Query(None)) -> ExpansionPolicy:
    return parse_expand(expand)


def get_engine(policy: ExpansionPolicy = Depends(get_policy)) -> ProjectionEngine:
    return ProjectionEngine(policy)


def get_history_size(
    historysize: int | None = Query(None, ge=0),
    settings: Settings = Depends(get_settings),
) -> int:
    return settings.default_history_size if historysize is None else historysize


def wants_geojson(request: Request) -> bool:
    return GEOJSON_MEDIA_TYPE in request.headers.get("accept", "").lower()
