# chargingcloud/api/main.py
"""
Open Charging Cloud API application factory.

Creates a FastAPI application over an in-memory roaming network store,
seeded from YAML, with one router per member collection.
"""
from __future__ import annotations

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pythonjsonlogger.json import JsonFormatter

from chargingcloud.api.api.collections import COLLECTIONS, build_collection_router
from chargingcloud.api.api.discovery import router as discovery_router
from chargingcloud.api.api.errors import register_exception_handlers
from chargingcloud.api.api.roaming_networks import property_router
from chargingcloud.api.api.roaming_networks import router as roaming_networks_router
from chargingcloud.api.core.config import Settings
from chargingcloud.api.core.config import settings as default_settings
from chargingcloud.api.core.store import RoamingNetworkStore, load_networks

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"


# -- Helpers -------------------------------------------------------------------


def _configure_logging(level: str, fmt: str = "text") -> None:
    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Avoid duplicate handlers on reload
    root.handlers = [handler]


def _seed(store: RoamingNetworkStore, settings: Settings) -> None:
    try:
        load_networks(store, settings.networks_config_paths)
    except Exception:
        logger.exception("Failed to seed roaming networks")
        raise


# -- Application factory -------------------------------------------------------


def create_app(
    settings: Settings | None = None,
    store: RoamingNetworkStore | None = None,
) -> FastAPI:
    """Build and wire the charging cloud FastAPI application.

    Args:
        settings: Configuration; the environment-driven defaults otherwise.
        store: A prepared store. When omitted a fresh one is created and
            seeded from ``settings.networks_config_paths``.
    """
    settings = settings or default_settings
    _configure_logging(settings.log_level, settings.log_format)
    logger.info("Creating charging cloud application (env=%s)", settings.app_env)

    if store is None:
        store = RoamingNetworkStore(
            isolate_hostnames=settings.isolate_hostnames,
            status_history_limit=settings.status_history_limit,
        )
        _seed(store, settings)

    app = FastAPI(
        title=settings.server_name,
        version="1.0.0",
        description="HTTP API for roaming networks and their charging infrastructure",
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["Content-Type", "Accept", "Authorization"],
        expose_headers=["X-Expected-Total-Number-Of-Items"],
    )
    register_exception_handlers(app)

    app.include_router(discovery_router)
    app.include_router(roaming_networks_router)
    # literal collection paths before the catch-all property routes
    for collection in COLLECTIONS:
        app.include_router(build_collection_router(collection))
        logger.debug("Mounted collection /RNs/{roaming_network_id}/%s", collection.path)
    app.include_router(property_router)

    logger.info(
        "Charging cloud application ready: %d roaming network(s), hostname isolation %s",
        len(store),
        "on" if settings.isolate_hostnames else "off",
    )
    return app
