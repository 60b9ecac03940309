# chargingcloud/api/core/store/seed.py
"""
Roaming network seeding from YAML.

Seed documents go through the same ``create`` / ``add_child`` operations
as HTTP requests, so ids, names and descriptions are validated exactly as
they would be at runtime.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from chargingcloud.api.contracts import (
    Address,
    AdminStatusType,
    GeoCoordinate,
    I18NText,
    StatusType,
)
from chargingcloud.api.core.loader import load_yaml_files
from chargingcloud.api.core.model import (
    EVSE,
    Brand,
    ChargingPool,
    ChargingStation,
    ChargingStationOperator,
    DataLicense,
    Entity,
    Relation,
    RoamingNetwork,
    SocketOutlet,
)
from chargingcloud.api.core.store.registry import RoamingNetworkStore

logger = logging.getLogger(__name__)


def load_networks(store: RoamingNetworkStore, patterns: Iterable[str]) -> list[RoamingNetwork]:
    """Load seed files matching ``patterns`` into ``store``.

    Expected structure::

        roaming_networks:
          - id: TEST_RN1
            hostname: "*"
            description: {en: Test network}
            charging_station_operators:
              - id: DE*GEF
                charging_pools:
                  - id: "1111"
                    charging_stations: [...]
    """
    return seed_store(store, load_yaml_files(patterns))


def seed_store(store: RoamingNetworkStore, documents: Iterable[dict[str, Any]]) -> list[RoamingNetwork]:
    created: list[RoamingNetwork] = []
    for document in documents:
        for raw in document.get("roaming_networks") or []:
            created.append(_seed_network(store, raw))
    logger.info("Seeded %d roaming network(s): %s", len(created), [str(rn.id) for rn in created])
    return created


def _seed_network(store: RoamingNetworkStore, raw: dict[str, Any]) -> RoamingNetwork:
    scope = store.scope_for(raw.get("hostname"))

    def configure(network: RoamingNetwork) -> None:
        _configure_common(network, raw, with_texts=False)
        for op in raw.get("charging_station_operators") or []:
            network.add_charging_station_operator(
                str(op["id"]), lambda o, op=op: _configure_operator(o, op)
            )
        for relation, key in (
            (Relation.GRID_OPERATOR, "grid_operators"),
            (Relation.PARKING_OPERATOR, "parking_operators"),
            (Relation.SMART_CITY, "smart_cities"),
        ):
            for item in raw.get(key) or []:
                network.add_child(
                    relation, str(item["id"]), lambda e, item=item: _configure_common(e, item)
                )

    return store.create(
        scope,
        str(raw["id"]),
        name=raw.get("name"),
        description=raw.get("description"),
        configurator=configure,
    )


def _configure_common(entity: Entity, raw: dict[str, Any], *, with_texts: bool = True) -> None:
    if with_texts:
        entity.name = I18NText.parse(raw.get("name"), error=f"Invalid {entity.kind} name!")
        entity.description = I18NText.parse(
            raw.get("description"), error=f"Invalid {entity.kind} description!"
        )
    if raw.get("geo_location") is not None:
        entity.geo_location = GeoCoordinate.parse(raw["geo_location"])
    if raw.get("admin_status") is not None:
        entity.admin_status.set(AdminStatusType(raw["admin_status"]))
    if raw.get("status") is not None:
        entity.status.set(StatusType(raw["status"]))
    for name, value in (raw.get("properties") or {}).items():
        entity.properties.set(name, "", value)


def _configure_catalog(entity: Any, raw: dict[str, Any]) -> None:
    for brand in raw.get("brands") or []:
        entity.add_brand(Brand.parse(brand))
    for data_license in raw.get("data_licenses") or []:
        entity.add_data_license(DataLicense.parse(data_license))


def _configure_operator(operator: ChargingStationOperator, raw: dict[str, Any]) -> None:
    _configure_common(operator, raw)
    _configure_catalog(operator, raw)
    operator.homepage = raw.get("homepage")
    for pool in raw.get("charging_pools") or []:
        operator.add_charging_pool(str(pool["id"]), lambda p, pool=pool: _configure_pool(p, pool))


def _configure_pool(pool: ChargingPool, raw: dict[str, Any]) -> None:
    _configure_common(pool, raw)
    _configure_catalog(pool, raw)
    if raw.get("address") is not None:
        pool.address = Address.parse(raw["address"])
    for station in raw.get("charging_stations") or []:
        pool.add_charging_station(
            str(station["id"]), lambda s, station=station: _configure_station(s, station)
        )


def _configure_station(station: ChargingStation, raw: dict[str, Any]) -> None:
    _configure_common(station, raw)
    _configure_catalog(station, raw)
    if raw.get("address") is not None:
        station.address = Address.parse(raw["address"])
    for evse in raw.get("evses") or []:
        station.add_evse(str(evse["id"]), lambda e, evse=evse: _configure_evse(e, evse))


def _configure_evse(evse: EVSE, raw: dict[str, Any]) -> None:
    _configure_common(evse, raw)
    _configure_catalog(evse, raw)
    for attr in ("average_voltage", "max_current", "max_power", "max_capacity"):
        if raw.get(attr) is not None:
            setattr(evse, attr, float(raw[attr]))
    evse.charging_modes = [str(m) for m in raw.get("charging_modes") or []]
    evse.current_type = raw.get("current_type")
    evse.energy_meter_id = raw.get("energy_meter_id")
    for number, outlet in enumerate(raw.get("socket_outlets") or [], start=1):
        evse.add_socket_outlet(
            str(outlet.get("id", number)), lambda o, outlet=outlet: _configure_outlet(o, outlet)
        )


def _configure_outlet(outlet: SocketOutlet, raw: dict[str, Any]) -> None:
    _configure_common(outlet, raw)
    outlet.plug = raw.get("plug")
    if raw.get("cable_attached") is not None:
        outlet.cable_attached = bool(raw["cable_attached"])
    if raw.get("cable_length") is not None:
        outlet.cable_length = float(raw["cable_length"])
