"""Charging infrastructure entity graph."""
from chargingcloud.api.core.model.base import BackRef, Configurator, Entity, Relation
from chargingcloud.api.core.model.catalog import Brand, DataLicense
from chargingcloud.api.core.model.infrastructure import (
    EVSE,
    ChargingPool,
    ChargingStation,
    SocketOutlet,
)
from chargingcloud.api.core.model.network import ENTITY_TYPES, RoamingNetwork
from chargingcloud.api.core.model.operators import (
    ChargingStationOperator,
    GridOperator,
    ParkingOperator,
    SmartCityProxy,
)

__all__ = [
    "BackRef", "Configurator", "Entity", "Relation",
    "Brand", "DataLicense",
    "EVSE", "ChargingPool", "ChargingStation", "SocketOutlet",
    "ENTITY_TYPES", "RoamingNetwork",
    "ChargingStationOperator", "GridOperator", "ParkingOperator", "SmartCityProxy",
]
