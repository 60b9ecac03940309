# chargingcloud/api/core/model/operators.py
"""Operators and city proxies registered directly below a roaming network."""
from __future__ import annotations

from typing import Any, ClassVar

from chargingcloud.api.contracts import (
    ChargingPoolId,
    ChargingStationOperatorId,
    GridOperatorId,
    ParkingOperatorId,
    SmartCityId,
)
from chargingcloud.api.contracts.ids import TokenId
from chargingcloud.api.core.model.base import Configurator, Entity, Relation
from chargingcloud.api.core.model.catalog import CatalogMixin
from chargingcloud.api.core.model.infrastructure import EVSE, ChargingPool, ChargingStation


class ChargingStationOperator(CatalogMixin, Entity):
    kind = "ChargingStationOperator"
    relation = Relation.OPERATOR
    id_type = ChargingStationOperatorId
    child_types: ClassVar[dict[Relation, type[Entity]]] = {Relation.CHARGING_POOL: ChargingPool}
    catalog_relations = (Relation.DATA_LICENSE,)

    def __init__(self, id: ChargingStationOperatorId, **kwargs: Any) -> None:
        super().__init__(id, **kwargs)
        self._init_catalog()
        self.homepage: str | None = None

    @property
    def charging_pools(self) -> list[ChargingPool]:
        return self.members(Relation.CHARGING_POOL)  # type: ignore[return-value]

    @property
    def charging_stations(self) -> list[ChargingStation]:
        return self.members(Relation.CHARGING_STATION)  # type: ignore[return-value]

    @property
    def evses(self) -> list[EVSE]:
        return self.members(Relation.EVSE)  # type: ignore[return-value]

    def add_charging_pool(
        self, pool_id: ChargingPoolId | str, configurator: Configurator | None = None
    ) -> ChargingPool:
        return self.add_child(Relation.CHARGING_POOL, pool_id, configurator)  # type: ignore[return-value]


class _TokenEntity(Entity):
    id_type: ClassVar[type[TokenId]]


class GridOperator(_TokenEntity):
    kind = "GridOperator"
    relation = Relation.GRID_OPERATOR
    id_type = GridOperatorId


class ParkingOperator(_TokenEntity):
    kind = "ParkingOperator"
    relation = Relation.PARKING_OPERATOR
    id_type = ParkingOperatorId


class SmartCityProxy(_TokenEntity):
    """Stand-in for a city administration taking part in a roaming network."""

    kind = "SmartCity"
    relation = Relation.SMART_CITY
    id_type = SmartCityId
