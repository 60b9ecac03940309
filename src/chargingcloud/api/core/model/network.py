# chargingcloud/api/core/model/network.py
"""
Roaming network: the root of an entity tree.
"""
from __future__ import annotations

from typing import Any, ClassVar

from chargingcloud.api.contracts import (
    ChargingPoolId,
    ChargingStationId,
    ChargingStationOperatorId,
    EVSEId,
    GridOperatorId,
    ParkingOperatorId,
    RoamingNetworkId,
    SmartCityId,
)
from chargingcloud.api.core.errors import NotFoundError, ValidationError
from chargingcloud.api.core.model.base import Configurator, Entity, Relation
from chargingcloud.api.core.model.infrastructure import (
    EVSE,
    ChargingPool,
    ChargingStation,
    SocketOutlet,
)
from chargingcloud.api.core.model.operators import (
    ChargingStationOperator,
    GridOperator,
    ParkingOperator,
    SmartCityProxy,
)


class RoamingNetwork(Entity):
    """Root of an ownership tree, registered in the store under a hostname scope."""

    kind = "RoamingNetwork"
    relation = Relation.ROAMING_NETWORK
    id_type = RoamingNetworkId
    child_types: ClassVar[dict[Relation, type[Entity]]] = {
        Relation.OPERATOR: ChargingStationOperator,
        Relation.GRID_OPERATOR: GridOperator,
        Relation.PARKING_OPERATOR: ParkingOperator,
        Relation.SMART_CITY: SmartCityProxy,
    }

    def __init__(self, id: RoamingNetworkId, *, hostname: str = "*", **kwargs: Any) -> None:
        super().__init__(id, **kwargs)
        self.hostname = hostname

    # -- members ------------------------------------------------------------

    def add_charging_station_operator(
        self,
        operator_id: ChargingStationOperatorId | str,
        configurator: Configurator | None = None,
    ) -> ChargingStationOperator:
        return self.add_child(Relation.OPERATOR, operator_id, configurator)  # type: ignore[return-value]

    def add_grid_operator(
        self, operator_id: GridOperatorId | str, configurator: Configurator | None = None
    ) -> GridOperator:
        return self.add_child(Relation.GRID_OPERATOR, operator_id, configurator)  # type: ignore[return-value]

    def add_parking_operator(
        self, operator_id: ParkingOperatorId | str, configurator: Configurator | None = None
    ) -> ParkingOperator:
        return self.add_child(Relation.PARKING_OPERATOR, operator_id, configurator)  # type: ignore[return-value]

    def add_smart_city(
        self, city_id: SmartCityId | str, configurator: Configurator | None = None
    ) -> SmartCityProxy:
        return self.add_child(Relation.SMART_CITY, city_id, configurator)  # type: ignore[return-value]

    # -- flattened views ------------------------------------------------------

    @property
    def charging_station_operators(self) -> list[ChargingStationOperator]:
        return self.members(Relation.OPERATOR)  # type: ignore[return-value]

    @property
    def grid_operators(self) -> list[GridOperator]:
        return self.members(Relation.GRID_OPERATOR)  # type: ignore[return-value]

    @property
    def parking_operators(self) -> list[ParkingOperator]:
        return self.members(Relation.PARKING_OPERATOR)  # type: ignore[return-value]

    @property
    def smart_cities(self) -> list[SmartCityProxy]:
        return self.members(Relation.SMART_CITY)  # type: ignore[return-value]

    @property
    def charging_pools(self) -> list[ChargingPool]:
        return self.members(Relation.CHARGING_POOL)  # type: ignore[return-value]

    @property
    def charging_stations(self) -> list[ChargingStation]:
        return self.members(Relation.CHARGING_STATION)  # type: ignore[return-value]

    @property
    def evses(self) -> list[EVSE]:
        return self.members(Relation.EVSE)  # type: ignore[return-value]

    # -- lookups --------------------------------------------------------------

    def get(self, relation: Relation, member_id: Any) -> Entity:
        """Find a member anywhere in the tree.

        Raises:
            NotFoundError: ``Unknown <Kind>Id!``
        """
        try:
            found = self.member(relation, member_id)
        except ValidationError:
            found = None
        if found is None:
            raise NotFoundError(f"Unknown {ENTITY_TYPES[relation].kind}Id!")
        return found

    def get_charging_station_operator(
        self, operator_id: ChargingStationOperatorId | str
    ) -> ChargingStationOperator:
        return self.get(Relation.OPERATOR, operator_id)  # type: ignore[return-value]

    def get_charging_pool(self, pool_id: ChargingPoolId | str) -> ChargingPool:
        return self.get(Relation.CHARGING_POOL, pool_id)  # type: ignore[return-value]

    def get_charging_station(self, station_id: ChargingStationId | str) -> ChargingStation:
        return self.get(Relation.CHARGING_STATION, station_id)  # type: ignore[return-value]

    def get_evse(self, evse_id: EVSEId | str) -> EVSE:
        return self.get(Relation.EVSE, evse_id)  # type: ignore[return-value]


ENTITY_TYPES: dict[Relation, type[Entity]] = {
    Relation.ROAMING_NETWORK: RoamingNetwork,
    Relation.OPERATOR: ChargingStationOperator,
    Relation.GRID_OPERATOR: GridOperator,
    Relation.PARKING_OPERATOR: ParkingOperator,
    Relation.SMART_CITY: SmartCityProxy,
    Relation.CHARGING_POOL: ChargingPool,
    Relation.CHARGING_STATION: ChargingStation,
    Relation.EVSE: EVSE,
    Relation.SOCKET_OUTLET: SocketOutlet,
}
