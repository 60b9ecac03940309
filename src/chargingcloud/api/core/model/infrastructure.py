# chargingcloud/api/core/model/infrastructure.py
"""
Physical charging infrastructure below an operator:

    ChargingPool -> ChargingStation -> EVSE -> SocketOutlet
"""
from __future__ import annotations

from typing import Any, ClassVar

from chargingcloud.api.contracts import (
    Address,
    ChargingPoolId,
    ChargingStationId,
    ChargingStationOperatorId,
    EVSEId,
    SocketOutletId,
)
from chargingcloud.api.contracts.ids import OperatorChildId
from chargingcloud.api.core.errors import ValidationError
from chargingcloud.api.core.model.base import Configurator, Entity, Relation
from chargingcloud.api.core.model.catalog import CatalogMixin


def operator_child_id(
    id_type: type[OperatorChildId],
    operator_id: ChargingStationOperatorId,
    value: Any,
) -> OperatorChildId:
    """Coerce ``value`` into an ``id_type`` owned by ``operator_id``."""
    if isinstance(value, id_type):
        typed = value
    elif isinstance(value, str):
        typed = id_type.create(operator_id, value)
    else:
        raise ValidationError(f"Invalid {id_type.kind}!")
    if typed.operator_id != operator_id:
        raise ValidationError(
            f"{id_type.kind} '{typed}' does not belong to operator '{operator_id}'!"
        )
    return typed


class SocketOutlet(Entity):
    kind = "SocketOutlet"
    relation = Relation.SOCKET_OUTLET
    id_type = SocketOutletId

    def __init__(self, id: SocketOutletId, **kwargs: Any) -> None:
        super().__init__(id, **kwargs)
        self.plug: str | None = None
        self.cable_attached: bool | None = None
        self.cable_length: float | None = None

    @classmethod
    def coerce_id(cls, parent: Entity | None, value: Any) -> SocketOutletId:
        if isinstance(value, SocketOutletId):
            return value
        if not isinstance(parent, EVSE) or not isinstance(value, str):
            raise ValidationError("Invalid SocketOutletId!")
        return SocketOutletId.create(parent.id, value)


class EVSE(CatalogMixin, Entity):
    """A single charge point: the unit a vehicle plugs into."""

    kind = "EVSE"
    relation = Relation.EVSE
    id_type = EVSEId
    child_types: ClassVar[dict[Relation, type[Entity]]] = {Relation.SOCKET_OUTLET: SocketOutlet}
    catalog_relations = (Relation.BRAND, Relation.DATA_LICENSE)

    def __init__(self, id: EVSEId, **kwargs: Any) -> None:
        super().__init__(id, **kwargs)
        self._init_catalog()
        self.average_voltage: float | None = None
        self.max_current: float | None = None
        self.max_power: float | None = None
        self.max_capacity: float | None = None
        self.charging_modes: list[str] = []
        self.current_type: str | None = None
        self.energy_meter_id: str | None = None

    @classmethod
    def coerce_id(cls, parent: Entity | None, value: Any) -> EVSEId:
        if not isinstance(parent, ChargingStation):
            raise ValidationError("Invalid EVSEId!")
        return operator_child_id(EVSEId, parent.id.operator_id, value)

    @property
    def socket_outlets(self) -> list[SocketOutlet]:
        return self.members(Relation.SOCKET_OUTLET)  # type: ignore[return-value]

    def add_socket_outlet(
        self, outlet_id: SocketOutletId | str, configurator: Configurator | None = None
    ) -> SocketOutlet:
        return self.add_child(Relation.SOCKET_OUTLET, outlet_id, configurator)  # type: ignore[return-value]


class ChargingStation(CatalogMixin, Entity):
    kind = "ChargingStation"
    relation = Relation.CHARGING_STATION
    id_type = ChargingStationId
    child_types: ClassVar[dict[Relation, type[Entity]]] = {Relation.EVSE: EVSE}
    catalog_relations = (Relation.BRAND,)

    def __init__(self, id: ChargingStationId, **kwargs: Any) -> None:
        super().__init__(id, **kwargs)
        self._init_catalog()
        self.address: Address | None = None

    @classmethod
    def coerce_id(cls, parent: Entity | None, value: Any) -> ChargingStationId:
        if not isinstance(parent, ChargingPool):
            raise ValidationError("Invalid ChargingStationId!")
        return operator_child_id(ChargingStationId, parent.id.operator_id, value)

    @property
    def evses(self) -> list[EVSE]:
        return self.members(Relation.EVSE)  # type: ignore[return-value]

    def add_evse(self, evse_id: EVSEId | str, configurator: Configurator | None = None) -> EVSE:
        return self.add_child(Relation.EVSE, evse_id, configurator)  # type: ignore[return-value]


class ChargingPool(CatalogMixin, Entity):
    """A site with one or more charging stations at one address."""

    kind = "ChargingPool"
    relation = Relation.CHARGING_POOL
    id_type = ChargingPoolId
    child_types: ClassVar[dict[Relation, type[Entity]]] = {
        Relation.CHARGING_STATION: ChargingStation
    }
    catalog_relations = (Relation.BRAND,)

    def __init__(self, id: ChargingPoolId, **kwargs: Any) -> None:
        super().__init__(id, **kwargs)
        self._init_catalog()
        self.address: Address | None = None

    @classmethod
    def coerce_id(cls, parent: Entity | None, value: Any) -> ChargingPoolId:
        if parent is None or parent.relation is not Relation.OPERATOR:
            raise ValidationError("Invalid ChargingPoolId!")
        return operator_child_id(ChargingPoolId, parent.id, value)

    @property
    def charging_stations(self) -> list[ChargingStation]:
        return self.members(Relation.CHARGING_STATION)  # type: ignore[return-value]

    @property
    def evses(self) -> list[EVSE]:
        return self.members(Relation.EVSE)  # type: ignore[return-value]

    def add_charging_station(
        self, station_id: ChargingStationId | str, configurator: Configurator | None = None
    ) -> ChargingStation:
        return self.add_child(Relation.CHARGING_STATION, station_id, configurator)  # type: ignore[return-value]
