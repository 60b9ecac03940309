# chargingcloud/api/core/projection/engine.py
"""
JSON projection of the entity graph.

The graph is cyclic through back-references (an EVSE points up to its
station, the station down to its EVSEs), so every render call carries an
explicit ``RenderFrame`` saying how the current entity was reached:

* ``ROOT``: requested directly; the caller's policy applies as given.
* ``MEMBER``: embedded by its container; back-references are hidden, since
  they would lead straight back to the container.
* ``BACKREF``: embedded as somebody's ancestor; every relation is capped
  at ``ID_ONLY``.

Members only ever go down the ownership tree and back-references are
followed at most once, so rendering terminates for any policy.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Sequence

from chargingcloud.api.core.model import (
    EVSE,
    ChargingPool,
    ChargingStation,
    ChargingStationOperator,
    Entity,
    Relation,
    RoamingNetwork,
    SocketOutlet,
)
from chargingcloud.api.core.paging import Page
from chargingcloud.api.core.projection.policy import ExpansionMode, ExpansionPolicy

logger = logging.getLogger(__name__)

PropertyCreator = Callable[[Entity], dict[str, Any]]

HIDDEN = ExpansionMode.HIDDEN
ID_ONLY = ExpansionMode.ID_ONLY
EXPAND = ExpansionMode.EXPAND


class Direction(str, Enum):
    ROOT = "root"
    MEMBER = "member"
    BACKREF = "backref"


@dataclass(frozen=True)
class RenderFrame:
    """How the entity being rendered was reached."""

    direction: Direction = Direction.ROOT
    depth: int = 0

    def clamp(self, mode: ExpansionMode, *, backward: bool) -> ExpansionMode:
        if self.direction is Direction.BACKREF:
            return min(mode, ID_ONLY)
        if self.direction is Direction.MEMBER and backward:
            return HIDDEN
        return mode

    def enter(self, direction: Direction) -> RenderFrame:
        return RenderFrame(direction, self.depth + 1)


ROOT_FRAME = RenderFrame()


@dataclass(frozen=True)
class RelationKeys:
    single_id: str
    single: str
    many_ids: str = ""
    many: str = ""


RELATION_KEYS: dict[Relation, RelationKeys] = {
    Relation.ROAMING_NETWORK: RelationKeys("RoamingNetworkId", "RoamingNetwork"),
    Relation.OPERATOR: RelationKeys(
        "OperatorId", "Operator", "ChargingStationOperatorIds", "ChargingStationOperators"
    ),
    Relation.GRID_OPERATOR: RelationKeys(
        "GridOperatorId", "GridOperator", "GridOperatorIds", "GridOperators"
    ),
    Relation.PARKING_OPERATOR: RelationKeys(
        "ParkingOperatorId", "ParkingOperator", "ParkingOperatorIds", "ParkingOperators"
    ),
    Relation.SMART_CITY: RelationKeys("SmartCityId", "SmartCity", "SmartCityIds", "SmartCities"),
    Relation.CHARGING_POOL: RelationKeys(
        "ChargingPoolId", "ChargingPool", "ChargingPoolIds", "ChargingPools"
    ),
    Relation.CHARGING_STATION: RelationKeys(
        "ChargingStationId", "ChargingStation", "ChargingStationIds", "ChargingStations"
    ),
    Relation.EVSE: RelationKeys("EVSEId", "EVSE", "EVSEIds", "EVSEs"),
    Relation.SOCKET_OUTLET: RelationKeys(
        "SocketOutletId", "SocketOutlet", "SocketOutletIds", "SocketOutlets"
    ),
    Relation.BRAND: RelationKeys("BrandId", "Brand", "BrandIds", "Brands"),
    Relation.DATA_LICENSE: RelationKeys(
        "DataLicenseId", "DataLicense", "DataLicenseIds", "DataLicenses"
    ),
}

# Per-kind defaults for relations the caller's policy does not mention.
# Anything missing here is hidden.
DEFAULT_MODES: dict[type[Entity], dict[Relation, ExpansionMode]] = {
    RoamingNetwork: {},
    ChargingStationOperator: {
        Relation.CHARGING_POOL: EXPAND,
        Relation.DATA_LICENSE: ID_ONLY,
    },
    ChargingPool: {
        Relation.OPERATOR: ID_ONLY,
        Relation.CHARGING_STATION: EXPAND,
        Relation.BRAND: ID_ONLY,
    },
    ChargingStation: {
        Relation.OPERATOR: ID_ONLY,
        Relation.CHARGING_POOL: ID_ONLY,
        Relation.EVSE: EXPAND,
        Relation.BRAND: ID_ONLY,
    },
    EVSE: {
        Relation.OPERATOR: ID_ONLY,
        Relation.CHARGING_STATION: ID_ONLY,
        Relation.SOCKET_OUTLET: EXPAND,
        Relation.BRAND: ID_ONLY,
        Relation.DATA_LICENSE: ID_ONLY,
    },
    SocketOutlet: {
        Relation.EVSE: ID_ONLY,
    },
}

# Rendering order of relations within a document: upward first, then
# downward, then catalog entries.
_RELATION_ORDER: tuple[Relation, ...] = tuple(Relation)


def format_quantity(value: float | None) -> str | None:
    """Two-decimal text for positive physical quantities, otherwise ``None``."""
    if value is None or value <= 0:
        return None
    return f"{value:.2f}"


def default_fields(entity: Entity) -> dict[str, Any]:
    """The field set of ``entity`` without any relation."""
    out: dict[str, Any] = {entity.id_key: str(entity.id)}
    if entity.name:
        out["name"] = entity.name.to_json()
    if isinstance(entity, RoamingNetwork) or entity.description:
        out["description"] = entity.description.to_json()
    if isinstance(entity, RoamingNetwork):
        return out

    if entity.geo_location is not None:
        out["GeoLocation"] = entity.geo_location.to_json()
    address = getattr(entity, "address", None)
    if address is not None:
        out["Address"] = address.to_json()
    homepage = getattr(entity, "homepage", None)
    if homepage:
        out["Homepage"] = homepage

    if isinstance(entity, EVSE):
        for key, value in (
            ("AverageVoltage", entity.average_voltage),
            ("MaxCurrent", entity.max_current),
            ("MaxPower", entity.max_power),
            ("MaxCapacity", entity.max_capacity),
        ):
            text = format_quantity(value)
            if text is not None:
                out[key] = text
        if entity.charging_modes:
            out["ChargingModes"] = list(entity.charging_modes)
        if entity.current_type:
            out["CurrentType"] = entity.current_type
        if entity.energy_meter_id:
            out["EnergyMeterId"] = entity.energy_meter_id

    if isinstance(entity, SocketOutlet):
        if entity.plug:
            out["Plug"] = entity.plug
        if entity.cable_attached is not None:
            out["CableAttached"] = entity.cable_attached
        length = format_quantity(entity.cable_length)
        if length is not None:
            out["CableLength"] = length
    return out


class ProjectionEngine:
    """Renders entities into JSON documents under an expansion policy.

    The engine never mutates the graph; for a fixed graph and policy its
    output is deterministic.

    Args:
        policy: Caller-chosen relation modes.
        property_creator: Replaces ``default_fields`` as the source of an
            entity's own fields. Relations are still added per policy.
    """

    def __init__(
        self,
        policy: ExpansionPolicy | None = None,
        *,
        property_creator: PropertyCreator | None = None,
    ) -> None:
        self.policy = policy or ExpansionPolicy()
        self.property_creator = property_creator or default_fields

    def mode_for(self, entity: Entity, relation: Relation, frame: RenderFrame) -> ExpansionMode:
        defaults = DEFAULT_MODES.get(type(entity), {})
        requested = self.policy.mode(relation, defaults.get(relation, HIDDEN))
        backward = relation.level is not None and relation.level < entity.level
        return frame.clamp(requested, backward=backward)

    def to_json(self, entity: Entity, frame: RenderFrame = ROOT_FRAME) -> dict[str, Any]:
        out = dict(self.property_creator(entity))
        for relation in _RELATION_ORDER:
            mode = self.mode_for(entity, relation, frame)
            if mode is HIDDEN:
                continue
            if relation in entity.catalog_relations:
                self._render_catalog(out, entity, relation, mode)
            elif relation.level is not None and relation.level < entity.level:
                self._render_backref(out, entity, relation, mode, frame)
            elif type(entity).reaches(relation):
                self._render_members(out, entity, relation, mode, frame)
        return out

    def to_json_list(
        self,
        entities: Sequence[Entity],
        skip: int = 0,
        take: int | None = None,
    ) -> Page[dict[str, Any]]:
        """Render a window of ``entities``; ``total`` counts all of them."""
        page = Page.of(entities, skip, take)
        return Page(
            [self.to_json(e) for e in page.items], page.skip, page.take, page.total
        )

    # -- relations --------------------------------------------------------

    def _render_backref(
        self,
        out: dict[str, Any],
        entity: Entity,
        relation: Relation,
        mode: ExpansionMode,
        frame: RenderFrame,
    ) -> None:
        ref = entity.ancestor(relation)
        if ref is None:
            return
        keys = RELATION_KEYS[relation]
        target = ref.resolve() if mode is EXPAND else None
        if target is None:
            out[keys.single_id] = str(ref.id)
            return
        out[keys.single] = self.to_json(target, frame.enter(Direction.BACKREF))

    def _render_members(
        self,
        out: dict[str, Any],
        entity: Entity,
        relation: Relation,
        mode: ExpansionMode,
        frame: RenderFrame,
    ) -> None:
        keys = RELATION_KEYS[relation]
        members = entity.members(relation)
        if mode is ID_ONLY:
            out[keys.many_ids] = [str(m.id) for m in members]
            return
        inner = frame.enter(Direction.MEMBER)
        out[keys.many] = [self.to_json(m, inner) for m in members]

    @staticmethod
    def _render_catalog(
        out: dict[str, Any],
        entity: Entity,
        relation: Relation,
        mode: ExpansionMode,
    ) -> None:
        keys = RELATION_KEYS[relation]
        entries: Iterable[Any] = (
            entity.brands if relation is Relation.BRAND else entity.data_licenses  # type: ignore[attr-defined]
        )
        entries = list(entries)
        if not entries:
            return
        if mode is ID_ONLY:
            out[keys.many_ids] = [str(e.id) for e in entries]
        else:
            out[keys.many] = [e.to_json() for e in entries]
