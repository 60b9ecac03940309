# chargingcloud/api/core/model/base.py
"""
Entity graph primitives.

Ownership is a strict tree: every entity owns its members and nothing else.
Upward navigation goes through ``BackRef`` values, which hold the parent id
and a weak reference, so a back-reference never keeps an entity alive.
"""
from __future__ import annotations

import logging
import threading
import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Generic, TypeVar

from chargingcloud.api.contracts import (
    AdminStatusType,
    GeoCoordinate,
    I18NText,
    StatusSchedule,
    StatusType,
)
from chargingcloud.api.contracts.status import DEFAULT_HISTORY_LIMIT
from chargingcloud.api.core.errors import ConflictError, ValidationError
from chargingcloud.api.core.properties import PropertyBag

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound="Entity")
Configurator = Callable[[EntityT], Any]


class Relation(str, Enum):
    """Named edges of the entity graph, as used in expansion policies."""

    ROAMING_NETWORK = "roamingNetwork"
    OPERATOR = "operator"
    GRID_OPERATOR = "gridOperator"
    PARKING_OPERATOR = "parkingOperator"
    SMART_CITY = "smartCity"
    CHARGING_POOL = "chargingPool"
    CHARGING_STATION = "chargingStation"
    EVSE = "evse"
    SOCKET_OUTLET = "socketOutlet"
    BRAND = "brand"
    DATA_LICENSE = "dataLicense"

    @property
    def level(self) -> int | None:
        """Depth of the target in the ownership tree, ``None`` for catalog entries."""
        return _LEVELS.get(self)


_LEVELS: dict[Relation, int] = {
    Relation.ROAMING_NETWORK: 0,
    Relation.OPERATOR: 1,
    Relation.GRID_OPERATOR: 1,
    Relation.PARKING_OPERATOR: 1,
    Relation.SMART_CITY: 1,
    Relation.CHARGING_POOL: 2,
    Relation.CHARGING_STATION: 3,
    Relation.EVSE: 4,
    Relation.SOCKET_OUTLET: 5,
}


@dataclass(frozen=True)
class BackRef(Generic[EntityT]):
    """Non-owning reference to an ancestor: its id plus a lookup."""

    id: Any
    _target: weakref.ref = field(repr=False, compare=False)

    @classmethod
    def to(cls, entity: EntityT) -> BackRef[EntityT]:
        return cls(entity.id, weakref.ref(entity))

    def resolve(self) -> EntityT | None:
        return self._target()

    def __str__(self) -> str:
        return str(self.id)


class Entity:
    """Common capabilities of every node in the charging infrastructure graph.

    Subclasses declare where they sit in the tree (``relation``) and which
    member collections they own (``child_types``). Members are kept in
    insertion order.
    """

    kind: ClassVar[str] = "Entity"
    relation: ClassVar[Relation]
    id_type: ClassVar[type]
    child_types: ClassVar[dict[Relation, type[Entity]]] = {}
    # brand / dataLicense relations this kind carries
    catalog_relations: ClassVar[tuple[Relation, ...]] = ()

    def __init__(
        self,
        id: Any,
        *,
        name: I18NText | None = None,
        description: I18NText | None = None,
        geo_location: GeoCoordinate | None = None,
        status_history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self.id = id
        self.name = name or I18NText()
        self.description = description or I18NText()
        self.geo_location = geo_location
        self.admin_status: StatusSchedule[AdminStatusType] = StatusSchedule(
            AdminStatusType.OPERATIONAL, limit=status_history_limit
        )
        self.status: StatusSchedule[StatusType] = StatusSchedule(
            StatusType.AVAILABLE, limit=status_history_limit
        )
        self.properties = PropertyBag(owner=f"{self.kind} {id}")
        self._status_history_limit = status_history_limit
        self._parent: BackRef[Entity] | None = None
        self._lock = threading.RLock()
        self._members: dict[Relation, dict[str, Entity]] = {r: {} for r in self.child_types}

    # -- identity ---------------------------------------------------------

    @classmethod
    def parse_id(cls, value: Any) -> Any:
        """Parse a complete id of this kind, normalized like a stored one."""
        if isinstance(value, cls.id_type):
            return value
        if not isinstance(value, str):
            raise ValidationError(f"Invalid {cls.id_type.kind}!")
        return cls.id_type.parse(value)

    @classmethod
    def coerce_id(cls, parent: Entity | None, value: Any) -> Any:
        """Turn ``value`` into this kind's typed id, relative to ``parent``."""
        return cls.parse_id(value)

    @property
    def id_key(self) -> str:
        return f"{self.kind}Id"

    # -- navigation -------------------------------------------------------

    @property
    def level(self) -> int:
        return self.relation.level or 0

    @property
    def parent(self) -> BackRef[Entity] | None:
        return self._parent

    def ancestor(self, relation: Relation) -> BackRef[Entity] | None:
        """Back-reference to the nearest ancestor reachable as ``relation``."""
        ref = self._parent
        while ref is not None:
            target = ref.resolve()
            if target is None:
                return None
            if target.relation is relation:
                return ref
            ref = target._parent
        return None

    def members(self, relation: Relation) -> list[Entity]:
        """Members reachable as ``relation``, flattened across intermediate levels."""
        with self._lock:
            direct = self._members.get(relation)
            if direct is not None:
                return list(direct.values())
            children = [c for bucket in self._members.values() for c in bucket.values()]
        target_level = relation.level
        if target_level is None or target_level <= self.level:
            return []
        out: list[Entity] = []
        for child in children:
            out.extend(child.members(relation))
        return out

    def member(self, relation: Relation, member_id: Any) -> Entity | None:
        """Member reachable as ``relation`` whose id equals ``member_id``.

        Raises:
            ValidationError: If ``member_id`` does not parse as such an id.
        """
        member_type = type(self).member_type(relation)
        if member_type is None:
            return None
        key = str(member_type.parse_id(member_id))
        with self._lock:
            direct = self._members.get(relation)
            if direct is not None:
                return direct.get(key)
        return next((m for m in self.members(relation) if str(m.id) == key), None)

    @classmethod
    def member_type(cls, relation: Relation) -> type[Entity] | None:
        """Kind of the members reachable as ``relation``, if any."""
        found = cls.child_types.get(relation)
        if found is not None:
            return found
        for child_type in cls.child_types.values():
            found = child_type.member_type(relation)
            if found is not None:
                return found
        return None

    @classmethod
    def reaches(cls, relation: Relation) -> bool:
        """Whether entities of this kind can own members of ``relation``."""
        return cls.member_type(relation) is not None

    # -- lifecycle --------------------------------------------------------

    def add_child(
        self,
        relation: Relation,
        child_id: Any,
        configurator: Configurator | None = None,
    ) -> Entity:
        """Create, configure and link a member.

        The id is checked for uniqueness among the existing members before
        ``configurator`` runs. The configurator already sees the child's
        back-reference, but the parent only lists the child once the
        configurator returned without raising.

        Raises:
            ValidationError: If ``child_id`` is malformed or belongs elsewhere.
            ConflictError: If a sibling with the same id exists.
        """
        try:
            child_type = self.child_types[relation]
        except KeyError:
            raise ValidationError(f"{self.kind} has no '{relation.value}' members!") from None

        typed_id = child_type.coerce_id(self, child_id)
        key = str(typed_id)
        with self._lock:
            bucket = self._members[relation]
            if key in bucket:
                raise ConflictError(f"{type(typed_id).kind} already exists!")
            child = child_type(typed_id, status_history_limit=self._status_history_limit)
            child._parent = BackRef.to(self)
            if configurator is not None:
                try:
                    configurator(child)
                except Exception:
                    child._parent = None
                    raise
            bucket[key] = child

        logger.debug("Added %s %s to %s %s", child.kind, key, self.kind, self.id)
        return child

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!s})"
