# chargingcloud/api/core/projection/geojson.py
"""
GeoJSON (RFC 7946) rendering of entities.

A feature only gets a geometry when a real coordinate is known; an unknown
location is never rendered as ``[0, 0]``.
"""
from __future__ import annotations

from typing import Any, Sequence

from chargingcloud.api.contracts import GeoCoordinate
from chargingcloud.api.core.model import Entity, Relation
from chargingcloud.api.core.paging import Page
from chargingcloud.api.core.projection.engine import ProjectionEngine

GEOJSON_MEDIA_TYPE = "application/geo+json"

# Where to look for a coordinate when an entity has none of its own.
_FALLBACKS: dict[Relation, tuple[Relation, ...]] = {
    Relation.SOCKET_OUTLET: (Relation.EVSE, Relation.CHARGING_STATION, Relation.CHARGING_POOL),
    Relation.EVSE: (Relation.CHARGING_STATION, Relation.CHARGING_POOL),
    Relation.CHARGING_STATION: (Relation.CHARGING_POOL,),
}


def locate(entity: Entity) -> GeoCoordinate | None:
    """The entity's own coordinate, else the nearest located container's."""
    if entity.geo_location is not None:
        return entity.geo_location
    for relation in _FALLBACKS.get(entity.relation, ()):
        ref = entity.ancestor(relation)
        target = ref.resolve() if ref is not None else None
        if target is not None and target.geo_location is not None:
            return target.geo_location
    return None


def point(coordinate: GeoCoordinate) -> dict[str, Any]:
    coordinates = [coordinate.longitude, coordinate.latitude]
    if coordinate.altitude is not None:
        coordinates.append(coordinate.altitude)
    return {"type": "Point", "coordinates": coordinates}


def to_feature(entity: Entity, engine: ProjectionEngine | None = None) -> dict[str, Any]:
    engine = engine or ProjectionEngine()
    feature: dict[str, Any] = {"type": "Feature", "properties": engine.to_json(entity)}
    coordinate = locate(entity)
    if coordinate is not None:
        feature["geometry"] = point(coordinate)
    return feature


def to_feature_collection(
    entities: Sequence[Entity],
    engine: ProjectionEngine | None = None,
    *,
    properties: dict[str, Any] | None = None,
    skip: int = 0,
    take: int | None = None,
) -> Page[dict[str, Any]]:
    """Render a window of ``entities`` as one FeatureCollection.

    The returned page holds a single document; ``total`` still counts the
    whole collection.
    """
    engine = engine or ProjectionEngine()
    page = Page.of(entities, skip, take)
    document = {
        "type": "FeatureCollection",
        "properties": dict(properties or {}),
        "features": [to_feature(e, engine) for e in page.items],
    }
    return Page([document], page.skip, page.take, page.total)
