"""JSON / GeoJSON projections of the entity graph."""
from chargingcloud.api.core.projection.engine import (
    Direction,
    ProjectionEngine,
    RenderFrame,
    default_fields,
    format_quantity,
)
from chargingcloud.api.core.projection.geojson import (
    GEOJSON_MEDIA_TYPE,
    to_feature,
    to_feature_collection,
)
from chargingcloud.api.core.projection.policy import ExpansionMode, ExpansionPolicy, parse_expand
from chargingcloud.api.core.projection.status import StatusKind, status_report

__all__ = [
    "Direction",
    "ProjectionEngine",
    "RenderFrame",
    "default_fields",
    "format_quantity",
    "GEOJSON_MEDIA_TYPE",
    "to_feature",
    "to_feature_collection",
    "ExpansionMode",
    "ExpansionPolicy",
    "parse_expand",
    "StatusKind",
    "status_report",
]
