from chargingcloud.api.core.properties.bag import CREATION_SENTINEL, PropertyBag, PropertyUpdate
from chargingcloud.api.core.properties.values import JSONType, JSONValue, json_equal, json_type, validate_json

__all__ = [
    "CREATION_SENTINEL",
    "PropertyBag",
    "PropertyUpdate",
    "JSONType",
    "JSONValue",
    "json_equal",
    "json_type",
    "validate_json",
]
