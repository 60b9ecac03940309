# chargingcloud/api/core/properties/bag.py
"""
Per-entity extension properties with compare-and-swap writes.

Each entity owns one ``PropertyBag``. Values are arbitrary JSON; a write
only succeeds when the caller proves it has seen the current value:

* unset property + expected value ``""`` -> created
* set property + structurally equal expected value -> updated
* anything else -> ``ConflictError``, nothing changes
"""
from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterator

from chargingcloud.api.core.errors import ConflictError, NotFoundError
from chargingcloud.api.core.properties.values import JSONValue, json_equal, validate_json

logger = logging.getLogger(__name__)

CREATION_SENTINEL = ""


@dataclass(frozen=True)
class PropertyUpdate:
    """Outcome of a successful ``PropertyBag.set``."""

    name: str
    old_value: JSONValue
    new_value: JSONValue
    created: bool

    def to_dict(self) -> dict[str, Any]:
        return {"oldValue": self.old_value, "newValue": self.new_value}


class PropertyBag:
    """Named JSON values guarded by a single lock.

    Values are copied on the way in and on the way out, so no caller ever
    holds a reference into the stored state.
    """

    def __init__(self, owner: str = "") -> None:
        self._owner = owner
        self._lock = threading.Lock()
        self._values: dict[str, JSONValue] = {}

    def get(self, name: str) -> JSONValue:
        """Return a copy of the value of ``name``.

        Raises:
            NotFoundError: If ``name`` was never set.
        """
        with self._lock:
            try:
                value = self._values[name]
            except KeyError:
                raise NotFoundError(f"Unknown property '{name}'!") from None
            return copy.deepcopy(value)

    def set(self, name: str, expected: Any, new_value: Any) -> PropertyUpdate:
        """Replace ``name`` with ``new_value`` if it currently equals ``expected``.

        Args:
            name: Property name.
            expected: The value the caller believes is stored, or ``""``
                to create a property that does not exist yet.
            new_value: Any JSON value.

        Returns:
            The applied update; ``created`` tells a creation from a replacement.

        Raises:
            ConflictError: If the stored value does not match ``expected``.
            ValidationError: If either value is not JSON.
        """
        expected = validate_json(expected)
        stored = validate_json(new_value)

        with self._lock:
            if name not in self._values:
                if not json_equal(expected, CREATION_SENTINEL):
                    logger.warning("Rejected write of unset property '%s' on %s", name, self._owner)
                    raise ConflictError("Property value mismatch!")
                self._values[name] = stored
                created = True
            else:
                if not json_equal(self._values[name], expected):
                    logger.warning("Rejected write of property '%s' on %s", name, self._owner)
                    raise ConflictError("Property value mismatch!")
                self._values[name] = stored
                created = False

        logger.debug(
            "Property '%s' on %s %s", name, self._owner, "created" if created else "updated"
        )
        return PropertyUpdate(
            name=name,
            old_value=expected,
            new_value=copy.deepcopy(stored),
            created=created,
        )

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._values

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._values))

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
