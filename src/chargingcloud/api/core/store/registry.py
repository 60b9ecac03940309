# chargingcloud/api/core/store/registry.py
"""
Hostname-scoped registry of roaming networks.

The store is an explicit object handed to every request handler. A scope
is a lookup key, not a separate container: each network is registered
under ``(scope, id)`` and a request sees the networks of its own scope plus
those registered under the wildcard scope ``*``.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from chargingcloud.api.contracts import I18NText, RoamingNetworkId
from chargingcloud.api.contracts.status import DEFAULT_HISTORY_LIMIT
from chargingcloud.api.core.errors import ConflictError, NotFoundError, ValidationError
from chargingcloud.api.core.model import Configurator, Entity, Relation, RoamingNetwork
from chargingcloud.api.core.paging import Page

logger = logging.getLogger(__name__)

WILDCARD_SCOPE = "*"

_Key = tuple[str, RoamingNetworkId]


def _parse_network_id(value: RoamingNetworkId | str) -> RoamingNetworkId:
    if isinstance(value, RoamingNetworkId):
        return value
    try:
        return RoamingNetworkId.parse(value)
    except (ValidationError, AttributeError):
        raise ValidationError("Invalid RoamingNetworkId!") from None


class RoamingNetworkStore:
    """Thread-safe CRUD over roaming network trees.

    Args:
        isolate_hostnames: When ``False`` every hostname maps to the
            wildcard scope, so all requests share one set of networks.
        status_history_limit: History bound handed to every created entity.
    """

    def __init__(
        self,
        *,
        isolate_hostnames: bool = False,
        status_history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self.isolate_hostnames = isolate_hostnames
        self.status_history_limit = status_history_limit
        self._lock = threading.RLock()
        # insertion ordered
        self._networks: dict[_Key, RoamingNetwork] = {}

    # -- scopes -------------------------------------------------------------

    def scope_for(self, hostname: str | None) -> str:
        """Normalize a ``Host`` header value into a scope key."""
        if not self.isolate_hostnames or not hostname:
            return WILDCARD_SCOPE
        host = hostname.strip().lower()
        if host.startswith("["):
            # IPv6 literal, e.g. "[::1]:8080"
            host = host[: host.find("]") + 1]
        else:
            host = host.split(":", 1)[0]
        return host or WILDCARD_SCOPE

    def _visible(self, scope: str) -> list[tuple[_Key, RoamingNetwork]]:
        return [
            (key, rn)
            for key, rn in self._networks.items()
            if key[0] == scope or key[0] == WILDCARD_SCOPE
        ]

    def _find(self, scope: str, network_id: RoamingNetworkId) -> tuple[_Key, RoamingNetwork] | None:
        exact = self._networks.get((scope, network_id))
        if exact is not None:
            return (scope, network_id), exact
        shared = self._networks.get((WILDCARD_SCOPE, network_id))
        if shared is not None:
            return (WILDCARD_SCOPE, network_id), shared
        return None

    # -- operations ---------------------------------------------------------

    def create(
        self,
        scope: str,
        network_id: RoamingNetworkId | str,
        name: Any = None,
        description: Any = None,
        configurator: Configurator | None = None,
    ) -> RoamingNetwork:
        """Register a new, empty roaming network.

        ``name`` and ``description`` are raw JSON values and must be I18N
        text objects when given.

        Raises:
            ValidationError: Malformed id, name or description.
            ConflictError: ``RoamingNetworkId already exists!``
        """
        rn_id = _parse_network_id(network_id)
        rn_name = I18NText.parse(name, error="Invalid roaming network name!")
        rn_description = I18NText.parse(description, error="Invalid roaming network description!")

        network = RoamingNetwork(
            rn_id,
            hostname=scope,
            name=rn_name,
            description=rn_description,
            status_history_limit=self.status_history_limit,
        )
        if configurator is not None:
            configurator(network)

        with self._lock:
            if self._conflicts(scope, rn_id):
                raise ConflictError("RoamingNetworkId already exists!")
            self._networks[(scope, rn_id)] = network

        logger.info("Created roaming network '%s' (scope=%s)", rn_id, scope)
        return network

    def _conflicts(self, scope: str, network_id: RoamingNetworkId) -> bool:
        if scope == WILDCARD_SCOPE:
            return any(key[1] == network_id for key in self._networks)
        return self._find(scope, network_id) is not None

    def get(self, scope: str, network_id: RoamingNetworkId | str) -> RoamingNetwork:
        """Raises ``NotFoundError`` (``Unknown RoamingNetworkId!``)."""
        rn_id = _parse_network_id(network_id)
        with self._lock:
            found = self._find(scope, rn_id)
        if found is None:
            raise NotFoundError("Unknown RoamingNetworkId!")
        return found[1]

    def exists(self, scope: str, network_id: RoamingNetworkId | str) -> bool:
        try:
            self.get(scope, network_id)
        except (NotFoundError, ValidationError):
            return False
        return True

    def list(self, scope: str, skip: int = 0, take: int | None = None) -> Page[RoamingNetwork]:
        """Networks visible in ``scope`` in creation order, windowed.

        ``Page.total`` is the size of the whole scope, also for ``take=0``.
        """
        with self._lock:
            visible = [rn for _, rn in self._visible(scope)]
        return Page.of(visible, skip, take)

    def count(self, scope: str) -> int:
        with self._lock:
            return len(self._visible(scope))

    def delete(self, scope: str, network_id: RoamingNetworkId | str) -> RoamingNetwork:
        """Unregister a network; its owned subtree goes with it.

        Only the scope a network was created in may delete it, so a host
        cannot remove a wildcard network shared with every other host.

        Raises:
            NotFoundError: ``Unknown RoamingNetworkId!``
            ConflictError: The network is shared from the wildcard scope.
        """
        rn_id = _parse_network_id(network_id)
        with self._lock:
            found = self._find(scope, rn_id)
            if found is None:
                raise NotFoundError("Unknown RoamingNetworkId!")
            key, network = found
            if key[0] != scope:
                raise ConflictError("RoamingNetworkId is shared by all hostnames!")
            del self._networks[key]
        logger.info("Deleted roaming network '%s' (scope=%s)", rn_id, key[0])
        return network

    def add_child(
        self,
        parent: Entity,
        relation: Relation,
        child_id: Any,
        configurator: Callable[[Any], Any] | None = None,
    ) -> Entity:
        """Add a member of kind ``relation`` below ``parent``.

        See ``Entity.add_child`` for the validation and uniqueness rules.
        """
        return parent.add_child(relation, child_id, configurator)

    def __len__(self) -> int:
        with self._lock:
            return len(self._networks)
