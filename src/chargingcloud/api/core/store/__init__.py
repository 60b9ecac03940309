"""Roaming network registry and seeding."""
from chargingcloud.api.core.store.registry import WILDCARD_SCOPE, RoamingNetworkStore
from chargingcloud.api.core.store.seed import load_networks, seed_store

__all__ = ["WILDCARD_SCOPE", "RoamingNetworkStore", "load_networks", "seed_store"]
