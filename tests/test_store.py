# tests/test_store.py
"""
Tests for the hostname-scoped roaming network store.
"""
from __future__ import annotations

import threading

import pytest

from chargingcloud.api.core.errors import ConflictError, NotFoundError, ValidationError
from chargingcloud.api.core.model import Relation
from chargingcloud.api.core.store import WILDCARD_SCOPE, RoamingNetworkStore


class TestCreate:
    def test_create_and_get(self, store):
        network = store.create("*", "TEST_RN1", description={"en": "Test"})
        assert store.get("*", "TEST_RN1") is network
        assert network.description == {"en": "Test"}
        assert store.exists("*", "TEST_RN1")

    def test_invalid_description(self, store):
        with pytest.raises(ValidationError) as exc:
            store.create("*", "TEST_RN1", description="plain text")
        assert exc.value.description == "Invalid roaming network description!"
        assert len(store) == 0

    def test_invalid_name(self, store):
        with pytest.raises(ValidationError, match="Invalid roaming network name!"):
            store.create("*", "TEST_RN1", name=["x"])

    def test_invalid_id(self, store):
        with pytest.raises(ValidationError, match="Invalid RoamingNetworkId!"):
            store.create("*", "no spaces allowed")

    def test_duplicate_keeps_first(self, store):
        store.create("*", "TEST_RN1", description={"en": "first"})
        with pytest.raises(ConflictError, match="RoamingNetworkId already exists!"):
            store.create("*", "TEST_RN1", description={"en": "second"})
        assert store.count("*") == 1
        assert store.get("*", "TEST_RN1").description == {"en": "first"}

    def test_concurrent_creates_have_one_winner(self, store):
        barrier = threading.Barrier(6)
        outcomes: list[str] = []
        lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            try:
                store.create("*", "RACE")
                outcome = "ok"
            except ConflictError:
                outcome = "conflict"
            with lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert outcomes.count("ok") == 1
        assert store.count("*") == 1

    def test_configurator_failure_registers_nothing(self, store):
        def broken(network):
            network.add_charging_station_operator("not an operator")

        with pytest.raises(ValidationError):
            store.create("*", "TEST_RN1", configurator=broken)
        assert not store.exists("*", "TEST_RN1")


class TestListAndDelete:
    @pytest.fixture
    def filled(self, store):
        for n in range(1, 6):
            store.create("*", f"RN{n}")
        return store

    @pytest.mark.parametrize(
        "skip,take,expected",
        [
            (0, None, ["RN1", "RN2", "RN3", "RN4", "RN5"]),
            (1, 2, ["RN2", "RN3"]),
            (4, 10, ["RN5"]),
            (7, 2, []),
            (0, 0, []),
        ],
    )
    def test_window(self, filled, skip, take, expected):
        page = filled.list("*", skip, take)
        assert [str(rn.id) for rn in page.items] == expected
        assert page.total == 5

    def test_delete(self, filled):
        filled.delete("*", "RN3")
        assert [str(rn.id) for rn in filled.list("*").items] == ["RN1", "RN2", "RN4", "RN5"]
        with pytest.raises(NotFoundError, match="Unknown RoamingNetworkId!"):
            filled.get("*", "RN3")

    def test_delete_unknown(self, store):
        with pytest.raises(NotFoundError, match="Unknown RoamingNetworkId!"):
            store.delete("*", "NOPE")

    def test_recreate_after_delete_starts_empty(self, store):
        network = store.create("*", "TEST_RN1")
        network.add_charging_station_operator("DE*GEF")
        network.properties.set("p", "", 1)
        store.delete("*", "TEST_RN1")
        fresh = store.create("*", "TEST_RN1")
        assert fresh.charging_station_operators == []
        assert "p" not in fresh.properties

    def test_add_child(self, store):
        network = store.create("*", "TEST_RN1")
        operator = store.add_child(network, Relation.OPERATOR, "DE*GEF")
        pool = store.add_child(operator, Relation.CHARGING_POOL, "1111")
        assert str(pool.id) == "DE*GEF*P1111"
        with pytest.raises(ConflictError):
            store.add_child(operator, Relation.CHARGING_POOL, "1111")


class TestScopes:
    def test_without_isolation_every_host_shares_one_scope(self, store):
        assert store.scope_for("a.example:8080") == WILDCARD_SCOPE
        assert store.scope_for(None) == WILDCARD_SCOPE

    def test_scope_normalization(self):
        store = RoamingNetworkStore(isolate_hostnames=True)
        assert store.scope_for("API.Example.org:3004") == "api.example.org"
        assert store.scope_for("[::1]:8080") == "[::1]"
        assert store.scope_for("") == WILDCARD_SCOPE

    def test_isolated_hosts(self):
        store = RoamingNetworkStore(isolate_hostnames=True)
        store.create("a.example", "RN")
        assert store.exists("a.example", "RN")
        assert not store.exists("b.example", "RN")
        # the same id may exist once per host
        store.create("b.example", "RN")
        assert store.count("a.example") == 1
        assert store.count("b.example") == 1

    def test_wildcard_networks_are_visible_everywhere(self):
        store = RoamingNetworkStore(isolate_hostnames=True)
        store.create(WILDCARD_SCOPE, "Shared")
        store.create("a.example", "Own")
        assert [str(rn.id) for rn in store.list("a.example").items] == ["Shared", "Own"]
        assert [str(rn.id) for rn in store.list("b.example").items] == ["Shared"]
        with pytest.raises(ConflictError):
            store.create("b.example", "Shared")
        with pytest.raises(ConflictError):
            store.create(WILDCARD_SCOPE, "Own")

    def test_only_the_owning_scope_deletes(self):
        store = RoamingNetworkStore(isolate_hostnames=True)
        store.create(WILDCARD_SCOPE, "Shared")
        with pytest.raises(ConflictError, match="shared by all hostnames"):
            store.delete("a.example", "Shared")
        assert store.exists("b.example", "Shared")
        store.delete(WILDCARD_SCOPE, "Shared")
        assert not store.exists("b.example", "Shared")
