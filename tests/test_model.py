# tests/test_model.py
"""
Tests for the entity tree: member creation, uniqueness, back-references
and flattened views.
"""
from __future__ import annotations

import gc

import pytest

from chargingcloud.api.contracts import ChargingPoolId, RoamingNetworkId
from chargingcloud.api.core.errors import ConflictError, NotFoundError, ValidationError
from chargingcloud.api.core.model import ChargingPool, Relation, RoamingNetwork


class TestAddChild:
    def test_ids_are_namespaced_by_operator(self, network):
        pools = network.charging_pools
        assert [str(p.id) for p in pools] == ["DE*GEF*P1111", "DE*GEF*P2222", "DE*GEF*P3333"]
        assert str(network.evses[0].id) == "DE*GEF*E11115678*1"

    def test_duplicate_sibling_id_conflicts(self, network):
        operator = network.get_charging_station_operator("DE*GEF")
        for variant in ("1111", "P1111", "DE*GEF*P1111"):
            with pytest.raises(ConflictError, match="ChargingPoolId already exists!"):
                operator.add_charging_pool(variant)
        assert len(operator.charging_pools) == 3

    def test_duplicate_operator_conflicts(self, network):
        with pytest.raises(ConflictError, match="ChargingStationOperatorId already exists!"):
            network.add_charging_station_operator("de*gef")

    def test_configurator_failure_links_nothing(self, network):
        operator = network.get_charging_station_operator("DE*GEF")

        def broken(pool: ChargingPool) -> None:
            raise ValidationError("Invalid address!")

        with pytest.raises(ValidationError):
            operator.add_charging_pool("4444", broken)
        assert "DE*GEF*P4444" not in [str(p.id) for p in operator.charging_pools]

    def test_configurator_sees_parent_before_linking(self):
        network = RoamingNetwork(RoamingNetworkId("RN"))
        seen = []

        def configure(operator) -> None:
            seen.append(operator.ancestor(Relation.ROAMING_NETWORK).resolve())
            seen.append(len(network.charging_station_operators))

        network.add_charging_station_operator("DE*GEF", configure)
        assert seen == [network, 0]

    def test_failed_configurator_drops_back_reference(self):
        network = RoamingNetwork(RoamingNetworkId("RN"))
        created = []

        def broken(operator) -> None:
            created.append(operator)
            raise ValidationError("Invalid homepage!")

        with pytest.raises(ValidationError):
            network.add_charging_station_operator("DE*GEF", broken)
        assert created[0].parent is None
        assert network.charging_station_operators == []

    def test_foreign_operator_id_rejected(self, network):
        operator = network.get_charging_station_operator("DE*GEF")
        with pytest.raises(ValidationError, match="does not belong"):
            operator.add_charging_pool(ChargingPoolId.parse("DE*XYZ*P1"))

    def test_unsupported_relation(self, network):
        with pytest.raises(ValidationError):
            network.add_child(Relation.EVSE, "1")

    def test_status_history_limit_is_inherited(self):
        network = RoamingNetwork(RoamingNetworkId("RN"), status_history_limit=2)
        operator = network.add_charging_station_operator("DE*GEF")
        for _ in range(5):
            operator.admin_status.set(operator.admin_status.current)
        assert len(operator.admin_status) == 2


class TestNavigation:
    def test_back_references(self, network):
        pool = network.get_charging_pool("DE*GEF*P1111")
        evse = network.get_evse("DE*GEF*E11115678*1")
        assert evse.ancestor(Relation.CHARGING_POOL).resolve() is pool
        assert str(evse.ancestor(Relation.OPERATOR).id) == "DE*GEF"
        assert evse.ancestor(Relation.ROAMING_NETWORK).resolve() is network
        assert evse.ancestor(Relation.GRID_OPERATOR) is None

    def test_back_references_are_weak(self):
        network = RoamingNetwork(RoamingNetworkId("RN"))
        operator = network.add_charging_station_operator("DE*GEF")
        ref = operator.parent
        assert ref.resolve() is network
        del network
        gc.collect()
        assert ref.resolve() is None
        assert str(ref.id) == "RN"

    def test_flattened_views_keep_creation_order(self, network):
        operator = network.get_charging_station_operator("DE*GEF")
        operator.add_charging_pool("0000")
        assert [str(p.id)[-4:] for p in network.charging_pools] == ["1111", "2222", "3333", "0000"]
        assert len(network.charging_stations) == 1
        assert len(network.grid_operators) == 1
        assert network.members(Relation.SOCKET_OUTLET)[0].plug == "Type2Outlet"

    def test_lookup_unknown_member(self, network):
        with pytest.raises(NotFoundError, match="Unknown ChargingPoolId!"):
            network.get_charging_pool("DE*GEF*P9999")
        with pytest.raises(NotFoundError, match="Unknown EVSEId!"):
            network.get(Relation.EVSE, "nope")

    def test_token_members(self, network):
        network.add_parking_operator("ParkJena")
        network.add_smart_city("Jena")
        assert [str(p.id) for p in network.parking_operators] == ["ParkJena"]
        assert network.smart_cities[0].kind == "SmartCity"
        station = network.get_charging_station("DE*GEF*S11115678")
        assert station.parent.resolve() is network.get_charging_pool("DE*GEF*P1111")

    @pytest.mark.parametrize("text", ["DE*GEF", "de*gef", "DEGEF", " de*GEF "])
    def test_lookup_normalizes_operator_ids(self, network, text):
        assert str(network.get_charging_station_operator(text).id) == "DE*GEF"

    def test_lookup_normalizes_child_ids(self, network):
        assert str(network.get_charging_pool("de*gef*p1111").id) == "DE*GEF*P1111"
        assert str(network.get_evse("de*gef*e11115678*1").id) == "DE*GEF*E11115678*1"

    def test_lookup_of_malformed_id_is_not_found(self, network):
        with pytest.raises(NotFoundError, match="Unknown ChargingStationOperatorId!"):
            network.get_charging_station_operator("not-an-operator")
