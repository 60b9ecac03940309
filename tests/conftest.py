# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from chargingcloud.api.contracts import GeoCoordinate, I18NText, RoamingNetworkId
from chargingcloud.api.core.config import Settings
from chargingcloud.api.core.model import EVSE, RoamingNetwork
from chargingcloud.api.core.store import RoamingNetworkStore
from chargingcloud.api.main import create_app


def build_network(network_id: str = "TEST_RN1") -> RoamingNetwork:
    """A small tree: one operator, three pools, one station, one EVSE, one outlet."""
    network = RoamingNetwork(RoamingNetworkId(network_id))
    operator = network.add_charging_station_operator(
        "DE*GEF", lambda o: setattr(o, "name", I18NText(de="GraphDefined"))
    )
    pool = operator.add_charging_pool(
        "1111", lambda p: setattr(p, "geo_location", GeoCoordinate(50.93, 11.58))
    )
    operator.add_charging_pool("2222")
    operator.add_charging_pool("3333")
    station = pool.add_charging_station("11115678")

    def configure_evse(evse: EVSE) -> None:
        evse.max_power = 22.0
        evse.max_current = 0.0

    evse = station.add_evse("11115678*1", configure_evse)
    evse.add_socket_outlet("1", lambda o: setattr(o, "plug", "Type2Outlet"))
    network.add_grid_operator("StadtwerkeJena")
    return network


@pytest.fixture
def network() -> RoamingNetwork:
    return build_network()


@pytest.fixture
def settings() -> Settings:
    return Settings(networks_config_paths=[], log_level="WARNING")


@pytest.fixture
def store() -> RoamingNetworkStore:
    return RoamingNetworkStore()


@pytest.fixture
def client(settings: Settings, store: RoamingNetworkStore) -> TestClient:
    return TestClient(create_app(settings, store))
