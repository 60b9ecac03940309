# tests/test_contracts.py
"""
Tests for identifiers, I18N text, locations and status schedules.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from chargingcloud.api.contracts import (
    Address,
    AdminStatusType,
    ChargingPoolId,
    ChargingStationOperatorId,
    EVSEId,
    GeoCoordinate,
    I18NText,
    RoamingNetworkId,
    SocketOutletId,
    StatusSchedule,
)
from chargingcloud.api.core.errors import ValidationError


class TestIdentifiers:
    def test_roaming_network_id(self):
        assert str(RoamingNetworkId.parse(" TEST_RN1 ")) == "TEST_RN1"
        assert RoamingNetworkId("A") == RoamingNetworkId.parse("A")
        with pytest.raises(ValidationError, match="Invalid RoamingNetworkId!"):
            RoamingNetworkId.parse("not valid")

    def test_operator_id_normalizes(self):
        assert str(ChargingStationOperatorId.parse("de*gef")) == "DE*GEF"
        assert ChargingStationOperatorId.parse("DEGEF") == ChargingStationOperatorId.parse("DE*GEF")
        with pytest.raises(ValidationError):
            ChargingStationOperatorId.parse("D*G")

    def test_pool_id_embeds_operator(self):
        operator = ChargingStationOperatorId.parse("DE*GEF")
        pool = ChargingPoolId.create(operator, "1111")
        assert str(pool) == "DE*GEF*P1111"
        assert ChargingPoolId.create(operator, "P1111") == pool
        assert ChargingPoolId.create(operator, "DE*GEF*P1111") == pool
        assert ChargingPoolId.parse("DE*GEF*P1111") == pool
        assert pool.operator_id == operator

    def test_marker_must_match_kind(self):
        with pytest.raises(ValidationError, match="Invalid ChargingPoolId!"):
            ChargingPoolId.parse("DE*GEF*S1111")

    def test_evse_and_outlet_ids(self):
        evse = EVSEId.parse("DE*GEF*E11115678*1")
        assert evse.suffix == "11115678*1"
        outlet = SocketOutletId.parse("DE*GEF*E11115678*1*2")
        assert outlet.evse_id == evse
        assert outlet.suffix == "2"
        assert str(SocketOutletId.create(evse, "2")) == "DE*GEF*E11115678*1*2"


class TestI18NText:
    def test_parse_object(self):
        text = I18NText.parse({"DE": "Hallo", "en": "Hello"})
        assert text["de"] == "Hallo"
        assert text.to_json() == {"de": "Hallo", "en": "Hello"}

    def test_structural_equality(self):
        assert I18NText(en="a", de="b") == I18NText(de="b", en="a")
        assert I18NText() == {}

    @pytest.mark.parametrize("value", ["text", 1, ["en"], {"en": 1}])
    def test_rejects_non_objects(self, value):
        with pytest.raises(ValidationError, match="Invalid description!"):
            I18NText.parse(value, error="Invalid description!")

    def test_none_is_empty(self):
        assert I18NText.parse(None).to_json() == {}


class TestLocations:
    def test_coordinate_range(self):
        with pytest.raises(ValidationError):
            GeoCoordinate(91, 0)
        assert GeoCoordinate.parse({"lat": 50.9, "lng": 11.5}).to_json() == {"lat": 50.9, "lng": 11.5}

    def test_address(self):
        address = Address.parse(
            {
                "street": "Biberweg",
                "house_number": "18",
                "postal_code": "07749",
                "city": {"de": "Jena"},
                "country": "Germany",
            }
        )
        assert address.country.alpha2 == "DE"
        assert address.to_json() == {
            "houseNumber": "18",
            "street": "Biberweg",
            "postalCode": "07749",
            "city": {"de": "Jena"},
            "country": {"en": "Germany", "de": "Deutschland"},
        }

    def test_address_missing_field(self):
        with pytest.raises(ValidationError, match="postal_code"):
            Address.parse({"street": "x", "city": {"de": "Jena"}, "country": "DE"})


class TestStatusSchedule:
    def test_newest_first_and_bounded(self):
        schedule = StatusSchedule(AdminStatusType.OPERATIONAL, limit=3)
        base = datetime.now(timezone.utc)
        for n, status in enumerate(
            [AdminStatusType.BLOCKED, AdminStatusType.OUT_OF_SERVICE, AdminStatusType.OPERATIONAL],
            start=1,
        ):
            schedule.set(status, base + timedelta(seconds=n))
        assert len(schedule) == 3
        assert schedule.current is AdminStatusType.OPERATIONAL
        assert [e.value for e in schedule.history()] == [
            AdminStatusType.OPERATIONAL,
            AdminStatusType.OUT_OF_SERVICE,
            AdminStatusType.BLOCKED,
        ]

    def test_late_report_keeps_order(self):
        schedule = StatusSchedule(AdminStatusType.OPERATIONAL)
        now = datetime.now(timezone.utc)
        schedule.set(AdminStatusType.BLOCKED, now + timedelta(minutes=5))
        schedule.set(AdminStatusType.PLANNED, now - timedelta(minutes=5))
        assert schedule.current is AdminStatusType.BLOCKED
        assert schedule.history()[-1].value is AdminStatusType.PLANNED

    def test_to_json_history_size(self):
        schedule = StatusSchedule(AdminStatusType.OPERATIONAL)
        schedule.set(AdminStatusType.BLOCKED, datetime.now(timezone.utc) + timedelta(seconds=1))
        assert list(schedule.to_json(1).values()) == ["Blocked"]
        assert list(schedule.to_json(5).values()) == ["Blocked", "Operational"]
