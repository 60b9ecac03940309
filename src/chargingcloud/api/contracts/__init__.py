"""Value types shared by the entity model, the store and the projections."""
from chargingcloud.api.contracts.geo import Address, Country, GeoCoordinate
from chargingcloud.api.contracts.i18n import I18NText
from chargingcloud.api.contracts.ids import (
    BrandId,
    ChargingPoolId,
    ChargingStationId,
    ChargingStationOperatorId,
    DataLicenseId,
    EVSEId,
    GridOperatorId,
    ParkingOperatorId,
    RoamingNetworkId,
    SmartCityId,
    SocketOutletId,
)
from chargingcloud.api.contracts.status import (
    AdminStatusType,
    StatusSchedule,
    StatusType,
    Timestamped,
)

__all__ = [
    "Address", "Country", "GeoCoordinate",
    "I18NText",
    "BrandId", "ChargingPoolId", "ChargingStationId", "ChargingStationOperatorId",
    "DataLicenseId", "EVSEId", "GridOperatorId", "ParkingOperatorId",
    "RoamingNetworkId", "SmartCityId", "SocketOutletId",
    "AdminStatusType", "StatusSchedule", "StatusType", "Timestamped",
]
