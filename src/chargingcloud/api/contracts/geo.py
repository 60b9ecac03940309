# chargingcloud/api/contracts/geo.py
"""
Physical location value types: coordinates, countries and postal addresses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chargingcloud.api.contracts.i18n import I18NText
from chargingcloud.api.core.errors import ValidationError


@dataclass(frozen=True)
class GeoCoordinate:
    """WGS84 coordinate with optional altitude."""

    latitude: float
    longitude: float
    altitude: float | None = None
    reference_model: str = "WGS84"

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValidationError("Invalid latitude!")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValidationError("Invalid longitude!")

    @classmethod
    def parse(cls, value: Any) -> GeoCoordinate:
        """Accepts ``{"lat": .., "lng": ..}`` or ``{"latitude": .., "longitude": ..}``."""
        if not isinstance(value, dict):
            raise ValidationError("Invalid geo coordinate!")
        try:
            lat = float(value["lat"] if "lat" in value else value["latitude"])
            lng = float(value["lng"] if "lng" in value else value["longitude"])
            alt = value.get("alt", value.get("altitude"))
            return cls(lat, lng, float(alt) if alt is not None else None)
        except (KeyError, TypeError, ValueError):
            raise ValidationError("Invalid geo coordinate!") from None

    def to_json(self) -> dict[str, float]:
        out = {"lat": self.latitude, "lng": self.longitude}
        if self.altitude is not None:
            out["alt"] = self.altitude
        return out


@dataclass(frozen=True)
class Country:
    alpha2: str
    names: I18NText = field(compare=False)

    @classmethod
    def parse(cls, text: str) -> Country:
        code = text.strip().upper()
        known = _COUNTRIES.get(code)
        if known is not None:
            return known
        for country in _COUNTRIES.values():
            if any(name.lower() == text.strip().lower() for name in country.names.values()):
                return country
        raise ValidationError(f"Unknown country '{text}'!")

    def to_json(self) -> dict[str, str]:
        return self.names.to_json()


_COUNTRIES: dict[str, Country] = {
    c.alpha2: c
    for c in (
        Country("DE", I18NText(en="Germany", de="Deutschland")),
        Country("AT", I18NText(en="Austria")),
        Country("BE", I18NText(en="Belgium")),
        Country("CH", I18NText(en="Switzerland", de="Schweiz")),
        Country("FR", I18NText(en="France", fr="France")),
        Country("NL", I18NText(en="Netherlands", nl="Nederland")),
        Country("IT", I18NText(en="Italy", it="Italia")),
        Country("DK", I18NText(en="Denmark")),
        Country("PL", I18NText(en="Poland")),
    )
}


@dataclass(frozen=True)
class Address:
    street: str
    postal_code: str
    city: I18NText
    country: Country
    house_number: str | None = None
    floor_level: str | None = None
    comment: I18NText = field(default_factory=I18NText)

    @classmethod
    def parse(cls, value: Any) -> Address:
        if not isinstance(value, dict):
            raise ValidationError("Invalid address!")
        try:
            return cls(
                street=str(value["street"]),
                postal_code=str(value["postal_code"]),
                city=I18NText.parse(value["city"], error="Invalid address!"),
                country=Country.parse(str(value["country"])),
                house_number=(
                    str(value["house_number"]) if value.get("house_number") is not None else None
                ),
                floor_level=(
                    str(value["floor_level"]) if value.get("floor_level") is not None else None
                ),
                comment=I18NText.parse(value.get("comment"), error="Invalid address!"),
            )
        except KeyError as exc:
            raise ValidationError(f"Invalid address, missing '{exc.args[0]}'!") from None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.house_number:
            out["houseNumber"] = self.house_number
        out["street"] = self.street
        out["postalCode"] = self.postal_code
        if self.floor_level:
            out["floorLevel"] = self.floor_level
        out["city"] = self.city.to_json()
        out["country"] = self.country.to_json()
        if self.comment:
            out["comment"] = self.comment.to_json()
        return out
