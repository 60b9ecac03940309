# chargingcloud/api/core/model/catalog.py
"""Brands and data licenses attached to infrastructure entities."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chargingcloud.api.contracts import BrandId, DataLicenseId, I18NText
from chargingcloud.api.core.errors import ValidationError


@dataclass(frozen=True)
class Brand:
    id: BrandId
    name: I18NText = field(default_factory=I18NText, compare=False)
    homepage: str | None = field(default=None, compare=False)

    @classmethod
    def parse(cls, value: Any) -> Brand:
        if isinstance(value, str):
            return cls(BrandId.parse(value))
        if not isinstance(value, dict) or "id" not in value:
            raise ValidationError("Invalid brand!")
        return cls(
            BrandId.parse(str(value["id"])),
            name=I18NText.parse(value.get("name"), error="Invalid brand name!"),
            homepage=value.get("homepage"),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"BrandId": str(self.id)}
        if self.name:
            out["name"] = self.name.to_json()
        if self.homepage:
            out["homepage"] = self.homepage
        return out


@dataclass(frozen=True)
class DataLicense:
    id: DataLicenseId
    description: str = field(default="", compare=False)
    urls: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def parse(cls, value: Any) -> DataLicense:
        """Accepts a well-known license id or ``{"id", "description", "urls"}``."""
        if isinstance(value, str):
            known = WELL_KNOWN_LICENSES.get(value.strip().lower())
            return known or cls(DataLicenseId.parse(value))
        if not isinstance(value, dict) or "id" not in value:
            raise ValidationError("Invalid data license!")
        return cls(
            DataLicenseId.parse(str(value["id"])),
            description=str(value.get("description", "")),
            urls=tuple(str(u) for u in value.get("urls", ())),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"DataLicenseId": str(self.id)}
        if self.description:
            out["description"] = self.description
        if self.urls:
            out["urls"] = list(self.urls)
        return out


WELL_KNOWN_LICENSES: dict[str, DataLicense] = {
    lic.id.value.lower(): lic
    for lic in (
        DataLicense(
            DataLicenseId("ODbL"),
            "Open Data Commons Open Database License 1.0",
            ("http://opendatacommons.org/licenses/odbl/1.0/",),
        ),
        DataLicense(
            DataLicenseId("CC0"),
            "Creative Commons Zero 1.0",
            ("https://creativecommons.org/publicdomain/zero/1.0/",),
        ),
        DataLicense(
            DataLicenseId("CC-BY-4.0"),
            "Creative Commons Attribution 4.0 International",
            ("https://creativecommons.org/licenses/by/4.0/",),
        ),
        DataLicense(
            DataLicenseId("dl-de-by-2.0"),
            "Datenlizenz Deutschland Namensnennung 2.0",
            ("https://www.govdata.de/dl-de/by-2-0",),
        ),
    )
}


class CatalogMixin:
    """Ordered, de-duplicated brands and data licenses."""

    def _init_catalog(self) -> None:
        self._brands: dict[BrandId, Brand] = {}
        self._data_licenses: dict[DataLicenseId, DataLicense] = {}

    @property
    def brands(self) -> list[Brand]:
        return list(self._brands.values())

    @property
    def data_licenses(self) -> list[DataLicense]:
        return list(self._data_licenses.values())

    def add_brand(self, brand: Brand) -> None:
        self._brands.setdefault(brand.id, brand)

    def add_data_license(self, data_license: DataLicense) -> None:
        self._data_licenses.setdefault(data_license.id, data_license)
