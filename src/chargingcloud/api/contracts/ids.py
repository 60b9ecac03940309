# chargingcloud/api/contracts/ids.py
"""
Hierarchically namespaced identifiers.

Every entity in the charging infrastructure graph is addressed by an
immutable identifier. Child identifiers embed the identifier of the
operator that owns them, e.g. operator ``DE*GEF`` owns pool
``DE*GEF*P1111``, station ``DE*GEF*S1111`` and EVSE ``DE*GEF*E1111*1``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, TypeVar

from chargingcloud.api.core.errors import ValidationError

_TOKEN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_\-\.]*$")
_OPERATOR = re.compile(r"^(?P<country>[A-Za-z]{2})\*?(?P<suffix>[A-Za-z0-9]{2,6})$")
_SUFFIX = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_\-\*]*$")

TokenIdT = TypeVar("TokenIdT", bound="TokenId")
OperatorChildIdT = TypeVar("OperatorChildIdT", bound="OperatorChildId")


@dataclass(frozen=True, order=True)
class TokenId:
    """Identifier consisting of a single opaque token."""

    kind: ClassVar[str] = "Id"

    value: str

    def __post_init__(self) -> None:
        if not _TOKEN.match(self.value):
            raise ValidationError(f"Invalid {self.kind}!")

    @classmethod
    def parse(cls: type[TokenIdT], text: str) -> TokenIdT:
        return cls(text.strip())

    def __str__(self) -> str:
        return self.value


class RoamingNetworkId(TokenId):
    kind = "RoamingNetworkId"


class GridOperatorId(TokenId):
    kind = "GridOperatorId"


class ParkingOperatorId(TokenId):
    kind = "ParkingOperatorId"


class SmartCityId(TokenId):
    kind = "SmartCityId"


class BrandId(TokenId):
    kind = "BrandId"


class DataLicenseId(TokenId):
    kind = "DataLicenseId"


@dataclass(frozen=True, order=True)
class ChargingStationOperatorId:
    """``<country>*<suffix>``, e.g. ``DE*GEF``."""

    kind: ClassVar[str] = "ChargingStationOperatorId"

    country_code: str
    suffix: str

    @classmethod
    def parse(cls, text: str) -> ChargingStationOperatorId:
        match = _OPERATOR.match(text.strip())
        if match is None:
            raise ValidationError("Invalid ChargingStationOperatorId!")
        return cls(match["country"].upper(), match["suffix"].upper())

    def __str__(self) -> str:
        return f"{self.country_code}*{self.suffix}"


@dataclass(frozen=True, order=True)
class OperatorChildId:
    """Identifier namespaced by a charging station operator.

    Rendered as ``<operator>*<marker><suffix>``. Subclasses define the
    single-letter ``marker`` (``P`` for pools, ``S`` for stations, ``E`` for
    EVSEs).
    """

    kind: ClassVar[str] = "Id"
    marker: ClassVar[str] = ""

    operator_id: ChargingStationOperatorId
    suffix: str

    def __post_init__(self) -> None:
        if not _SUFFIX.match(self.suffix):
            raise ValidationError(f"Invalid {self.kind}!")

    @classmethod
    def create(
        cls: type[OperatorChildIdT],
        operator_id: ChargingStationOperatorId,
        suffix: str,
    ) -> OperatorChildIdT:
        """Build an id below ``operator_id``.

        ``suffix`` may be given with or without the leading marker letter
        or even as a complete id of the same operator.
        """
        text = suffix.strip()
        prefix = f"{operator_id}*"
        if text.startswith(prefix):
            return cls.parse(text)
        if text[:1].upper() == cls.marker and text[1:2].isdigit():
            text = text[1:]
        return cls(operator_id, text)

    @classmethod
    def parse(cls: type[OperatorChildIdT], text: str) -> OperatorChildIdT:
        parts = text.strip().split("*", 2)
        if len(parts) != 3 or parts[2][:1].upper() != cls.marker:
            raise ValidationError(f"Invalid {cls.kind}!")
        try:
            operator_id = ChargingStationOperatorId.parse(f"{parts[0]}*{parts[1]}")
        except ValidationError:
            raise ValidationError(f"Invalid {cls.kind}!") from None
        return cls(operator_id, parts[2][1:])

    def __str__(self) -> str:
        return f"{self.operator_id}*{self.marker}{self.suffix}"


class ChargingPoolId(OperatorChildId):
    kind = "ChargingPoolId"
    marker = "P"


class ChargingStationId(OperatorChildId):
    kind = "ChargingStationId"
    marker = "S"


class EVSEId(OperatorChildId):
    kind = "EVSEId"
    marker = "E"


@dataclass(frozen=True, order=True)
class SocketOutletId:
    """``<evse>*<n>``: a socket outlet numbered within its EVSE."""

    kind: ClassVar[str] = "SocketOutletId"

    evse_id: EVSEId
    suffix: str

    def __post_init__(self) -> None:
        if not _TOKEN.match(self.suffix):
            raise ValidationError("Invalid SocketOutletId!")

    @classmethod
    def create(cls, evse_id: EVSEId, suffix: str) -> SocketOutletId:
        text = suffix.strip()
        prefix = f"{evse_id}*"
        if text.startswith(prefix):
            text = text[len(prefix):]
        return cls(evse_id, text)

    @classmethod
    def parse(cls, text: str) -> SocketOutletId:
        head, sep, tail = text.strip().rpartition("*")
        if not sep:
            raise ValidationError("Invalid SocketOutletId!")
        return cls(EVSEId.parse(head), tail)

    @property
    def operator_id(self) -> ChargingStationOperatorId:
        return self.evse_id.operator_id

    def __str__(self) -> str:
        return f"{self.evse_id}*{self.suffix}"
