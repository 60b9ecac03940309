# chargingcloud/api/core/errors.py
"""
Error taxonomy shared by the store, the property bags and the HTTP layer.

Every error is a well-formed rejection of a single request: it is raised
before any mutation takes place and carries the ``description`` that is
returned to the client as ``{"description": "..."}``.
"""
from __future__ import annotations

from typing import ClassVar


class ChargingCloudError(Exception):
    """Base class for all rejections raised by the core."""

    status_code: ClassVar[int] = 500

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(description)

    def to_dict(self) -> dict[str, str]:
        return {"description": self.description}


class ValidationError(ChargingCloudError):
    """Malformed input, e.g. a description that is not an I18N text."""

    status_code = 400


class NotFoundError(ChargingCloudError):
    """Unknown entity id or unset property."""

    status_code = 404


class ConflictError(ChargingCloudError):
    """Duplicate id on create or compare-and-swap mismatch on set."""

    status_code = 409
