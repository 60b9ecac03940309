# chargingcloud/api/core/projection/status.py
"""Admin status / status history reports: ``{entityId: {timestamp: value}}``."""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from chargingcloud.api.core.model import Entity
from chargingcloud.api.core.paging import Page


class StatusKind(str, Enum):
    ADMIN_STATUS = "AdminStatus"
    STATUS = "Status"

    @property
    def attribute(self) -> str:
        return "admin_status" if self is StatusKind.ADMIN_STATUS else "status"


def status_report(
    entities: Sequence[Entity],
    kind: StatusKind,
    *,
    skip: int = 0,
    take: int | None = None,
    history_size: int = 1,
) -> Page[dict[str, dict[str, str]]]:
    page = Page.of(entities, skip, take)
    report = {
        str(e.id): getattr(e, kind.attribute).to_json(history_size) for e in page.items
    }
    return Page([report], page.skip, page.take, page.total)
