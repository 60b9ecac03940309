# chargingcloud/api/core/projection/policy.py
"""
Expansion policies: how much of a related entity is embedded in a document.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Iterable, Mapping

from chargingcloud.api.core.model import Relation

logger = logging.getLogger(__name__)


class ExpansionMode(IntEnum):
    """Ordered so that ``min`` clamps a mode to a ceiling."""

    HIDDEN = 0
    ID_ONLY = 1
    EXPAND = 2


class ExpansionPolicy:
    """Explicit per-relation modes chosen by the caller.

    Relations the caller did not mention fall back to the default of the
    renderer that asks.
    """

    __slots__ = ("_modes",)

    def __init__(self, modes: Mapping[Relation, ExpansionMode] | None = None) -> None:
        self._modes: dict[Relation, ExpansionMode] = dict(modes or {})

    @classmethod
    def uniform(cls, mode: ExpansionMode) -> ExpansionPolicy:
        """Same mode for every relation."""
        return cls({relation: mode for relation in Relation})

    def mode(self, relation: Relation, default: ExpansionMode) -> ExpansionMode:
        return self._modes.get(relation, default)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpansionPolicy):
            return NotImplemented
        return self._modes == other._modes

    def __repr__(self) -> str:
        inner = ", ".join(f"{r.value}={m.name}" for r, m in self._modes.items())
        return f"ExpansionPolicy({inner})"


def _aliases() -> dict[str, Relation]:
    table: dict[str, Relation] = {}
    for relation in Relation:
        token = relation.value.lower()
        table[token] = relation
        table[token + "s"] = relation
    table.update(
        {
            "chargingstationoperator": Relation.OPERATOR,
            "chargingstationoperators": Relation.OPERATOR,
            "smartcities": Relation.SMART_CITY,
            "outlets": Relation.SOCKET_OUTLET,
        }
    )
    return table


TOKEN_ALIASES: dict[str, Relation] = _aliases()


def parse_expand(values: Iterable[str] | None) -> ExpansionPolicy:
    """Turn ``expand`` query values into a policy.

    ``token`` expands, ``-token`` hides and ``token:id`` keeps only the id.
    Values may repeat or carry comma-separated tokens. Tokens are
    case-insensitive and accept plurals; unknown tokens are ignored.
    """
    modes: dict[Relation, ExpansionMode] = {}
    for value in values or ():
        for raw in value.split(","):
            token = raw.strip().lower()
            if not token:
                continue
            mode = ExpansionMode.EXPAND
            if token.startswith("-"):
                token, mode = token[1:], ExpansionMode.HIDDEN
            elif token.endswith(":id"):
                token, mode = token[:-3], ExpansionMode.ID_ONLY
            relation = TOKEN_ALIASES.get(token)
            if relation is None:
                logger.debug("Ignoring unknown expand token '%s'", raw.strip())
                continue
            modes[relation] = mode
    return ExpansionPolicy(modes)
