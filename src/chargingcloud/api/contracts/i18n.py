# chargingcloud/api/contracts/i18n.py
"""Multi-language text."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from chargingcloud.api.core.errors import ValidationError


class I18NText(Mapping[str, str]):
    """Ordered mapping of language code to text.

    A missing language means "not translated". Equality is structural and
    does not depend on insertion order.
    """

    __slots__ = ("_texts",)

    def __init__(self, texts: Mapping[str, str] | None = None, **kwargs: str) -> None:
        self._texts: dict[str, str] = {}
        for language, text in {**(texts or {}), **kwargs}.items():
            self._texts[language.lower()] = text

    @classmethod
    def parse(cls, value: Any, *, error: str = "Invalid I18N text!") -> I18NText:
        """Build from a decoded JSON value.

        Only JSON objects whose values are all strings are accepted; a bare
        scalar raises ``ValidationError`` with ``error`` as description.
        """
        if value is None:
            return cls()
        if isinstance(value, I18NText):
            return value
        if not isinstance(value, Mapping):
            raise ValidationError(error)
        if not all(isinstance(k, str) and k and isinstance(v, str) for k, v in value.items()):
            raise ValidationError(error)
        return cls(value)

    def set(self, language: str, text: str) -> I18NText:
        """Return a copy with ``language`` set to ``text``."""
        return I18NText({**self._texts, language.lower(): text})

    def first_text(self) -> str | None:
        return next(iter(self._texts.values()), None)

    def to_json(self) -> dict[str, str]:
        return dict(self._texts)

    def __getitem__(self, language: str) -> str:
        return self._texts[language.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._texts)

    def __len__(self) -> int:
        return len(self._texts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, I18NText):
            return self._texts == other._texts
        if isinstance(other, Mapping):
            return self._texts == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._texts.items()))

    def __repr__(self) -> str:
        return f"I18NText({self._texts!r})"
