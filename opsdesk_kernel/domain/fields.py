"""
Field presence marker for partial updates.

``UNSET`` means "the caller did not supply this field".  It is distinct from
every real value, including ``0``, ``""`` and ``None``, so an update can
tell "leave quantity alone" apart from "set quantity to 0".
"""

from __future__ import annotations

from typing import Any, Final


class _Unset:
    """Singleton type of the UNSET marker."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict) -> _Unset:
        return self


UNSET: Final = _Unset()


def is_set(value: Any) -> bool:
    """True when a field was supplied (even if its value is falsy)."""
    return value is not UNSET
