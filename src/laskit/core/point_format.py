"""Point data record formats."""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

from laskit.errors import UnsupportedPointFormat


class _Layout(NamedTuple):
    record_length: int
    has_time: bool
    has_color: bool


class PointFormat(IntEnum):
    """LAS point data format codes 0-3."""

    FORMAT_0 = 0
    FORMAT_1 = 1
    FORMAT_2 = 2
    FORMAT_3 = 3

    @classmethod
    def from_code(cls, code: int) -> PointFormat:
        try:
            return cls(code)
        except ValueError:
            raise UnsupportedPointFormat(code) from None

    @property
    def record_length(self) -> int:
        """Fixed record length in bytes, excluding extra bytes."""
        return _LAYOUTS[self].record_length

    @property
    def has_time(self) -> bool:
        return _LAYOUTS[self].has_time

    @property
    def has_color(self) -> bool:
        return _LAYOUTS[self].has_color


_LAYOUTS: dict[PointFormat, _Layout] = {
    PointFormat.FORMAT_0: _Layout(20, has_time=False, has_color=False),
    PointFormat.FORMAT_1: _Layout(28, has_time=True, has_color=False),
    PointFormat.FORMAT_2: _Layout(26, has_time=False, has_color=True),
    PointFormat.FORMAT_3: _Layout(34, has_time=True, has_color=True),
}


def _check_layouts() -> None:
    missing = set(PointFormat) - set(_LAYOUTS)
    if missing:
        raise RuntimeError(f"Point formats without a layout: {sorted(missing)}")


_check_layouts()
