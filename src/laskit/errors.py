"""Exception hierarchy for LAS reading and writing.

I/O failures from the underlying stream are not wrapped; they surface as
the ``OSError`` the stream raised.
"""

from __future__ import annotations

from typing import Any


class LasError(Exception):
    """Base class for all laskit errors."""


class InvalidHeader(LasError, ValueError):
    """The header block is malformed or internally inconsistent."""


class UnsupportedPointFormat(LasError, ValueError):
    """A point data format code outside the supported set."""

    def __init__(self, code: int) -> None:
        super().__init__(f"Unsupported point data format: {code}")
        self.code = code


class ShortRead(LasError, EOFError):
    """Fewer bytes were available than a record demands."""

    def __init__(self, expected: int, actual: int, what: str = "record") -> None:
        super().__init__(
            f"Tried to read {expected} bytes for {what}, only got {actual}"
        )
        self.expected = expected
        self.actual = actual


class PointFormatMismatch(LasError, ValueError):
    """A point lacks a field that its point data format requires."""

    def __init__(self, point_format: Any, field: str) -> None:
        super().__init__(
            f"Point does not match point format {int(point_format)}: "
            f"missing or inconsistent '{field}'"
        )
        self.point_format = point_format
        self.field = field


class CoordinateOutOfRange(LasError, ValueError):
    """A coordinate cannot be encoded as a signed 32-bit scaled integer."""

    def __init__(self, value: float, scale_factor: float, offset: float) -> None:
        super().__init__(
            f"Coordinate {value!r} is not encodable with "
            f"scale {scale_factor!r} and offset {offset!r}"
        )
        self.value = value
        self.scale_factor = scale_factor
        self.offset = offset
