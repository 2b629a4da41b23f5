"""Streaming, record-at-a-time LAS reader."""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator

from laskit._stream import read_exact, skip
from laskit.core.header import Header
from laskit.core.point import Point
from laskit.core.vlr import Vlr
from laskit.errors import InvalidHeader
from laskit.io.codec import decode_point

logger = logging.getLogger(__name__)


class LasReader:
    """Read a LAS stream one point at a time.

    The header and VLRs are parsed on construction, leaving the stream at
    the start of point data. The stream only needs ``read``; padding is
    skipped by reading and discarding.

    Examples:
        >>> with open("points.las", "rb") as f:
        ...     reader = LasReader(f)
        ...     for point in reader:
        ...         print(point.x, point.y, point.z)
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._header = Header.read_from(stream)
        consumed = self._skip_to(
            self._header.header_size, self._header.block_size(), "header extension"
        )

        self._vlrs: list[Vlr] = []
        for _ in range(self._header.number_of_variable_length_records):
            vlr = Vlr.read_from(stream)
            self._vlrs.append(vlr)
            consumed += len(vlr)

        self._skip_to(self._header.offset_to_point_data, consumed, "point data padding")
        self._points_read = 0
        logger.debug(
            "Opened LAS %s, point format %d, %d VLRs, %d points",
            self._header.version,
            self._header.point_data_format,
            len(self._vlrs),
            self._header.number_of_point_records,
        )

    def _skip_to(self, target: int, consumed: int, what: str) -> int:
        if target < consumed:
            raise InvalidHeader(
                f"Declared offset {target} for {what} lies inside the "
                f"{consumed} bytes already read"
            )
        skip(self._stream, target - consumed, what)
        return target

    @property
    def header(self) -> Header:
        """A copy of the file header."""
        return self._header.copy()

    @property
    def vlrs(self) -> list[Vlr]:
        return list(self._vlrs)

    @property
    def npoints(self) -> int:
        """Declared number of point records."""
        return self._header.number_of_point_records

    def next_point(self) -> Point | None:
        """Decode the next point, or return None once all points are read.

        Raises:
            ShortRead: If the stream ends inside a point record.
        """
        if self._points_read >= self.npoints:
            return None
        data = read_exact(
            self._stream, self._header.point_data_record_length, "point record"
        )
        self._points_read += 1
        return decode_point(data, self._header)

    def __iter__(self) -> Iterator[Point]:
        while True:
            point = self.next_point()
            if point is None:
                return
            yield point
