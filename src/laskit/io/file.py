"""Whole-file LAS read/write engine.

``LasFile`` holds *all* of a file's points in memory. For record-at-a-time
access use ``LasReader`` directly.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from pathlib import Path
from typing import BinaryIO

import numpy as np

from laskit._stream import write_zeros
from laskit.core.header import Header
from laskit.core.point import Point
from laskit.core.vlr import Vlr
from laskit.errors import PointFormatMismatch
from laskit.io.codec import encode_point, point_dtype
from laskit.io.reader import LasReader

logger = logging.getLogger(__name__)


class LasFile:
    """A LAS file: one header, its VLRs and its points.

    VLRs and points keep their storage order. Writing never changes the
    file's own header; the header actually written is derived from the
    points and returned to the caller.

    Examples:
        >>> las = LasFile()
        >>> las.add_point(Point(x=1.0, y=2.0, z=3.0))
        >>> header = las.to_path("one.las")
        >>> header.number_of_point_records
        1
        >>> LasFile.from_path("one.las").points[0].x
        1.0
    """

    def __init__(self) -> None:
        self._header = Header()
        self._vlrs: list[Vlr] = []
        self._points: list[Point] = []

    # ── Reading ─────────────────────────────────────────────────────

    @classmethod
    def read_from(cls, stream: BinaryIO) -> LasFile:
        """Read a whole LAS file from a binary stream.

        Any error decoding the header, a VLR or a point aborts the read.
        """
        las = cls()
        reader = LasReader(stream)
        las._header = reader.header
        las._vlrs = reader.vlrs
        logger.debug("Reading %d declared points", reader.npoints)
        while True:
            point = reader.next_point()
            if point is None:
                break
            las._points.append(point)
        return las

    @classmethod
    def from_path(cls, path: str | Path) -> LasFile:
        """Read a LAS file from the filesystem."""
        logger.info("Reading %s", path)
        with open(path, "rb") as f:
            las = cls.read_from(f)
        logger.info("  Read %d points", len(las))
        return las

    # ── Contents ────────────────────────────────────────────────────

    @property
    def header(self) -> Header:
        return self._header

    def set_header(self, header: Header) -> None:
        """Replace the header, e.g. one built elsewhere just before writing."""
        self._header = header

    @property
    def vlrs(self) -> list[Vlr]:
        return self._vlrs

    def add_vlr(self, vlr: Vlr) -> None:
        self._vlrs.append(vlr)

    @property
    def points(self) -> list[Point]:
        return self._points

    def add_point(self, point: Point) -> None:
        self._points.append(point)

    def __len__(self) -> int:
        return len(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LasFile):
            return NotImplemented
        return (
            self._header == other._header
            and self._vlrs == other._vlrs
            and self._points == other._points
        )

    def __repr__(self) -> str:
        return (
            f"LasFile(version={self._header.version}, "
            f"format={int(self._header.point_data_format)}, "
            f"{len(self._vlrs)} vlrs, {len(self._points):,} points)"
        )

    # ── Writing ─────────────────────────────────────────────────────

    def _extra_bytes_length(self) -> int:
        if not self._points:
            return 0
        length = len(self._points[0].extra_bytes)
        for point in self._points:
            if len(point.extra_bytes) != length:
                raise PointFormatMismatch(self._header.point_data_format, "extra_bytes")
        return length

    def derive_header(self, auto_offsets: bool = False) -> Header:
        """Return a copy of the header with all point-dependent fields filled in.

        Sizes, offsets and counts are recomputed, the bounding box is taken
        from the points (+inf/-inf per axis when there are none), and
        returns 1-5 are tallied; return numbers 0, 6 and 7 are not counted.

        Args:
            auto_offsets: Center each axis offset between that axis's min
                and max. Leave False to keep caller-chosen offsets, e.g. to
                share one coordinate frame across several files. Ignored
                when there are no points.
        """
        header = self._header
        header_size = header.calculate_size()
        by_return = [0, 0, 0, 0, 0]
        x_min = y_min = z_min = math.inf
        x_max = y_max = z_max = -math.inf
        for point in self._points:
            if 1 <= point.return_number <= 5:
                by_return[point.return_number - 1] += 1
            x_min = min(x_min, point.x)
            y_min = min(y_min, point.y)
            z_min = min(z_min, point.z)
            x_max = max(x_max, point.x)
            y_max = max(y_max, point.y)
            z_max = max(z_max, point.z)

        derived = dataclasses.replace(
            header,
            header_size=header_size,
            number_of_point_records=len(self._points),
            point_data_record_length=(
                header.point_data_format.record_length + self._extra_bytes_length()
            ),
            number_of_variable_length_records=len(self._vlrs),
            offset_to_point_data=header_size + sum(len(vlr) for vlr in self._vlrs),
            number_of_points_by_return=tuple(by_return),
            x_min=x_min,
            y_min=y_min,
            z_min=z_min,
            x_max=x_max,
            y_max=y_max,
            z_max=z_max,
            # Waveform packets and EVLRs are not carried over.
            start_of_waveform_data_packet_record=0,
            start_of_first_evlr=0,
            number_of_evlrs=0,
        )
        if auto_offsets and self._points:
            derived.x_offset, derived.y_offset, derived.z_offset = derived.bounds.center
        return derived

    def write_to(self, stream: BinaryIO, auto_offsets: bool = False) -> Header:
        """Write this file to a binary stream.

        The header is derived first (see ``derive_header``), then written and
        zero-padded to its declared size, followed by the VLRs, zero padding
        up to the point data offset, and the points.

        Bytes already written are not rolled back if a point fails to
        encode; write to a temporary location if atomicity matters.

        Returns:
            The header that was written.

        Raises:
            PointFormatMismatch: If a point lacks a field its format requires.
            CoordinateOutOfRange: If a coordinate does not fit the scaling.
        """
        header = self.derive_header(auto_offsets=auto_offsets)

        written = header.write_to(stream)
        if written < header.header_size:
            written += write_zeros(stream, header.header_size - written)
        for vlr in self._vlrs:
            written += vlr.write_to(stream)
        if written < header.offset_to_point_data:
            write_zeros(stream, header.offset_to_point_data - written)
        for point in self._points:
            stream.write(encode_point(point, header))
        return header

    def to_path(self, path: str | Path, auto_offsets: bool = False) -> Header:
        """Write this file to the filesystem, returning the written header."""
        logger.info("Writing %d points to %s", len(self._points), path)
        with open(path, "wb") as f:
            return self.write_to(f, auto_offsets=auto_offsets)

    # ── Conversion ──────────────────────────────────────────────────

    def to_numpy(self) -> np.ndarray:
        """Convert the points to a NumPy structured array, one row per point.

        Columns follow the header's point format; GPS time and color must be
        present on every point when the format carries them.
        """
        point_format = self._header.point_data_format
        extra = self._extra_bytes_length()
        result = np.empty(len(self._points), dtype=point_dtype(point_format, extra))
        columns = {
            "X": "x",
            "Y": "y",
            "Z": "z",
            "Intensity": "intensity",
            "ReturnNumber": "return_number",
            "NumberOfReturns": "number_of_returns",
            "ScanDirectionFlag": "scan_direction",
            "EdgeOfFlightLine": "edge_of_flight_line",
            "Classification": "classification",
            "Synthetic": "synthetic",
            "KeyPoint": "key_point",
            "Withheld": "withheld",
            "ScanAngleRank": "scan_angle_rank",
            "UserData": "user_data",
            "PointSourceId": "point_source_id",
        }
        if point_format.has_time:
            columns["GpsTime"] = "gps_time"
        if point_format.has_color:
            columns.update(Red="red", Green="green", Blue="blue")

        for name, attr in columns.items():
            values = [getattr(p, attr) for p in self._points]
            if any(v is None for v in values):
                raise PointFormatMismatch(point_format, attr)
            result[name] = values
        if extra:
            result["ExtraBytes"] = [list(p.extra_bytes) for p in self._points]
        return result
