"""Point record codec: one Point to and from its fixed-stride bytes."""

from __future__ import annotations

import struct

import numpy as np

from laskit.core.header import Header
from laskit.core.point import Point, ScanDirection
from laskit.core.point_format import PointFormat
from laskit.core.scale import descale, scale
from laskit.errors import PointFormatMismatch, ShortRead

# x, y, z, intensity, return byte, classification byte, scan angle rank,
# user data, point source id
_CORE = struct.Struct("<iiiHBBbBH")
_GPS_TIME = struct.Struct("<d")
_COLOR = struct.Struct("<HHH")

# Columnar dtypes, named like the standard point cloud dimensions
_BASE_DTYPE: list[tuple[str, str]] = [
    ("X", "<f8"),
    ("Y", "<f8"),
    ("Z", "<f8"),
    ("Intensity", "<u2"),
    ("ReturnNumber", "u1"),
    ("NumberOfReturns", "u1"),
    ("ScanDirectionFlag", "u1"),
    ("EdgeOfFlightLine", "?"),
    ("Classification", "u1"),
    ("Synthetic", "?"),
    ("KeyPoint", "?"),
    ("Withheld", "?"),
    ("ScanAngleRank", "i1"),
    ("UserData", "u1"),
    ("PointSourceId", "<u2"),
]


def _check_bits(name: str, value: int, bits: int) -> int:
    value = int(value)
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} must be in [0, {(1 << bits) - 1}], got {value}")
    return value


def pack_return_byte(
    return_number: int,
    number_of_returns: int,
    scan_direction: int,
    edge_of_flight_line: bool,
) -> int:
    """Pack return info: bits 0-2 return number, 3-5 number of returns,
    6 scan direction, 7 edge of flight line."""
    return (
        _check_bits("return_number", return_number, 3)
        | _check_bits("number_of_returns", number_of_returns, 3) << 3
        | _check_bits("scan_direction", scan_direction, 1) << 6
        | bool(edge_of_flight_line) << 7
    )


def unpack_return_byte(byte: int) -> tuple[int, int, ScanDirection, bool]:
    return (
        byte & 0b111,
        (byte >> 3) & 0b111,
        ScanDirection((byte >> 6) & 1),
        bool(byte >> 7 & 1),
    )


def pack_classification_byte(
    classification: int, synthetic: bool, key_point: bool, withheld: bool
) -> int:
    """Pack bits 0-4 classification, 5 synthetic, 6 key-point, 7 withheld."""
    return (
        _check_bits("classification", classification, 5)
        | bool(synthetic) << 5
        | bool(key_point) << 6
        | bool(withheld) << 7
    )


def unpack_classification_byte(byte: int) -> tuple[int, bool, bool, bool]:
    return (
        byte & 0b11111,
        bool(byte >> 5 & 1),
        bool(byte >> 6 & 1),
        bool(byte >> 7 & 1),
    )


def decode_point(data: bytes, header: Header) -> Point:
    """Decode one point record.

    Args:
        data: The record bytes, ``header.point_data_record_length`` long.
        header: Supplies the point format, scale factors and offsets.

    Returns:
        The decoded Point. Bytes past the format's fixed layout become
        ``extra_bytes``.

    Raises:
        ShortRead: If ``data`` is shorter than the declared record length
            or the point format's fixed layout.
    """
    record_length = max(
        header.point_data_record_length, header.point_data_format.record_length
    )
    if len(data) < record_length:
        raise ShortRead(record_length, len(data), "point record")

    (
        x, y, z,
        intensity,
        return_byte,
        class_byte,
        scan_angle_rank,
        user_data,
        point_source_id,
    ) = _CORE.unpack_from(data, 0)
    return_number, number_of_returns, scan_direction, edge = unpack_return_byte(return_byte)
    classification, synthetic, key_point, withheld = unpack_classification_byte(class_byte)

    point = Point(
        x=scale(x, header.x_scale_factor, header.x_offset),
        y=scale(y, header.y_scale_factor, header.y_offset),
        z=scale(z, header.z_scale_factor, header.z_offset),
        intensity=intensity,
        return_number=return_number,
        number_of_returns=number_of_returns,
        scan_direction=scan_direction,
        edge_of_flight_line=edge,
        classification=classification,
        synthetic=synthetic,
        key_point=key_point,
        withheld=withheld,
        scan_angle_rank=scan_angle_rank,
        user_data=user_data,
        point_source_id=point_source_id,
    )

    pos = _CORE.size
    point_format = header.point_data_format
    if point_format.has_time:
        (point.gps_time,) = _GPS_TIME.unpack_from(data, pos)
        pos += _GPS_TIME.size
    if point_format.has_color:
        point.red, point.green, point.blue = _COLOR.unpack_from(data, pos)
        pos += _COLOR.size
    point.extra_bytes = bytes(data[pos:record_length])
    return point


def encode_point(point: Point, header: Header) -> bytes:
    """Encode one point record, the exact inverse of ``decode_point``.

    Raises:
        PointFormatMismatch: If the format carries GPS time or color and the
            point is missing it.
        CoordinateOutOfRange: If a coordinate does not fit the scaled i32.
        ValueError: If a field is outside its on-disk range.
    """
    point_format = header.point_data_format
    parts = []
    try:
        parts.append(
            _CORE.pack(
                descale(point.x, header.x_scale_factor, header.x_offset),
                descale(point.y, header.y_scale_factor, header.y_offset),
                descale(point.z, header.z_scale_factor, header.z_offset),
                point.intensity,
                pack_return_byte(
                    point.return_number,
                    point.number_of_returns,
                    point.scan_direction,
                    point.edge_of_flight_line,
                ),
                pack_classification_byte(
                    point.classification,
                    point.synthetic,
                    point.key_point,
                    point.withheld,
                ),
                point.scan_angle_rank,
                point.user_data,
                point.point_source_id,
            )
        )
        if point_format.has_time:
            if point.gps_time is None:
                raise PointFormatMismatch(point_format, "gps_time")
            parts.append(_GPS_TIME.pack(point.gps_time))
        if point_format.has_color:
            if not point.has_color:
                missing = next(
                    name for name in ("red", "green", "blue") if getattr(point, name) is None
                )
                raise PointFormatMismatch(point_format, missing)
            parts.append(_COLOR.pack(point.red, point.green, point.blue))
    except struct.error as e:
        raise ValueError(f"Cannot encode point: {e}") from e
    parts.append(bytes(point.extra_bytes))
    return b"".join(parts)


def point_dtype(point_format: PointFormat, extra_bytes: int = 0) -> np.dtype:
    """Columnar NumPy dtype holding every field of ``point_format``."""
    fields: list[tuple] = list(_BASE_DTYPE)
    if point_format.has_time:
        fields.append(("GpsTime", "<f8"))
    if point_format.has_color:
        fields.extend([("Red", "<u2"), ("Green", "<u2"), ("Blue", "<u2")])
    if extra_bytes:
        fields.append(("ExtraBytes", "u1", (extra_bytes,)))
    return np.dtype(fields)
