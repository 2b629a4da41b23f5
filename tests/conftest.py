"""Shared test fixtures."""

import io

import numpy as np
import pytest

from laskit.core.header import Header
from laskit.core.point import Point, ScanDirection
from laskit.core.point_format import PointFormat
from laskit.core.scale import scale
from laskit.core.vlr import Vlr
from laskit.io.file import LasFile


SCALE = 0.01
OFFSETS = (400000.0, 5600000.0, 0.0)


def make_points(n: int, point_format: PointFormat, seed: int = 42) -> list[Point]:
    """Points whose coordinates are exact decodings under SCALE and OFFSETS."""
    rng = np.random.default_rng(seed)
    points = []
    for i in range(n):
        point = Point(
            x=scale(int(rng.integers(0, 100000)), SCALE, OFFSETS[0]),
            y=scale(int(rng.integers(0, 100000)), SCALE, OFFSETS[1]),
            z=scale(int(rng.integers(10000, 50000)), SCALE, OFFSETS[2]),
            intensity=int(rng.integers(0, 65535)),
            return_number=i % 5 + 1,
            number_of_returns=5,
            scan_direction=ScanDirection(i % 2),
            edge_of_flight_line=i % 7 == 0,
            classification=int(rng.choice([1, 2, 3, 6])),
            synthetic=i % 3 == 0,
            key_point=i % 4 == 0,
            withheld=i % 5 == 0,
            scan_angle_rank=int(rng.integers(-90, 90)),
            user_data=int(rng.integers(0, 255)),
            point_source_id=int(rng.integers(0, 65535)),
        )
        if point_format.has_time:
            point.gps_time = 1000.0 + i * 0.25
        if point_format.has_color:
            point.red, point.green, point.blue = (
                int(v) for v in rng.integers(0, 65535, 3)
            )
        points.append(point)
    return points


def build_file(point_format: PointFormat, n: int = 25, vlrs: bool = True) -> LasFile:
    las = LasFile()
    las.set_header(
        Header(
            point_data_format=point_format,
            x_scale_factor=SCALE,
            y_scale_factor=SCALE,
            z_scale_factor=SCALE,
            x_offset=OFFSETS[0],
            y_offset=OFFSETS[1],
            z_offset=OFFSETS[2],
            system_identifier="test",
        )
    )
    if vlrs:
        las.add_vlr(
            Vlr(
                user_id="LASF_Projection",
                record_id=2112,
                description="OGC WKT Coordinate System",
                record_data=b'PROJCS["ETRS89 / UTM zone 32N"]\x00',
            )
        )
        las.add_vlr(Vlr(user_id="laskit", record_id=1, record_data=b"\x01\x02\x03"))
    for point in make_points(n, point_format):
        las.add_point(point)
    return las


def write_bytes(las: LasFile, auto_offsets: bool = False) -> bytes:
    buf = io.BytesIO()
    las.write_to(buf, auto_offsets=auto_offsets)
    return buf.getvalue()


@pytest.fixture
def sample_file() -> LasFile:
    """A point format 3 file with 25 points and two VLRs."""
    return build_file(PointFormat.FORMAT_3)


@pytest.fixture
def sample_bytes(sample_file) -> bytes:
    return write_bytes(sample_file)


@pytest.fixture
def sample_path(sample_file, tmp_path):
    path = tmp_path / "sample.las"
    sample_file.to_path(path)
    return path


@pytest.fixture
def make_file():
    """Factory for LasFile objects: make_file(point_format, n=25, vlrs=True)."""
    return build_file


@pytest.fixture
def to_bytes():
    """Serialize a LasFile into bytes: to_bytes(las, auto_offsets=False)."""
    return write_bytes
