"""Tests for the LAS header block."""

import io
import struct

import pytest

from laskit.core.header import HEADER_BLOCK_SIZE, Header
from laskit.core.point_format import PointFormat
from laskit.errors import InvalidHeader, LasError, ShortRead, UnsupportedPointFormat

# Byte offsets into the header block
POINT_FORMAT_OFFSET = 104
RECORD_LENGTH_OFFSET = 105
HEADER_SIZE_OFFSET = 94
WAVEFORM_OFFSET = 227
EXTENDED_COUNT_OFFSET = 247


def header_bytes(header: Header) -> bytearray:
    buf = io.BytesIO()
    header.write_to(buf)
    return bytearray(buf.getvalue())


class TestHeaderDefaults:
    def test_defaults(self):
        h = Header()
        assert h.version == "1.2"
        assert h.point_data_format is PointFormat.FORMAT_0
        assert h.header_size == 227
        assert h.point_data_record_length == 20
        assert h.x_scale_factor == 0.001
        assert h.number_of_points_by_return == (0, 0, 0, 0, 0)

    @pytest.mark.parametrize(
        "minor, size", [(0, 227), (1, 227), (2, 227), (3, 235), (4, 375)]
    )
    def test_calculate_size(self, minor, size):
        assert Header(version_minor=minor).calculate_size() == size

    def test_calculate_size_unknown_version(self):
        with pytest.raises(LasError, match="version"):
            Header(version_major=2, version_minor=0).calculate_size()

    def test_copy_is_independent(self):
        h = Header()
        c = h.copy()
        c.x_offset = 5.0
        assert h.x_offset == 0.0
        assert c == Header(x_offset=5.0)

    def test_extra_bytes_length(self):
        h = Header(point_data_format=PointFormat.FORMAT_1, point_data_record_length=31)
        assert h.extra_bytes_length == 3


class TestHeaderSerialization:
    def test_write_size(self):
        buf = io.BytesIO()
        assert Header().write_to(buf) == HEADER_BLOCK_SIZE == 227
        assert len(buf.getvalue()) == 227

    def test_signature(self):
        assert bytes(header_bytes(Header())[:4]) == b"LASF"

    def test_roundtrip(self):
        h = Header(
            file_source_id=7,
            global_encoding=1,
            project_id=bytes(range(16)),
            system_identifier="survey",
            generating_software="laskit tests",
            file_creation_day_of_year=42,
            file_creation_year=2024,
            point_data_format=PointFormat.FORMAT_3,
            point_data_record_length=34,
            number_of_point_records=10,
            number_of_points_by_return=(4, 3, 2, 1, 0),
            x_scale_factor=0.01,
            x_offset=400000.0,
            x_min=-1.5,
            x_max=2.5,
            z_min=-100.0,
            z_max=100.0,
        )
        data = bytes(header_bytes(h))
        assert Header.read_from(io.BytesIO(data)) == h

    def test_bounds_field_order(self):
        h = Header(x_max=1.0, x_min=2.0, y_max=3.0, y_min=4.0, z_max=5.0, z_min=6.0)
        data = header_bytes(h)
        assert struct.unpack_from("<6d", data, 179) == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)

    def test_text_with_interior_nul_preserved(self):
        h = Header(system_identifier="abc\x00junk")
        data = header_bytes(h)
        assert Header.read_from(io.BytesIO(bytes(data))).system_identifier == "abc\x00junk"
        assert bytes(header_bytes(Header.read_from(io.BytesIO(bytes(data))))) == bytes(data)

    def test_text_too_long_raises(self):
        with pytest.raises(ValueError, match="longer than 32"):
            header_bytes(Header(generating_software="x" * 33))

    def test_bad_project_id_raises(self):
        with pytest.raises(ValueError, match="project_id"):
            header_bytes(Header(project_id=b"short"))

    def test_bounds_property(self):
        h = Header(x_min=1, y_min=2, z_min=3, x_max=4, y_max=5, z_max=6)
        b = h.bounds
        assert (b.minx, b.miny, b.minz, b.maxx, b.maxy, b.maxz) == (1, 2, 3, 4, 5, 6)


class TestHeaderErrors:
    def test_bad_signature(self):
        data = header_bytes(Header())
        data[:4] = b"LASX"
        with pytest.raises(InvalidHeader, match="Not a LAS file"):
            Header.read_from(io.BytesIO(bytes(data)))

    def test_truncated(self):
        data = bytes(header_bytes(Header()))[:100]
        with pytest.raises(ShortRead) as exc_info:
            Header.read_from(io.BytesIO(data))
        assert exc_info.value.expected == 227
        assert exc_info.value.actual == 100

    def test_unsupported_point_format(self):
        data = header_bytes(Header())
        data[POINT_FORMAT_OFFSET] = 6
        with pytest.raises(UnsupportedPointFormat):
            Header.read_from(io.BytesIO(bytes(data)))

    def test_record_length_too_short(self):
        data = header_bytes(Header(point_data_format=PointFormat.FORMAT_1))
        struct.pack_into("<H", data, RECORD_LENGTH_OFFSET, 20)
        with pytest.raises(InvalidHeader, match="shorter"):
            Header.read_from(io.BytesIO(bytes(data)))

    def test_header_size_too_small(self):
        data = header_bytes(Header())
        struct.pack_into("<H", data, HEADER_SIZE_OFFSET, 200)
        with pytest.raises(InvalidHeader, match="too small"):
            Header.read_from(io.BytesIO(bytes(data)))


class TestHeaderExtensions:
    def test_waveform_offset_roundtrip(self):
        h = Header(version_minor=3, header_size=235, start_of_waveform_data_packet_record=4096)
        data = bytes(header_bytes(h))
        assert len(data) == 235
        assert struct.unpack_from("<Q", data, WAVEFORM_OFFSET) == (4096,)
        assert Header.read_from(io.BytesIO(data)) == h

    def test_extended_counts_written(self):
        h = Header(
            version_minor=4,
            header_size=375,
            number_of_point_records=9,
            number_of_points_by_return=(5, 3, 1, 0, 0),
        )
        data = bytes(header_bytes(h))
        assert len(data) == 375
        assert struct.unpack_from("<Q", data, EXTENDED_COUNT_OFFSET) == (9,)
        assert struct.unpack_from("<15Q", data, EXTENDED_COUNT_OFFSET + 8) == (
            (5, 3, 1) + (0,) * 12
        )
        assert Header.read_from(io.BytesIO(data)) == h

    def test_extended_count_used_when_legacy_is_zero(self):
        h = Header(version_minor=4, header_size=375)
        data = header_bytes(h)
        struct.pack_into("<Q", data, EXTENDED_COUNT_OFFSET, 2**32 + 1)
        struct.pack_into("<5Q", data, EXTENDED_COUNT_OFFSET + 8, 7, 6, 5, 4, 3)
        result = Header.read_from(io.BytesIO(bytes(data)))
        assert result.number_of_point_records == 2**32 + 1
        assert result.number_of_points_by_return == (7, 6, 5, 4, 3)

    def test_evlr_fields_roundtrip(self):
        h = Header(version_minor=4, header_size=375, start_of_first_evlr=10_000, number_of_evlrs=2)
        data = bytes(header_bytes(h))
        assert Header.read_from(io.BytesIO(data)).number_of_evlrs == 2

    @pytest.mark.parametrize("minor, header_size", [(2, 375), (3, 227), (4, 235)])
    def test_block_size_bounded_by_version_and_size(self, minor, header_size):
        h = Header(version_minor=minor, header_size=header_size)
        assert h.block_size() == min(header_size, h.calculate_size())

    def test_truncated_extension(self):
        data = bytes(header_bytes(Header(version_minor=4, header_size=375)))[:300]
        with pytest.raises(ShortRead):
            Header.read_from(io.BytesIO(data))
