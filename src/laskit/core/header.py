"""LAS public header block."""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass
from typing import BinaryIO

from laskit._stream import decode_text, encode_text, read_exact
from laskit.core.bounds import Bounds
from laskit.core.point_format import PointFormat
from laskit.errors import InvalidHeader, LasError

FILE_SIGNATURE = b"LASF"

# Common block shared by every version: 227 bytes.
_HEADER_STRUCT = struct.Struct("<4sHH16sBB32s32sHHHLLBHL5L12d")
HEADER_BLOCK_SIZE = _HEADER_STRUCT.size

# 1.3: start of waveform data packet record.
_WAVEFORM_STRUCT = struct.Struct("<Q")
# 1.4: start of first EVLR, number of EVLRs, 64-bit point count and
# 15 by-return counts.
_EXTENDED_STRUCT = struct.Struct("<QLQ15Q")

# Header sizes by (major, minor); 1.3 adds the waveform offset, 1.4 the
# extended VLR and 64-bit count fields.
_HEADER_SIZES: dict[tuple[int, int], int] = {
    (1, 0): 227,
    (1, 1): 227,
    (1, 2): 227,
    (1, 3): 235,
    (1, 4): 375,
}


@dataclass
class Header:
    """The LAS public header block.

    The 227-byte block common to all versions is always present. A 1.3
    header adds the waveform record offset and a 1.4 header adds the EVLR
    fields and the 64-bit counts, which mirror ``number_of_point_records``
    and ``number_of_points_by_return``. Bytes past those blocks, up to
    ``header_size``, are written back as zeros.

    Most fields are declared values copied verbatim from a file. The
    counts, bounds and offsets to point data are derived from the points
    at write time, see ``LasFile.derive_header``.
    """

    file_source_id: int = 0
    global_encoding: int = 0
    project_id: bytes = bytes(16)
    version_major: int = 1
    version_minor: int = 2
    system_identifier: str = ""
    generating_software: str = "laskit"
    file_creation_day_of_year: int = 0
    file_creation_year: int = 0
    header_size: int = 227
    offset_to_point_data: int = 227
    number_of_variable_length_records: int = 0
    point_data_format: PointFormat = PointFormat.FORMAT_0
    point_data_record_length: int = 20
    number_of_point_records: int = 0
    number_of_points_by_return: tuple[int, int, int, int, int] = (0, 0, 0, 0, 0)
    x_scale_factor: float = 0.001
    y_scale_factor: float = 0.001
    z_scale_factor: float = 0.001
    x_offset: float = 0.0
    y_offset: float = 0.0
    z_offset: float = 0.0
    x_max: float = 0.0
    x_min: float = 0.0
    y_max: float = 0.0
    y_min: float = 0.0
    z_max: float = 0.0
    z_min: float = 0.0
    start_of_waveform_data_packet_record: int = 0
    start_of_first_evlr: int = 0
    number_of_evlrs: int = 0

    @property
    def version(self) -> str:
        return f"{self.version_major}.{self.version_minor}"

    @property
    def bounds(self) -> Bounds:
        return Bounds(
            minx=self.x_min,
            miny=self.y_min,
            minz=self.z_min,
            maxx=self.x_max,
            maxy=self.y_max,
            maxz=self.z_max,
        )

    @property
    def extra_bytes_length(self) -> int:
        """Bytes per record beyond the point format's fixed layout."""
        return self.point_data_record_length - self.point_data_format.record_length

    def calculate_size(self) -> int:
        """Header size in bytes required by this header's version."""
        try:
            return _HEADER_SIZES[(self.version_major, self.version_minor)]
        except KeyError:
            raise LasError(f"Unsupported LAS version: {self.version}") from None

    def block_size(self) -> int:
        """Bytes that ``read_from`` and ``write_to`` handle for this header.

        Extension blocks are only used when ``header_size`` has room for them.
        """
        size = HEADER_BLOCK_SIZE
        if self.version_minor >= 3 and self.header_size >= size + _WAVEFORM_STRUCT.size:
            size += _WAVEFORM_STRUCT.size
            if self.version_minor >= 4 and self.header_size >= size + _EXTENDED_STRUCT.size:
                size += _EXTENDED_STRUCT.size
        return size

    def copy(self) -> Header:
        return dataclasses.replace(self)

    @classmethod
    def read_from(cls, stream: BinaryIO) -> Header:
        """Read the header from the current stream position.

        The common block is followed by the 1.3 and 1.4 extensions when
        the version and declared ``header_size`` call for them.

        Raises:
            ShortRead: If the stream ends inside the header.
            InvalidHeader: If the signature or record length is wrong.
            UnsupportedPointFormat: If the point format code is unknown.
        """
        data = read_exact(stream, _HEADER_STRUCT.size, "header")
        fields = _HEADER_STRUCT.unpack(data)
        if fields[0] != FILE_SIGNATURE:
            raise InvalidHeader(f"Not a LAS file (signature {fields[0]!r})")

        (
            _,
            file_source_id,
            global_encoding,
            project_id,
            version_major,
            version_minor,
            system_identifier,
            generating_software,
            day,
            year,
            header_size,
            offset_to_point_data,
            n_vlrs,
            format_code,
            record_length,
            n_points,
        ) = fields[:16]
        by_return = tuple(fields[16:21])
        (
            x_scale, y_scale, z_scale,
            x_offset, y_offset, z_offset,
            x_max, x_min, y_max, y_min, z_max, z_min,
        ) = fields[21:]

        point_format = PointFormat.from_code(format_code)
        if record_length < point_format.record_length:
            raise InvalidHeader(
                f"Point record length {record_length} is shorter than "
                f"{point_format.record_length} required by format {format_code}"
            )
        if header_size < _HEADER_STRUCT.size:
            raise InvalidHeader(f"Header size {header_size} is too small")

        header = cls(
            file_source_id=file_source_id,
            global_encoding=global_encoding,
            project_id=project_id,
            version_major=version_major,
            version_minor=version_minor,
            system_identifier=decode_text(system_identifier),
            generating_software=decode_text(generating_software),
            file_creation_day_of_year=day,
            file_creation_year=year,
            header_size=header_size,
            offset_to_point_data=offset_to_point_data,
            number_of_variable_length_records=n_vlrs,
            point_data_format=point_format,
            point_data_record_length=record_length,
            number_of_point_records=n_points,
            number_of_points_by_return=by_return,
            x_scale_factor=x_scale,
            y_scale_factor=y_scale,
            z_scale_factor=z_scale,
            x_offset=x_offset,
            y_offset=y_offset,
            z_offset=z_offset,
            x_max=x_max,
            x_min=x_min,
            y_max=y_max,
            y_min=y_min,
            z_max=z_max,
            z_min=z_min,
        )
        header._read_extension(stream)
        return header

    def _read_extension(self, stream: BinaryIO) -> None:
        size = self.block_size()
        if size == HEADER_BLOCK_SIZE:
            return
        (self.start_of_waveform_data_packet_record,) = _WAVEFORM_STRUCT.unpack(
            read_exact(stream, _WAVEFORM_STRUCT.size, "header")
        )
        if size == HEADER_BLOCK_SIZE + _WAVEFORM_STRUCT.size:
            return
        fields = _EXTENDED_STRUCT.unpack(read_exact(stream, _EXTENDED_STRUCT.size, "header"))
        self.start_of_first_evlr, self.number_of_evlrs, n_points = fields[:3]
        # 1.4 writers may leave the legacy 32-bit counts at zero.
        if self.number_of_point_records == 0 and n_points:
            self.number_of_point_records = n_points
            self.number_of_points_by_return = tuple(fields[3:8])

    def write_to(self, stream: BinaryIO) -> int:
        """Write the header blocks, returning the number of bytes written.

        The 1.3 and 1.4 extensions are written when ``header_size`` has room
        for them, see ``block_size``.

        Callers pad up to ``header_size`` themselves.
        """
        if len(self.project_id) != 16:
            raise ValueError(f"project_id must be 16 bytes, got {len(self.project_id)}")
        try:
            data = _HEADER_STRUCT.pack(
                FILE_SIGNATURE,
                self.file_source_id,
                self.global_encoding,
                self.project_id,
                self.version_major,
                self.version_minor,
                encode_text(self.system_identifier, 32),
                encode_text(self.generating_software, 32),
                self.file_creation_day_of_year,
                self.file_creation_year,
                self.header_size,
                self.offset_to_point_data,
                self.number_of_variable_length_records,
                int(self.point_data_format),
                self.point_data_record_length,
                self.number_of_point_records,
                *self.number_of_points_by_return,
                self.x_scale_factor,
                self.y_scale_factor,
                self.z_scale_factor,
                self.x_offset,
                self.y_offset,
                self.z_offset,
                self.x_max,
                self.x_min,
                self.y_max,
                self.y_min,
                self.z_max,
                self.z_min,
            )
            size = self.block_size()
            if size > HEADER_BLOCK_SIZE:
                data += _WAVEFORM_STRUCT.pack(self.start_of_waveform_data_packet_record)
            if size == HEADER_BLOCK_SIZE + _WAVEFORM_STRUCT.size + _EXTENDED_STRUCT.size:
                data += _EXTENDED_STRUCT.pack(
                    self.start_of_first_evlr,
                    self.number_of_evlrs,
                    self.number_of_point_records,
                    *self.number_of_points_by_return,
                    *(0,) * 10,
                )
        except struct.error as e:
            raise ValueError(f"Cannot encode header: {e}") from e
        stream.write(data)
        return len(data)
