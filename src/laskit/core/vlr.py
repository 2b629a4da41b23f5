"""Variable length records, passed through unchanged."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

from laskit._stream import decode_text, encode_text, read_exact

_VLR_HEADER_STRUCT = struct.Struct("<H16sHH32s")

VLR_HEADER_SIZE = _VLR_HEADER_STRUCT.size  # 54


@dataclass
class Vlr:
    """A variable length record.

    The payload is opaque here; only its serialized length matters for
    offset bookkeeping.
    """

    user_id: str = ""
    record_id: int = 0
    description: str = ""
    record_data: bytes = b""
    reserved: int = 0

    def __len__(self) -> int:
        """Serialized length in bytes, record header included."""
        return VLR_HEADER_SIZE + len(self.record_data)

    @classmethod
    def read_from(cls, stream: BinaryIO) -> Vlr:
        data = read_exact(stream, VLR_HEADER_SIZE, "VLR header")
        reserved, user_id, record_id, length, description = _VLR_HEADER_STRUCT.unpack(data)
        record_data = read_exact(stream, length, "VLR payload")
        return cls(
            user_id=decode_text(user_id),
            record_id=record_id,
            description=decode_text(description),
            record_data=record_data,
            reserved=reserved,
        )

    def write_to(self, stream: BinaryIO) -> int:
        """Write the record, returning the number of bytes written."""
        if len(self.record_data) > 0xFFFF:
            raise ValueError(
                f"VLR payload of {len(self.record_data)} bytes exceeds 65535"
            )
        stream.write(
            _VLR_HEADER_STRUCT.pack(
                self.reserved,
                encode_text(self.user_id, 16),
                self.record_id,
                len(self.record_data),
                encode_text(self.description, 32),
            )
        )
        stream.write(self.record_data)
        return len(self)
