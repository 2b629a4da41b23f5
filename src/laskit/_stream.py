"""Byte stream helpers shared by the header, VLR and point codecs."""

from __future__ import annotations

from typing import BinaryIO

from laskit.errors import ShortRead

_ZEROS_CHUNK = 4096


def read_exact(stream: BinaryIO, n: int, what: str = "record") -> bytes:
    """Read exactly ``n`` bytes or raise ``ShortRead``."""
    data = stream.read(n)
    if len(data) != n:
        raise ShortRead(n, len(data), what)
    return data


def skip(stream: BinaryIO, n: int, what: str = "padding") -> None:
    """Consume ``n`` bytes without requiring the stream to be seekable."""
    while n > 0:
        step = min(n, _ZEROS_CHUNK)
        read_exact(stream, step, what)
        n -= step


def write_zeros(stream: BinaryIO, n: int) -> int:
    """Write ``n`` zero bytes, returning the count written."""
    remaining = n
    while remaining > 0:
        step = min(remaining, _ZEROS_CHUNK)
        stream.write(bytes(step))
        remaining -= step
    return n


def decode_text(raw: bytes) -> str:
    """Decode a fixed-width NUL-padded text field."""
    # latin-1 maps every byte, so encode_text reproduces the field exactly.
    return raw.decode("latin-1").rstrip("\x00")


def encode_text(text: str, width: int) -> bytes:
    """Encode text into a fixed-width NUL-padded field."""
    raw = text.encode("latin-1")
    if len(raw) > width:
        raise ValueError(f"Text field {text!r} is longer than {width} bytes")
    return raw.ljust(width, b"\x00")
