"""LAS stream reading and writing."""

from laskit.io.codec import decode_point, encode_point
from laskit.io.file import LasFile
from laskit.io.reader import LasReader

__all__ = ["LasFile", "LasReader", "decode_point", "encode_point"]
