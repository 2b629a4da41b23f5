"""laskit: read, modify and rewrite LAS point cloud files."""

from laskit._version import __version__
from laskit.core.bounds import Bounds
from laskit.core.header import Header
from laskit.core.point import Point, ScanDirection
from laskit.core.point_format import PointFormat
from laskit.core.vlr import Vlr
from laskit.errors import (
    CoordinateOutOfRange,
    InvalidHeader,
    LasError,
    PointFormatMismatch,
    ShortRead,
    UnsupportedPointFormat,
)
from laskit.io.file import LasFile
from laskit.io.reader import LasReader

__all__ = [
    "__version__",
    "Bounds",
    "Header",
    "Point",
    "ScanDirection",
    "PointFormat",
    "Vlr",
    "LasFile",
    "LasReader",
    "LasError",
    "InvalidHeader",
    "UnsupportedPointFormat",
    "ShortRead",
    "PointFormatMismatch",
    "CoordinateOutOfRange",
]
