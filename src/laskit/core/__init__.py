"""Core data model for laskit."""

from laskit.core.bounds import Bounds
from laskit.core.header import Header
from laskit.core.point import CLASSIFICATION_CODES, Point, ScanDirection
from laskit.core.point_format import PointFormat
from laskit.core.scale import descale, scale
from laskit.core.vlr import Vlr

__all__ = [
    "Bounds",
    "Header",
    "Point",
    "ScanDirection",
    "CLASSIFICATION_CODES",
    "PointFormat",
    "Vlr",
    "scale",
    "descale",
]
