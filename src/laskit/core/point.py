"""Point data model and standard classification codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# LAS 1.2 classification codes (ASPRS standard)
CLASSIFICATION_CODES: dict[int, str] = {
    0: "Created, Never Classified",
    1: "Unclassified",
    2: "Ground",
    3: "Low Vegetation",
    4: "Medium Vegetation",
    5: "High Vegetation",
    6: "Building",
    7: "Low Point (Noise)",
    8: "Model Key-point",
    9: "Water",
    12: "Overlap Points",
}


class ScanDirection(IntEnum):
    """Direction the scanner mirror was travelling when the pulse was output."""

    NEGATIVE = 0
    POSITIVE = 1


@dataclass
class Point:
    """A single LAS point.

    Coordinates are real-world values; scaling to the stored integers
    happens in the codec using the header's scale factors and offsets.

    ``gps_time`` and the ``red``/``green``/``blue`` channels are optional,
    and must be set when the file's point format carries them. This is
    checked when the point is written, not when it is constructed.

    Examples:
        >>> p = Point(x=1.0, y=2.0, z=3.0, classification=2)
        >>> p.return_number
        0
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    intensity: int = 0
    return_number: int = 0
    number_of_returns: int = 0
    scan_direction: ScanDirection = ScanDirection.NEGATIVE
    edge_of_flight_line: bool = False
    classification: int = 0
    synthetic: bool = False
    key_point: bool = False
    withheld: bool = False
    scan_angle_rank: int = 0
    user_data: int = 0
    point_source_id: int = 0
    gps_time: float | None = None
    red: int | None = None
    green: int | None = None
    blue: int | None = None
    extra_bytes: bytes = b""

    @property
    def classification_name(self) -> str:
        """Human-readable name of the classification code."""
        return CLASSIFICATION_CODES.get(self.classification, "Reserved")

    @property
    def has_color(self) -> bool:
        return self.red is not None and self.green is not None and self.blue is not None
