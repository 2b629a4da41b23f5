"""Axis-aligned 3D bounding box."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """3D axis-aligned bounding box.

    An empty box has +inf minimums and -inf maximums, which is what a
    header written without any points carries.

    Attributes:
        minx, miny, minz: Minimum corner coordinates.
        maxx, maxy, maxz: Maximum corner coordinates.
    """

    minx: float
    miny: float
    minz: float
    maxx: float
    maxy: float
    maxz: float

    @classmethod
    def empty(cls) -> Bounds:
        return cls(
            minx=math.inf,
            miny=math.inf,
            minz=math.inf,
            maxx=-math.inf,
            maxy=-math.inf,
            maxz=-math.inf,
        )

    @property
    def is_empty(self) -> bool:
        return self.minx > self.maxx or self.miny > self.maxy or self.minz > self.maxz

    def contains_point(self, x: float, y: float, z: float) -> bool:
        """Check if a point is inside the bounding box."""
        return (
            self.minx <= x <= self.maxx
            and self.miny <= y <= self.maxy
            and self.minz <= z <= self.maxz
        )

    def union(self, other: Bounds) -> Bounds:
        """Return the bounding box enclosing both boxes."""
        return Bounds(
            minx=min(self.minx, other.minx),
            miny=min(self.miny, other.miny),
            minz=min(self.minz, other.minz),
            maxx=max(self.maxx, other.maxx),
            maxy=max(self.maxy, other.maxy),
            maxz=max(self.maxz, other.maxz),
        )

    @property
    def center(self) -> tuple[float, float, float]:
        return (
            (self.minx + self.maxx) / 2.0,
            (self.miny + self.maxy) / 2.0,
            (self.minz + self.maxz) / 2.0,
        )

    @property
    def width(self) -> float:
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        return self.maxy - self.miny

    @property
    def depth(self) -> float:
        return self.maxz - self.minz

    def __repr__(self) -> str:
        return (
            f"Bounds(x=[{self.minx:.2f}, {self.maxx:.2f}], "
            f"y=[{self.miny:.2f}, {self.maxy:.2f}], "
            f"z=[{self.minz:.2f}, {self.maxz:.2f}])"
        )
