"""Tests for the Point data model."""

from laskit.core.point import CLASSIFICATION_CODES, Point, ScanDirection


class TestPoint:
    def test_defaults(self):
        p = Point()
        assert (p.x, p.y, p.z) == (0.0, 0.0, 0.0)
        assert p.scan_direction is ScanDirection.NEGATIVE
        assert p.gps_time is None
        assert p.red is None and p.green is None and p.blue is None
        assert p.extra_bytes == b""

    def test_equality(self):
        assert Point(x=1.0, classification=2) == Point(x=1.0, classification=2)
        assert Point(x=1.0) != Point(x=1.0, gps_time=0.0)

    def test_classification_name(self):
        assert Point(classification=2).classification_name == "Ground"
        assert Point(classification=25).classification_name == "Reserved"
        assert CLASSIFICATION_CODES[9] == "Water"

    def test_has_color(self):
        assert Point(red=1, green=2, blue=3).has_color
        assert not Point(red=1, green=2).has_color
