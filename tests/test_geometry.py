import pytest

from termform.terminal.geometry import FieldBounds, ScreenPoint


class TestScreenPoint:
    def test_offset(self):
        assert ScreenPoint(3, 4).offset(2, -1) == ScreenPoint(5, 3)
        assert ScreenPoint(3, 4).offset() == ScreenPoint(3, 4)

    def test_linear_and_back(self):
        point = ScreenPoint(7, 2)
        assert point.linear(80) == 167
        assert ScreenPoint.from_linear(167, 80) == point

    def test_str(self):
        assert str(ScreenPoint(3, 4)) == "(3, 4)"

    def test_from_linear_rejects_bad_width(self):
        with pytest.raises(ValueError):
            ScreenPoint.from_linear(5, 0)


class TestFieldBounds:
    def test_edges(self):
        bounds = FieldBounds.at(10, 5, 4, 3)
        assert bounds.x == 10 and bounds.y == 5
        assert bounds.right == 13
        assert bounds.bottom == 7
        assert bounds.area == 12

    def test_str(self):
        assert str(FieldBounds.at(10, 5, 4, 3)) == "4x3 at (10, 5)"

    def test_default_height_is_one(self):
        assert FieldBounds(ScreenPoint(0, 0), 5).height == 1

    def test_contains(self):
        bounds = FieldBounds.at(10, 5, 4, 2)
        assert bounds.contains(ScreenPoint(10, 5))
        assert bounds.contains(ScreenPoint(13, 6))
        assert not bounds.contains(ScreenPoint(14, 5))
        assert not bounds.contains(ScreenPoint(10, 7))
        assert not bounds.contains(ScreenPoint(9, 5))

    def test_overlaps(self):
        a = FieldBounds.at(0, 0, 5, 2)
        assert a.overlaps(FieldBounds.at(4, 1, 3))
        assert not a.overlaps(FieldBounds.at(5, 0, 3))
        assert not a.overlaps(FieldBounds.at(0, 2, 5))

    def test_empty_rectangles_never_overlap(self):
        assert FieldBounds.at(0, 0, 0).is_empty()
        assert not FieldBounds.at(0, 0, 0).overlaps(FieldBounds.at(0, 0, 5))

    def test_union(self):
        union = FieldBounds.at(2, 4, 3).union(FieldBounds.at(10, 8, 5, 2))
        assert union == FieldBounds.at(2, 4, 13, 6)
        assert FieldBounds.at(1, 1, 2).union(None) == FieldBounds.at(1, 1, 2)

    def test_points_are_row_major(self):
        cells = list(FieldBounds.at(1, 1, 2, 2).points())
        assert cells == [
            ScreenPoint(1, 1),
            ScreenPoint(2, 1),
            ScreenPoint(1, 2),
            ScreenPoint(2, 2),
        ]

    def test_raster_index_round_trip(self):
        bounds = FieldBounds.at(3, 3, 5, 4)
        for index in range(bounds.area):
            assert bounds.raster_index(bounds.point_at(index)) == index

    def test_fits_within(self):
        assert FieldBounds.at(70, 23, 10).fits_within(80, 24)
        assert not FieldBounds.at(71, 23, 10).fits_within(80, 24)
        assert not FieldBounds.at(0, 23, 1, 2).fits_within(80, 24)
        assert not FieldBounds.at(-1, 0, 1).fits_within(80, 24)
