"""Tests for projection module."""

import math

import numpy as np
import pytest
from trek.exceptions import ConfigurationError, InvalidPathError
from trek.geometry import simplify_path
from trek.projection import project_path, format_svg_points, select_star_indices


class TestProjectPath:
    """Tests for project_path function."""

    def test_empty_path(self):
        """Test empty path projects to no points."""
        assert project_path([], 100, 100) == []

    def test_length_matches_simplified_path(self, loop_track):
        """Test output has one point per simplified point."""
        for tolerance in (0.0, 0.0001, 0.000215, 0.001):
            projected = project_path(loop_track, 250, 250, tolerance)
            assert len(projected) == len(simplify_path(loop_track, tolerance))

    def test_points_within_canvas(self, random_track):
        """Test every point lies inside the canvas."""
        width, height = 130, 90
        for x, y in project_path(random_track, width, height, 0.0):
            assert 0 <= x <= width
            assert 0 <= y <= height

    def test_no_nan_or_infinity(self, loop_track):
        """Test all coordinates are finite numbers."""
        for x, y in project_path(loop_track, 250, 250, 0.0):
            assert math.isfinite(x) and math.isfinite(y)

    def test_y_axis_flipped(self):
        """Test higher latitude maps to smaller y."""
        path = [(10.0, 20.0), (10.01, 20.0), (10.02, 20.01)]
        (_, y_south), _, (_, y_north) = project_path(path, 100, 100, 0.0)
        assert y_north < y_south

    def test_x_follows_longitude(self):
        """Test larger longitude maps to larger x."""
        path = [(10.0, 20.0), (10.01, 20.02)]
        (x_west, _), (x_east, _) = project_path(path, 100, 100, 0.0)
        assert x_east > x_west

    def test_margin_keeps_points_off_edges(self):
        """Test the degree margin keeps extreme points away from the border."""
        path = [(0.0, 0.0), (0.01, 0.01)]
        (x0, y0), (x1, y1) = project_path(path, 140, 140, 0.0)
        # 0.002 margin on a 0.014 span: 10 px of 140
        assert x0 == pytest.approx(20.0)
        assert y0 == pytest.approx(120.0)
        assert x1 == pytest.approx(120.0)
        assert y1 == pytest.approx(20.0)

    def test_shared_latitude_maps_to_vertical_midpoint(self):
        """Test a path along one latitude sits on the canvas midline."""
        path = [(45.0, 7.0), (45.0, 7.01), (45.0, 7.03)]
        points = project_path(path, 200, 100, 0.0)
        assert [y for _, y in points] == pytest.approx([50.0] * len(points))

    def test_shared_longitude_maps_to_horizontal_midpoint(self):
        """Test a path along one meridian sits on the canvas centre line."""
        path = [(45.0, 7.0), (45.01, 7.0)]
        points = project_path(path, 200, 100, 0.0)
        assert [x for x, _ in points] == pytest.approx([100.0, 100.0])

    def test_zero_margin_degenerate_axis(self):
        """Test zero-extent axes without margin emit the midpoint, not NaN."""
        path = [(45.0, 7.0), (45.0, 7.01)]
        points = project_path(path, 200, 100, 0.0, margin=0.0)
        assert [y for _, y in points] == [50.0, 50.0]
        assert points[0][0] == 0.0
        assert points[1][0] == 200.0

    def test_single_point(self):
        """Test a single point lands in the canvas centre."""
        [(x, y)] = project_path([(1.0, 2.0)], 80, 60)
        assert x == pytest.approx(40.0)
        assert y == pytest.approx(30.0)

    def test_returns_python_floats(self, canonical_path):
        """Test output is plain tuples of floats."""
        for point in project_path(canonical_path, 100, 100):
            assert isinstance(point, tuple)
            assert all(type(v) is float for v in point)

    def test_invalid_width(self, canonical_path):
        """Test non-positive canvas sizes are rejected."""
        with pytest.raises(ConfigurationError):
            project_path(canonical_path, 0, 100)

    def test_negative_tolerance(self, canonical_path):
        """Test negative tolerance is rejected."""
        with pytest.raises(ConfigurationError):
            project_path(canonical_path, 100, 100, -0.1)

    def test_malformed_path(self):
        """Test non-numeric points are rejected."""
        with pytest.raises(InvalidPathError):
            project_path([(1.0, 2.0), (float("nan"), 2.0)], 100, 100)

    @pytest.mark.parametrize("margin", [-0.005, float("nan")])
    def test_invalid_margin(self, margin):
        """Test negative or NaN margins are rejected instead of collapsing the track."""
        path = [(37.77, -122.45), (37.78, -122.44)]
        with pytest.raises(ConfigurationError) as exc_info:
            project_path(path, 100, 100, margin=margin)
        assert exc_info.value.config_key == "margin"

    def test_numpy_array_input(self, loop_track):
        """Test an (N, 2) array projects like the equivalent list."""
        assert project_path(np.asarray(loop_track)) == project_path(loop_track)


class TestFormatSvgPoints:
    """Tests for format_svg_points function."""

    def test_format(self):
        """Test points are joined as x,y pairs."""
        assert format_svg_points([(0.0, 250.0), (125.5, 10.25)]) == "0.00,250.00 125.50,10.25"

    def test_precision(self):
        """Test custom precision."""
        assert format_svg_points([(1.23456, 2.0)], precision=1) == "1.2,2.0"

    def test_empty(self):
        """Test empty list formats to an empty string."""
        assert format_svg_points([]) == ""


class TestSelectStarIndices:
    """Tests for select_star_indices function."""

    def test_every_second_point(self):
        """Test default step marks every second point."""
        assert select_star_indices(7) == [0, 2, 4, 6]

    def test_custom_step(self):
        """Test a custom step."""
        assert select_star_indices(7, step=3) == [0, 3, 6]

    def test_no_points(self):
        """Test zero points yields no stars."""
        assert select_star_indices(0) == []

    def test_invalid_step(self):
        """Test non-positive step is rejected."""
        with pytest.raises(ValueError):
            select_star_indices(5, step=0)
