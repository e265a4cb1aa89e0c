import math

import numpy as np
import pytest
from matplotlib.path import Path
from matplotlib.transforms import Affine2D

from graphgeom.edge_paths import (
    curved_path,
    end_point,
    interpolate,
    pixel_angle,
    polyline_path,
    segments,
    slide_from_start,
    slide_toward,
    straight_path,
    tangent,
    trim_path,
)


def _unit(vector):
    vector = np.asarray(vector, dtype=float)
    return vector / np.linalg.norm(vector)


class TestPathEvaluation:

    def test_straight_tangent(self):
        path = straight_path((1.0, 1.0), (4.0, 5.0))
        np.testing.assert_allclose(tangent(path, 1.0), [3.0, 4.0])
        np.testing.assert_allclose(tangent(path, 0.0), [3.0, 4.0])

    def test_cubic_end_tangents(self):
        p0, c1, c2, p1 = (0.0, 0.0), (1.0, 2.0), (3.0, 2.0), (4.0, 0.0)
        path = curved_path(p0, c1, c2, p1)
        np.testing.assert_allclose(tangent(path, 0.0), [3.0, 6.0])
        np.testing.assert_allclose(tangent(path, 1.0), [3.0, -6.0])

    def test_degenerate_cubic_tangent_falls_back(self):
        path = curved_path((0.0, 0.0), (0.0, 2.0), (4.0, 0.0), (4.0, 0.0))
        np.testing.assert_allclose(_unit(tangent(path, 1.0)), _unit([4.0, -2.0]))

    def test_cubic_midpoint(self):
        p0, c1, c2, p1 = map(np.array, ([0.0, 0.0], [1.0, 2.0], [3.0, 2.0], [4.0, 0.0]))
        path = curved_path(p0, c1, c2, p1)
        np.testing.assert_allclose(interpolate(path, 0.5), (p0 + 3 * c1 + 3 * c2 + p1) / 8)

    def test_quadratic_segment(self):
        path = Path([(0, 0), (1, 2), (2, 0)], [Path.MOVETO, Path.CURVE3, Path.CURVE3])
        np.testing.assert_allclose(interpolate(path, 0.5), [1.0, 1.0])
        np.testing.assert_allclose(tangent(path, 0.5), [2.0, 0.0])
        np.testing.assert_allclose(tangent(path, 0.0), [2.0, 4.0])

    def test_segments_share_parameter_range(self):
        path = polyline_path([(0.0, 0.0), (2.0, 0.0), (2.0, 4.0)])
        np.testing.assert_allclose(interpolate(path, 0.25), [1.0, 0.0])
        np.testing.assert_allclose(interpolate(path, 0.5), [2.0, 0.0])
        np.testing.assert_allclose(interpolate(path, 1.0), [2.0, 4.0])
        np.testing.assert_allclose(tangent(path, 1.0), [0.0, 4.0])

    def test_closepoly_becomes_line(self):
        path = Path([(0, 0), (1, 0), (1, 1), (0, 0)], [Path.MOVETO, Path.LINETO, Path.LINETO, Path.CLOSEPOLY])
        parts = segments(path)
        assert len(parts) == 3
        np.testing.assert_allclose(parts[-1][1], [[1.0, 1.0], [0.0, 0.0]])
        np.testing.assert_allclose(end_point(path), [1.0, 1.0])

    def test_parameter_out_of_range(self):
        with pytest.raises(ValueError):
            tangent(straight_path((0, 0), (1, 1)), 1.5)


class TestSlideToward:

    def test_zero_distance_is_identity(self):
        path = curved_path((0, 0), (1, 3), (2, -1), (5, 5))
        reference = np.array([5.0, 5.0])
        result = slide_toward(path, reference, 0, Affine2D().scale(37.0, 3.0))
        np.testing.assert_allclose(result, reference)

    def test_isotropic_slide(self):
        path = straight_path((0.0, 0.0), (10.0, 0.0))
        result = slide_toward(path, (10.0, 0.0), 3.0, Affine2D())
        np.testing.assert_allclose(result, [7.0, 0.0])

    def test_pixel_gap_is_exact_under_anisotropic_scaling(self):
        to_px = Affine2D().scale(100.0, 50.0)
        path = straight_path((0.0, 0.0), (1.0, 1.0))
        result = slide_toward(path, (1.0, 1.0), 10.0, to_px)
        gap = to_px.transform((1.0, 1.0)) - to_px.transform(result)
        assert math.hypot(*gap) == pytest.approx(10.0)
        # Still on the edge itself.
        assert result[0] == pytest.approx(result[1])

    def test_flipped_translated_axes(self):
        to_px = Affine2D().scale(20.0, -20.0).translate(5.0, 300.0)
        path = straight_path((0.0, 0.0), (3.0, 4.0))
        result = slide_toward(path, (3.0, 4.0), 7.0, to_px)
        gap = to_px.transform((3.0, 4.0)) - to_px.transform(result)
        assert math.hypot(*gap) == pytest.approx(7.0)
        np.testing.assert_allclose(_unit(result), _unit([3.0, 4.0]))

    def test_accepts_plain_callable(self):
        path = straight_path((0.0, 0.0), (0.0, 1.0))
        # 3 pixels per data unit along y
        result = slide_toward(path, (0.0, 1.0), 3.0, lambda p: p * np.array([2.0, 3.0]))
        np.testing.assert_allclose(result, [0.0, 0.0])

    def test_slide_from_start(self):
        path = straight_path((0.0, 0.0), (10.0, 0.0))
        np.testing.assert_allclose(slide_from_start(path, (0.0, 0.0), 2.0, Affine2D()), [2.0, 0.0])


class TestTrimPath:

    def test_straight_trim(self):
        trimmed = trim_path(straight_path((0.0, 0.0), (10.0, 0.0)), 1.0, 2.0, Affine2D())
        np.testing.assert_allclose(trimmed.vertices, [[1.0, 0.0], [8.0, 0.0]])

    def test_too_short_edge_is_dropped(self):
        assert trim_path(straight_path((0.0, 0.0), (1.0, 0.0)), 0.6, 0.6, Affine2D()) is None

    def test_curved_trim_keeps_end_directions(self):
        path = curved_path((0.0, 0.0), (1.0, 2.0), (3.0, 2.0), (4.0, 0.0))
        trimmed = trim_path(path, 0.3, 0.4, Affine2D())
        np.testing.assert_allclose(_unit(tangent(trimmed, 1.0)), _unit(tangent(path, 1.0)))
        np.testing.assert_allclose(_unit(tangent(trimmed, 0.0)), _unit(tangent(path, 0.0)))
        assert np.linalg.norm(end_point(trimmed) - [4.0, 0.0]) == pytest.approx(0.4)

    def test_input_path_is_untouched(self):
        path = straight_path((0.0, 0.0), (10.0, 0.0))
        trim_path(path, 1.0, 1.0, Affine2D())
        np.testing.assert_allclose(path.vertices, [[0.0, 0.0], [10.0, 0.0]])


def test_pixel_angle_follows_screen_orientation():
    path = straight_path((0.0, 0.0), (0.0, 1.0))
    assert pixel_angle(path, 1.0, Affine2D()) == pytest.approx(math.pi / 2)
    assert pixel_angle(path, 1.0, Affine2D().scale(1.0, -1.0)) == pytest.approx(-math.pi / 2)
