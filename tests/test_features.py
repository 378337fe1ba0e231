"""Tests for the centering, corner, edge and surface extractors."""

import math

import numpy as np
import pytest

from card_grader.core.constants import IMAGE_SHAPE
from card_grader.core.types import NormalizedImage
from card_grader.features import FEATURE_EXTRACTORS
from card_grader.features.centering import centering_score, centroid_distance
from card_grader.features.corners import corner_region_scores, corners_score
from card_grader.features.edges import edges_score
from card_grader.features.surface import surface_score


def single_pixel_grid(row, col):
    pixels = np.zeros(IMAGE_SHAPE)
    pixels[row, col] = 1.0
    return NormalizedImage(pixels)


class TestScoreRange:
    """Every extractor stays within [0, 10]."""

    @pytest.mark.parametrize("fixture_name", ["black_grid", "white_grid", "uniform_grid", "noise_grid"])
    @pytest.mark.parametrize("name", sorted(FEATURE_EXTRACTORS))
    def test_scores_clamped(self, request, fixture_name, name):
        grid = request.getfixturevalue(fixture_name)
        score = FEATURE_EXTRACTORS[name](grid)
        assert 0.0 <= score <= 10.0

    def test_extractors_do_not_modify_grid(self, noise_grid):
        before = noise_grid.pixels.copy()
        for extractor in FEATURE_EXTRACTORS.values():
            extractor(noise_grid)
        np.testing.assert_array_equal(noise_grid.pixels, before)



# Zero padding: on a constant grid of value c only the outermost ring responds.
# Sobel magnitude is 3*sqrt(2)*c at the four corners and 4*c along the
# remaining 4 * 222 border pixels; the Laplacian is -2c and -c respectively.
GRID_PIXELS = 224 * 224
BORDER_GRADIENT_SUM = 4 * 3 * math.sqrt(2) + 4 * 222 * 4
CORNER_WINDOW_GRADIENT_SUM = 3 * math.sqrt(2) + 2 * 31 * 4
BORDER_LAPLACIAN_VARIANCE = (4 * 4 + 888) / GRID_PIXELS - ((4 * 2 + 888) / GRID_PIXELS) ** 2


class TestCentering:
    """Test centroid-based centering."""

    def test_perfect_center_scores_ten(self):
        assert centering_score(single_pixel_grid(112, 112)) == 10.0

    def test_symmetric_mass_around_center_scores_ten(self):
        pixels = np.zeros(IMAGE_SHAPE)
        pixels[100, 112] = 1.0
        pixels[124, 112] = 1.0
        assert centering_score(NormalizedImage(pixels)) == 10.0

    def test_origin_centroid(self):
        grid = single_pixel_grid(0, 0)
        assert centroid_distance(grid) == pytest.approx(math.hypot(112, 112))
        assert centering_score(grid) == pytest.approx(10 - math.hypot(112, 112) / 22.4)
        assert centering_score(grid) == pytest.approx(2.929, abs=1e-3)

    def test_linear_falloff(self):
        # one point per 22.4 px of drift
        assert centering_score(single_pixel_grid(112, 123)) == pytest.approx(10 - 11 / 22.4)
        assert centering_score(single_pixel_grid(112, 123)) == pytest.approx(9.509, abs=1e-3)
        assert centering_score(single_pixel_grid(112, 134)) == pytest.approx(10 - 22 / 22.4)

    def test_uniform_grid_nearly_centered(self, uniform_grid):
        expected = 10 - math.hypot(0.5, 0.5) / 22.4
        assert centering_score(uniform_grid) == pytest.approx(expected)

    def test_black_grid_has_no_centroid(self, black_grid):
        assert centering_score(black_grid) == 0.0


class TestCorners:
    """Test corner-region gradient energy."""

    def test_black_grid_scores_zero(self, black_grid):
        assert corner_region_scores(black_grid) == [0.0, 0.0, 0.0, 0.0]
        assert corners_score(black_grid) == 0.0

    def test_white_grid_responds_at_border(self, white_grid):
        expected = CORNER_WINDOW_GRADIENT_SUM / 1024 * 20

        assert corner_region_scores(white_grid) == pytest.approx([expected] * 4)
        assert corners_score(white_grid) == pytest.approx(4.927, abs=1e-3)

    def test_border_response_scales_with_intensity(self, uniform_grid):
        expected = 0.5 * CORNER_WINDOW_GRADIENT_SUM / 1024 * 20
        assert corners_score(uniform_grid) == pytest.approx(expected)

    def test_only_affected_corner_scores(self):
        pixels = np.zeros(IMAGE_SHAPE)
        pixels[:16, :16] = 1.0
        scores = corner_region_scores(NormalizedImage(pixels))

        assert scores[0] > 0.0
        assert scores[1:] == [0.0, 0.0, 0.0]

    def test_corner_score_is_region_mean(self, noise_grid):
        scores = corner_region_scores(noise_grid)
        assert corners_score(noise_grid) == pytest.approx(sum(scores) / 4)

    def test_noise_saturates(self, noise_grid):
        assert corners_score(noise_grid) == 10.0


class TestEdges:
    """Test whole-grid gradient energy."""

    def test_black_grid_scores_zero(self, black_grid):
        assert edges_score(black_grid) == 0.0

    def test_uniform_grid_border_only(self, uniform_grid):
        expected = 0.5 * BORDER_GRADIENT_SUM / GRID_PIXELS * 20
        assert edges_score(uniform_grid) == pytest.approx(expected)

    def test_single_impulse(self):
        # the Sobel pair spreads an interior impulse over its 3x3 neighbourhood
        expected = (8 + 4 * math.sqrt(2)) / GRID_PIXELS * 20
        assert edges_score(single_pixel_grid(112, 112)) == pytest.approx(expected)

    def test_noise_saturates(self, noise_grid):
        assert edges_score(noise_grid) == 10.0


class TestSurface:
    """Test Laplacian variance."""

    def test_black_grid_scores_zero(self, black_grid):
        assert surface_score(black_grid) == 0.0

    def test_uniform_grid_border_only(self, uniform_grid):
        expected = 0.25 * BORDER_LAPLACIAN_VARIANCE * 100
        assert surface_score(uniform_grid) == pytest.approx(expected)

    def test_single_impulse(self):
        expected = 20 / GRID_PIXELS * 100
        assert surface_score(single_pixel_grid(112, 112)) == pytest.approx(expected)

    def test_noise_saturates(self, noise_grid):
        assert surface_score(noise_grid) == 10.0
