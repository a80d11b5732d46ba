"""Tests for luma extraction."""

import numpy as np
import pytest

from graydither.core.luma import luma, luma_array


class TestLuma:
    def test_black(self):
        assert luma(0, 0, 0, 255) == 0.0

    def test_white(self):
        assert luma(255, 255, 255, 255) == pytest.approx(255.0)

    def test_bt601_weights(self):
        assert luma(255, 0, 0, 255) == pytest.approx(0.299 * 255)
        assert luma(0, 255, 0, 255) == pytest.approx(0.587 * 255)
        assert luma(0, 0, 255, 255) == pytest.approx(0.114 * 255)

    def test_transparent_is_black(self):
        assert luma(255, 255, 255, 0) == 0.0

    def test_half_alpha_scales(self):
        assert luma(200, 200, 200, 51) == pytest.approx(40.0)

    def test_default_alpha_opaque(self):
        assert luma(100, 100, 100) == pytest.approx(100.0)


class TestLumaArray:
    def test_matches_scalar(self):
        rgba = np.array(
            [[[10, 20, 30, 255], [200, 100, 50, 128]],
             [[0, 0, 0, 0], [255, 255, 255, 255]]],
            dtype=np.uint8,
        )
        result = luma_array(rgba)
        assert result.shape == (2, 2)
        assert result.dtype == np.float64
        for y in range(2):
            for x in range(2):
                assert result[y, x] == pytest.approx(luma(*rgba[y, x].tolist()))

    def test_no_uint8_overflow(self):
        rgba = np.full((1, 1, 4), 255, dtype=np.uint8)
        assert luma_array(rgba)[0, 0] == pytest.approx(255.0)
