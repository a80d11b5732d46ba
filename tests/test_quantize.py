"""Tests for the bit-depth quantizer."""

import numpy as np
import pytest

from graydither.core.errors import DitherError, InvalidBitDepth
from graydither.core.quantize import closest_level, level_values, validate_bits


class TestValidateBits:
    @pytest.mark.parametrize("bits", [1, 2, 4, 8, np.int64(2), np.uint8(8)])
    def test_accepts_valid(self, bits):
        result = validate_bits(bits)
        assert result == bits
        assert type(result) is int

    @pytest.mark.parametrize("bits", [0, 9, -1, 16])
    def test_rejects_out_of_range(self, bits):
        with pytest.raises(InvalidBitDepth, match="between 1 and 8"):
            validate_bits(bits)

    @pytest.mark.parametrize("bits", [1.0, "1", None, True, np.float64(2.0)])
    def test_rejects_non_integer(self, bits):
        with pytest.raises(InvalidBitDepth, match="integer"):
            validate_bits(bits)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            validate_bits(0)
        assert issubclass(InvalidBitDepth, DitherError)


class TestClosestLevel:
    def test_one_bit_is_black_or_white(self):
        assert closest_level(0, 1) == 0
        assert closest_level(127, 1) == 0
        assert closest_level(128, 1) == 255
        assert closest_level(255, 1) == 255

    def test_eight_bit_is_identity(self):
        for v in range(256):
            assert closest_level(v, 8) == v

    def test_eight_bit_rounds_fractions(self):
        assert closest_level(10.4, 8) == 10
        assert closest_level(10.6, 8) == 11

    def test_two_bit_levels(self):
        assert closest_level(40, 2) == 0
        assert closest_level(50, 2) == 85
        assert closest_level(200, 2) == 170
        assert closest_level(220, 2) == 255

    def test_clamps_diffused_overshoot(self):
        assert closest_level(-40.0, 1) == 0
        assert closest_level(300.0, 1) == 255
        assert closest_level(-0.7, 8) == 0
        assert closest_level(256.2, 8) == 255

    def test_rejects_bad_bits(self):
        with pytest.raises(InvalidBitDepth):
            closest_level(100, 0)

    def test_accepts_numpy_bits(self):
        assert closest_level(200, np.int32(1)) == 255

    @pytest.mark.parametrize("bits", range(1, 9))
    def test_output_is_a_level(self, bits):
        levels = set(level_values(bits))
        outputs = {closest_level(v / 4, bits) for v in range(0, 255 * 4 + 1)}
        assert outputs == levels


class TestLevelValues:
    def test_one_bit(self):
        assert level_values(1) == (0, 255)

    def test_two_bit(self):
        assert level_values(2) == (0, 85, 170, 255)

    @pytest.mark.parametrize("bits", range(1, 9))
    def test_count_and_span(self, bits):
        levels = level_values(bits)
        assert len(levels) == 2**bits
        assert len(set(levels)) == 2**bits
        assert levels[0] == 0
        assert levels[-1] == 255
