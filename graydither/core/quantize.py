"""Uniform bit-depth quantizer for luma values."""

from __future__ import annotations

import math
import operator

from graydither.core.errors import InvalidBitDepth

MIN_BITS = 1
MAX_BITS = 8
DEFAULT_BITS = 1


def validate_bits(bits: int) -> int:
    """Return ``bits`` as a plain int, or raise :class:`InvalidBitDepth`.

    Any integer type is accepted (including numpy integers); bools and
    floats are not.
    """
    if isinstance(bits, bool):
        raise InvalidBitDepth(f"bits must be an integer, got {bits!r}")
    try:
        bits = operator.index(bits)
    except TypeError:
        raise InvalidBitDepth(f"bits must be an integer, got {bits!r}") from None
    if not MIN_BITS <= bits <= MAX_BITS:
        raise InvalidBitDepth(
            f"bits must be between {MIN_BITS} and {MAX_BITS}, got {bits}"
        )
    return bits


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def quantizer_for(bits: int):
    """Return an unchecked ``value -> level`` function for validated ``bits``."""
    steps = 2**bits - 1
    scale = 255 / steps

    def quantize(value: float) -> int:
        # Diffused error can push a sample slightly outside [0, 255]
        step = max(0, min(steps, _round_half_up(value / scale)))
        return _round_half_up(step * scale)

    return quantize


def closest_level(value: float, bits: int = MAX_BITS) -> int:
    """Map a luma value to the nearest of ``2**bits`` levels spanning [0, 255].

    The value is first snapped to a step index, then the reconstructed level
    is rounded again so the result is always one of exactly ``2**bits``
    integers. ``bits=1`` gives pure black/white, ``bits=8`` is the identity
    on integers.
    """
    return quantizer_for(validate_bits(bits))(value)


def level_values(bits: int) -> tuple[int, ...]:
    """All levels :func:`closest_level` can produce for ``bits``, ascending."""
    bits = validate_bits(bits)
    scale = 255 / (2**bits - 1)
    return tuple(_round_half_up(step * scale) for step in range(2**bits))
