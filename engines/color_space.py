"""Per-pixel color operations, shaped as for_each_pixel callbacks."""

import math

from engines.bounded_value import round_half_up, saturate
from utils.constants import BlendType, CHANNEL_MAX, GRAYSCALE_WEIGHTS


def invert_pixel(x, y, r, g, b, image):
    """255 - v per channel."""
    return [CHANNEL_MAX - r, CHANNEL_MAX - g, CHANNEL_MAX - b]


def grayscale_pixel(x, y, r, g, b, image):
    """Rec. 709 luma, each weighted term rounded separately."""
    wr, wg, wb = GRAYSCALE_WEIGHTS
    value = round_half_up(wr * r) + round_half_up(wg * g) + round_half_up(wb * b)
    return [value, value, value]


def make_fill(red, green, blue):
    def fill_pixel(x, y, r, g, b, image):
        return [red, green, blue]
    return fill_pixel


def make_threshold(levels: int = 2, shift: int = 0):
    """
    Build a callback quantizing each channel to `levels` evenly spaced values.

    Raises:
        ValueError: If levels < 2
    """
    if levels < 2:
        raise ValueError(f"Threshold needs at least 2 levels, got {levels}")
    step = levels - 1

    def quantize(v):
        return math.floor((v + shift) / CHANNEL_MAX * levels) / step * CHANNEL_MAX

    def threshold_pixel(x, y, r, g, b, image):
        return [quantize(r), quantize(g), quantize(b)]

    return threshold_pixel


def blend_coefficients(percentage: float):
    """Weights (own, other) for a blend ratio in [0, 1]; 0.5 keeps both at full weight."""
    c1 = 1.0 if percentage <= 0.5 else 1.0 - (percentage - 0.5) * 2.0
    c2 = 1.0 if percentage > 0.5 else percentage * 2.0
    return c1, c2


_BLEND_OPS = {
    BlendType.ADD: lambda a, b: a + b,
    BlendType.SUBTRACT: lambda a, b: a - b,
    BlendType.MULTIPLY: lambda a, b: a * b,
}


def make_blend(other, percentage: float = 0.5, blend_type: BlendType = BlendType.ADD, mask=None):
    """
    Build a callback blending each pixel with the same pixel of `other`.

    Args:
        other: Image to blend with
        percentage: Blend ratio, saturated to [0, 1]; ignored when mask is given
        blend_type: How the weighted values are combined
        mask: Optional Image; each of its channels / 255 is the per-pixel
            ratio for the corresponding channel
    """
    op = _BLEND_OPS[BlendType(blend_type)]
    fixed = blend_coefficients(saturate(percentage, 0.0, 1.0))

    def blend_pixel(x, y, r, g, b, image):
        c = other.get_pixel(x, y)
        if mask is None:
            weights = [fixed] * 3
        else:
            m = mask.get_pixel(x, y)
            weights = [blend_coefficients(m[i] / CHANNEL_MAX) for i in range(3)]
        own = (r, g, b)
        return [op(own[i] * weights[i][0], c[i] * weights[i][1]) for i in range(3)]

    return blend_pixel
