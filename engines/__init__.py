"""Raster engines - pure computation on pixel sources, no model imports."""

from .bounded_value import (
    wrap_value,
    saturate,
    round_half_up,
    apply_overflow_behavior,
    apply_overflow_behavior_array,
    apply_border_behavior,
)
from .sampling import sample_pixel, get_derivative, bicubic_coefficients
from .spatial import convolve, morphology, dilate, erode
from .dct_engine import dct2, idct2, transform_channels
from .color_space import invert_pixel, grayscale_pixel, make_fill, make_threshold, make_blend

__all__ = [
    'wrap_value',
    'saturate',
    'round_half_up',
    'apply_overflow_behavior',
    'apply_overflow_behavior_array',
    'apply_border_behavior',
    'sample_pixel',
    'get_derivative',
    'bicubic_coefficients',
    'convolve',
    'morphology',
    'dilate',
    'erode',
    'dct2',
    'idct2',
    'transform_channels',
    'invert_pixel',
    'grayscale_pixel',
    'make_fill',
    'make_threshold',
    'make_blend',
]
