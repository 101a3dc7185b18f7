"""Shared utilities."""

from .constants import (
    BorderBehavior,
    OverflowBehavior,
    InterpolationMethod,
    DerivativeType,
    BlendType,
)
from .metrics import compute_psnr, max_abs_error
from .test_images import (
    generate_colored_checkerboard,
    generate_thin_stripes,
    generate_gradient,
    generate_random,
)
from .image_io import load_image, save_image

__all__ = [
    'BorderBehavior',
    'OverflowBehavior',
    'InterpolationMethod',
    'DerivativeType',
    'BlendType',
    'compute_psnr',
    'max_abs_error',
    'generate_colored_checkerboard',
    'generate_thin_stripes',
    'generate_gradient',
    'generate_random',
    'load_image',
    'save_image',
]
