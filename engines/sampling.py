"""Fractional-coordinate sampling and discrete derivatives."""

import math
from typing import List

import numpy as np

from engines.bounded_value import round_half_up
from utils.constants import InterpolationMethod, DerivativeType, HERMITE_BASIS


def get_derivative(image, x: int, y: int,
                   derivative_type: DerivativeType = DerivativeType.X) -> List[float]:
    """
    Estimate the image derivative at an integer position.

    X and Y use a central difference over the two axis neighbours,
    XY is the central difference of the X central differences taken
    one row below and one row above.

    Args:
        image: Image to read from (border behavior applies)
        x: x position
        y: y position
        derivative_type: Which derivative to estimate

    Returns:
        Three derivatives, one per RGB channel
    """
    if derivative_type is DerivativeType.XY:
        c1 = image.get_pixel(x + 1, y + 1)
        c2 = image.get_pixel(x - 1, y + 1)
        c3 = image.get_pixel(x + 1, y - 1)
        c4 = image.get_pixel(x - 1, y - 1)
        return [((c1[c] - c2[c]) / 2.0 - (c3[c] - c4[c]) / 2.0) / 2.0 for c in range(3)]

    if derivative_type is DerivativeType.Y:
        c1 = image.get_pixel(x, y + 1)
        c2 = image.get_pixel(x, y - 1)
    else:
        c1 = image.get_pixel(x + 1, y)
        c2 = image.get_pixel(x - 1, y)

    return [(c1[c] - c2[c]) / 2.0 for c in range(3)]


def sample_closest(image, x: float, y: float) -> tuple:
    """Nearest-neighbour sample."""
    return image.get_pixel(round_half_up(x), round_half_up(y))


def sample_bilinear(image, x: float, y: float) -> tuple:
    """Blend the four surrounding pixels, first along x, then along y."""
    x0, x1 = math.floor(x), math.ceil(x)
    y0, y1 = math.floor(y), math.ceil(y)
    x_ratio = x - x0
    y_ratio = y - y0

    c1 = image.get_pixel(x0, y0)
    c2 = image.get_pixel(x1, y0)
    c3 = image.get_pixel(x0, y1)
    c4 = image.get_pixel(x1, y1)

    result = []
    for c in range(3):
        top = c1[c] * (1 - x_ratio) + c2[c] * x_ratio
        bottom = c3[c] * (1 - x_ratio) + c4[c] * x_ratio
        result.append(round_half_up(top * (1 - y_ratio) + bottom * y_ratio))
    return tuple(result)


def bicubic_coefficients(corners: np.ndarray) -> np.ndarray:
    """
    Solve the bicubic Hermite patch for one channel.

    Args:
        corners: 4x4 matrix G of the form
            [[f00,  f01,  fy00,  fy01],
             [f10,  f11,  fy10,  fy11],
             [fx00, fx01, fxy00, fxy01],
             [fx10, fx11, fxy10, fxy11]]
            where the first index is the x corner, the second the y corner.

    Returns:
        4x4 coefficient matrix A with p(x, y) = sum A[i, j] * x^i * y^j
    """
    return HERMITE_BASIS @ corners @ HERMITE_BASIS.T


def sample_bicubic(image, x: float, y: float) -> tuple:
    """Bicubic Hermite sample using central-difference derivatives."""
    x0, x1 = math.floor(x), math.ceil(x)
    y0, y1 = math.floor(y), math.ceil(y)
    x_ratio = x - x0
    y_ratio = y - y0

    corners = [(x0, y0), (x1, y0), (x0, y1), (x1, y1)]
    f = [image.get_pixel(cx, cy) for cx, cy in corners]
    fx = [get_derivative(image, cx, cy, DerivativeType.X) for cx, cy in corners]
    fy = [get_derivative(image, cx, cy, DerivativeType.Y) for cx, cy in corners]
    fxy = [get_derivative(image, cx, cy, DerivativeType.XY) for cx, cy in corners]

    x_powers = np.array([1.0, x_ratio, x_ratio ** 2, x_ratio ** 3])
    y_powers = np.array([1.0, y_ratio, y_ratio ** 2, y_ratio ** 3])

    result = []
    for c in range(3):
        # corner order: 0 = (x0,y0), 1 = (x1,y0), 2 = (x0,y1), 3 = (x1,y1)
        g = np.array([
            [f[0][c], f[2][c], fy[0][c], fy[2][c]],
            [f[1][c], f[3][c], fy[1][c], fy[3][c]],
            [fx[0][c], fx[2][c], fxy[0][c], fxy[2][c]],
            [fx[1][c], fx[3][c], fxy[1][c], fxy[3][c]]
        ], dtype=np.float64)
        a = bicubic_coefficients(g)
        result.append(round_half_up(float(x_powers @ a @ y_powers)))
    return tuple(result)


def sample_pixel(image, x: float, y: float) -> tuple:
    """Sample image at a fractional position using its interpolation method."""
    method = image.interpolation_method

    if method is InterpolationMethod.BILINEAR:
        return sample_bilinear(image, x, y)
    if method is InterpolationMethod.BICUBIC:
        return sample_bicubic(image, x, y)
    if method is InterpolationMethod.SINE:
        raise NotImplementedError("Sine interpolation is not implemented")
    return sample_closest(image, x, y)
