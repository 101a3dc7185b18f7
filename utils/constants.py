"""Policy enums and numeric constants shared by engines and models."""

from enum import Enum

import numpy as np


class BorderBehavior(Enum):
    """How a pixel coordinate outside the image area is resolved."""

    BLACK = 0
    """Pixels outside the image area read as black."""

    WHITE = 1
    """Pixels outside the image area read as white."""

    WRAP = 2
    """Modular arithmetic, as if the image were tiled."""

    MIRROR = 3
    """Tiled with every other copy mirrored, no seam duplication."""

    CLOSEST = 4
    """The closest pixel inside the image is used."""


class OverflowBehavior(Enum):
    """How a channel value outside [0, 255] is brought back into range."""

    SATURATE = 10
    """Clamp, e.g. 257 -> 255."""

    WRAP = 11
    """Modulo 256, e.g. 257 -> 1."""


class InterpolationMethod(Enum):
    """How a pixel is sampled at fractional coordinates."""

    CLOSEST = 20
    BILINEAR = 21
    BICUBIC = 22
    SINE = 23


class DerivativeType(Enum):
    X = 30
    Y = 31
    XY = 32


class BlendType(Enum):
    ADD = 40
    SUBTRACT = 41
    MULTIPLY = 42


CHANNEL_MIN = 0
CHANNEL_MAX = 255

WHITE = (CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX)
BLACK = (CHANNEL_MIN, CHANNEL_MIN, CHANNEL_MIN)

# Rec. 709 luma
GRAYSCALE_WEIGHTS = (0.2126, 0.7152, 0.0722)

# Cubic Hermite basis; bicubic coefficients are HERMITE_BASIS @ G @ HERMITE_BASIS.T
HERMITE_BASIS = np.array([
    [1, 0, 0, 0],
    [0, 0, 1, 0],
    [-3, 3, -2, -1],
    [2, -2, 1, 1]
], dtype=np.float64)
