"""Convolution and grayscale morphology as per-pixel folds over an image."""

import logging
from typing import List, Optional, Tuple

from utils.constants import CHANNEL_MIN, CHANNEL_MAX

logger = logging.getLogger(__name__)


def convolution_taps(kernel) -> List[Tuple[int, int, float]]:
    """
    List (dx, dy, weight) taps of a kernel, read flipped.

    The kernel is centred at (width // 2, height // 2); the neighbour at
    offset (k - mid_x, l - mid_y) is weighted by the kernel entry at
    (width - 1 - k, height - 1 - l), which makes this a true convolution.
    """
    width, height = kernel.width, kernel.height
    mid_x, mid_y = width // 2, height // 2

    taps = []
    for k in range(width):
        for l in range(height):
            weight = kernel.get_value(width - 1 - k, height - 1 - l)
            taps.append((k - mid_x, l - mid_y, weight))
    return taps


def convolve(image, kernel) -> None:
    """
    Convolve image in place with kernel.

    Neighbours are read from a frozen copy taken before any write, through
    the image's border behavior; results go through the overflow behavior.

    Args:
        image: Image to convolve (modified in place)
        kernel: Matrix holding the convolution kernel
    """
    logger.debug("Convolving %dx%d image with %dx%d kernel",
                 image.width, image.height, kernel.width, kernel.height)
    source = image.copy()
    taps = convolution_taps(kernel)

    def convolve_pixel(x, y, r, g, b, target):
        sums = [0.0, 0.0, 0.0]
        for dx, dy, weight in taps:
            c = source.get_pixel(x + dx, y + dy)
            sums[0] += c[0] * weight
            sums[1] += c[1] * weight
            sums[2] += c[2] * weight
        return sums

    image.for_each_pixel(convolve_pixel)


def structuring_probes(element, center_x: int, center_y: int) -> List[Tuple[int, int, float]]:
    """List (dx, dy, value) probes of a structuring element; negative entries are skipped."""
    probes = []
    for j in range(element.height):
        for i in range(element.width):
            value = element.get_value(i, j)
            if value < 0:
                continue
            probes.append((i - center_x, j - center_y, value))
    return probes


def morphology(image, element, center_x: Optional[int] = None,
               center_y: Optional[int] = None, dilation: bool = True) -> None:
    """
    Grayscale dilation or erosion in place.

    For every pixel, each probed neighbour (read from a frozen copy) plus
    the structuring element value is folded into a channel-wise maximum
    (dilation, starting at 0) or minimum (erosion, starting at 255).

    Args:
        image: Image to process (modified in place)
        element: Matrix holding the structuring element, negative entries
            mark offsets that are not probed
        center_x: x of the element origin, defaults to width // 2
        center_y: y of the element origin, defaults to height // 2
        dilation: True for dilation, False for erosion
    """
    if center_x is None:
        center_x = element.width // 2
    if center_y is None:
        center_y = element.height // 2

    logger.debug("%s with %dx%d element centred at (%d, %d)",
                 "Dilation" if dilation else "Erosion",
                 element.width, element.height, center_x, center_y)

    source = image.copy()
    probes = structuring_probes(element, center_x, center_y)
    initial = CHANNEL_MIN if dilation else CHANNEL_MAX
    pick = max if dilation else min

    def morph_pixel(x, y, r, g, b, target):
        extremes = [initial, initial, initial]
        for dx, dy, value in probes:
            c = source.get_pixel(x + dx, y + dy)
            for component in range(3):
                extremes[component] = pick(extremes[component], c[component] + value)
        return extremes

    image.for_each_pixel(morph_pixel)


def dilate(image, element, center_x: Optional[int] = None,
           center_y: Optional[int] = None) -> None:
    """Grayscale dilation in place."""
    morphology(image, element, center_x, center_y, dilation=True)


def erode(image, element, center_x: Optional[int] = None,
          center_y: Optional[int] = None) -> None:
    """Grayscale erosion in place."""
    morphology(image, element, center_x, center_y, dilation=False)
