"""RGB pixel buffer with border, overflow and interpolation policies."""

import logging
import math
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from engines.bounded_value import (
    apply_border_behavior,
    apply_overflow_behavior,
    apply_overflow_behavior_array,
    round_half_up,
)
from engines.color_space import invert_pixel, grayscale_pixel, make_fill, make_threshold, make_blend
from engines.dct_engine import transform_channels
from engines.sampling import sample_pixel, get_derivative
from engines.spatial import convolve, dilate, erode
from models.matrix import Matrix
from models.policies import ImagePolicies, coerce_policy
from utils.constants import (
    BorderBehavior,
    OverflowBehavior,
    InterpolationMethod,
    DerivativeType,
    BlendType,
    BLACK,
    WHITE,
    CHANNEL_MAX,
)

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]
PixelFunction = Callable[..., Optional[Sequence[float]]]


def _is_integral(value) -> bool:
    return float(value).is_integer()


def _check_size(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")


def _matrix_plane(matrix: Matrix, width: int, height: int) -> np.ndarray:
    """Matrix values as a (height, width) plane, zero-padded or cropped."""
    plane = np.zeros((height, width), dtype=np.float64)
    values = matrix.to_array()
    h = min(height, values.shape[0])
    w = min(width, values.shape[1])
    plane[:h, :w] = values[:h, :w]
    return plane


class Image:
    """
    Width x height grid of RGB samples, each channel an integer in [0, 255].

    Coordinates are (x, y). Reads outside the grid resolve through the
    border behavior, writes clamp or wrap channel values through the
    overflow behavior, and reads at fractional coordinates are sampled
    with the interpolation method. A new image is white with border
    WHITE, overflow SATURATE and interpolation BILINEAR.
    """

    def __init__(self, width: int, height: int, policies: Optional[ImagePolicies] = None):
        _check_size(width, height)
        self._pixels = np.full((height, width, 3), CHANNEL_MAX, dtype=np.uint8)
        self.policies = replace(policies) if policies is not None else ImagePolicies()

    @classmethod
    def from_array(cls, array: np.ndarray, policies: Optional[ImagePolicies] = None) -> 'Image':
        """Create an image from an (height, width, 3) RGB array."""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) array, got shape {array.shape}")
        image = cls(array.shape[1], array.shape[0], policies)
        image.load_array(array)
        return image

    @classmethod
    def load(cls, path: str, policies: Optional[ImagePolicies] = None) -> 'Image':
        """Read an image file (any format OpenCV decodes)."""
        from utils.image_io import load_image
        return cls.from_array(load_image(path), policies)

    def save(self, path: str) -> None:
        from utils.image_io import save_image
        save_image(self.to_array(), path)

    # ---------- size and policies ----------

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def border_behavior(self) -> BorderBehavior:
        return self.policies.border_behavior

    @border_behavior.setter
    def border_behavior(self, behavior) -> None:
        self.policies.border_behavior = coerce_policy(BorderBehavior, behavior)

    @property
    def overflow_behavior(self) -> OverflowBehavior:
        return self.policies.overflow_behavior

    @overflow_behavior.setter
    def overflow_behavior(self, behavior) -> None:
        self.policies.overflow_behavior = coerce_policy(OverflowBehavior, behavior)

    @property
    def interpolation_method(self) -> InterpolationMethod:
        return self.policies.interpolation_method

    @interpolation_method.setter
    def interpolation_method(self, method) -> None:
        self.policies.interpolation_method = coerce_policy(InterpolationMethod, method)

    # ---------- pixel addressing ----------

    def _resolve(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        x = apply_border_behavior(x, self.width - 1, self.border_behavior)
        y = apply_border_behavior(y, self.height - 1, self.border_behavior)
        if x is None or y is None:
            return None
        return x, y

    def get_pixel(self, x, y) -> Color:
        """
        Get the RGB value at (x, y).

        Non-integer coordinates are sampled with the interpolation method.
        Coordinates outside the image resolve through the border behavior;
        if they cannot be used the result is white (border WHITE) or black.
        """
        if not (_is_integral(x) and _is_integral(y)):
            return sample_pixel(self, x, y)

        position = self._resolve(int(x), int(y))
        if position is None:
            return WHITE if self.border_behavior is BorderBehavior.WHITE else BLACK

        px, py = position
        r, g, b = self._pixels[py, px]
        return int(r), int(g), int(b)

    def set_pixel(self, x, y, red, green, blue) -> None:
        """
        Set the RGB value at (x, y).

        Channel values are floored and passed through the overflow
        behavior. Writes to coordinates the border behavior cannot
        resolve are dropped. Fractional coordinates are rounded.
        """
        if not _is_integral(x):
            x = round_half_up(x)
        if not _is_integral(y):
            y = round_half_up(y)

        position = self._resolve(int(x), int(y))
        if position is None:
            return

        px, py = position
        behavior = self.overflow_behavior
        self._pixels[py, px] = [
            apply_overflow_behavior(math.floor(red), behavior),
            apply_overflow_behavior(math.floor(green), behavior),
            apply_overflow_behavior(math.floor(blue), behavior),
        ]

    def get_derivative(self, x: int, y: int,
                       derivative_type: DerivativeType = DerivativeType.X) -> List[float]:
        return get_derivative(self, x, y, DerivativeType(derivative_type))

    def for_each_pixel(self, function: PixelFunction) -> None:
        """
        Apply function to every pixel, row by row.

        function is called as function(x, y, r, g, b, image); a returned
        RGB sequence is written back with set_pixel, None leaves the pixel
        unchanged.
        """
        for y in range(self.height):
            for x in range(self.width):
                r, g, b = self.get_pixel(x, y)
                color = function(x, y, r, g, b, self)
                if color is not None:
                    self.set_pixel(x, y, color[0], color[1], color[2])

    # ---------- whole-image operations ----------

    def set_size(self, width: int, height: int) -> None:
        """
        Change the image size without resampling.

        The new grid is read from the old one through get_pixel, so
        growing fills the new area according to the border behavior and
        shrinking crops.
        """
        _check_size(width, height)
        logger.debug("Setting size %dx%d -> %dx%d", self.width, self.height, width, height)

        pixels = np.empty((height, width, 3), dtype=np.uint8)
        for y in range(height):
            for x in range(width):
                pixels[y, x] = self.get_pixel(x, y)
        self._pixels = pixels

    def resize(self, width: int, height: int) -> None:
        """Resize with resampling through the interpolation method."""
        _check_size(width, height)
        logger.debug("Resizing %dx%d -> %dx%d", self.width, self.height, width, height)

        old = self.copy()
        self.set_size(width, height)

        def source_coordinate(value, new_size, old_size):
            if new_size == 1:
                return 0
            return value / (new_size - 1) * (old_size - 1)

        def resample(x, y, r, g, b, image):
            return old.get_pixel(source_coordinate(x, width, old.width),
                                 source_coordinate(y, height, old.height))

        self.for_each_pixel(resample)

    def copy(self) -> 'Image':
        """Deep copy with the same pixels and an independent copy of the policies."""
        result = Image(self.width, self.height, self.policies)
        result._pixels = self._pixels.copy()
        return result

    def fill(self, red, green, blue) -> None:
        self.for_each_pixel(make_fill(red, green, blue))

    def invert(self) -> None:
        self.for_each_pixel(invert_pixel)

    def to_grayscale(self) -> None:
        self.for_each_pixel(grayscale_pixel)

    def threshold(self, levels: int = 2, shift: int = 0) -> None:
        """Quantize every channel to `levels` values after adding shift."""
        self.for_each_pixel(make_threshold(levels, shift))

    def translate(self, horizontal, vertical) -> None:
        """Shift the content; uncovered area is filled by the border behavior."""
        source = self.copy()

        def shifted(x, y, r, g, b, image):
            return source.get_pixel(x - horizontal, y - vertical)

        self.for_each_pixel(shifted)

    def blend(self, other: 'Image', percentage: float = 0.5,
              blend_type: BlendType = BlendType.ADD, mask: Optional['Image'] = None) -> None:
        """Blend with another image in place, see engines.color_space.make_blend."""
        self.for_each_pixel(make_blend(other, percentage, blend_type, mask))

    # ---------- channels ----------

    def split_channels(self) -> List['Image']:
        """Three grayscale images holding the R, G and B channels."""
        result = []
        for channel in range(3):
            plane = self._pixels[:, :, channel]
            result.append(Image.from_array(np.repeat(plane[:, :, np.newaxis], 3, axis=2)))
        return result

    def merge_channels(self, image_r: 'Image', image_g: 'Image', image_b: 'Image') -> None:
        """
        Overwrite this image with the red channel of each input.

        The image takes the size of image_r; the other inputs are read
        through their own border behavior where sizes differ.
        """
        self.set_size(image_r.width, image_r.height)

        def merge(x, y, r, g, b, image):
            return [image_r.get_pixel(x, y)[0],
                    image_g.get_pixel(x, y)[0],
                    image_b.get_pixel(x, y)[0]]

        self.for_each_pixel(merge)

    def merge_channels_from_matrices(self, matrix_r: Matrix, matrix_g: Matrix,
                                     matrix_b: Matrix) -> None:
        self.merge_channels(matrix_r.to_image(), matrix_g.to_image(), matrix_b.to_image())

    def to_matrices(self) -> List[Matrix]:
        """R, G and B channel values as three matrices."""
        return [Matrix.from_array(self._pixels[:, :, channel]) for channel in range(3)]

    # ---------- operators ----------

    def convolve(self, kernel: Matrix) -> None:
        convolve(self, kernel)

    def dilate(self, element: Matrix, center_x: Optional[int] = None,
               center_y: Optional[int] = None) -> None:
        dilate(self, element, center_x, center_y)

    def erode(self, element: Matrix, center_x: Optional[int] = None,
              center_y: Optional[int] = None) -> None:
        erode(self, element, center_x, center_y)

    def dct(self) -> List[Matrix]:
        """
        2D DCT of each channel.

        Returns:
            Three coefficient matrices (R, G, B) of the image size
        """
        planes = [self._pixels[:, :, channel].astype(np.float64) for channel in range(3)]
        return [Matrix.from_array(coeffs) for coeffs in transform_channels(planes)]

    def idct(self, matrix_r: Matrix, matrix_g: Matrix, matrix_b: Matrix) -> None:
        """
        Reconstruct this image from DCT coefficient matrices.

        The image is resized to matrix_r; matrix_g and matrix_b are
        zero-padded or cropped to that size. Reconstructed values are
        floored and saturated to [0, 255].
        """
        width, height = matrix_r.width, matrix_r.height
        planes = [_matrix_plane(m, width, height) for m in (matrix_r, matrix_g, matrix_b)]
        restored = transform_channels(planes, inverse=True)
        self.merge_channels_from_matrices(*[Matrix.from_array(plane) for plane in restored])

    # ---------- conversion ----------

    def load_array(self, array: np.ndarray) -> None:
        """
        Replace the grid with an (height, width, 3) array.

        Values are floored and passed through the overflow behavior.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) array, got shape {array.shape}")
        _check_size(array.shape[1], array.shape[0])
        self._pixels = apply_overflow_behavior_array(array, self.overflow_behavior)

    def to_array(self) -> np.ndarray:
        """Copy of the grid as an (height, width, 3) uint8 array."""
        return self._pixels.copy()

    def to_rgba_bytes(self) -> bytes:
        """Row-major RGBA bytes with alpha fixed at 255, for display surfaces."""
        rgba = np.empty((self.height, self.width, 4), dtype=np.uint8)
        rgba[:, :, :3] = self._pixels
        rgba[:, :, 3] = CHANNEL_MAX
        return rgba.tobytes()

    def __repr__(self):
        return (f"Image({self.width}, {self.height}, border={self.border_behavior.name}, "
                f"overflow={self.overflow_behavior.name}, "
                f"interpolation={self.interpolation_method.name})")

    def __str__(self):
        lines = []
        for y in range(self.height):
            cells = []
            for x in range(self.width):
                r, g, b = self.get_pixel(x, y)
                cells.append(f"{f'[{r},{g},{b}]':<14}")
            lines.append("".join(cells))
        return "\n".join(lines) + "\n"
