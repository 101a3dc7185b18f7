"""Dense 2D matrix used for kernels, structuring elements and DCT planes."""

from typing import Optional, Sequence

import numpy as np

from engines.bounded_value import round_half_up


class Matrix:
    """
    Real-valued width x height matrix addressed as (x, y).

    Reads outside the matrix return 0 and writes outside it are ignored,
    so a matrix behaves as a zero-padded plane. Fractional indices are
    rounded to the nearest integer first.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Matrix dimensions must be positive, got {width}x{height}")
        self._data = np.zeros((height, width), dtype=np.float64)

    @classmethod
    def from_values(cls, width: int, height: int, values: Sequence[float]) -> 'Matrix':
        """Create a matrix filled row by row from values."""
        matrix = cls(width, height)
        matrix.set_values(values)
        return matrix

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Matrix':
        """Create a matrix from a 2D (height, width) array."""
        array = np.asarray(array, dtype=np.float64)
        if array.ndim != 2:
            raise ValueError(f"Expected 2D array, got {array.ndim}D")
        matrix = cls(array.shape[1], array.shape[0])
        matrix._data[:] = array
        return matrix

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    def _index(self, x, y):
        x = round_half_up(x)
        y = round_half_up(y)
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return None
        return y, x

    def get_value(self, x, y) -> float:
        index = self._index(x, y)
        if index is None:
            return 0.0
        return float(self._data[index])

    def set_value(self, x, y, value: float) -> None:
        index = self._index(x, y)
        if index is not None:
            self._data[index] = value

    def set_values(self, values: Sequence[float]) -> None:
        """
        Fill the matrix from values traversed row by row, top left first.

        Raises:
            ValueError: If len(values) != width * height
        """
        values = np.asarray(values, dtype=np.float64).ravel()
        if values.size != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} values for a "
                f"{self.width}x{self.height} matrix, got {values.size}")
        self._data[:] = values.reshape(self.height, self.width)

    def multiply(self, other: 'Matrix') -> Optional['Matrix']:
        """
        Matrix product self x other.

        Returns:
            Matrix of other.width x self.height, or None if self.width
            differs from other.height
        """
        if self.width != other.height:
            return None
        return Matrix.from_array(self._data @ other._data)

    def transposed(self) -> 'Matrix':
        return Matrix.from_array(self._data.T)

    def copy(self) -> 'Matrix':
        return Matrix.from_array(self._data)

    def to_array(self) -> np.ndarray:
        """Copy of the values as a (height, width) array."""
        return self._data.copy()

    def to_image(self):
        """Grayscale image of the values, floored and saturated to [0, 255]."""
        from models.image import Image

        image = Image(self.width, self.height)
        gray = np.clip(np.floor(self._data), 0, 255).astype(np.uint8)
        image.load_array(np.repeat(gray[:, :, np.newaxis], 3, axis=2))
        return image

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._data.shape == other._data.shape and np.array_equal(self._data, other._data)

    def __repr__(self):
        return f"Matrix({self.width}, {self.height})"

    def __str__(self):
        lines = []
        for row in self._data:
            lines.append("".join(f"{_format_value(value)} " for value in row))
        return "\n".join(lines) + "\n"


def _format_value(value) -> str:
    """Integral values without a decimal point, others at full precision."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
