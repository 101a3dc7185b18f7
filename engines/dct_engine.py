"""Separable 2D DCT/IDCT on whole channel planes."""

import logging
from typing import List, Sequence

import numpy as np
from scipy.fft import dct, idct

logger = logging.getLogger(__name__)


def dct2(plane: np.ndarray) -> np.ndarray:
    """
    2D DCT-II of an (height, width) plane as two 1D passes.

    Rows first, then columns, each with orthonormal normalization, so the
    result equals dctn(plane, norm='ortho') for any plane shape.
    """
    by_rows = dct(plane.astype(np.float64), type=2, norm='ortho', axis=1)
    return dct(by_rows, type=2, norm='ortho', axis=0)


def idct2(coeffs: np.ndarray) -> np.ndarray:
    """2D inverse DCT (Type-III) of an (height, width) coefficient plane, rows then columns."""
    by_rows = idct(coeffs.astype(np.float64), type=2, norm='ortho', axis=1)
    return idct(by_rows, type=2, norm='ortho', axis=0)


def transform_channels(planes: Sequence[np.ndarray], inverse: bool = False) -> List[np.ndarray]:
    """Apply dct2 (or idct2) to each channel plane."""
    logger.debug("%s on %d planes of shape %s",
                 "IDCT" if inverse else "DCT", len(planes), planes[0].shape)
    transform = idct2 if inverse else dct2
    return [transform(plane) for plane in planes]
