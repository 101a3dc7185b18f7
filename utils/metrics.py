"""Metrics for comparing RGB arrays."""

import numpy as np
from skimage.metrics import peak_signal_noise_ratio


def compute_psnr(original: np.ndarray, reconstructed: np.ndarray) -> float:
    """PSNR in dB over all channels, inf for identical inputs."""
    if np.array_equal(original, reconstructed):
        return float('inf')
    return float(peak_signal_noise_ratio(original, reconstructed, data_range=255))


def max_abs_error(original: np.ndarray, reconstructed: np.ndarray) -> int:
    """Largest per-channel absolute difference."""
    diff = original.astype(np.int32) - reconstructed.astype(np.int32)
    return int(np.abs(diff).max())
