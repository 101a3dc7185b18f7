"""Image file I/O using OpenCV, on RGB uint8 arrays."""

import cv2
import numpy as np


def load_image(path: str) -> np.ndarray:
    """Load image as an (height, width, 3) RGB uint8 array."""
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError(f"Could not load image from {path}")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def save_image(image: np.ndarray, path: str) -> None:
    """Save an RGB array; the format follows the file extension."""
    if not cv2.imwrite(str(path), cv2.cvtColor(image, cv2.COLOR_RGB2BGR)):
        raise ValueError(f"Could not save image to {path}")
