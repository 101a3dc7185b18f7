"""Data models: pixel buffer, matrix and policy configuration."""

from .policies import ImagePolicies
from .matrix import Matrix
from .image import Image
from .loader import load_images

__all__ = ['ImagePolicies', 'Matrix', 'Image', 'load_images']
