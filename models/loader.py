"""Batch image producer."""

import logging
from typing import Callable, List, Optional, Sequence

from models.image import Image
from models.policies import ImagePolicies

logger = logging.getLogger(__name__)


def load_images(paths: Sequence[str],
                completed_callback: Optional[Callable[[List[Optional[Image]]], None]] = None,
                policies: Optional[ImagePolicies] = None) -> List[Optional[Image]]:
    """
    Load several image files.

    Every path is attempted; a file that cannot be read leaves None in its
    slot. completed_callback, if given, is called once with the list after
    all paths have been attempted, whether or not any load succeeded.

    Args:
        paths: Image file paths
        completed_callback: Called with the resulting list
        policies: Policies given to every loaded image

    Returns:
        One Image or None per path, in input order
    """
    images: List[Optional[Image]] = []
    for path in paths:
        try:
            images.append(Image.load(path, policies))
        except (OSError, ValueError) as exc:
            logger.warning("Could not load %s: %s", path, exc)
            images.append(None)

    if completed_callback is not None:
        completed_callback(images)
    return images
