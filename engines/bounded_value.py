"""Wrap/clamp arithmetic for coordinates and channel values."""

import math
from typing import Optional

import numpy as np

from utils.constants import BorderBehavior, OverflowBehavior, CHANNEL_MIN, CHANNEL_MAX


def wrap_value(value: int, maximum: int) -> int:
    """Wrap value into [0, maximum] with true modulo (never negative)."""
    return value % (maximum + 1)


def saturate(value, minimum, maximum):
    """Clamp value into [minimum, maximum]."""
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +infinity."""
    return int(math.floor(value + 0.5))


def apply_overflow_behavior(value: int, behavior: OverflowBehavior) -> int:
    """Bring a channel value into [0, 255] according to behavior."""
    if behavior is OverflowBehavior.WRAP:
        return wrap_value(value, CHANNEL_MAX)
    return saturate(value, CHANNEL_MIN, CHANNEL_MAX)


def apply_overflow_behavior_array(values: np.ndarray, behavior: OverflowBehavior) -> np.ndarray:
    """Floor an array of channel values and bring it into [0, 255] as uint8."""
    values = np.floor(np.asarray(values, dtype=np.float64))
    if behavior is OverflowBehavior.WRAP:
        values = np.mod(values, CHANNEL_MAX + 1)
    else:
        values = np.clip(values, CHANNEL_MIN, CHANNEL_MAX)
    return values.astype(np.uint8)


def apply_border_behavior(value: int, maximum: int,
                          behavior: BorderBehavior) -> Optional[int]:
    """
    Resolve a coordinate against the valid index range [0, maximum].

    Args:
        value: Integer coordinate, possibly out of range
        maximum: Largest valid index (size - 1)
        behavior: Border behavior to apply

    Returns:
        A valid index, or None when the coordinate cannot be used
        (BLACK/WHITE outside the image); the caller substitutes the
        border color.
    """
    if behavior is BorderBehavior.CLOSEST:
        return saturate(value, 0, maximum)

    if behavior is BorderBehavior.WRAP:
        return wrap_value(value, maximum)

    if behavior is BorderBehavior.MIRROR:
        # odd copies of the domain are reflected
        copy_index = value // (maximum + 1)
        wrapped = wrap_value(value, maximum)
        if copy_index % 2:
            return maximum - wrapped
        return wrapped

    if value < 0 or value > maximum:
        return None
    return value
