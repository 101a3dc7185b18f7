"""Per-image policy configuration."""

from dataclasses import dataclass
from enum import Enum
from typing import Type

from utils.constants import BorderBehavior, OverflowBehavior, InterpolationMethod


def coerce_policy(enum_cls: Type[Enum], value) -> Enum:
    """Accept an enum member, its value, or its (case-insensitive) name."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.upper()]
        except KeyError:
            pass
    else:
        try:
            return enum_cls(value)
        except ValueError:
            pass
    raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}")


@dataclass
class ImagePolicies:
    """Border, overflow and interpolation behavior of one image."""

    border_behavior: BorderBehavior = BorderBehavior.WHITE
    overflow_behavior: OverflowBehavior = OverflowBehavior.SATURATE
    interpolation_method: InterpolationMethod = InterpolationMethod.BILINEAR

    def __post_init__(self):
        self.border_behavior = coerce_policy(BorderBehavior, self.border_behavior)
        self.overflow_behavior = coerce_policy(OverflowBehavior, self.overflow_behavior)
        self.interpolation_method = coerce_policy(InterpolationMethod, self.interpolation_method)
