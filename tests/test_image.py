"""Tests for Image pixel addressing and whole-image operations."""

import numpy as np
import pytest
from models.image import Image
from models.policies import ImagePolicies
from utils.constants import BorderBehavior, OverflowBehavior, InterpolationMethod, BlendType
from utils.test_images import generate_random, generate_gradient, generate_thin_stripes


def test_new_image_defaults():
    """A new image is white with WHITE/SATURATE/BILINEAR policies."""
    image = Image(3, 2)
    assert (image.width, image.height) == (3, 2)
    assert np.all(image.to_array() == 255)
    assert image.border_behavior is BorderBehavior.WHITE
    assert image.overflow_behavior is OverflowBehavior.SATURATE
    assert image.interpolation_method is InterpolationMethod.BILINEAR


def test_set_and_get_with_color_borders():
    """Values written in range read back; out of range reads the border color."""
    image = Image(2, 2)
    image.fill(255, 255, 255)
    image.set_pixel(0, 0, 10, 20, 30)
    assert image.get_pixel(0, 0) == (10, 20, 30)
    assert image.get_pixel(5, 5) == (255, 255, 255)

    image.border_behavior = BorderBehavior.BLACK
    assert image.get_pixel(5, 5) == (0, 0, 0)


def test_out_of_range_write_dropped():
    """Writes the border behavior cannot resolve are ignored."""
    image = Image(2, 2)
    before = image.to_array()
    image.set_pixel(-1, 0, 0, 0, 0)
    image.set_pixel(0, 2, 0, 0, 0)
    assert np.array_equal(image.to_array(), before)


def test_write_through_wrap_border():
    """With WRAP, an out-of-range write lands on the wrapped pixel."""
    image = Image(3, 3)
    image.border_behavior = BorderBehavior.WRAP
    image.set_pixel(-1, 4, 1, 2, 3)
    assert image.get_pixel(2, 1) == (1, 2, 3)


def test_write_floors_and_saturates():
    """Channel values are floored then saturated."""
    image = Image(1, 1)
    image.set_pixel(0, 0, 10.9, 300, -5)
    assert image.get_pixel(0, 0) == (10, 255, 0)


def test_write_wraps_overflow():
    """With overflow WRAP, channel values wrap modulo 256."""
    image = Image(1, 1)
    image.overflow_behavior = OverflowBehavior.WRAP
    image.set_pixel(0, 0, 256, 257, -1)
    assert image.get_pixel(0, 0) == (0, 1, 255)


def test_wrap_and_mirror_reads():
    """WRAP and MIRROR resolve reads to pixels inside the image."""
    image = Image.from_array(generate_random(4))
    image.border_behavior = BorderBehavior.WRAP
    assert image.get_pixel(-1, 0) == image.get_pixel(3, 0)
    assert image.get_pixel(0, 4) == image.get_pixel(0, 0)

    image.border_behavior = BorderBehavior.MIRROR
    assert image.get_pixel(-1, 0) == image.get_pixel(0, 0)
    assert image.get_pixel(4, 2) == image.get_pixel(3, 2)
    assert image.get_pixel(-2, -2) == image.get_pixel(1, 1)


def test_integral_float_coordinates_are_not_sampled():
    """2.0 addresses the pixel directly."""
    image = Image.from_array(generate_random(4))
    assert image.get_pixel(2.0, 1.0) == image.get_pixel(2, 1)


def test_for_each_pixel_order_and_arguments():
    """Pixels are visited row by row with their color and the image."""
    image = Image(2, 2)
    image.set_pixel(1, 0, 1, 2, 3)
    calls = []

    def record(x, y, r, g, b, img):
        calls.append((x, y, (r, g, b), img))
        return None

    image.for_each_pixel(record)
    assert [(x, y) for x, y, _, _ in calls] == [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert calls[1][2] == (1, 2, 3)
    assert all(img is image for _, _, _, img in calls)


def test_for_each_pixel_none_leaves_pixel():
    """Returning None keeps the pixel, a sequence replaces it."""
    image = Image(2, 1)

    def darken_left(x, y, r, g, b, img):
        return [0, 0, 0] if x == 0 else None

    image.for_each_pixel(darken_left)
    assert image.get_pixel(0, 0) == (0, 0, 0)
    assert image.get_pixel(1, 0) == (255, 255, 255)


def test_copy_equal_and_independent():
    """Copies match pixel for pixel and do not share pixels or policies."""
    original = generate_random(5)
    image = Image.from_array(original)
    image.border_behavior = BorderBehavior.MIRROR
    copy = image.copy()
    assert np.array_equal(copy.to_array(), original)
    assert copy.border_behavior is BorderBehavior.MIRROR

    copy.set_pixel(0, 0, 1, 1, 1)
    copy.border_behavior = BorderBehavior.BLACK
    assert np.array_equal(image.to_array(), original)
    assert image.border_behavior is BorderBehavior.MIRROR


def test_set_size_grow_closest():
    """Growing under CLOSEST extends the edge pixels."""
    image = Image(2, 2)
    image.set_pixel(1, 1, 10, 20, 30)
    image.border_behavior = BorderBehavior.CLOSEST
    image.set_size(4, 4)
    assert (image.width, image.height) == (4, 4)
    assert image.get_pixel(3, 3) == (10, 20, 30)


@pytest.mark.parametrize('method', [InterpolationMethod.CLOSEST,
                                    InterpolationMethod.BILINEAR,
                                    InterpolationMethod.BICUBIC])
def test_resize_grow_closest_keeps_corner(method):
    """Resizing 2x2 to 4x4 under CLOSEST keeps the bottom-right pixel."""
    image = Image(2, 2)
    image.set_pixel(1, 1, 10, 20, 30)
    image.border_behavior = BorderBehavior.CLOSEST
    image.interpolation_method = method
    image.resize(4, 4)
    assert (image.width, image.height) == (4, 4)
    assert image.get_pixel(3, 3) == (10, 20, 30)


def test_set_size_grow_black_and_crop():
    """Growing under BLACK pads black; shrinking crops."""
    image = Image(2, 2)
    image.border_behavior = BorderBehavior.BLACK
    image.set_size(3, 3)
    assert image.get_pixel(2, 2) == (0, 0, 0)
    assert image.get_pixel(1, 1) == (255, 255, 255)

    image.set_size(1, 1)
    assert image.to_array().shape == (1, 1, 3)


def test_resize_bilinear():
    """Resampling resize keeps corners and interpolates between them."""
    image = Image(2, 2)
    image.set_pixel(0, 0, 0, 0, 0)
    image.set_pixel(1, 0, 100, 100, 100)
    image.set_pixel(0, 1, 100, 100, 100)
    image.set_pixel(1, 1, 200, 200, 200)
    image.resize(3, 3)
    assert image.get_pixel(0, 0) == (0, 0, 0)
    assert image.get_pixel(2, 2) == (200, 200, 200)
    assert image.get_pixel(1, 1) == (100, 100, 100)
    assert image.get_pixel(1, 0) == (50, 50, 50)


def test_resize_to_single_pixel():
    """A target dimension of 1 samples the first row/column."""
    image = Image.from_array(generate_gradient(4))
    first = image.get_pixel(0, 0)
    image.resize(1, 1)
    assert image.get_pixel(0, 0) == first


def test_invert_is_involution():
    """invert twice restores the image."""
    original = generate_random(6)
    image = Image.from_array(original)
    image.invert()
    assert image.get_pixel(0, 0) == tuple(255 - int(v) for v in original[0, 0])
    image.invert()
    assert np.array_equal(image.to_array(), original)


def test_to_grayscale():
    """Luma terms are rounded separately."""
    image = Image(1, 1)
    image.set_pixel(0, 0, 100, 150, 200)
    image.to_grayscale()
    assert image.get_pixel(0, 0) == (142, 142, 142)


def test_threshold():
    """Channels are quantized to evenly spaced levels."""
    image = Image(1, 1)
    image.set_pixel(0, 0, 100, 128, 255)
    image.threshold()
    assert image.get_pixel(0, 0) == (0, 255, 255)

    image.set_pixel(0, 0, 100, 200, 0)
    image.threshold(levels=3)
    assert image.get_pixel(0, 0) == (127, 255, 0)

    image.set_pixel(0, 0, 100, 100, 100)
    image.threshold(levels=2, shift=50)
    assert image.get_pixel(0, 0) == (255, 255, 255)


def test_threshold_needs_two_levels():
    """A single level is rejected."""
    with pytest.raises(ValueError):
        Image(1, 1).threshold(levels=1)


def test_translate():
    """Content shifts; the uncovered area takes the border color."""
    image = Image(3, 1)
    image.border_behavior = BorderBehavior.BLACK
    image.set_pixel(0, 0, 10, 10, 10)
    image.set_pixel(1, 0, 20, 20, 20)
    image.set_pixel(2, 0, 30, 30, 30)
    image.translate(1, 0)
    assert [image.get_pixel(x, 0)[0] for x in range(3)] == [0, 10, 20]


def test_blend_types():
    """Blending weights both sides fully at 0.5 and picks one side at 0 or 1."""
    def pair():
        a = Image(1, 1)
        a.set_pixel(0, 0, 10, 20, 30)
        b = Image(1, 1)
        b.set_pixel(0, 0, 1, 2, 3)
        return a, b

    a, b = pair()
    a.blend(b, 0.5)
    assert a.get_pixel(0, 0) == (11, 22, 33)

    a, b = pair()
    a.blend(b, 0.5, BlendType.SUBTRACT)
    assert a.get_pixel(0, 0) == (9, 18, 27)

    a, b = pair()
    a.blend(b, 0.5, BlendType.MULTIPLY)
    assert a.get_pixel(0, 0) == (10, 40, 90)

    a, b = pair()
    a.blend(b, 1.0)
    assert a.get_pixel(0, 0) == (1, 2, 3)

    a, b = pair()
    a.blend(b, 0.0)
    assert a.get_pixel(0, 0) == (10, 20, 30)


def test_blend_with_mask():
    """A mask gives a per-channel blend ratio."""
    a = Image(1, 1)
    a.set_pixel(0, 0, 10, 20, 30)
    b = Image(1, 1)
    b.set_pixel(0, 0, 1, 2, 3)
    mask = Image(1, 1)
    mask.set_pixel(0, 0, 0, 255, 128)
    a.blend(b, mask=mask)
    assert a.get_pixel(0, 0) == (10, 2, 32)


def test_split_and_merge_channels():
    """Splitting then merging restores the image."""
    original = generate_random(4, seed=3)
    image = Image.from_array(original)
    red, green, blue = image.split_channels()
    r = int(original[1, 2, 0])
    assert red.get_pixel(2, 1) == (r, r, r)

    merged = Image(1, 1)
    merged.merge_channels(red, green, blue)
    assert np.array_equal(merged.to_array(), original)


def test_matrices_round_trip():
    """to_matrices and merge_channels_from_matrices are inverse."""
    original = generate_random(3, seed=4)
    image = Image.from_array(original)
    mr, mg, mb = image.to_matrices()
    assert mg.get_value(2, 1) == original[1, 2, 1]

    rebuilt = Image(1, 1)
    rebuilt.merge_channels_from_matrices(mr, mg, mb)
    assert np.array_equal(rebuilt.to_array(), original)


def test_to_rgba_bytes():
    """Row-major RGBA with alpha 255."""
    image = Image(2, 1)
    image.set_pixel(0, 0, 1, 2, 3)
    image.set_pixel(1, 0, 4, 5, 6)
    assert image.to_rgba_bytes() == bytes([1, 2, 3, 255, 4, 5, 6, 255])


def test_to_string():
    """Pixels print as padded [r,g,b] cells."""
    assert str(Image(1, 1)) == "[255,255,255] \n"


def test_invalid_construction():
    """Non-positive sizes and malformed arrays are rejected."""
    with pytest.raises(ValueError):
        Image(0, 1)
    with pytest.raises(ValueError):
        Image.from_array(np.zeros((2, 2)))
    with pytest.raises(ValueError):
        Image(2, 2).set_size(2, 0)


def test_policy_coercion():
    """Policies accept members, values and names."""
    image = Image(1, 1)
    image.border_behavior = "mirror"
    assert image.border_behavior is BorderBehavior.MIRROR
    image.interpolation_method = 22
    assert image.interpolation_method is InterpolationMethod.BICUBIC
    with pytest.raises(ValueError):
        image.overflow_behavior = "bounce"

    policies = ImagePolicies(border_behavior=3)
    assert policies.border_behavior is BorderBehavior.MIRROR


def test_policies_not_shared():
    """Images built from the same policies object own separate copies."""
    policies = ImagePolicies(border_behavior=BorderBehavior.CLOSEST)
    a = Image(1, 1, policies)
    b = Image(1, 1, policies)
    a.border_behavior = BorderBehavior.WRAP
    assert b.border_behavior is BorderBehavior.CLOSEST
    assert policies.border_behavior is BorderBehavior.CLOSEST


def test_set_size_wrap_tiles_stripes():
    """Growing under WRAP repeats the content."""
    image = Image.from_array(generate_thin_stripes(4))
    image.border_behavior = BorderBehavior.WRAP
    image.set_size(8, 4)
    assert image.get_pixel(5, 0) == image.get_pixel(1, 0)
    assert image.get_pixel(4, 3) == image.get_pixel(0, 3)
    assert image.get_pixel(0, 0) != image.get_pixel(1, 0)
