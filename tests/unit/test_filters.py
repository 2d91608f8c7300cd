# tests/unit/test_filters.py
import numpy as np
import pytest

from blurthing.core import registry
from blurthing.core.pipeline import Ctx
from blurthing.filters.blur import blur
from blurthing.filters.brightness import brightness
from blurthing.filters.contrast import contrast
from blurthing.filters.hue_rotate import hue_rotate


def _px(r, g, b, a=255, shape=(2, 2)):
    img = np.zeros(shape + (4,), dtype=np.uint8)
    img[...] = (r, g, b, a)
    return img


def test_registry_contains_the_four_adjustments():
    assert registry.available() == ["blur", "brightness", "contrast", "hue_rotate"]
    assert registry.get("Blur") is blur
    assert registry.meta("contrast")["defaults"] == {"amount": 0}
    assert registry.meta("brightness")["name"] == "brightness"


def test_registry_meta_defaults_are_a_copy():
    registry.meta("blur")["defaults"]["sigma"] = 99
    assert registry.meta("blur")["defaults"] == {"sigma": 0}


def test_registry_unknown_name_raises():
    with pytest.raises(KeyError):
        registry.get("smoothness")


def test_brightness_adds_and_clamps_rgb_only():
    img = np.array([[[250, 5, 100, 77]]], dtype=np.uint8)
    out = brightness(img, Ctx(), offset=20)
    assert out.tolist() == [[[255, 25, 120, 77]]]
    out = brightness(img, Ctx(), offset=-20)
    assert out.tolist() == [[[230, 0, 80, 77]]]


def test_contrast_values():
    img = np.array([[[0, 128, 255, 10]]], dtype=np.uint8)
    out = contrast(img, Ctx(), amount=100)
    assert out.tolist() == [[[0, 129, 255, 10]]]
    flat = contrast(img, Ctx(), amount=-100)
    assert flat.tolist() == [[[127, 127, 127, 10]]]


def test_contrast_zero_is_identity():
    img = np.arange(64, dtype=np.uint8).reshape(4, 4, 4)
    assert np.array_equal(contrast(img, Ctx(), amount=0), img)


def test_hue_rotate_180_turns_red_into_cyan():
    out = hue_rotate(_px(255, 0, 0, 200), Ctx(), degrees=180)
    r, g, b, a = out[0, 0].tolist()
    assert (r, g, b, a) == (0, 108, 108, 200)


def test_hue_rotate_keeps_grey_roughly_grey():
    img = _px(120, 120, 120)
    for deg in (-180, -90, 45, 170):
        out = hue_rotate(img, Ctx(), degrees=deg).astype(int)
        assert np.all(np.abs(out[..., :3] - 120) <= 1)


def test_hue_rotate_zero_is_identity():
    img = np.arange(64, dtype=np.uint8).reshape(4, 4, 4)
    assert np.array_equal(hue_rotate(img, Ctx(), degrees=0), img)


def test_blur_zero_is_identity_copy():
    img = np.arange(64, dtype=np.uint8).reshape(4, 4, 4)
    out = blur(img, Ctx(), sigma=0)
    assert np.array_equal(out, img)
    assert out is not img


def test_blur_spreads_a_bright_pixel():
    img = _px(0, 0, 0, shape=(9, 9))
    img[4, 4, :3] = 255
    out = blur(img, Ctx(), sigma=2)
    assert out.shape == img.shape and out.dtype == np.uint8
    assert out[4, 4, 0] < 255
    assert out[4, 5, 0] > 0 and out[3, 4, 0] > 0


def test_filters_do_not_mutate_input():
    img = np.arange(4 * 4 * 4, dtype=np.uint8).reshape(4, 4, 4)
    before = img.copy()
    blur(img, Ctx(), sigma=3)
    hue_rotate(img, Ctx(), degrees=33)
    contrast(img, Ctx(), amount=40)
    brightness(img, Ctx(), offset=-30)
    assert np.array_equal(img, before)
