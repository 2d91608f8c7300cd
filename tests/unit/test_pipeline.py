# tests/unit/test_pipeline.py
import numpy as np
import pytest

from blurthing.core.params import ParamSnapshot
from blurthing.core.pipeline import apply_pipeline, apply_transforms, build_ctx, build_steps
from blurthing.filters.brightness import brightness


def test_build_steps_fixed_order_and_brightness_doubling():
    steps = build_steps(ParamSnapshot(blur=3, hue_rotate=10, brightness=25, contrast=-5))
    assert [s["name"] for s in steps] == ["blur", "hue_rotate", "contrast", "brightness"]
    assert steps[0]["params"] == {"sigma": 3}
    assert steps[3]["params"] == {"offset": 50}


def test_defaults_are_identity(corner_source):
    out = apply_transforms(corner_source, ParamSnapshot())
    assert np.array_equal(out, corner_source)
    assert out is not corner_source


def test_brightness_50_equals_raw_offset_100(corner_source):
    out = apply_transforms(corner_source, ParamSnapshot(brightness=50))
    expected = brightness(corner_source, build_ctx(), offset=100)
    assert np.array_equal(out, expected)


def test_deterministic(red_source):
    p = ParamSnapshot(blur=4, hue_rotate=77, brightness=-20, contrast=35)
    a = apply_transforms(red_source, p)
    b = apply_transforms(red_source, p)
    assert np.array_equal(a, b)


def test_source_is_not_mutated(red_source):
    frozen = red_source.copy()
    frozen.setflags(write=False)
    apply_transforms(frozen, ParamSnapshot(blur=2, hue_rotate=90, brightness=10, contrast=10))
    assert np.array_equal(frozen, red_source)


def test_order_matters():
    img = np.zeros((1, 1, 4), dtype=np.uint8)
    img[...] = (100, 100, 100, 255)
    ctx = build_ctx()
    forward = apply_pipeline(img, ctx, [
        {"name": "contrast", "params": {"amount": 50}},
        {"name": "brightness", "params": {"offset": 40}},
    ])
    backward = apply_pipeline(img, build_ctx(), [
        {"name": "brightness", "params": {"offset": 40}},
        {"name": "contrast", "params": {"amount": 50}},
    ])
    assert forward[0, 0, 0] == 105
    assert backward[0, 0, 0] == 155


def test_stage_telemetry_in_cache(red_source):
    ctx = build_ctx(ParamSnapshot(blur=1))
    apply_transforms(red_source, ParamSnapshot(blur=1), ctx)
    assert ctx.cache["stage/0/name"] == "blur"
    assert ctx.cache["stage/3/name"] == "brightness"
    assert ctx.cache["stage/0/t_ms"] >= 0.0
    assert ctx.meta["params"]["blur"] == 1


def test_unknown_step_params_are_logged_and_dropped(red_source):
    dbg = []
    out = apply_pipeline(red_source, build_ctx(), [
        {"name": "brightness", "params": {"offset": 0, "gamma": 2}},
    ], debug_log=dbg)
    assert np.array_equal(out, red_source)
    assert any("gamma" in line for line in dbg)


def test_rejects_non_rgba():
    with pytest.raises(ValueError):
        apply_transforms(np.zeros((4, 4, 3), dtype=np.uint8), ParamSnapshot())
    with pytest.raises(ValueError):
        apply_transforms(np.zeros((4, 4, 4), dtype=np.float32), ParamSnapshot())


def test_unknown_step_name_raises(red_source):
    with pytest.raises(KeyError):
        apply_pipeline(red_source, build_ctx(), [{"name": "sharpen", "params": {}}])
