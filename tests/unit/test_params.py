# tests/unit/test_params.py
import pytest

from blurthing.core.params import RANGES, ParamSnapshot


def test_defaults():
    p = ParamSnapshot()
    assert p.components == (4, 3)
    assert (p.blur, p.hue_rotate, p.brightness, p.contrast) == (0, 0, 0, 0)


def test_value_semantics():
    a = ParamSnapshot(blur=3)
    b = ParamSnapshot(blur=3)
    assert a == b
    assert hash(a) == hash(b)
    with pytest.raises(Exception):
        a.blur = 5  # frozen


def test_with_field_returns_new_instance():
    p = ParamSnapshot()
    q = p.with_field("hue_rotate", 90)
    assert q.hue_rotate == 90
    assert p.hue_rotate == 0
    assert p.with_field("x_components", 7).components == (7, 3)
    assert p.with_field("y_components", 1).components == (4, 1)
    assert p.with_field("components", [2, 5]).components == (2, 5)


def test_with_field_same_value_is_equal():
    p = ParamSnapshot(contrast=20)
    assert p.with_field("contrast", 20) == p


def test_unknown_field_raises():
    with pytest.raises(ValueError):
        ParamSnapshot().with_field("rotation", 1)
    with pytest.raises(ValueError):
        ParamSnapshot().get("rotation")


def test_validate_and_clamp():
    bad = ParamSnapshot(components=(0, 9), blur=40, hue_rotate=-200, brightness=101, contrast=-101)
    with pytest.raises(ValueError) as ei:
        bad.validate()
    assert "blur=40" in str(ei.value)
    fixed = bad.clamped()
    assert fixed.validate() is fixed
    assert fixed.components == (1, 8)
    assert fixed.blur == RANGES["blur"][1]
    assert fixed.hue_rotate == -180


def test_dict_round_trip():
    p = ParamSnapshot(components=(8, 8), blur=32, hue_rotate=-45, brightness=12, contrast=-3)
    assert ParamSnapshot.from_dict(p.to_dict()) == p
