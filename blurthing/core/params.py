# blurthing/core/params.py
# -*- coding: utf-8 -*-
"""
Parameter snapshot: the tunable knobs of a blurhash computation.

Snapshots are frozen dataclasses: compared and hashed by value, "mutation"
returns a new instance (`with_field`). Range checks live here for the UI
layer (`validate`, `clamped`); the transform pipeline never clamps.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Tuple

__all__ = [
    "ParamSnapshot",
    "RANGES",
    "FIELDS",
]

# (min, max) inclusive
RANGES: Dict[str, Tuple[int, int]] = {
    "x_components": (1, 8),
    "y_components": (1, 8),
    "blur": (0, 32),
    "hue_rotate": (-180, 180),
    "brightness": (-100, 100),
    "contrast": (-100, 100),
}

FIELDS: Tuple[str, ...] = tuple(RANGES.keys()) + ("components",)


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(v)))


@dataclass(frozen=True)
class ParamSnapshot:
    components: Tuple[int, int] = (4, 3)
    blur: int = 0
    hue_rotate: int = 0
    brightness: int = 0
    contrast: int = 0

    # ------------------------------------------------------------------ access

    @property
    def x_components(self) -> int:
        return self.components[0]

    @property
    def y_components(self) -> int:
        return self.components[1]

    def get(self, name: str) -> Any:
        if name not in FIELDS:
            raise ValueError(f"unknown parameter field: {name!r}")
        return getattr(self, name)

    # ---------------------------------------------------------------- updates

    def with_field(self, name: str, value: Any) -> "ParamSnapshot":
        """Copy with one field replaced. `x_components`/`y_components` update one axis."""
        if name == "x_components":
            return replace(self, components=(int(value), self.components[1]))
        if name == "y_components":
            return replace(self, components=(self.components[0], int(value)))
        if name == "components":
            x, y = value
            return replace(self, components=(int(x), int(y)))
        if name in ("blur", "hue_rotate", "brightness", "contrast"):
            return replace(self, **{name: int(value)})
        raise ValueError(f"unknown parameter field: {name!r}")

    def validate(self) -> "ParamSnapshot":
        """Raise ValueError when any field lies outside its UI range."""
        bad = []
        for name, (lo, hi) in RANGES.items():
            v = getattr(self, name)
            if not (lo <= v <= hi):
                bad.append(f"{name}={v} not in [{lo},{hi}]")
        if bad:
            raise ValueError("invalid parameters: " + ", ".join(bad))
        return self

    def clamped(self) -> "ParamSnapshot":
        r = RANGES
        return ParamSnapshot(
            components=(
                _clamp(self.components[0], *r["x_components"]),
                _clamp(self.components[1], *r["y_components"]),
            ),
            blur=_clamp(self.blur, *r["blur"]),
            hue_rotate=_clamp(self.hue_rotate, *r["hue_rotate"]),
            brightness=_clamp(self.brightness, *r["brightness"]),
            contrast=_clamp(self.contrast, *r["contrast"]),
        )

    # ------------------------------------------------------------------ (de)serialization

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["components"] = list(self.components)
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParamSnapshot":
        snap = cls()
        for key, value in data.items():
            snap = snap.with_field(key, value)
        return snap

    def __str__(self) -> str:
        x, y = self.components
        return (f"components=({x},{y}) blur={self.blur} hue_rotate={self.hue_rotate} "
                f"brightness={self.brightness} contrast={self.contrast}")
