# blurthing/filters/hue_rotate.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import math
from typing import Any, Dict

import numpy as np

from blurthing.core.registry import register

DOC = (
    "Hue rotation by degrees via a luminance-preserving 3x3 matrix "
    "(weights 0.213/0.715/0.072). Alpha untouched; results truncated to u8."
)
DEFAULTS: Dict[str, Any] = {
    "degrees": 0,
}


def hue_matrix(degrees: float) -> np.ndarray:
    """3x3 macierz obrotu barwy (wiersze: R, G, B)."""
    rad = float(degrees) * math.pi / 180.0
    c = math.cos(rad)
    s = math.sin(rad)
    return np.array([
        [0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928],
        [0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283],
        [0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072],
    ], dtype=np.float64)


@register("hue_rotate", defaults=DEFAULTS, doc=DOC)
def hue_rotate(img_u8: np.ndarray, ctx, **p) -> np.ndarray:
    degrees = int(p.get("degrees", DEFAULTS["degrees"]))
    out = img_u8.copy()
    if degrees == 0:
        return out
    m = hue_matrix(degrees)
    rgb = img_u8[..., :3].astype(np.float64)
    rotated = rgb @ m.T
    # clamp, potem obcięcie (nie zaokrąglenie)
    out[..., :3] = np.clip(rotated, 0.0, 255.0).astype(np.uint8)
    return out
