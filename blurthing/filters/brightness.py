# blurthing/filters/brightness.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, Dict

import numpy as np

from blurthing.core.registry import register

DOC = "Additive brightness offset on RGB, clamped to [0,255]. Alpha untouched."
DEFAULTS: Dict[str, Any] = {
    "offset": 0,
}


@register("brightness", defaults=DEFAULTS, doc=DOC)
def brightness(img_u8: np.ndarray, ctx, **p) -> np.ndarray:
    offset = int(p.get("offset", DEFAULTS["offset"]))
    out = img_u8.copy()
    if offset == 0:
        return out
    rgb = img_u8[..., :3].astype(np.int32) + offset
    out[..., :3] = np.clip(rgb, 0, 255).astype(np.uint8)
    return out
