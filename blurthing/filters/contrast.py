# blurthing/filters/contrast.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, Dict

import numpy as np

from blurthing.core.registry import register

DOC = "Contrast stretch around mid-grey: percent=((100+c)/100)^2. Alpha untouched."
DEFAULTS: Dict[str, Any] = {
    "amount": 0,
}


@register("contrast", defaults=DEFAULTS, doc=DOC)
def contrast(img_u8: np.ndarray, ctx, **p) -> np.ndarray:
    amount = float(p.get("amount", DEFAULTS["amount"]))
    out = img_u8.copy()
    if amount == 0.0:
        return out
    percent = np.float32(((100.0 + amount) / 100.0) ** 2)
    x = img_u8[..., :3].astype(np.float32) / np.float32(255.0)
    y = ((x - np.float32(0.5)) * percent + np.float32(0.5)) * np.float32(255.0)
    out[..., :3] = np.clip(y, 0.0, 255.0).astype(np.uint8)
    return out
