# blurthing/filters/blur.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, Dict

import numpy as np
from PIL import Image, ImageFilter

from blurthing.core.registry import register

DOC = "Gaussian blur (sigma in px) applied before hashing; sigma 0 leaves the image untouched."
DEFAULTS: Dict[str, Any] = {
    "sigma": 0,
}


@register("blur", defaults=DEFAULTS, doc=DOC)
def blur(img_u8: np.ndarray, ctx, **p) -> np.ndarray:
    sigma = float(p.get("sigma", DEFAULTS["sigma"]))
    if sigma <= 0.0:
        return img_u8.copy()
    # Pillow: radius GaussianBlur == odchylenie standardowe
    im = Image.fromarray(np.ascontiguousarray(img_u8))
    im = im.filter(ImageFilter.GaussianBlur(radius=sigma))
    return np.asarray(im, dtype=np.uint8).copy()
