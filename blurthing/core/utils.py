# blurthing/core/utils.py
"""
---
version: 2
kind: module
id: "core-utils"
created_at: "2025-10-02"
name: "blurthing.core.utils"
author: "BlurThing"
role: "Core Utilities (RGBA buffer conversions & helpers)"
description: >
  Lekki zestaw funkcji pomocniczych wspólny dla core/app: konwersje do RGBA u8,
  zamrażanie bufora źródłowego (write=False), downsampling Lanczos (Pillow)
  oraz konwersja bufor bajtów <-> ndarray.

inputs:
  image?: {type: "PIL.Image|np.ndarray", shape: "(H,W[,1|3|4])"}
  size?:  {type: "int", desc: "bok kwadratu dla downsample_rgba"}
outputs:
  rgba_u8?: {dtype: "uint8", shape: "(H,W,4)"}

interfaces:
  exports: ["to_u8_rgba","freeze","downsample_rgba","rgba_from_bytes","to_pil"]
  depends_on: ["numpy","Pillow"]
  used_by: ["blurthing.core.pipeline","blurthing.core.codec","blurthing.app.orchestrator",
            "blurthing.app.services.files"]

contracts:
  - "funkcje nie mutują wejść"
  - "to_u8_rgba zwraca uint8 (H,W,4); brak kanału alfa -> alfa 255"
license: "Proprietary"
---
"""

from __future__ import annotations

from typing import Any, Union

import numpy as np
from PIL import Image

__all__ = [
    "to_u8_rgba",
    "freeze",
    "downsample_rgba",
    "rgba_from_bytes",
    "to_pil",
]


def to_u8_rgba(img: Any) -> np.ndarray:
    """
    Akceptuje: PIL.Image | np.ndarray (H,W) / (H,W,1|3|4)
    Zwraca: np.ndarray uint8 RGBA (H,W,4), zawsze kopia.
    """
    if isinstance(img, Image.Image):
        im = img if img.mode == "RGBA" else img.convert("RGBA")
        return np.array(im, dtype=np.uint8)

    if isinstance(img, np.ndarray):
        a = img
        if a.dtype != np.uint8:
            a = np.clip(a, 0, 255).astype(np.uint8)
        if a.ndim == 2:
            a = a[..., None]
        if a.ndim != 3 or a.shape[-1] not in (1, 3, 4):
            raise ValueError(f"Unsupported array shape for RGBA: {img.shape}")
        if a.shape[-1] == 1:
            a = np.repeat(a, 3, axis=-1)
        if a.shape[-1] == 3:
            alpha = np.full(a.shape[:2] + (1,), 255, dtype=np.uint8)
            a = np.concatenate([a, alpha], axis=-1)
        return np.array(a, dtype=np.uint8, copy=True)

    raise TypeError(f"Unsupported image type: {type(img)}")


def freeze(arr: np.ndarray) -> np.ndarray:
    """Read-only copy; źródło nie może być mutowane w miejscu."""
    out = np.array(arr, copy=True)
    out.setflags(write=False)
    return out


def downsample_rgba(img: Union[Image.Image, np.ndarray], size: int) -> np.ndarray:
    """Resize exact to (size,size) with Lanczos, zwraca RGBA u8."""
    if size <= 0:
        raise ValueError("downsample_rgba: size must be positive")
    im = img if isinstance(img, Image.Image) else Image.fromarray(to_u8_rgba(img))
    if im.mode != "RGBA":
        im = im.convert("RGBA")
    im = im.resize((int(size), int(size)), resample=Image.LANCZOS)
    return np.asarray(im, dtype=np.uint8).copy()


def rgba_from_bytes(data: bytes, width: int, height: int) -> np.ndarray:
    """Bufor bajtów RGBA -> ndarray (H,W,4). ValueError gdy długość się nie zgadza."""
    expected = int(width) * int(height) * 4
    if len(data) != expected:
        raise ValueError(f"buffer length {len(data)} != {width}x{height}x4 ({expected})")
    return np.frombuffer(bytes(data), dtype=np.uint8).reshape(int(height), int(width), 4).copy()


def to_pil(rgba_u8: np.ndarray) -> Image.Image:
    if rgba_u8.ndim != 3 or rgba_u8.shape[-1] != 4 or rgba_u8.dtype != np.uint8:
        raise ValueError(f"Expected u8 RGBA, got shape={rgba_u8.shape} dtype={rgba_u8.dtype}")
    return Image.fromarray(np.ascontiguousarray(rgba_u8))
