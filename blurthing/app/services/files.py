# blurthing/app/services/files.py
"""
---
version: 3
kind: module
id: "app-services-files"
created_at: "2025-10-02"
name: "blurthing.app.services.files"
author: "BlurThing"
role: "Image I/O (collaborator)"
description: >
  Lekki serwis współpracujący z rdzeniem: wczytanie pliku obrazu (Pillow)
  z korektą orientacji EXIF i downsamplingiem Lanczos do stałego kwadratu,
  oraz zapis eksportowanego podglądu (RGBA spłaszczane do RGB).
  Rdzeń sam nie robi I/O: dostaje gotowy bufor z load_image().
inputs:
  load_image.path: {type: "str|Path"}
  save_image.img: {type: "np.ndarray", shape: "(H,W,4)", dtype: "uint8"}
outputs:
  load_image: {type: "np.ndarray", shape: "(N,N,4)", dtype: "uint8"}
  save_image: {type: "Path", side_effect: "zapis na dysk"}
interfaces:
  exports: ["load_image","save_image","is_supported","default_export_name","UnsupportedFileType"]
  depends_on: ["Pillow","numpy","pathlib"]
  used_by: ["blurthing.__main__"]
policy:
  side_effects: ["filesystem I/O"]
license: "Proprietary"
---
"""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, Optional, Union

import numpy as np
from PIL import Image, ImageOps

from blurthing.config import BlurThingConfig
from blurthing.core.utils import downsample_rgba, to_pil

__all__ = [
    "load_image",
    "save_image",
    "is_supported",
    "default_export_name",
    "UnsupportedFileType",
]

logger = logging.getLogger("blurthing.app.services.files")


class UnsupportedFileType(ValueError):
    """Rozszerzenie pliku nie należy do obsługiwanych typów obrazu."""


def _ext(path: Union[str, Path]) -> str:
    return Path(path).suffix.lower().lstrip(".")


def is_supported(path: Union[str, Path], extensions: Iterable[str]) -> bool:
    return _ext(path) in {e.lower() for e in extensions}


def load_image(path: Union[str, Path], config: Optional[BlurThingConfig] = None) -> np.ndarray:
    """
    Wczytuje obraz i zwraca bufor RGBA (N,N,4) po downsamplingu Lanczos
    do config.downsample_size. Proporcje nie są zachowywane.
    """
    cfg = config or BlurThingConfig()
    p = Path(path)
    if not is_supported(p, cfg.allowed_extensions):
        raise UnsupportedFileType(
            f"the file {p.name!r} does not appear to be a supported image type "
            f"({', '.join(cfg.allowed_extensions)})"
        )
    with Image.open(p) as im:
        im = ImageOps.exif_transpose(im)
        rgba = im.convert("RGBA")
    logger.debug("loaded %s (%dx%d), downsampling to %d", p, rgba.width, rgba.height, cfg.downsample_size)
    return downsample_rgba(rgba, cfg.downsample_size)


def save_image(img: np.ndarray, path: Union[str, Path], config: Optional[BlurThingConfig] = None,
               *, quality: Optional[int] = None) -> Path:
    """Zapisuje podgląd jako RGB (alfa pomijana). Format wg rozszerzenia."""
    cfg = config or BlurThingConfig()
    p = Path(path)
    if not is_supported(p, cfg.export_extensions):
        raise UnsupportedFileType(
            f"cannot export to {p.suffix or '<no extension>'}; use one of {', '.join(cfg.export_extensions)}"
        )
    p.parent.mkdir(parents=True, exist_ok=True)
    rgb = to_pil(img).convert("RGB")
    kw = {}
    if quality is not None and _ext(p) in ("jpg", "jpeg", "webp"):
        kw["quality"] = int(quality)
    rgb.save(p, **kw)
    logger.info("exported %s (%dx%d)", p, rgb.width, rgb.height)
    return p


def default_export_name(now: Optional[float] = None) -> str:
    ts = int(time.time() if now is None else now)
    return f"blurthing-{ts}.jpg"
