# blurthing/core/codec.py
# -*- coding: utf-8 -*-
"""
Adapter kodeka blurhash (`blurhash-python`, rozszerzenie C, import `blurhash`).

Kontrakt widziany przez rdzeń:
  • encode(grid_x, grid_y, width, height, rgba) -> str        (EncodeError)
  • decode(hash, out_width, out_height, punch) -> bytes RGBA  (DecodeError)

Obie funkcje są czyste i synchroniczne. Biblioteka przyjmuje i zwraca
obrazy PIL w trybie RGB; kanał alfa jest pomijany przy kodowaniu
i ustawiany na 255 przy dekodowaniu. Podgląd 512x512 dekoduje się
w C, więc nadaje się do przeliczania przy każdym ruchu suwaka.
"""
from __future__ import annotations

from typing import Union

import blurhash
import numpy as np
from PIL import Image

from blurthing.core.errors import DecodeError, EncodeError

__all__ = ["encode", "decode", "PUNCH", "MIN_COMPONENTS", "MAX_COMPONENTS"]

PUNCH = 1.0
MIN_COMPONENTS = 1
MAX_COMPONENTS = 9

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz#$%*+,-.:;=?@[]^_{|}~"
_LIB_ERRORS = (ValueError, IndexError, TypeError, OverflowError)


def _as_rgba(rgba: Union[bytes, bytearray, memoryview, np.ndarray], width: int, height: int) -> np.ndarray:
    if isinstance(rgba, np.ndarray):
        if rgba.dtype != np.uint8:
            raise EncodeError(f"pixel buffer must be uint8, got {rgba.dtype}")
        flat = rgba.reshape(-1)
    else:
        flat = np.frombuffer(bytes(rgba), dtype=np.uint8)
    expected = width * height * 4
    if flat.size != expected:
        raise EncodeError(
            f"buffer length {flat.size} does not match {width}x{height}x4 ({expected})"
        )
    return flat.reshape(height, width, 4)


def _check_hash(hash_str: str) -> None:
    # rozszerzenie C nie sprawdza znaków, tylko długość
    if len(hash_str) < 6:
        raise DecodeError(f"blurhash {hash_str!r} is too short")
    bad = sorted({c for c in hash_str if c not in _ALPHABET})
    if bad:
        raise DecodeError(f"blurhash {hash_str!r} contains invalid characters {''.join(bad)!r}")
    size_flag = _ALPHABET.index(hash_str[0])
    nx, ny = size_flag % 9 + 1, size_flag // 9 + 1
    expected = 4 + 2 * nx * ny
    if len(hash_str) != expected:
        raise DecodeError(
            f"blurhash {hash_str!r} has length {len(hash_str)}, expected {expected} for a {nx}x{ny} grid"
        )


def encode(grid_x: int, grid_y: int, width: int, height: int,
           rgba: Union[bytes, bytearray, memoryview, np.ndarray]) -> str:
    """Hash dla bufora RGBA (width*height*4 bajtów) i siatki grid_x x grid_y."""
    gx, gy, w, h = int(grid_x), int(grid_y), int(width), int(height)
    for label, v in (("x", gx), ("y", gy)):
        if not (MIN_COMPONENTS <= v <= MAX_COMPONENTS):
            raise EncodeError(
                f"{label} components {v} outside [{MIN_COMPONENTS},{MAX_COMPONENTS}]"
            )
    if w <= 0 or h <= 0:
        raise EncodeError(f"invalid image size {w}x{h}")
    pixels = _as_rgba(rgba, w, h)
    # biblioteka zamyka przekazany obraz, więc dostaje własną kopię
    im = Image.fromarray(np.ascontiguousarray(pixels[..., :3]))
    try:
        return blurhash.encode(im, x_components=gx, y_components=gy)
    except _LIB_ERRORS as ex:
        raise EncodeError(f"failed to compute the blurhash: {ex}") from ex


def decode(hash_str: str, out_width: int, out_height: int, punch: float = PUNCH) -> bytes:
    """Dekoduje hash do bufora RGBA out_width*out_height*4 (alfa = 255)."""
    w, h = int(out_width), int(out_height)
    if w <= 0 or h <= 0:
        raise DecodeError(f"invalid decode target {w}x{h}")
    if not isinstance(hash_str, str):
        raise DecodeError(f"hash must be str, got {type(hash_str).__name__}")
    if float(punch) <= 0 or not float(punch).is_integer():
        raise DecodeError(f"punch must be a positive whole number, got {punch!r}")
    _check_hash(hash_str)
    try:
        im = blurhash.decode(hash_str, w, h, punch=int(punch))
    except _LIB_ERRORS as ex:
        raise DecodeError(f"failed to decode the blurhash {hash_str!r}: {ex}") from ex

    rgb = np.asarray(im.convert("RGB"), dtype=np.uint8)
    if rgb.shape != (h, w, 3):
        raise DecodeError(f"unexpected decoded shape {rgb.shape}, expected {(h, w, 3)}")
    alpha = np.full((h, w, 1), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=-1).tobytes()
