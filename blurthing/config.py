# blurthing/config.py
# -*- coding: utf-8 -*-
"""
Konfiguracja BlurThing (rozmiary podglądu/eksportu, downsampling, historia).

Źródła (w kolejności):
  1) jawna ścieżka przekazana do load_config(path),
  2) zmienna środowiskowa BLURTHING_CONFIG,
  3) wartości domyślne dataclassy.

Format pliku: YAML (.yaml/.yml) lub JSON (.json). Nieznane klucze są
ignorowane z ostrzeżeniem; złe typy/zakresy -> ValueError.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

__all__ = ["BlurThingConfig", "load_config", "dump_config", "ENV_VAR"]

logger = logging.getLogger("blurthing.config")

ENV_VAR = "BLURTHING_CONFIG"


@dataclass(frozen=True)
class BlurThingConfig:
    """
    - preview_size: bok kwadratowego podglądu interaktywnego
    - downsample_size: bok obrazu źródłowego po downsamplingu (Lanczos)
    - export_size: domyślny bok eksportu
    - punch: kontrast dekodera (1.0 = neutralnie; liczba całkowita, nie jest parametrem UI)
    - history_limit: None = historia bez limitu
    """
    preview_size: int = 512
    downsample_size: int = 128
    export_size: int = 2048
    punch: float = 1.0
    history_limit: Optional[int] = None
    allowed_extensions: Tuple[str, ...] = ("bmp", "gif", "jpg", "jpeg", "png", "tga", "tiff", "webp")
    export_extensions: Tuple[str, ...] = ("jpg", "jpeg", "png", "webp")

    def validate(self) -> "BlurThingConfig":
        for name in ("preview_size", "downsample_size", "export_size"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
                raise ValueError(f"config: {name} must be a positive int, got {v!r}")
        if self.punch <= 0 or not float(self.punch).is_integer():
            raise ValueError(f"config: punch must be a positive whole number, got {self.punch!r}")
        if self.history_limit is not None and self.history_limit < 2:
            raise ValueError(f"config: history_limit must be >= 2 or null, got {self.history_limit!r}")
        return self

    def with_overrides(self, data: Mapping[str, Any]) -> "BlurThingConfig":
        known = {f.name for f in fields(self)}
        kw: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("config: unknown key %r ignored", key)
                continue
            if key in ("allowed_extensions", "export_extensions"):
                value = tuple(str(v).lower().lstrip(".") for v in value)
            elif key == "punch":
                value = float(value)
            kw[key] = value
        return replace(self, **kw).validate()


def _read_mapping(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"config: {path} must contain a mapping")
    # dopuszczamy sekcję {blurthing: {...}}
    if set(data.keys()) == {"blurthing"} and isinstance(data["blurthing"], dict):
        data = data["blurthing"]
    return data


def load_config(path: Optional[Union[str, Path]] = None) -> BlurThingConfig:
    cfg = BlurThingConfig()
    src = path or os.environ.get(ENV_VAR)
    if not src:
        return cfg
    p = Path(src)
    logger.debug("config: loading %s", p)
    return cfg.with_overrides(_read_mapping(p))


def dump_config(cfg: BlurThingConfig) -> str:
    data = {f.name: getattr(cfg, f.name) for f in fields(cfg)}
    for key in ("allowed_extensions", "export_extensions"):
        data[key] = list(data[key])
    return yaml.safe_dump(data, sort_keys=False)
