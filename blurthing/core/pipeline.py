# blurthing/core/pipeline.py
"""
---
version: 2
kind: module
id: "core-pipeline"
created_at: "2025-10-02"
name: "blurthing.core.pipeline"
author: "BlurThing"
role: "Transform Pipeline"
description: >
  Mapuje (bufor źródłowy RGBA, ParamSnapshot) -> bufor RGBA gotowy do hashowania.
  Kroki w stałej kolejności: blur -> hue_rotate -> contrast -> brightness(x2).
  Kolejność jest częścią kontraktu: zmiana kolejności zmienia hashe.
inputs:
  image: {dtype: "uint8", shape: "(H,W,4)", colorspace: "RGBA"}
  params: "ParamSnapshot"
outputs:
  image_out: {dtype: "uint8", shape: "(H,W,4)"}
  cache_keys:
    - "stage/{i}/name"
    - "stage/{i}/t_ms"
    - "debug/log"
interfaces:
  exports: ["Step","Ctx","build_ctx","build_steps","apply_pipeline","apply_transforms"]
  depends_on: ["blurthing.core.registry","blurthing.filters","numpy"]
  used_by: ["blurthing.app.orchestrator"]
policy:
  fail_fast: true
  clamps_params: false
constraints:
  - "korekty mają sygnaturę (img:uint8 RGBA, ctx:Ctx, **params)->np.ndarray"
  - "brak stanu wewnętrznego; wejście nie jest modyfikowane"
license: "Proprietary"
---
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict

import numpy as np

import blurthing.filters  # noqa: F401  (rejestracja korekt)
from blurthing.core.params import ParamSnapshot
from blurthing.core.registry import get as registry_get, meta as registry_meta

__all__ = ["Step", "Ctx", "build_ctx", "build_steps", "apply_pipeline", "apply_transforms"]


# -------------------------------------------------------------------------------------------------
# Typy publiczne
# -------------------------------------------------------------------------------------------------

class Step(TypedDict):
    name: str
    params: Dict[str, Any]


@dataclass
class Ctx:
    cache: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)


def build_ctx(params: Optional[ParamSnapshot] = None) -> Ctx:
    ctx = Ctx()
    if params is not None:
        ctx.meta["params"] = params.to_dict()
    return ctx


# -------------------------------------------------------------------------------------------------
# Kroki
# -------------------------------------------------------------------------------------------------

def build_steps(params: ParamSnapshot) -> List[Step]:
    """Stała kolejność kroków dla snapshotu. Jasność jest podwajana tutaj."""
    return [
        {"name": "blur", "params": {"sigma": params.blur}},
        {"name": "hue_rotate", "params": {"degrees": params.hue_rotate}},
        {"name": "contrast", "params": {"amount": params.contrast}},
        {"name": "brightness", "params": {"offset": params.brightness * 2}},
    ]


def _check_rgba(img_u8: np.ndarray, where: str) -> None:
    if not (isinstance(img_u8, np.ndarray) and img_u8.ndim == 3
            and img_u8.shape[-1] == 4 and img_u8.dtype == np.uint8):
        shape = getattr(img_u8, "shape", None)
        raise ValueError(f"{where}: expected uint8 RGBA (H,W,4), got {shape}")


def apply_pipeline(
    img_u8: np.ndarray,
    ctx: Ctx,
    steps: List[Step],
    *,
    debug_log: Optional[List[str]] = None,
) -> np.ndarray:
    """
    Wykonuje kroki po kolei, zapisując telemetrię:
      - stage/{i}/name, stage/{i}/t_ms
    Nieznane parametry kroku są logowane do debug_log i pomijane.
    """
    _check_rgba(img_u8, "apply_pipeline")
    if not isinstance(steps, list):
        raise ValueError("apply_pipeline: steps must be a list")

    out = img_u8
    cache = ctx.cache
    dbg = debug_log if debug_log is not None else []

    for i, step in enumerate(steps):
        name = step.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError(f"apply_pipeline: step[{i}] invalid 'name'")
        fn = registry_get(name)  # KeyError gdy brak korekty

        params_in = dict(step.get("params", {}))
        defs = registry_meta(name)["defaults"]
        unknown = [k for k in params_in if k not in defs]
        if unknown:
            dbg.append(f"[pipeline] step[{i}] '{name}': unknown params {unknown}")
            for k in unknown:
                params_in.pop(k)
        eff_params = {**defs, **params_in}

        t0 = time.perf_counter()
        fx = fn(out, ctx, **eff_params)
        _check_rgba(fx, f"step[{i}] '{name}'")
        if fx.shape != out.shape:
            raise ValueError(f"apply_pipeline: step[{i}] '{name}' changed shape {out.shape} -> {fx.shape}")
        cache[f"stage/{i}/name"] = name
        cache[f"stage/{i}/t_ms"] = (time.perf_counter() - t0) * 1000.0
        out = fx

    if dbg and debug_log is None:
        cache["debug/log"] = list(dbg)

    # zawsze świeża tablica, nawet gdy wszystkie kroki były tożsamościowe
    return out if out is not img_u8 else img_u8.copy()


def apply_transforms(source: np.ndarray, params: ParamSnapshot, ctx: Optional[Ctx] = None) -> np.ndarray:
    """Bufor RGBA po korektach, w rozmiarze źródła."""
    c = ctx if ctx is not None else build_ctx(params)
    return apply_pipeline(source, c, build_steps(params))
