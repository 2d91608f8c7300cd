# blurthing/core/registry.py
# -*- coding: utf-8 -*-
"""
Rejestr korekt obrazu używanych przez pipeline.

Moduły z blurthing.filters rejestrują się dekoratorem @register przy imporcie;
pipeline pobiera funkcję (get) i jej domyślne parametry (meta) po nazwie kroku.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

__all__ = [
    "register",
    "get",
    "available",
    "meta",
]

Adjustment = Callable[..., Any]


@dataclass(frozen=True)
class _Entry:
    fn: Adjustment
    defaults: Dict[str, Any] = field(default_factory=dict)
    doc: str = ""


_LOCK = RLock()
_ENTRIES: Dict[str, _Entry] = {}


def _key(name: str) -> str:
    if not isinstance(name, str):
        raise TypeError("adjustment name must be str")
    return name.strip().lower()


def _entry(name: str) -> _Entry:
    with _LOCK:
        try:
            return _ENTRIES[_key(name)]
        except KeyError:
            raise KeyError(f"Unknown adjustment: {name!r}") from None


def available() -> List[str]:
    with _LOCK:
        return sorted(_ENTRIES)


def get(name: str) -> Adjustment:
    """Funkcja korekty dla nazwy kroku. KeyError gdy nie zarejestrowana."""
    return _entry(name).fn


def meta(name: str) -> Dict[str, Any]:
    """{'name', 'defaults', 'doc'}; defaults to kopia, można ją modyfikować."""
    e = _entry(name)
    return {"name": _key(name), "defaults": dict(e.defaults), "doc": e.doc}


def register(name: str, defaults: Optional[Dict[str, Any]] = None, doc: Optional[str] = None):
    """
    Dekorator:
        @register("contrast", defaults={"amount": 0}, doc="...")
        def contrast(img, ctx, **params): ...
    Ponowna rejestracja tej samej nazwy podmienia wpis.
    """
    key = _key(name)
    if defaults is not None and not isinstance(defaults, dict):
        raise TypeError("register: defaults must be a dict or None")
    if doc is not None and not isinstance(doc, str):
        raise TypeError("register: doc must be a str or None")

    def _decorator(fn: Adjustment) -> Adjustment:
        if not callable(fn):
            raise TypeError("register: fn must be callable")
        with _LOCK:
            _ENTRIES[key] = _Entry(fn=fn, defaults=dict(defaults or {}), doc=doc or "")
        return fn

    return _decorator
