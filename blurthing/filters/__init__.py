# blurthing/filters/__init__.py
# -*- coding: utf-8 -*-
"""
Jawne ładowanie modułów korekt.
Każdy moduł rejestruje swoją funkcję dekoratorem @register z core.registry.
"""

from __future__ import annotations

import importlib
import logging
from typing import Iterable, List, Tuple

from blurthing.core.registry import available

logger = logging.getLogger("blurthing.filters")

# ──────────────────────────────────────────────────────────────────────────────
# Lista modułów do jawnego importu (kolejność kroków ustala pipeline)
# ──────────────────────────────────────────────────────────────────────────────
_MODULES: Tuple[str, ...] = (
    "blur",
    "hue_rotate",
    "contrast",
    "brightness",
)


def load_all(modnames: Iterable[str] = _MODULES) -> List[str]:
    """
    Importuje podmoduły `blurthing.filters.<modname>` (rejestracja przez @register).
    Błąd importu jest propagowany: brak korekty oznacza inne hashe.
    """
    loaded: List[str] = []
    for m in modnames:
        importlib.import_module(f"{__name__}.{m}")
        loaded.append(m)
    logger.debug("filters loaded: %s (registry: %s)", loaded, available())
    return loaded


_loaded = load_all()

__all__ = [
    "load_all",
    "available",
]
