# blurthing/__init__.py
# -*- coding: utf-8 -*-
"""
BlurThing — strojenie parametrów blurhasha z podglądem na żywo i undo/redo.

    from blurthing import Orchestrator, ParamSnapshot
"""
from __future__ import annotations

__version__ = "0.3.0"

from blurthing.app.orchestrator import Orchestrator
from blurthing.app.state import ComputedResult, Session
from blurthing.config import BlurThingConfig, load_config
from blurthing.core.params import ParamSnapshot

__all__ = [
    "__version__",
    "Orchestrator",
    "Session",
    "ComputedResult",
    "BlurThingConfig",
    "load_config",
    "ParamSnapshot",
]
