# blurthing/app/state.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from blurthing.core.history import UndoHistory
from blurthing.core.params import ParamSnapshot


@dataclass(frozen=True)
class ComputedResult:
    hash: str
    preview: np.ndarray  # (S,S,4) uint8 RGBA
    params: ParamSnapshot

    @property
    def size(self) -> int:
        return int(self.preview.shape[1])


@dataclass
class Session:
    """Stan jednego dokumentu: obraz źródłowy, bieżące parametry, historia, ostatni wynik."""
    source: Optional[np.ndarray] = None  # (H,W,4) uint8, read-only
    source_path: Optional[str] = None
    params: ParamSnapshot = field(default_factory=ParamSnapshot)
    history: UndoHistory[ParamSnapshot] = field(default_factory=UndoHistory)
    computed: Optional[ComputedResult] = None
    last_error: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return self.source is not None

    @property
    def has_pending_edit(self) -> bool:
        """Bieżące parametry różnią się od wpisu wskazywanego przez historię."""
        current = self.history.current()
        return current is not None and current != self.params
