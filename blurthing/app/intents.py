# blurthing/app/intents.py
# -*- coding: utf-8 -*-
"""
Zamknięty zbiór intencji UI -> rdzeń (tagged union).

UI (suwaki, skróty klawiszowe, CLI) tłumaczy swoje zdarzenia na jedną
z tych wartości i przekazuje ją do Orchestrator.dispatch().
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from blurthing.core.params import FIELDS


@dataclass(frozen=True)
class NoOp:
    pass


@dataclass(frozen=True)
class SetField:
    """Zmiana jednego pola (bez zapisu do historii)."""
    field: str
    value: Any

    def __post_init__(self) -> None:
        if self.field not in FIELDS:
            raise ValueError(f"SetField: unknown field {self.field!r}")


@dataclass(frozen=True)
class Commit:
    """Koniec gestu (np. puszczenie suwaka): zapis bieżących parametrów do historii."""


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class LoadImage:
    image: Any  # PIL.Image | np.ndarray, już po downsamplingu
    path: Optional[str] = None


@dataclass(frozen=True)
class Export:
    size: Optional[int] = None


Intent = Union[NoOp, SetField, Commit, Undo, Redo, LoadImage, Export]

__all__ = ["Intent", "NoOp", "SetField", "Commit", "Undo", "Redo", "LoadImage", "Export"]
