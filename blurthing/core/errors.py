# blurthing/core/errors.py
# -*- coding: utf-8 -*-
"""
Błędy przeliczenia (compute) zgłaszane przez rdzeń.

Każdy wyjątek niesie `stage` (który etap zawiódł) i opcjonalnie `params`
(snapshot, przy którym to się stało). Orkiestrator łapie `ComputeError`
na swojej granicy i oddaje UI sam opis tekstowy.
"""
from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "ComputeError",
    "NoSourceImageError",
    "EncodeError",
    "DecodeError",
    "PreviewBufferError",
]


class ComputeError(Exception):
    """Nie udało się przeliczyć hasha lub podglądu."""

    stage: str = "compute"

    def __init__(self, message: str, *, params: Optional[Any] = None) -> None:
        super().__init__(message)
        self.params = params

    def describe(self) -> str:
        text = f"{self.stage}: {self}"
        if self.params is not None:
            text += f" (params: {self.params})"
        return text


class NoSourceImageError(ComputeError):
    """Operacja wymaga wczytanego obrazu, a żadnego nie ma."""

    stage = "source"

    def __init__(self, message: str = "source image is not available", **kw: Any) -> None:
        super().__init__(message, **kw)


class EncodeError(ComputeError):
    stage = "encode"


class DecodeError(ComputeError):
    stage = "decode"


class PreviewBufferError(ComputeError):
    """Zdekodowany bufor nie pasuje do W*H*4."""

    stage = "preview"
