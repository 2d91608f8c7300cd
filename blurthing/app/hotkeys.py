# blurthing/app/hotkeys.py
# -*- coding: utf-8 -*-
"""Skróty klawiszowe (z wciśniętym Ctrl/Cmd) -> intencja rdzenia albo akcja UI."""
from __future__ import annotations

from typing import Optional, Union

from blurthing.app.intents import Export, Intent, Redo, Undo

# akcje obsługiwane wyłącznie przez UI (dialog pliku, schowek)
SELECT_IMAGE = "select_image"
COPY_HASH = "copy_hash"


def handle_hotkey(key: str, *, command: bool, shift: bool = False) -> Optional[Union[Intent, str]]:
    if not command:
        return None
    k = key.lower()
    if k == "o":
        return SELECT_IMAGE
    if k == "c":
        return COPY_HASH
    if k == "s":
        return Export()
    if k == "z":
        return Redo() if shift else Undo()
    return None
