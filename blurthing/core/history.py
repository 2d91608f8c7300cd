# blurthing/core/history.py
# -*- coding: utf-8 -*-
"""
BlurThing — Undo History (stack-based)

Cel:
- Utrzymywać liniową historię stanów (tu: snapshotów parametrów),
- Zapewnić undo/redo z kursorem wskazującym bieżący wpis,
- Publikować proste zdarzenia (opcjonalnie) na EventBus.

Konwencje:
- Wpisy są niemutowalne (ParamSnapshot jest frozen), więc nie kopiujemy ich.
- Kursor == None tylko gdy historia jest pusta.
- push() gdy kursor nie jest na końcu ucina gałąź redo.

Zdarzenia (opcjonalne; jeśli bus ma .publish):
- "history.changed" {size:int, index:int}
- "history.push"    {index:int}
- "history.undo"    {index:int}
- "history.redo"    {index:int}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger("blurthing.core.history")


class UndoHistory(Generic[T]):
    """
    Stos (undo/redo) stanów.
    Indeks wskazuje NA BIEŻĄCY stan (0..len-1) albo None (pusto).

    API:
      - push(item)               -> dorzuć nowy stan i ustaw jako bieżący
      - undo() / redo()          -> przesuń kursor, zwróć stan lub None
      - can_undo() / can_redo()
      - reset()                  -> wyczyść (nowy dokument)
      - current(), size(), index()
    """

    def __init__(self, *, bus: Optional[Any] = None, max_len: Optional[int] = None) -> None:
        self._bus = bus
        self._max_len = None if max_len is None else max(2, int(max_len))
        self._entries: List[T] = []
        self._index: Optional[int] = None

    # --------------------------- core ops ------------------------------------

    def push(self, item: T) -> None:
        """
        Dorzuca nowy stan na „wierzch” historii.
        Kasuje ewentualne „redo” (wszystko za bieżącym indeksem).
        """
        if self._index is None:
            self._entries = []
        elif self._index < len(self._entries) - 1:
            self._entries = self._entries[: self._index + 1]

        self._entries.append(item)
        self._index = len(self._entries) - 1
        self._trim_if_needed()
        self._publish("history.push", {"index": self._index})
        self._publish("history.changed", {"size": self.size(), "index": self.index()})

    def reset(self) -> None:
        self._entries = []
        self._index = None
        self._publish("history.changed", {"size": 0, "index": -1})

    # --------------------------- navigation ----------------------------------

    def can_undo(self) -> bool:
        return self._index is not None and self._index > 0

    def can_redo(self) -> bool:
        return self._index is not None and self._index < len(self._entries) - 1

    def undo(self) -> Optional[T]:
        if not self.can_undo():
            return None
        self._index -= 1
        self._publish("history.undo", {"index": self._index})
        self._publish("history.changed", {"size": self.size(), "index": self.index()})
        return self._entries[self._index]

    def redo(self) -> Optional[T]:
        if not self.can_redo():
            return None
        self._index += 1
        self._publish("history.redo", {"index": self._index})
        self._publish("history.changed", {"size": self.size(), "index": self.index()})
        return self._entries[self._index]

    # --------------------------- getters -------------------------------------

    def current(self) -> Optional[T]:
        if self._index is None:
            return None
        return self._entries[self._index]

    def size(self) -> int:
        return len(self._entries)

    def index(self) -> int:
        """Bieżący indeks albo -1 dla pustej historii."""
        return -1 if self._index is None else self._index

    def entries(self) -> List[T]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # --------------------------- utils ---------------------------------------

    def _trim_if_needed(self) -> None:
        # Ogranicz długość historii; zachowujemy ostatnie wpisy
        if self._max_len is None:
            return
        overflow = len(self._entries) - self._max_len
        if overflow > 0:
            # przesuwamy indeks o tyle, ile „odpadło” z przodu
            self._entries = self._entries[overflow:]
            self._index = max(0, (self._index or 0) - overflow)

    def _publish(self, topic: str, payload: Dict[str, Any]) -> None:
        if self._bus is None or not hasattr(self._bus, "publish"):
            return
        try:
            self._bus.publish(topic, dict(payload))
        except Exception:
            # historia działa również bez busa
            logger.exception("history: publish %s failed", topic)
