# blurthing/app/event_bus.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, List, Optional

logger = logging.getLogger("blurthing.app.event_bus")

Callback = Callable[[str, Dict[str, Any]], Any]


class EventBus:
    """
    Prosty, synchroniczny event bus (szew między rdzeniem a UI):
      • subscribe(topic, cb) – rejestruje callback: (topic:str, payload:dict) -> None
      • publish(topic, payload) – wywołuje subskrybentów po kolei, na wątku wołającego

    Wyjątek w callbacku jest logowany i nie przerywa pozostałych subskrybentów
    ani operacji rdzenia, która publikowała zdarzenie.
    Subskrypcja "*" dostaje wszystkie tematy.
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[Callback]] = defaultdict(list)

    # ───────────────── subscribe ─────────────────
    def subscribe(self, topic: str, cb: Callback) -> None:
        if not callable(cb):
            raise TypeError("subscribe: cb must be callable")
        self._subs[topic].append(cb)

    # ───────────────── publish (sync) ─────────────────
    def publish(self, topic: str, payload: Optional[Dict[str, Any]] = None) -> None:
        data = dict(payload or {})
        cbs = list(self._subs.get(topic, [])) + list(self._subs.get("*", []))
        logger.debug("publish %s -> %d subs", topic, len(cbs))
        for cb in cbs:
            try:
                cb(topic, data)
            except Exception:
                logger.exception("event bus: subscriber for %r failed", topic)

