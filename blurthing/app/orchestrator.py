# blurthing/app/orchestrator.py
# -*- coding: utf-8 -*-
"""
Recompute Orchestrator: jedyne miejsce, które układa
pipeline -> encode -> decode -> podgląd i tłumaczy błędy.

Publikowane zdarzenia na EventBus (opcjonalnym):
  • image.loaded   {width, height, path}
  • compute.done   {hash, size}
  • compute.error  {error, stage}
  • export.done    {hash, size, image}
  • history.*      (z UndoHistory)

Zasady:
  • Mutacja parametrów i commit do historii są rozdzielone: przeciąganie
    suwaka nie zaśmieca historii, tylko Commit tworzy wpis.
  • Błąd compute nigdy nie wychodzi poza metody interaktywne: poprzedni
    wynik zostaje, UI dostaje opis tekstowy.
  • Jednowątkowo: sesję obsługuje jeden wątek naraz.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np

from blurthing.app.intents import Commit, Export, Intent, LoadImage, NoOp, Redo, SetField, Undo
from blurthing.app.state import ComputedResult, Session
from blurthing.config import BlurThingConfig
from blurthing.core import codec
from blurthing.core.errors import ComputeError, NoSourceImageError, PreviewBufferError
from blurthing.core.history import UndoHistory
from blurthing.core.params import ParamSnapshot
from blurthing.core.pipeline import apply_transforms
from blurthing.core.utils import freeze, rgba_from_bytes, to_u8_rgba

logger = logging.getLogger("blurthing.app.orchestrator")


class Orchestrator:

    def __init__(self, config: Optional[BlurThingConfig] = None, *, bus: Optional[Any] = None) -> None:
        self.config = config or BlurThingConfig()
        self.bus = bus

    # ------------------------- PUBLIC API -------------------------

    def new_session(self) -> Session:
        """Pusta sesja; historia zawiera już domyślny snapshot."""
        session = Session(history=UndoHistory(bus=self.bus, max_len=self.config.history_limit))
        self._reset_settings(session)
        return session

    def compute(self, source: Optional[np.ndarray], params: ParamSnapshot, output_size: int) -> ComputedResult:
        """
        Pipeline -> encode -> decode. Rzuca ComputeError (z `stage`) przy pierwszym błędzie.
        """
        if source is None:
            raise NoSourceImageError(params=params)
        size = int(output_size)

        buffer = apply_transforms(source, params)
        height, width = buffer.shape[:2]
        x, y = params.components

        try:
            hash_str = codec.encode(x, y, width, height, buffer)
        except ComputeError as ex:
            ex.params = params
            raise
        try:
            decoded = codec.decode(hash_str, size, size, self.config.punch)
        except ComputeError as ex:
            ex.params = params
            raise

        expected = size * size * 4
        if len(decoded) != expected:
            raise PreviewBufferError(
                f"failed to create preview image from decoded buffer "
                f"({len(decoded)} bytes, expected {expected})",
                params=params,
            )
        preview = rgba_from_bytes(decoded, size, size)
        return ComputedResult(hash=hash_str, preview=preview, params=params)

    def load_new_image(self, session: Session, image: Any, *, path: Optional[str] = None) -> Optional[str]:
        """
        Podmienia obraz źródłowy (już po downsamplingu), resetuje parametry
        i historię, wrzuca domyślny snapshot i liczy pierwszy podgląd.
        """
        session.source = freeze(to_u8_rgba(image))
        session.source_path = path
        session.computed = None
        self._reset_settings(session)
        h, w = session.source.shape[:2]
        logger.info("image loaded: %dx%d (%s)", w, h, path or "<buffer>")
        self._emit("image.loaded", {"width": w, "height": h, "path": path})
        return self._recompute(session)

    def apply_mutation(self, session: Session, field: str, value: Any) -> Optional[str]:
        """Zmiana jednego pola, bez zapisu do historii; od razu przeliczenie podglądu."""
        session.params = session.params.with_field(field, value)
        return self._recompute(session)

    def commit(self, session: Session) -> None:
        session.history.push(session.params)

    def undo(self, session: Session) -> Optional[str]:
        # niezapisana edycja: najpierw wracamy do bieżącego wpisu historii
        if session.has_pending_edit:
            target = session.history.current()
        else:
            target = session.history.undo()
        if target is None:
            return None
        session.params = target
        return self._recompute(session)

    def redo(self, session: Session) -> Optional[str]:
        target = session.history.redo()
        if target is None:
            return None
        session.params = target
        return self._recompute(session)

    def export(self, session: Session, output_size: Optional[int] = None) -> ComputedResult:
        """Jednorazowy render w większej rozdzielczości, bieżącymi parametrami; historia bez zmian."""
        size = int(self.config.export_size if output_size is None else output_size)
        return self.compute(session.source, session.params, size)

    def export_checked(self, session: Session,
                       output_size: Optional[int] = None) -> Tuple[Optional[ComputedResult], Optional[str]]:
        try:
            result = self.export(session, output_size)
        except ComputeError as ex:
            return None, self._report(session, ex)
        self._emit("export.done", {"hash": result.hash, "size": result.size, "image": result.preview})
        return result, None

    def dispatch(self, session: Session, intent: Intent) -> Optional[str]:
        """Pojedynczy punkt wejścia dla intencji UI. Zwraca opis błędu albo None."""
        logger.debug("dispatch %r", intent)
        if isinstance(intent, SetField):
            return self.apply_mutation(session, intent.field, intent.value)
        if isinstance(intent, Commit):
            self.commit(session)
            return None
        if isinstance(intent, Undo):
            return self.undo(session)
        if isinstance(intent, Redo):
            return self.redo(session)
        if isinstance(intent, LoadImage):
            return self.load_new_image(session, intent.image, path=intent.path)
        if isinstance(intent, Export):
            _result, err = self.export_checked(session, intent.size)
            return err
        if isinstance(intent, NoOp):
            return None
        raise TypeError(f"dispatch: unsupported intent {intent!r}")

    # ------------------------- INTERNAL --------------------------

    def _reset_settings(self, session: Session) -> None:
        session.params = ParamSnapshot()
        session.history.reset()
        session.history.push(session.params)

    def _recompute(self, session: Session) -> Optional[str]:
        if not session.has_image:
            return None
        try:
            result = self.compute(session.source, session.params, self.config.preview_size)
        except ComputeError as ex:
            return self._report(session, ex)
        session.computed = result
        session.last_error = None
        self._emit("compute.done", {"hash": result.hash, "size": result.size})
        return None

    def _report(self, session: Session, ex: ComputeError) -> str:
        msg = f"failed to compute blurhash: {ex.describe()}"
        logger.warning(msg)
        session.last_error = msg
        self._emit("compute.error", {"error": msg, "stage": ex.stage})
        return msg

    def _emit(self, topic: str, payload: Dict[str, Any]) -> None:
        if self.bus is None:
            return
        self.bus.publish(topic, payload)
