# tests/unit/test_history.py
from blurthing.core.history import UndoHistory


def _filled(*items, **kw):
    h = UndoHistory(**kw)
    for it in items:
        h.push(it)
    return h


def test_empty_history_is_noop():
    h = UndoHistory()
    assert h.current() is None
    assert h.index() == -1
    assert h.undo() is None
    assert h.redo() is None
    assert h.size() == 0


def test_first_push_sets_cursor_at_zero():
    h = _filled("a")
    assert h.index() == 0
    assert h.current() == "a"
    # brak poprzednika pierwszego wpisu
    assert h.undo() is None
    assert h.current() == "a"


def test_undo_redo_walks_cursor():
    h = _filled("a", "b", "c")
    assert h.undo() == "b"
    assert h.undo() == "a"
    assert h.undo() is None
    assert h.index() == 0
    assert h.redo() == "b"
    assert h.redo() == "c"
    assert h.redo() is None
    assert h.index() == 2


def test_push_after_undo_discards_redo_branch():
    h = _filled("a", "b", "c")
    h.undo()
    h.undo()
    h.push("x")
    assert h.entries() == ["a", "x"]
    assert h.redo() is None
    assert not h.can_redo()
    assert h.undo() == "a"


def test_reset_clears_and_next_push_starts_over():
    h = _filled("a", "b")
    h.reset()
    assert h.size() == 0
    assert h.current() is None
    h.push("z")
    assert h.entries() == ["z"]
    assert h.index() == 0
    assert h.undo() is None


def test_can_undo_can_redo_flags():
    h = _filled("a")
    assert not h.can_undo() and not h.can_redo()
    h.push("b")
    assert h.can_undo() and not h.can_redo()
    h.undo()
    assert not h.can_undo() and h.can_redo()


def test_max_len_drops_oldest_and_keeps_cursor_on_same_entry():
    h = _filled(1, 2, 3, 4, 5, max_len=3)
    assert h.entries() == [3, 4, 5]
    assert h.current() == 5
    h.undo()
    h.push(6)
    assert h.entries() == [3, 4, 6]
    assert h.current() == 6


def test_history_publishes_events(events):
    bus, seen = events
    h = UndoHistory(bus=bus)
    h.push("a")
    h.push("b")
    h.undo()
    topics = [t for t, _ in seen]
    assert "history.push" in topics
    assert "history.undo" in topics
    assert seen[-1] == ("history.changed", {"size": 2, "index": 0})


def test_failing_bus_does_not_break_history():
    class Broken:
        def publish(self, topic, payload):
            raise RuntimeError("boom")

    h = UndoHistory(bus=Broken())
    h.push("a")
    h.push("b")
    assert h.undo() == "a"
