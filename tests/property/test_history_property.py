# tests/property/test_history_property.py
from hypothesis import given, strategies as st

from blurthing.core.history import UndoHistory
from blurthing.core.params import ParamSnapshot

snapshots = st.builds(
    ParamSnapshot,
    components=st.tuples(st.integers(1, 8), st.integers(1, 8)),
    blur=st.integers(0, 32),
    hue_rotate=st.integers(-180, 180),
    brightness=st.integers(-100, 100),
    contrast=st.integers(-100, 100),
)


@given(st.lists(snapshots, min_size=1, max_size=12), st.data())
def test_k_undos_then_k_redos_restore_current(entries, data):
    h = UndoHistory()
    for e in entries:
        h.push(e)
    top = h.current()
    k = data.draw(st.integers(0, len(entries) - 1))
    for _ in range(k):
        h.undo()
    assert h.index() == len(entries) - 1 - k
    for _ in range(k):
        h.redo()
    assert h.current() == top
    assert not h.can_redo()


@given(st.lists(snapshots, min_size=2, max_size=10), snapshots)
def test_push_after_undo_discards_redo_tail(entries, extra):
    h = UndoHistory()
    for e in entries:
        h.push(e)
    h.undo()
    h.push(extra)
    assert h.current() == extra
    assert h.size() == len(entries)
    assert h.redo() is None
    assert h.entries()[:-1] == list(entries[:-1])


@given(st.lists(snapshots, max_size=10), st.integers(0, 15))
def test_undo_never_leaves_bounds(entries, n):
    h = UndoHistory()
    for e in entries:
        h.push(e)
    for _ in range(n):
        h.undo()
    if entries:
        assert h.index() == max(0, len(entries) - 1 - n)
        assert h.current() == entries[h.index()]
    else:
        assert h.index() == -1
        assert h.current() is None


@given(snapshots, st.sampled_from(["blur", "hue_rotate", "brightness", "contrast"]), st.integers(-50, 50))
def test_with_field_returns_new_snapshot(snap, field, value):
    changed = snap.with_field(field, value)
    assert getattr(changed, field) == value
    assert snap == ParamSnapshot.from_dict(snap.to_dict())
