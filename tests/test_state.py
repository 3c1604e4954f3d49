import json

from wormgrid.engine import state as state_mod
from wormgrid.engine.state import BLOCKED, NOT_FOUND, REMOVED, GameState
from wormgrid.geometry import Direction
from wormgrid.grid import WormState
from wormgrid.snapshot import LevelSnapshot, WormRecord

def two_worm_level():
    # 3x3: worm 0 points UP at worm 1, which lies along the top row facing RIGHT.
    return LevelSnapshot(width=3, height=3, worms=(
        WormRecord(id=0, cells=((1, 1), (1, 2)), direction=Direction.UP, color=0xF87171),
        WormRecord(id=1, cells=((2, 0), (1, 0)), direction=Direction.RIGHT, color=0x60A5FA),
    ))

def test_1x2_example():
    gs = GameState(1, 2)
    snap = LevelSnapshot(width=1, height=2, worms=(
        WormRecord(id=0, cells=((0, 0), (0, 1)), direction=Direction.UP, color=0x34D399),
    ))
    assert gs.restore(snap)
    assert gs.obstruction(0, 0, Direction.UP, 0) == []
    res = gs.try_remove(0)
    assert res.ok and res.reason == REMOVED
    assert gs.is_cleared()
    assert gs.grid.empty_cells() == [(0, 0), (0, 1)]

def test_blocked_removal_reports_blocker_and_changes_nothing():
    gs = GameState(3, 3)
    assert gs.restore(two_worm_level())
    res = gs.try_remove(0)
    assert not res.ok
    assert res.reason == BLOCKED
    assert res.blockers == [1]
    assert set(gs.grid.worms) == {0, 1}
    assert gs.moves == 0

    # worm 1's own body is behind its head, so it leaves freely
    worm1 = gs.grid.worms[1]
    assert gs.try_remove(1).ok
    assert worm1.state is WormState.REMOVED
    assert 1 not in gs.grid.worms
    assert gs.try_remove(0).ok
    assert gs.is_cleared()
    assert gs.moves == 2

def test_remove_unknown_worm():
    gs = GameState(3, 3)
    res = gs.try_remove(42)
    assert not res.ok and res.reason == NOT_FOUND and res.blockers == []

def test_generate_and_clear_with_solution_order():
    gs = GameState(10, 10, seed=3)
    assert gs.generate(0.9, 0)
    assert gs.snapshot() is not None
    for wid in list(gs.solution):
        assert gs.try_remove(wid).ok, f"worm {wid} should be free"
    assert gs.is_cleared()

def test_hints_clear_the_board():
    gs = GameState(8, 8, seed=11)
    assert gs.generate()
    while not gs.is_cleared():
        wid = gs.hint()
        assert wid is not None
        assert gs.is_free(wid)
        assert gs.try_remove(wid).ok
    assert gs.hint() is None

def test_snapshot_survives_play_and_round_trips():
    gs = GameState(10, 10, seed=21)
    assert gs.generate()
    snap = gs.snapshot()
    first = gs.solution[0]
    assert gs.try_remove(first).ok
    assert gs.snapshot() is snap
    assert any(r.id == first for r in snap.worms)

    other = GameState(4, 4)
    assert other.restore(snap)
    assert (other.width, other.height) == (10, 10)
    assert sorted(other.grid.worms) == sorted(r.id for r in snap.worms)
    for r in snap.worms:
        w = other.grid.worms[r.id]
        assert tuple(w.cells) == r.cells
        assert w.direction == r.direction
        assert w.color == r.color

def test_json_export_import():
    gs = GameState(9, 9, seed=5)
    assert gs.generate()
    text = gs.export_json()
    data = json.loads(text)
    assert data["v"] == 1 and data["w"] == 9 and data["h"] == 9
    assert len(data["worms"]) == len(gs.snapshot().worms)

    fresh = GameState(2, 2)
    assert fresh.import_json(text)
    assert fresh.snapshot() == gs.snapshot()
    assert fresh.export_json() == text

def test_bad_import_leaves_board_alone():
    gs = GameState(3, 3)
    assert gs.restore(two_worm_level())
    grid = gs.grid
    assert not gs.import_json("{not json")
    assert not gs.import_json(json.dumps({"w": 3, "worms": []}))
    overlapping = {"v": 1, "w": 3, "h": 3, "worms": [
        {"id": 0, "cells": [{"x": 0, "y": 0}], "dir": 0, "color": 1},
        {"id": 1, "cells": [{"x": 0, "y": 0}], "dir": 0, "color": 1},
    ]}
    assert not gs.import_json(json.dumps(overlapping))
    # well-typed but far too large to allocate
    assert not gs.import_json(json.dumps({"v": 1, "w": 10**6, "h": 10**6, "worms": []}))
    assert gs.grid is grid
    assert (gs.width, gs.height) == (3, 3)
    assert gs.snapshot() == two_worm_level()

def test_restore_rejects_hand_built_garbage():
    gs = GameState(3, 3)
    bad = LevelSnapshot(width=3, height=3, worms=(
        WormRecord(id=0, cells=((0, 0), (2, 2)), direction=Direction.UP, color=0),
    ))
    assert not gs.restore(bad)
    assert gs.snapshot() is None

def test_reset_level_puts_worms_back():
    gs = GameState(3, 3)
    assert gs.restore(two_worm_level())
    assert gs.try_remove(1).ok
    assert gs.reset_level()
    assert set(gs.grid.worms) == {0, 1}
    assert gs.moves == 0

def test_failed_generation_keeps_previous_board(monkeypatch):
    gs = GameState(3, 3)
    assert gs.restore(two_worm_level())
    grid = gs.grid
    monkeypatch.setattr(state_mod, "generate_level", lambda *a, **k: None)
    assert not gs.generate()
    assert gs.grid is grid
    assert gs.export_json() == two_worm_level().to_json()

def test_no_level_yet():
    gs = GameState(5, 5)
    assert gs.export_json() is None
    assert not gs.reset_level()
    assert gs.is_cleared()
