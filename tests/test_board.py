"""
Test script for the board model

Covers:
1. Element codes and symbols
2. Index <-> coordinate mapping and neighbors
3. Freeness rule
4. Composition check and text notation
5. Legal step generation, including the metal chain and Gold

Usage:
    python test_board.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from sigmar.solver import (
    Board,
    BOARD_CELLS,
    Element,
    HexCoord,
    INITIAL_COUNTS,
    INITIAL_TILE_COUNT,
    Step,
    all_coords,
    coord_to_index,
    index_to_coord,
    neighbors_cw,
)
from sample_boards import solvable_board

E = Element


def board_with(cells):
    """Board from {(row, col): element}."""
    return Board.from_cells({HexCoord(r, c): e for (r, c), e in cells.items()})


def idx(row, col):
    return coord_to_index(HexCoord(row, col))


def test_elements():
    """Test element codes, symbols and the fresh deal composition."""
    print("\n" + "="*60)
    print("TEST: Elements")
    print("="*60)

    assert E.SALT == 1 and E.GOLD == 14
    assert Element.from_code(0) is None
    assert Element.from_code(8) is E.QUICKSILVER
    with pytest.raises(ValueError):
        Element.from_code(15)

    symbols = {e.symbol for e in Element}
    print(f"  Symbols: {''.join(e.symbol for e in Element)}")
    assert len(symbols) == 14
    assert all(Element.from_symbol(e.symbol) is e for e in Element)
    assert Element.from_symbol(".") is None
    with pytest.raises(ValueError):
        Element.from_symbol("x")

    print(f"  Fresh deal: {INITIAL_TILE_COUNT} tiles")
    assert INITIAL_TILE_COUNT == 55
    assert set(INITIAL_COUNTS) == set(Element)

    print("  [PASS] Element tests")


def test_coordinate_bijection():
    """Every index maps to a distinct on-board coordinate and back."""
    print("\n" + "="*60)
    print("TEST: Coordinate Bijection")
    print("="*60)

    coords = [index_to_coord(i) for i in range(BOARD_CELLS)]
    assert len(set(coords)) == BOARD_CELLS
    for i, c in enumerate(coords):
        assert abs(c.row) <= 5 and abs(c.col) <= 5 and abs(c.row - c.col) <= 5
        assert coord_to_index(c) == i
    assert coords == all_coords()

    assert index_to_coord(0) == HexCoord(-5, -5)
    assert index_to_coord(5) == HexCoord(-5, 0)
    assert index_to_coord(6) == HexCoord(-4, -5)
    assert index_to_coord(45) == HexCoord(0, 0)
    assert index_to_coord(90) == HexCoord(5, 5)
    print(f"  First/center/last: {coords[0]} {coords[45]} {coords[90]}")

    with pytest.raises(ValueError):
        index_to_coord(91)
    with pytest.raises(ValueError):
        index_to_coord(-1)
    with pytest.raises(ValueError):
        coord_to_index(HexCoord(5, -1))

    print("  [PASS] Coordinate bijection tests")


def test_neighbors():
    """Neighbor slots are clockwise from east, None off the board."""
    print("\n" + "="*60)
    print("TEST: Neighbors")
    print("="*60)

    center = neighbors_cw(HexCoord(0, 0))
    assert center == [
        HexCoord(1, 0), HexCoord(1, 1), HexCoord(0, 1),
        HexCoord(-1, 0), HexCoord(-1, -1), HexCoord(0, -1),
    ]

    corner = neighbors_cw(HexCoord(-5, -5))
    print(f"  Corner (-5,-5): {corner}")
    assert len(corner) == 6
    assert corner[:3] == [HexCoord(-4, -5), HexCoord(-4, -4), HexCoord(-5, -4)]
    assert corner[3:] == [None, None, None]

    for c in all_coords():
        slots = neighbors_cw(c)
        assert len(slots) == 6
        present = [n for n in slots if n is not None]
        assert len(set(present)) == len(present)
        for n in present:
            assert (n.row - c.row, n.col - c.col) in {(1, 0), (1, 1), (0, 1), (-1, 0), (-1, -1), (0, -1)}

    print("  [PASS] Neighbor tests")


def test_freeness():
    """A tile is free with three consecutive open neighbor slots."""
    print("\n" + "="*60)
    print("TEST: Freeness")
    print("="*60)

    # Slots 3, 4, 5 occupied; 0, 1, 2 open
    board = board_with({
        (0, 0): E.AIR,
        (-1, 0): E.FIRE, (-1, -1): E.FIRE, (0, -1): E.FIRE,
    })
    assert board.is_free(HexCoord(0, 0))

    # Slots 0, 3, 5 occupied: no three open in a row
    board = board_with({
        (0, 0): E.AIR,
        (1, 0): E.FIRE, (-1, 0): E.FIRE, (0, -1): E.FIRE,
    })
    assert not board.is_free(HexCoord(0, 0))

    # Wraparound: slots 5, 0, 1 open
    board = board_with({
        (0, 0): E.AIR,
        (0, 1): E.FIRE, (-1, 0): E.FIRE, (-1, -1): E.FIRE,
    })
    assert board.is_free(HexCoord(0, 0))

    # Off-board slots count as open
    board = board_with({(-5, -5): E.AIR, (-4, -5): E.FIRE, (-4, -4): E.FIRE, (-5, -4): E.FIRE})
    assert board.is_free(HexCoord(-5, -5))

    # Fully surrounded
    board = board_with({(0, 0): E.AIR, **{(n.row, n.col): E.FIRE for n in neighbors_cw(HexCoord(0, 0))}})
    assert not board.is_free(HexCoord(0, 0))
    free = [i for i, _ in board.free_elements()]
    assert idx(0, 0) not in free
    assert len(free) == 6

    print("  [PASS] Freeness tests")


def test_packing():
    """Cells read back what was written, neighbors untouched."""
    print("\n" + "="*60)
    print("TEST: Packing")
    print("="*60)

    board = Board()
    assert board.is_solved()
    board.set(10, E.GOLD)
    board.set(11, E.SALT)
    assert board.get(10) is E.GOLD
    assert board.get(11) is E.SALT
    board.set(10, None)
    assert board.get(10) is None
    assert board.get(11) is E.SALT
    assert board.tile_count() == 1
    assert not board.is_solved()

    copy = board.copy()
    assert copy == board
    copy.set(90, E.IRON)
    assert copy != board
    assert board.get(90) is None

    assert len(board.to_bytes()) == 46
    assert Board(board.to_bytes()) == board

    print("  [PASS] Packing tests")


def test_composition():
    """Only the exact fresh deal composition is a valid initial state."""
    print("\n" + "="*60)
    print("TEST: Composition")
    print("="*60)

    board = solvable_board()
    print(f"  Sample board: {board.tile_count()} tiles")
    assert board.tile_count() == 55
    assert board.is_valid_initial_state()

    # One tile fewer
    removed = board.copy()
    removed.set(HexCoord(-5, -5), None)
    assert not removed.is_valid_initial_state()

    # One extra tile
    extra = board.copy()
    extra.set(HexCoord(-5, -3), E.SALT)
    assert not extra.is_valid_initial_state()

    # Same tile count, wrong mix
    swapped = board.copy()
    swapped.set(HexCoord(-5, -5), E.EARTH)
    assert not swapped.is_valid_initial_state()

    assert not Board().is_valid_initial_state()

    print("  [PASS] Composition tests")


def test_text_notation():
    """Boards render to text and parse back unchanged."""
    print("\n" + "="*60)
    print("TEST: Text Notation")
    print("="*60)

    board = solvable_board()
    text = board.to_text()
    print(text)

    lines = text.splitlines()
    assert len(lines) == 11
    assert len(lines[0].split()) == 6
    assert len(lines[5].split()) == 11
    assert Board.from_text(text) == board

    empty = Board.from_text("\n".join("." * (11 - abs(r)) for r in range(-5, 6)))
    assert empty.is_solved()

    with pytest.raises(ValueError):
        Board.from_text("...")
    with pytest.raises(ValueError):
        Board.from_text("\n".join("." * 11 for _ in range(11)))

    print("  [PASS] Text notation tests")


def test_step_order():
    """Steps come out grouped: salt pairs, salt+basic, basic pairs, mors+vitae."""
    print("\n" + "="*60)
    print("TEST: Step Order")
    print("="*60)

    board = board_with({
        (-5, -5): E.SALT,
        (-5, -2): E.SALT,
        (-3, -3): E.AIR,
        (0, 0): E.FIRE,
        (0, 3): E.FIRE,
        (3, 0): E.MORS,
        (5, 5): E.VITAE,
    })
    s1, s2 = idx(-5, -5), idx(-5, -2)
    air = idx(-3, -3)
    f1, f2 = idx(0, 0), idx(0, 3)
    mors, vitae = idx(3, 0), idx(5, 5)

    steps = board.valid_steps()
    for step in steps:
        print(f"    {step}")

    assert steps == [
        Step(s1, s2),
        Step(s1, air), Step(s1, f1), Step(s1, f2),
        Step(s2, air), Step(s2, f1), Step(s2, f2),
        Step(f1, f2),
        Step(mors, vitae),
    ]

    print("  [PASS] Step order tests")


def test_blocked_tiles_excluded():
    """Tiles that are not free never appear in a step."""
    print("\n" + "="*60)
    print("TEST: Blocked Tiles")
    print("="*60)

    cells = {(n.row, n.col): E.WATER for n in neighbors_cw(HexCoord(0, 0))}
    cells[(0, 0)] = E.WATER
    board = board_with(cells)

    steps = board.valid_steps()
    print(f"  {len(steps)} steps")
    center = idx(0, 0)
    assert steps
    assert all(center not in (s.first, s.second) for s in steps)
    # Six free waters: 15 pairs
    assert len(steps) == 15

    print("  [PASS] Blocked tile tests")


def test_metal_chain():
    """Only the lowest metal on the board can be taken, and Gold only last."""
    print("\n" + "="*60)
    print("TEST: Metal Chain")
    print("="*60)

    lead, tin, q1, q2, gold = (-5, -5), (-5, 0), (0, 0), (5, 5), (0, -5)
    board = board_with({
        lead: E.LEAD,
        tin: E.TIN,
        q1: E.QUICKSILVER,
        q2: E.QUICKSILVER,
        gold: E.GOLD,
    })
    steps = board.valid_steps()
    print(f"  Lead+Tin+QS+Gold: {[str(s) for s in steps]}")
    assert steps == [Step(idx(*lead), idx(*q1)), Step(idx(*lead), idx(*q2))]

    # Lead gone: Tin is next
    board.set(HexCoord(*lead), None)
    steps = board.valid_steps()
    assert steps == [Step(idx(*tin), idx(*q1)), Step(idx(*tin), idx(*q2))]

    # No metals left: Gold alone
    board.set(HexCoord(*tin), None)
    steps = board.valid_steps()
    print(f"  QS+Gold: {[str(s) for s in steps]}")
    assert steps == [Step(idx(*gold), idx(*gold))]
    assert steps[0].is_single
    assert steps[0].cells == (idx(*gold),)

    print("  [PASS] Metal chain tests")


def test_blocked_metal_gates_everything():
    """A buried metal suppresses later metals and Gold even when they are free."""
    print("\n" + "="*60)
    print("TEST: Blocked Metal")
    print("="*60)

    cells = {(n.row, n.col): E.WATER for n in neighbors_cw(HexCoord(0, 0))}
    cells[(0, 0)] = E.LEAD
    cells[(-5, -5)] = E.TIN
    cells[(5, 5)] = E.QUICKSILVER
    cells[(0, -5)] = E.GOLD
    board = board_with(cells)

    assert not board.is_free(HexCoord(0, 0))
    steps = board.valid_steps()
    touched = {c for s in steps for c in (s.first, s.second)}
    assert idx(0, 0) not in touched
    assert idx(-5, -5) not in touched
    assert idx(0, -5) not in touched
    assert idx(5, 5) not in touched
    assert len(steps) == 15

    # A free metal with no quicksilver still holds Gold back
    board = board_with({(0, 0): E.LEAD, **{(n.row, n.col): E.SALT for n in neighbors_cw(HexCoord(0, 0))[:3]},
                        (-5, -5): E.GOLD})
    assert all(s.first != idx(-5, -5) for s in board.valid_steps())

    print("  [PASS] Blocked metal tests")


def test_apply():
    """Applying a step clears its cells."""
    print("\n" + "="*60)
    print("TEST: Apply")
    print("="*60)

    board = solvable_board()
    step = board.valid_steps()[-1]
    a, b = board.get(step.first), board.get(step.second)
    print(f"  Applying {step}: {a.name} + {b.name}")
    board.apply(step)
    assert board.get(step.first) is None
    assert board.get(step.second) is None
    assert board.tile_count() == 53

    print("  [PASS] Apply tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# BOARD MODEL TESTS")
    print("#"*60)

    tests = [
        ("Elements", test_elements),
        ("Coordinate Bijection", test_coordinate_bijection),
        ("Neighbors", test_neighbors),
        ("Freeness", test_freeness),
        ("Packing", test_packing),
        ("Composition", test_composition),
        ("Text Notation", test_text_notation),
        ("Step Order", test_step_order),
        ("Blocked Tiles", test_blocked_tiles_excluded),
        ("Metal Chain", test_metal_chain),
        ("Blocked Metal", test_blocked_metal_gates_everything),
        ("Apply", test_apply),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
