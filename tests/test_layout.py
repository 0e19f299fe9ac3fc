import itertools

import pytest

from hillchart.alignment import AlignmentMemory
from hillchart.curve import HillCurve
from hillchart.layout import raw_overlap, resolve_layout, sort_markers
from hillchart.model import Marker


@pytest.fixture
def curve():
    return HillCurve()


def _snapshot(placed):
    return [(p.marker.id, p.x, p.y, p.stack_depth, p.focus) for p in placed]


def _by_id(placed):
    return {p.marker.id: p for p in placed}


def test_sort_orders_by_position():
    markers = [Marker(1, "c", 700.0), Marker(2, "a", 300.0), Marker(3, "b", 500.0)]

    assert [m.id for m in sort_markers(markers, 5.0)] == [2, 3, 1]


def test_sort_puts_higher_rank_first_within_tie_epsilon():
    markers = [
        Marker("low", "low", 400.0, priority_rank=1),
        Marker("high", "high", 403.0, priority_rank=5),
        Marker("far", "far", 420.0, priority_rank=9),
    ]

    assert [m.id for m in sort_markers(markers, 5.0)] == ["high", "low", "far"]


def test_sort_falls_back_to_list_order_for_identical_markers():
    markers = [Marker("b", "b", 400.0), Marker("a", "a", 400.0)]

    assert [m.id for m in sort_markers(markers, 5.0)] == ["b", "a"]


def test_raw_overlap_needs_both_horizontal_and_vertical_closeness(curve):
    near_start = Marker(1, "a", 320.0)
    close = Marker(2, "b", 334.0)
    far = Marker(3, "c", 880.0)
    uphill = Marker(4, "d", 410.0)

    assert raw_overlap(near_start, close, curve)
    assert not raw_overlap(near_start, far, curve)
    # Within 100 units horizontally but the curve climbs too much in between.
    assert abs(uphill.position - near_start.position) < 100
    assert not raw_overlap(near_start, uphill, curve)


def test_close_pair_shares_x_and_stacks(curve):
    memory = AlignmentMemory()
    markers = [Marker(1, "a", 320.0), Marker(2, "b", 334.0), Marker(3, "c", 880.0)]

    placed = _by_id(resolve_layout(markers, memory, curve))

    assert placed[1].x == placed[2].x == 320.0
    assert placed[1].stack_depth == 0
    assert placed[2].stack_depth == 1
    assert placed[1].y == pytest.approx(curve.height_at(320.0))
    assert placed[2].y == pytest.approx(curve.height_at(320.0) - 30.0)
    assert placed[3].x == 880.0
    assert placed[3].y == pytest.approx(curve.height_at(880.0))
    assert memory.get(1, 2) == 320.0


def test_focus_sits_on_curve_and_is_placed_first(curve):
    memory = AlignmentMemory()
    markers = [Marker(1, "a", 320.0), Marker(2, "b", 600.0, priority_rank=3)]
    markers[1].position = 330.0

    placed = resolve_layout(markers, memory, curve, focus_id=2)

    assert placed[0].marker.id == 2 and placed[0].focus
    assert placed[0].stack_depth == 0
    assert placed[0].y == pytest.approx(curve.height_at(placed[0].x))


def test_focus_moves_to_meet_stationary_marker(curve):
    memory = AlignmentMemory()
    markers = [Marker(1, "still", 320.0), Marker(2, "dragged", 330.0, priority_rank=2)]

    placed = _by_id(resolve_layout(markers, memory, curve, focus_id=2))

    assert placed[2].x == 320.0
    assert placed[2].y == pytest.approx(curve.height_at(320.0))
    assert placed[1].x == 320.0
    assert placed[1].stack_depth == 1
    assert memory.get(1, 2) == 320.0


def test_focus_prefers_any_remembered_alignment_over_a_new_one(curve):
    memory = AlignmentMemory()
    markers = [
        Marker("A", "left", 300.0),
        Marker("F", "dragged", 310.0, priority_rank=5),
        Marker("B", "right", 320.0),
    ]
    memory.set("F", "B", 320.0)

    first = resolve_layout(markers, memory, curve, focus_id="F")
    placed = _by_id(first)

    assert placed["F"].x == 320.0
    assert memory.get("F", "B") == 320.0
    assert memory.get("F", "A") == 320.0
    assert placed["A"].x == placed["B"].x == 320.0
    assert _snapshot(resolve_layout(markers, memory, curve, focus_id="F")) == _snapshot(first)


def test_remembered_alignment_survives_small_moves(curve):
    memory = AlignmentMemory()
    a = Marker(1, "a", 320.0)
    b = Marker(2, "b", 334.0)
    resolve_layout([a, b], memory, curve)

    b.position = 340.0
    placed = _by_id(resolve_layout([a, b], memory, curve))

    assert placed[2].x == 320.0
    assert memory.get(1, 2) == 320.0


def test_alignment_decays_once_raw_positions_separate(curve):
    memory = AlignmentMemory()
    a = Marker(1, "a", 320.0)
    b = Marker(2, "b", 334.0)
    resolve_layout([a, b], memory, curve)
    assert len(memory) == 1

    b.position = 600.0
    placed = _by_id(resolve_layout([a, b], memory, curve, focus_id=2))

    assert len(memory) == 0
    assert placed[1].x == 320.0 and placed[1].stack_depth == 0
    assert placed[2].x == 600.0 and placed[2].stack_depth == 0


def test_entries_for_missing_markers_are_dropped(curve):
    memory = AlignmentMemory()
    memory.set(1, 99, 320.0)

    resolve_layout([Marker(1, "a", 320.0)], memory, curve)

    assert len(memory) == 0


def test_three_markers_on_one_spot_stack_progressively(curve):
    memory = AlignmentMemory()
    markers = [Marker(i, f"m{i}", 300.0) for i in range(3)]

    placed = resolve_layout(markers, memory, curve)

    assert sorted(p.stack_depth for p in placed) == [0, 1, 2]
    assert len({p.x for p in placed}) == 1


def test_chained_overlap_does_not_share_a_slot(curve):
    memory = AlignmentMemory()
    a, b, c = Marker(1, "a", 250.0), Marker(2, "b", 330.0), Marker(3, "c", 360.0)
    assert raw_overlap(a, b, curve) and raw_overlap(b, c, curve)
    assert not raw_overlap(a, c, curve)

    placed = _by_id(resolve_layout([a, b, c], memory, curve))

    assert placed[2].x == placed[3].x
    assert placed[2].stack_depth != placed[3].stack_depth


def test_layout_is_idempotent(curve):
    memory = AlignmentMemory()
    markers = [
        Marker(1, "a", 300.0, priority_rank=1),
        Marker(2, "b", 310.0),
        Marker(3, "c", 318.0, priority_rank=4),
        Marker(4, "d", 600.0),
        Marker(5, "e", 890.0, priority_rank=2),
        Marker(6, "f", 900.0),
    ]

    first = _snapshot(resolve_layout(markers, memory, curve, focus_id=3))
    second = _snapshot(resolve_layout(markers, memory, curve, focus_id=3))

    assert first == second


def test_overlapping_pairs_are_visually_separated(curve):
    memory = AlignmentMemory()
    positions = [250, 262, 275, 300, 330, 345, 360, 590, 600, 604, 860, 880, 900, 930, 950]
    markers = [Marker(i, f"m{i}", float(p), priority_rank=i % 4) for i, p in enumerate(positions)]
    offset = curve.options.stack_offset

    for focus_id in (None, 4, 9):
        placed = resolve_layout(markers, memory, curve, focus_id=focus_id)
        assert len(placed) == len(markers)
        for p, q in itertools.combinations(placed, 2):
            if not raw_overlap(p.marker, q.marker, curve):
                continue
            same_column = p.x == q.x and p.stack_depth != q.stack_depth
            assert same_column or abs(p.y - q.y) >= offset - 1e-6


def test_focus_missing_from_markers_is_ignored(curve):
    placed = resolve_layout([Marker(1, "a", 320.0)], AlignmentMemory(), curve, focus_id="gone")

    assert not placed[0].focus
