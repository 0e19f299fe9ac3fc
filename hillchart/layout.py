"""Overlap resolution and stacking for markers on the hill.

A pass places the focus marker first (always on the curve), then every other
marker in sort order. The focus snaps to a remembered alignment with any
marker it still overlaps; failing that it meets its first overlapping
neighbour at that neighbour's raw position. Overlap between two markers is decided on their *raw*
positions, never on rendered ones, so stacking inside a pass cannot move a
marker out of detection range. The first placed marker a candidate overlaps
decides the candidate's shared x; every overlap lifts it one more
``stack_offset`` above the curve, and it keeps rising while it would sit
closer than ``stack_offset`` to a marker it overlaps.

Three-way overlaps resolve in placement order: focus first, then the order
of :func:`sort_markers`. Renderers paint in that order too, so inside a tie
run the most recently moved marker is drawn first and sits underneath.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .alignment import AlignmentMemory
from .curve import HillCurve
from .logging_utils import apply_debug_logging
from .model import Marker, MarkerId, PlacedMarker

logger = logging.getLogger(__name__)


def sort_markers(markers: Sequence[Marker], tie_epsilon: float) -> List[Marker]:
    """Order markers by position; near-ties go to the higher rank first.

    Consecutive markers no further than ``tie_epsilon`` apart form a tie run.
    Inside a run the order is descending ``priority_rank``, then position, then
    the original list index, which makes the order total.
    """

    indexed = sorted(enumerate(markers), key=lambda item: (item[1].position, item[0]))
    runs: List[List[Tuple[int, Marker]]] = []
    for idx, marker in indexed:
        if runs and marker.position - runs[-1][-1][1].position <= tie_epsilon:
            runs[-1].append((idx, marker))
        else:
            runs.append([(idx, marker)])

    ordered: List[Marker] = []
    for run in runs:
        run.sort(key=lambda item: (-item[1].priority_rank, item[1].position, item[0]))
        ordered.extend(marker for _, marker in run)
    return ordered


def raw_overlap(a: Marker, b: Marker, curve: HillCurve) -> bool:
    """Return ``True`` when the raw footprints of ``a`` and ``b`` collide."""

    opts = curve.options
    if abs(a.position - b.position) >= opts.overlap_x_factor * opts.dot_radius:
        return False
    dy = abs(curve.height_at(a.position) - curve.height_at(b.position))
    return dy < opts.overlap_y_factor * opts.dot_radius


def prune_alignments(
    markers: Sequence[Marker], memory: AlignmentMemory, curve: HillCurve
) -> int:
    """Drop entries whose markers are gone or whose raw positions separated."""

    present: Dict[MarkerId, Marker] = {marker.id: marker for marker in markers}
    dropped = 0
    for key, _ in memory.pairs():
        a_id, b_id = tuple(key)
        a = present.get(a_id)
        b = present.get(b_id)
        if a is None or b is None or not raw_overlap(a, b, curve):
            memory.remove(a_id, b_id)
            dropped += 1
    return dropped


def _collides(y: float, others: Sequence[PlacedMarker], spacing: float) -> bool:
    return any(abs(y - other.y) < spacing - 1e-9 for other in others)


def _place_focus(
    focus: Marker,
    ordered: Sequence[Marker],
    memory: AlignmentMemory,
    curve: HillCurve,
) -> PlacedMarker:
    neighbours = [
        other for other in ordered if other.id != focus.id and raw_overlap(focus, other, curve)
    ]
    x = focus.position
    for other in neighbours:
        remembered = memory.get(focus.id, other.id)
        if remembered is not None:
            x = remembered
            break
    else:
        if neighbours:
            # The focus moves to meet the stationary marker.
            anchor = neighbours[0]
            x = anchor.position
            memory.set(focus.id, anchor.id, x)
            logger.debug("Focus %r aligned to %r at %.3f", focus.id, anchor.id, x)
    return PlacedMarker(focus, x, curve.height_at(x), 0, True)


def resolve_layout(
    markers: Sequence[Marker],
    memory: AlignmentMemory,
    curve: HillCurve,
    *,
    focus_id: Optional[MarkerId] = None,
) -> List[PlacedMarker]:
    """Compute final render coordinates for every marker.

    The result lists the focus marker first, then the others in sort order.
    ``memory`` is updated in place.
    """

    opts = curve.options
    ordered = sort_markers(markers, opts.tie_epsilon)
    prune_alignments(ordered, memory, curve)

    focus: Optional[Marker] = None
    if focus_id is not None:
        focus = next((marker for marker in ordered if marker.id == focus_id), None)

    placed: List[PlacedMarker] = []
    if focus is not None:
        placed.append(_place_focus(focus, ordered, memory, curve))

    for marker in ordered:
        if focus is not None and marker.id == focus.id:
            continue
        x = marker.position
        overlapping: List[PlacedMarker] = []
        for prior in placed:
            if not raw_overlap(marker, prior.marker, curve):
                continue
            overlapping.append(prior)
            if len(overlapping) == 1:
                shared = memory.get(marker.id, prior.id)
                if shared is None:
                    # A focus with any neighbour already sits on a stationary
                    # marker's position, so every pair with it shares one x.
                    shared = prior.x
                    memory.set(marker.id, prior.id, shared)
                x = shared

        depth = len(overlapping)
        base = curve.height_at(x)
        if depth == 0:
            for prior in placed:
                memory.remove(marker.id, prior.id)
        else:
            # Chained overlaps can land two markers on the same slot; lift
            # until clear of every marker this one overlaps.
            while _collides(base - depth * opts.stack_offset, overlapping, opts.stack_offset):
                depth += 1
            logger.debug("Marker %r stacked at depth %d (x=%.3f)", marker.id, depth, x)
        placed.append(PlacedMarker(marker, x, base - depth * opts.stack_offset, depth, False))

    return placed


__all__ = ["prune_alignments", "raw_overlap", "resolve_layout", "sort_markers"]

apply_debug_logging(globals(), logger=logger)
