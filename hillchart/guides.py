"""Vertical guide line at the domain midpoint, broken around markers."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .logging_utils import apply_debug_logging
from .model import HillOptions, Interval, PlacedMarker

logger = logging.getLogger(__name__)


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """Sort by start and merge intervals that overlap or touch."""

    merged: List[Interval] = []
    for start, end in sorted((min(a, b), max(a, b)) for a, b in intervals):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def visible_segments(gaps: Iterable[Interval], line_start: float, line_end: float) -> List[Interval]:
    """Return the parts of ``[line_start, line_end]`` not covered by ``gaps``."""

    segments: List[Interval] = []
    cursor = line_start
    for start, end in merge_intervals(gaps):
        if end <= cursor:
            continue
        if start >= line_end:
            break
        if start > cursor:
            segments.append((cursor, start))
        cursor = max(cursor, end)
        if cursor >= line_end:
            break
    if cursor < line_end:
        segments.append((cursor, line_end))
    return segments


def blocking_markers(placed: Sequence[PlacedMarker], options: HillOptions) -> List[PlacedMarker]:
    midpoint = options.midpoint
    return [entry for entry in placed if abs(entry.x - midpoint) <= options.guide_gap]


def guide_line_segments(placed: Sequence[PlacedMarker], options: HillOptions) -> List[Interval]:
    gap = options.guide_gap
    gaps = [(entry.y - gap, entry.y + gap) for entry in blocking_markers(placed, options)]
    segments = visible_segments(gaps, options.guide_line_start, options.guide_line_end)
    if gaps:
        logger.debug("Guide line broken by %d marker(s) into %d segment(s)", len(gaps), len(segments))
    return segments


__all__ = ["blocking_markers", "guide_line_segments", "merge_intervals", "visible_segments"]

apply_debug_logging(globals(), logger=logger)
