"""Drag priority bookkeeping.

Every drag start and every drag end bumps a single counter and stamps the
marker with the new value, so the most recently released marker always holds
the highest rank.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from .model import Marker, MarkerId

logger = logging.getLogger(__name__)


class PriorityTracker:
    def __init__(self) -> None:
        self.counter = 0
        self.dragging: Optional[MarkerId] = None

    def reset(self) -> None:
        self.counter = 0
        self.dragging = None

    def _next_rank(self) -> int:
        self.counter += 1
        return self.counter

    def begin_drag(self, marker: Marker) -> int:
        if self.dragging is not None and self.dragging != marker.id:
            logger.warning(
                "Drag of %r started while %r is still dragging; transferring drag",
                marker.id,
                self.dragging,
            )
        marker.priority_rank = self._next_rank()
        self.dragging = marker.id
        return marker.priority_rank

    def end_drag(self, marker: Marker) -> int:
        marker.priority_rank = self._next_rank()
        if self.dragging == marker.id:
            self.dragging = None
        return marker.priority_rank

    def forget(self, marker_id: MarkerId) -> None:
        if self.dragging == marker_id:
            self.dragging = None

    def current_focus(self, markers: Iterable[Marker]) -> Optional[Marker]:
        best: Optional[Marker] = None
        for marker in markers:
            if self.dragging is not None and marker.id == self.dragging:
                return marker
            if marker.ranked and (best is None or marker.priority_rank > best.priority_rank):
                best = marker
        return best

    def backfill(self, markers: List[Marker]) -> None:
        """Give every marker without a usable rank a fresh one, in list order.

        Values already held by another marker are skipped, and duplicated
        ranks count as missing for every marker after the first holder, so
        ranks are unique once this returns.
        """

        seen: Set[int] = set()
        pending: List[Marker] = []
        for marker in markers:
            rank = marker.priority_rank
            if rank > 0 and rank not in seen:
                seen.add(rank)
            else:
                pending.append(marker)
        for marker in pending:
            rank = self._next_rank()
            while rank in seen:
                rank = self._next_rank()
            marker.priority_rank = rank
            seen.add(rank)
        if markers:
            self.counter = max(self.counter, max(m.priority_rank for m in markers))
        if pending:
            logger.info("Backfilled priority rank for %d marker(s)", len(pending))


__all__ = ["PriorityTracker"]
