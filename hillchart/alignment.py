"""Sticky shared positions for marker pairs that snapped together."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterator, Optional, Tuple

from .model import MarkerId

PairKey = FrozenSet[MarkerId]


class AlignmentMemory:
    """Unordered pair of marker ids -> shared domain position."""

    def __init__(self) -> None:
        self._entries: Dict[PairKey, float] = {}

    @staticmethod
    def key_for(a: MarkerId, b: MarkerId) -> PairKey:
        if a == b:
            raise ValueError(f"alignment pair needs two distinct markers (got {a!r} twice)")
        return frozenset((a, b))

    def get(self, a: MarkerId, b: MarkerId) -> Optional[float]:
        return self._entries.get(self.key_for(a, b))

    def set(self, a: MarkerId, b: MarkerId, position: float) -> None:
        self._entries[self.key_for(a, b)] = float(position)

    def remove(self, a: MarkerId, b: MarkerId) -> bool:
        return self._entries.pop(self.key_for(a, b), None) is not None

    def discard_marker(self, marker_id: MarkerId) -> int:
        stale = [key for key in self._entries if marker_id in key]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def pairs(self) -> Iterator[Tuple[PairKey, float]]:
        return iter(list(self._entries.items()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, (tuple, list)) or len(pair) != 2:
            return False
        a, b = pair
        if a == b:
            return False
        return self.key_for(a, b) in self._entries

    def __repr__(self) -> str:
        return f"AlignmentMemory({len(self._entries)} entries)"


__all__ = ["AlignmentMemory", "PairKey"]
