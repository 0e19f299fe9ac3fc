"""JSON persistence for the marker list."""

from __future__ import annotations

import json
import logging
import math
import numbers
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .model import HillOptions, Marker, StoreError

logger = logging.getLogger(__name__)


def _coerce_float(value: object) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return result if math.isfinite(result) else None


def _coerce_rank(value: object) -> int:
    number = _coerce_float(value)
    if number is None or number <= 0:
        return 0
    return int(number)


def marker_from_record(record: Mapping[str, Any], options: HillOptions) -> Marker:
    """Build a marker from a stored record, repairing missing fields.

    ``label``/``position`` fall back to the older ``name``/``x`` keys, and a
    missing position is recovered from ``progress`` before defaulting to the
    start progress. The rank stays ``0`` when absent; the engine backfills it.
    """

    label = record.get("label", record.get("name", ""))
    position = _coerce_float(record.get("position", record.get("x")))
    if position is None:
        progress = _coerce_float(record.get("progress"))
        if progress is None:
            progress = options.default_progress
        position = options.position_of(progress)
    offset = _coerce_float(record.get("labelOffset"))
    return Marker(
        id=record.get("id"),
        label=str(label) if label is not None else "",
        position=options.clamp(position),
        priority_rank=_coerce_rank(record.get("priorityRank")),
        label_offset=offset if offset is not None else 0.0,
    )


def markers_from_records(records: Iterable[Any], options: HillOptions) -> List[Marker]:
    markers: List[Marker] = []
    seen = set()
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            logger.warning("Skipping stored marker #%d: not an object", idx)
            continue
        marker = marker_from_record(record, options)
        if marker.id is None or isinstance(marker.id, (list, dict)) or marker.id in seen:
            logger.warning("Skipping stored marker #%d: missing or duplicate id %r", idx, marker.id)
            continue
        seen.add(marker.id)
        markers.append(marker)
    return markers


def marker_to_record(marker: Marker, options: HillOptions) -> Dict[str, Any]:
    return {
        "id": marker.id,
        "label": marker.label,
        "position": marker.position,
        "progress": options.progress_of(marker.position),
        "priorityRank": marker.priority_rank,
        "labelOffset": marker.label_offset,
    }


class MarkerStore:
    """Reads and writes the marker list as a JSON array."""

    def __init__(self, path: Union[str, Path], options: Optional[HillOptions] = None) -> None:
        self.path = Path(path)
        self.options = options or HillOptions()

    def load_records(self) -> List[Any]:
        if not self.path.exists():
            logger.info("No marker store at %s; starting empty", self.path)
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except json.JSONDecodeError as exc:
            raise StoreError(f"{self.path}: not valid JSON ({exc.msg} at line {exc.lineno})") from exc
        if not isinstance(data, list):
            raise StoreError(f"{self.path}: expected a JSON array of markers")
        return data

    def load(self) -> List[Marker]:
        markers = markers_from_records(self.load_records(), self.options)
        logger.info("Loaded %d marker(s) from %s", len(markers), self.path)
        return markers

    def save(self, markers: Iterable[Marker]) -> None:
        records = [marker_to_record(marker, self.options) for marker in markers]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        logger.info("Saved %d marker(s) to %s", len(records), self.path)


__all__ = ["MarkerStore", "marker_from_record", "marker_to_record", "markers_from_records"]
