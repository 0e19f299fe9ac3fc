"""Read-only projection of the marker list for listings and downloads."""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from typing import Iterable, List, Tuple

from .model import HillOptions, Marker, MarkerId

PHASE_NAMES: Tuple[str, str] = ("Problem Analysis", "Executing Plan")


@dataclass(frozen=True)
class ExportRow:
    id: MarkerId
    label: str
    percent: int
    phase: str


def rounded_percent(progress: float) -> int:
    # Half-up, so 12.5 % reads as 13 %.
    return int(math.floor(progress * 100.0 + 0.5))


def phase_for(progress: float, phases: Tuple[str, str] = PHASE_NAMES) -> str:
    return phases[0] if progress < 0.5 else phases[1]


def export_rows(
    markers: Iterable[Marker],
    options: HillOptions,
    *,
    phases: Tuple[str, str] = PHASE_NAMES,
) -> List[ExportRow]:
    rows = []
    for marker in markers:
        progress = options.progress_of(marker.position)
        rows.append(ExportRow(marker.id, marker.label, rounded_percent(progress), phase_for(progress, phases)))
    return rows


def format_export_text(rows: Iterable[ExportRow]) -> str:
    return "\n".join(f"{row.label}: {row.percent}% - {row.phase}" for row in rows)


def format_export_json(rows: Iterable[ExportRow]) -> str:
    return json.dumps([asdict(row) for row in rows], indent=2, ensure_ascii=False)


__all__ = [
    "ExportRow",
    "PHASE_NAMES",
    "export_rows",
    "format_export_json",
    "format_export_text",
    "phase_for",
    "rounded_percent",
]
