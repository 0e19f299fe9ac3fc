"""Core data structures shared by the layout engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Hashable, List, Optional, Tuple

MarkerId = Hashable
Point = Tuple[float, float]
Interval = Tuple[float, float]


class HillChartError(Exception):
    """Base class for errors reported by the hill chart package."""


class StoreError(HillChartError, ValueError):
    """Raised when a persisted marker file cannot be read."""


class RenderError(HillChartError, RuntimeError):
    """Raised when rendering or writing a chart image fails."""


@dataclass
class HillOptions:
    """Geometry and tuning knobs for the curve and the layout resolver."""

    domain_start: float = 250.0
    domain_end: float = 950.0
    top_y: float = 180.0
    bottom_y: float = 480.0
    mean: float = 0.5
    std_dev: float = 0.15
    dot_radius: float = 10.0
    overlap_x_factor: float = 10.0
    overlap_y_factor: float = 1.5
    stack_offset: float = 30.0
    tie_epsilon: float = 5.0
    guide_gap: float = 20.0
    guide_line_start: float = 100.0
    guide_line_end: float = 480.0
    default_progress: float = 0.1
    path_samples: int = 50
    chart_width: float = 1200.0
    chart_height: float = 600.0

    def validate(self) -> None:
        for name in ("domain_start", "domain_end", "top_y", "bottom_y", "mean", "std_dev"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite (got {value!r})")
        if self.domain_end <= self.domain_start:
            raise ValueError("domain_end must be greater than domain_start")
        if self.std_dev <= 0:
            raise ValueError("std_dev must be positive")
        if self.dot_radius <= 0:
            raise ValueError("dot_radius must be positive")
        if self.stack_offset < 0 or self.guide_gap < 0 or self.tie_epsilon < 0:
            raise ValueError("stack_offset, guide_gap and tie_epsilon must be non-negative")
        if self.guide_line_end < self.guide_line_start:
            raise ValueError("guide_line_end must not be above guide_line_start")
        if self.path_samples < 1:
            raise ValueError("path_samples must be at least 1")

    @property
    def domain_width(self) -> float:
        return self.domain_end - self.domain_start

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.domain_start + self.domain_end)

    def clamp(self, position: float) -> float:
        position = float(position)
        if math.isnan(position):
            return self.domain_start
        return max(self.domain_start, min(self.domain_end, position))

    def progress_of(self, position: float) -> float:
        return (self.clamp(position) - self.domain_start) / self.domain_width

    def position_of(self, progress: float) -> float:
        return self.clamp(self.domain_start + self.domain_width * float(progress))


@dataclass
class Marker:
    """A labeled milestone on the hill."""

    id: MarkerId
    label: str
    position: float
    priority_rank: int = 0
    label_offset: float = 0.0

    @property
    def ranked(self) -> bool:
        return self.priority_rank > 0


@dataclass
class PlacedMarker:
    """Final render coordinates for one marker in a layout pass."""

    marker: Marker
    x: float
    y: float
    stack_depth: int = 0
    focus: bool = False

    @property
    def id(self) -> MarkerId:
        return self.marker.id


@dataclass
class LayoutFrame:
    """Everything a renderer needs for one layout pass."""

    curve_points: List[Point]
    placed: List[PlacedMarker]
    guide_segments: List[Interval]
    guide_x: float
    focus_id: Optional[MarkerId] = None

    def find(self, marker_id: MarkerId) -> Optional[PlacedMarker]:
        for entry in self.placed:
            if entry.marker.id == marker_id:
                return entry
        return None


__all__ = [
    "HillChartError",
    "HillOptions",
    "Interval",
    "LayoutFrame",
    "Marker",
    "MarkerId",
    "PlacedMarker",
    "Point",
    "RenderError",
    "StoreError",
]
