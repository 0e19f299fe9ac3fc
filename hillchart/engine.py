"""Engine façade owning markers, drag priority and alignment state."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .alignment import AlignmentMemory
from .config import get_default_options
from .curve import HillCurve
from .export import PHASE_NAMES, ExportRow, export_rows
from .guides import guide_line_segments
from .layout import resolve_layout
from .model import HillOptions, LayoutFrame, Marker, MarkerId, RenderError
from .priority import PriorityTracker
from .store import MarkerStore
from .svg_codegen import SvgStyle, generate_svg_document

logger = logging.getLogger(__name__)


class HillChartEngine:
    """Single owner of the mutable layout state for one chart.

    Every mutating call that the user would expect to survive a reload
    (add, remove, clear, drag end, nudge) is followed by a save when a
    ``store`` is attached.
    """

    def __init__(self, options: Optional[HillOptions] = None, *, store: Optional[MarkerStore] = None) -> None:
        self.options = options if options is not None else get_default_options()
        self.curve = HillCurve(self.options)
        self.tracker = PriorityTracker()
        self.alignments = AlignmentMemory()
        self.store = store
        self._markers: List[Marker] = []

    @classmethod
    def from_store(cls, store: MarkerStore, options: Optional[HillOptions] = None) -> "HillChartEngine":
        engine = cls(options if options is not None else store.options, store=store)
        engine.load(store.load())
        return engine

    # ------------------------------------------------------------------
    # Marker set
    # ------------------------------------------------------------------

    @property
    def markers(self) -> Tuple[Marker, ...]:
        return tuple(self._markers)

    def get(self, marker_id: MarkerId) -> Optional[Marker]:
        for marker in self._markers:
            if marker.id == marker_id:
                return marker
        return None

    def progress_of(self, marker: Marker) -> float:
        return self.options.progress_of(marker.position)

    def _next_id(self) -> int:
        numeric = [m.id for m in self._markers if isinstance(m.id, int) and not isinstance(m.id, bool)]
        return max(numeric, default=0) + 1

    def add(
        self,
        label: str,
        *,
        marker_id: Optional[MarkerId] = None,
        position: Optional[float] = None,
        progress: Optional[float] = None,
    ) -> Optional[Marker]:
        """Add a marker; blank labels and duplicate ids are ignored."""

        label = (label or "").strip()
        if not label:
            logger.info("Ignoring marker with a blank label")
            return None
        if marker_id is None:
            marker_id = self._next_id()
        elif self.get(marker_id) is not None:
            logger.warning("Marker id %r already exists; add ignored", marker_id)
            return None
        if position is None:
            position = self.options.position_of(
                self.options.default_progress if progress is None else progress
            )
        marker = Marker(marker_id, label, self.options.clamp(position))
        self._markers.append(marker)
        logger.info("Added marker %r (%s) at %.3f", marker.id, marker.label, marker.position)
        self._persist()
        return marker

    def remove(self, marker_id: MarkerId) -> bool:
        marker = self.get(marker_id)
        if marker is None:
            logger.debug("remove(%r): unknown marker", marker_id)
            return False
        self._markers.remove(marker)
        self.alignments.discard_marker(marker_id)
        self.tracker.forget(marker_id)
        logger.info("Removed marker %r", marker_id)
        self._persist()
        return True

    def clear(self) -> None:
        self._markers = []
        self.alignments.clear()
        self.tracker.reset()
        logger.info("Cleared all markers")
        self._persist()

    def load(self, markers: Iterable[Marker]) -> None:
        """Replace the marker set, resetting alignment and rank state."""

        self._markers = []
        for marker in markers:
            marker.position = self.options.clamp(marker.position)
            self._markers.append(marker)
        self.alignments.clear()
        self.tracker.reset()
        self.tracker.backfill(self._markers)
        logger.info("Loaded %d marker(s); rank counter at %d", len(self._markers), self.tracker.counter)

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def begin_drag(self, marker_id: MarkerId) -> bool:
        marker = self.get(marker_id)
        if marker is None:
            logger.debug("begin_drag(%r): unknown marker", marker_id)
            return False
        rank = self.tracker.begin_drag(marker)
        logger.debug("Drag started for %r with rank %d", marker_id, rank)
        return True

    def move_to(self, position: float) -> LayoutFrame:
        """Move the dragged marker and run a full layout pass."""

        marker = self.get(self.tracker.dragging) if self.tracker.dragging is not None else None
        if marker is not None:
            marker.position = self.options.clamp(position)
        else:
            logger.debug("move_to(%r) without an active drag", position)
        return self.layout()

    def end_drag(self, marker_id: MarkerId) -> bool:
        marker = self.get(marker_id)
        if marker is None or self.tracker.dragging != marker_id:
            logger.debug("end_drag(%r): marker is not being dragged", marker_id)
            return False
        rank = self.tracker.end_drag(marker)
        logger.info("Marker %r released at %.3f with rank %d", marker_id, marker.position, rank)
        self._persist()
        return True

    def drag(self, marker_id: MarkerId, position: float) -> Optional[LayoutFrame]:
        """Run a complete begin/move/end drag and return the final layout."""

        if not self.begin_drag(marker_id):
            return None
        self.move_to(position)
        self.end_drag(marker_id)
        return self.layout()

    def nudge(self, marker_id: MarkerId, delta: float) -> bool:
        """Shift a marker's label horizontally without moving the marker."""

        marker = self.get(marker_id)
        if marker is None:
            logger.debug("nudge(%r): unknown marker", marker_id)
            return False
        marker.label_offset += float(delta)
        logger.info("Nudged label of %r to offset %.1f", marker_id, marker.label_offset)
        self._persist()
        return True

    # ------------------------------------------------------------------
    # Layout and output
    # ------------------------------------------------------------------

    def focus(self) -> Optional[Marker]:
        return self.tracker.current_focus(self._markers)

    def layout(self) -> LayoutFrame:
        focus = self.focus()
        focus_id = focus.id if focus is not None else None
        placed = resolve_layout(self._markers, self.alignments, self.curve, focus_id=focus_id)
        return LayoutFrame(
            curve_points=self.curve.sample_path(),
            placed=placed,
            guide_segments=guide_line_segments(placed, self.options),
            guide_x=self.options.midpoint,
            focus_id=focus_id,
        )

    def export(self, phases: Tuple[str, str] = PHASE_NAMES) -> List[ExportRow]:
        return export_rows(self._markers, self.options, phases=phases)

    def render_svg(self, *, style: Optional[SvgStyle] = None, title: Optional[str] = None) -> str:
        """Lay out and render the chart; a failure leaves the engine untouched."""

        saved = copy.deepcopy(self.alignments)
        try:
            return generate_svg_document(self.layout(), self.options, style=style, title=title)
        except Exception as exc:
            self.alignments = saved
            raise RenderError(f"Failed to render hill chart: {exc}") from exc

    def write_svg(
        self,
        path: Union[str, Path],
        *,
        style: Optional[SvgStyle] = None,
        title: Optional[str] = None,
    ) -> Path:
        saved = copy.deepcopy(self.alignments)
        document = self.render_svg(style=style, title=title)
        output_path = Path(path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(document, encoding="utf-8")
        except OSError as exc:
            self.alignments = saved
            raise RenderError(f"Failed to write {output_path}: {exc}") from exc
        logger.info("Wrote SVG chart to %s", output_path)
        return output_path

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self._markers)


__all__ = ["HillChartEngine"]
