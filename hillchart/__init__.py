from .model import (
    HillChartError,
    HillOptions,
    LayoutFrame,
    Marker,
    PlacedMarker,
    RenderError,
    StoreError,
)
from .config import get_default_options, set_default_options
from .curve import HillCurve
from .priority import PriorityTracker
from .alignment import AlignmentMemory
from .layout import raw_overlap, resolve_layout, sort_markers
from .guides import guide_line_segments, merge_intervals, visible_segments
from .store import MarkerStore, markers_from_records
from .export import ExportRow, export_rows, format_export_json, format_export_text
from .svg_codegen import SvgStyle, generate_svg_code, generate_svg_document
from .engine import HillChartEngine

__all__ = [
    'HillChartError',
    'HillOptions',
    'LayoutFrame',
    'Marker',
    'PlacedMarker',
    'RenderError',
    'StoreError',
    'get_default_options',
    'set_default_options',
    'HillCurve',
    'PriorityTracker',
    'AlignmentMemory',
    'raw_overlap',
    'resolve_layout',
    'sort_markers',
    'guide_line_segments',
    'merge_intervals',
    'visible_segments',
    'MarkerStore',
    'markers_from_records',
    'ExportRow',
    'export_rows',
    'format_export_json',
    'format_export_text',
    'SvgStyle',
    'generate_svg_code',
    'generate_svg_document',
    'HillChartEngine',
]
