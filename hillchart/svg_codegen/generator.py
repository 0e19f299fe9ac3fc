"""SVG renderer for a resolved hill chart layout."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .utils import wrap_label, xml_escape
from ..model import HillOptions, LayoutFrame, PlacedMarker, Point

SVG_NS = "http://www.w3.org/2000/svg"

document_tpl = """<?xml version="1.0" encoding="UTF-8"?>
%s
"""


@dataclass
class SvgStyle:
    """Presentation constants for the SVG output."""

    label_offset: float = 80.0
    wrap_width: float = 150.0
    char_width: float = 7.0
    line_height: float = 14.0
    curve_class: str = "hill-path"
    guide_class: str = "guide-line"
    marker_class: str = "milestone-point"
    text_class: str = "milestone-text"
    focus_class: str = "focus"
    stylesheet: str = (
        ".hill-path{fill:none;stroke:#333;stroke-width:3}"
        ".guide-line{stroke:#999;stroke-width:1;stroke-dasharray:4 4}"
        ".milestone-point circle{fill:#c0392b;stroke:#fff;stroke-width:2}"
        ".milestone-point.focus circle{fill:#e67e22}"
        ".milestone-text{font:12px sans-serif;fill:#222}"
    )


def generate_svg_document(
    frame: LayoutFrame,
    options: HillOptions,
    *,
    style: Optional[SvgStyle] = None,
    title: Optional[str] = None,
) -> str:
    """Render a standalone SVG file for ``frame``."""

    return document_tpl % generate_svg_code(frame, options, style=style, title=title)


def generate_svg_code(
    frame: LayoutFrame,
    options: HillOptions,
    *,
    style: Optional[SvgStyle] = None,
    title: Optional[str] = None,
) -> str:
    """Generate the ``<svg>`` element for ``frame``."""

    if not isinstance(frame, LayoutFrame):
        raise TypeError("frame must be an instance of LayoutFrame")
    style = style or SvgStyle()

    lines: List[str] = []
    lines.append(
        '<svg xmlns="{ns}" width="{w}" height="{h}" viewBox="0 0 {w} {h}">'.format(
            ns=SVG_NS,
            w=_format_float(options.chart_width),
            h=_format_float(options.chart_height),
        )
    )
    if title:
        lines.append(f"  <title>{xml_escape(title)}</title>")
    if style.stylesheet:
        lines.append(f"  <style>{xml_escape(style.stylesheet)}</style>")

    if frame.curve_points:
        lines.append('  <g class="hill-curve">')
        lines.append(f'    <path d="{_curve_path_data(frame.curve_points)}" class="{style.curve_class}"/>')
        lines.append("  </g>")

    if frame.guide_segments:
        lines.append('  <g class="guide">')
        x = _format_float(frame.guide_x)
        for start, end in frame.guide_segments:
            lines.append(
                f'    <line x1="{x}" y1="{_format_float(start)}" x2="{x}" y2="{_format_float(end)}"'
                f' class="{style.guide_class}"/>'
            )
        lines.append("  </g>")

    lines.append('  <g class="milestone-points">')
    for entry in frame.placed:
        lines.extend("    " + item for item in _emit_marker(entry, options, style))
    lines.append("  </g>")
    lines.append("</svg>")
    return "\n".join(lines)


def _curve_path_data(points: Sequence[Point]) -> str:
    """Smooth path through ``points`` using quadratic segments.

    Each interior sample is a control point; the curve passes through the
    midpoint between it and the next sample, then ends with a ``T`` to the
    last sample.
    """

    first = points[0]
    parts = [f"M {_format_float(first[0])} {_format_float(first[1])}"]
    for current, nxt in zip(points[1:-1], points[2:]):
        mid_x = 0.5 * (current[0] + nxt[0])
        mid_y = 0.5 * (current[1] + nxt[1])
        parts.append(
            "Q {cx} {cy} {mx} {my}".format(
                cx=_format_float(current[0]),
                cy=_format_float(current[1]),
                mx=_format_float(mid_x),
                my=_format_float(mid_y),
            )
        )
    if len(points) > 1:
        last = points[-1]
        parts.append(f"T {_format_float(last[0])} {_format_float(last[1])}")
    return " ".join(parts)


def _label_anchor(entry: PlacedMarker, options: HillOptions, style: SvgStyle) -> Tuple[float, str]:
    offset = style.label_offset + entry.marker.label_offset
    if entry.x < options.midpoint:
        return entry.x - offset, "end"
    return entry.x + offset, "start"


def _emit_marker(entry: PlacedMarker, options: HillOptions, style: SvgStyle) -> List[str]:
    classes = style.marker_class + (f" {style.focus_class}" if entry.focus else "")
    marker_id = xml_escape(str(entry.marker.id))
    out = [f'<g class="{classes}" data-milestone-id="{marker_id}" data-stack-depth="{entry.stack_depth}">']
    out.append(
        '  <circle cx="{x}" cy="{y}" r="{r}"/>'.format(
            x=_format_float(entry.x), y=_format_float(entry.y), r=_format_float(options.dot_radius)
        )
    )

    text_x, anchor = _label_anchor(entry, options, style)
    lines = wrap_label(entry.marker.label, style.wrap_width, style.char_width)
    first_y = entry.y - (len(lines) - 1) * style.line_height / 2.0
    for idx, line in enumerate(lines):
        out.append(
            '  <text x="{x}" y="{y}" text-anchor="{anchor}" class="{cls}">{text}</text>'.format(
                x=_format_float(text_x),
                y=_format_float(first_y + idx * style.line_height),
                anchor=anchor,
                cls=style.text_class,
                text=xml_escape(line),
            )
        )
    out.append("</g>")
    return out


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for SVG output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted
