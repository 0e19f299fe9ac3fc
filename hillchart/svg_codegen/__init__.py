"""Hill chart → SVG code generation helpers."""

from .generator import (
    SvgStyle,
    generate_svg_code,
    generate_svg_document,
)
from .utils import wrap_label, xml_escape

__all__ = [
    "SvgStyle",
    "generate_svg_code",
    "generate_svg_document",
    "wrap_label",
    "xml_escape",
]
