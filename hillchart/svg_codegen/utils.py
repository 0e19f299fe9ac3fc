import re
import unicodedata
from typing import List

_CONTROL_RE = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f]')

_XML_ESCAPES = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#39;',
}


def xml_escape(text: str) -> str:
    """Escape text for use in SVG element content and attribute values."""
    text = unicodedata.normalize('NFC', str(text))
    text = _CONTROL_RE.sub('', text)
    return ''.join(_XML_ESCAPES.get(c, c) for c in text)


def wrap_label(text: str, max_width: float, char_width: float) -> List[str]:
    """
    Greedy word wrap using an approximate per-character width.
    A single word wider than ``max_width`` stays on its own line unbroken.
    """
    lines: List[str] = []
    current = ''
    for word in text.split():
        candidate = f'{current} {word}' if current else word
        if current and len(candidate) * char_width > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
