"""Layout helpers: font metrics, line wrapping and image fitting.

Text is measured with reportlab font metrics so that the wrapped lines
recorded in the document model are exactly what the PDF writer draws.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from PIL import Image
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

DEFAULT_FONT = "Helvetica"


@dataclass
class FontSpec:
    name: str
    file: Optional[str] = None

    def width(self, text: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.name, size)

    def ascent(self, size: float) -> float:
        return pdfmetrics.getAscent(self.name, size)


def load_font(font_file: Optional[str] = None) -> FontSpec:
    """Register `font_file` with reportlab, falling back to Helvetica."""
    if not font_file:
        return FontSpec(DEFAULT_FONT)
    name = os.path.splitext(os.path.basename(font_file))[0] or "CustomFont"
    try:
        if name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont(name, font_file))
        return FontSpec(name, font_file)
    except Exception as e:
        print(f"Warning: failed to load font '{font_file}': {e}; using {DEFAULT_FONT}")
        return FontSpec(DEFAULT_FONT)


def layout_lines(text: str, measure: Callable[[str], float], max_width: float) -> List[str]:
    """Greedy word wrap. Explicit newlines always start a new line.

    A single word wider than `max_width` stays on its own (overflowing) line.
    """
    lines: List[str] = []
    for para in str(text).split("\n"):
        words = para.split()
        if not words:
            lines.append("")
            continue
        cur = ""
        for w_ in words:
            t = (cur + " " + w_) if cur else w_
            if measure(t) <= max_width:
                cur = t
            else:
                if cur:
                    lines.append(cur)
                cur = w_
        if cur:
            lines.append(cur)
    return lines


def fit_size(img_w: float, img_h: float, box_w: float, box_h: float) -> Tuple[float, float]:
    """Scale (img_w, img_h) to the largest size that fits the box, keeping aspect."""
    if img_w <= 0 or img_h <= 0 or box_w <= 0 or box_h <= 0:
        return 0.0, 0.0
    img_ratio = img_w / img_h
    if box_w / box_h > img_ratio:
        return box_h * img_ratio, box_h
    return box_w, box_w / img_ratio


def align_offset(outer: float, inner: float, mode: Optional[str]) -> float:
    if mode == "center":
        return (outer - inner) / 2.0
    if mode in ("right", "bottom"):
        return outer - inner
    return 0.0


def probe_image_size(path: str) -> Tuple[int, int]:
    """Return (width, height) in pixels; raises if Pillow cannot read the file."""
    with Image.open(path) as img:
        return img.size
