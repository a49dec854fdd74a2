from __future__ import annotations

import os

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, RGBColor

from .model import Document, ImageItem, TextRun

_ALIGNMENT = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
}


def write_docx(doc: Document, out_path: str) -> str:
    """Write the document model as flowed DOCX.

    Absolute positions are not kept: items are written in order, one
    page break per model page. Page-number stamps are left to Word.
    """
    d = DocxDocument()
    section = d.sections[0]
    # Available width = page width - (left+right) margins
    avail_width = section.page_width - section.left_margin - section.right_margin
    for page in doc.pages:
        if page.index > 0:
            d.add_page_break()
        for item in sorted(page.items, key=lambda it: it.order):
            if isinstance(item, TextRun):
                if item.role == "page_number":
                    continue
                p = d.add_paragraph()
                p.alignment = _ALIGNMENT.get(item.align, WD_ALIGN_PARAGRAPH.LEFT)
                run = p.add_run(item.text)
                run.font.size = Pt(item.font_size)
                run.font.color.rgb = RGBColor(*(int(round(c * 255)) for c in item.color))
                if item.role == "heading":
                    run.bold = True
            elif isinstance(item, ImageItem):
                try:
                    d.add_picture(item.src_path, width=min(Pt(item.width), avail_width))
                except Exception:
                    # fallback: put a placeholder paragraph
                    p = d.add_paragraph()
                    p.add_run(f"[image: {os.path.basename(item.src_path)}]")
    d.save(out_path)
    return out_path
