from __future__ import annotations

from reportlab.pdfgen import canvas as pdfcanvas

from h5p2pdf.render.layout import load_font

from .model import Document, ImageItem, TextRun


def write_pdf(doc: Document, out_path: str) -> str:
    """Draw the buffered document model into a PDF file.

    The model uses a top-left origin; reportlab draws from the bottom-left,
    so every y coordinate is flipped against its page height.

    Args:
        doc: Rendered document model.
        out_path: Destination PDF path.

    Returns:
        out_path.
    """
    font_name = load_font(doc.font_file).name if doc.font_file else doc.font_name
    c = pdfcanvas.Canvas(out_path)
    for page in doc.pages:
        c.setPageSize((page.width, page.height))
        for item in sorted(page.items, key=lambda it: it.order):
            if isinstance(item, TextRun):
                c.setFillColorRGB(*item.color)
                c.setFont(font_name, item.font_size)
                for line in item.lines:
                    if line.text:
                        c.drawString(line.x, page.height - line.baseline, line.text)
            elif isinstance(item, ImageItem):
                if item.width <= 0 or item.height <= 0:
                    continue
                try:
                    c.drawImage(
                        item.src_path,
                        item.x,
                        page.height - item.y - item.height,
                        width=item.width,
                        height=item.height,
                        mask="auto",
                    )
                except Exception as e:
                    print(f"Warning: Couldn't embed image: {item.src_path} ({e})")
        c.showPage()
    c.save()
    return out_path
