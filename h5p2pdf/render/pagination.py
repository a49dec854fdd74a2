from __future__ import annotations

from typing import Optional

from h5p2pdf.docs.model import GRAY

PAGE_NUMBER_OFFSET = 35.0


def stamp_page_numbers(writer, page_count: Optional[int] = None, font_size: Optional[float] = None) -> int:
    """Draw "Page <n>" centered at the bottom of every buffered page.

    Must run once, after all content has been emitted. The bottom margin is
    zeroed while stamping so the label never triggers a page break.

    Doxygen:
    - @param writer: DocumentWriter holding the buffered pages.
    - @param page_count: Pages to stamp; defaults to writer.flush().
    - @param font_size: Label size; defaults to settings.page_number_font_size.
    - @return: Number of pages stamped.
    """
    count = writer.flush() if page_count is None else page_count
    size = font_size or writer.settings.page_number_font_size
    previous_color = writer.fill_color
    previous_size = writer.font_size
    for i in range(count):
        page = writer.switch_to_page(i)
        original_bottom = page.margins.bottom
        page.margins.bottom = 0
        try:
            writer.text(
                f"Page {i + 1}",
                0,
                page.height - PAGE_NUMBER_OFFSET,
                width=page.width,
                align="center",
                font_size=size,
                color=GRAY,
                role="page_number",
            )
        finally:
            page.margins.bottom = original_bottom
    writer.fill_color = previous_color
    writer.font_size = previous_size
    return count
