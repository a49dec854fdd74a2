"""Document cursor used by the renderers.

`DocumentWriter` records layout instructions into the `Document` model
instead of drawing directly, so every page stays buffered until the
output stage. That makes a backward pass (page numbers) possible and lets
tests assert on the exact placement of every text line and image.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from h5p2pdf.config import RenderSettings
from h5p2pdf.render.layout import align_offset, fit_size, layout_lines, load_font, probe_image_size

from .model import BLACK, Color, Document, ImageItem, Margins, Page, TextLine, TextRun


class DocumentWriter:
    """Append-only page writer with a flowing cursor.

    Doxygen:
    - @param settings: Page geometry, fonts and spacing. Defaults to A4 landscape.
    """

    def __init__(self, settings: Optional[RenderSettings] = None) -> None:
        self.settings = settings or RenderSettings()
        self.font = load_font(self.settings.font_file)
        self.document = Document(font_name=self.font.name, font_file=self.font.file)
        self.font_size: float = self.settings.body_font_size
        self.fill_color: Color = BLACK
        self.x: float = 0.0
        self.y: float = 0.0
        self._order = 0
        self._page_index = -1
        # the first page always exists
        self.add_page()

    # ------------------------------------------------------------------
    # pages
    # ------------------------------------------------------------------

    @property
    def page(self) -> Page:
        return self.document.pages[self._page_index]

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page_count(self) -> int:
        return len(self.document.pages)

    @property
    def content_width(self) -> float:
        m = self.page.margins
        return self.page.width - m.left - m.right

    @property
    def content_height(self) -> float:
        m = self.page.margins
        return self.page.height - m.top - m.bottom

    def add_page(self) -> Page:
        width, height = self.settings.page_dimensions()
        m = self.settings.margins
        page = Page(
            index=len(self.document.pages),
            width=float(width),
            height=float(height),
            margins=Margins(
                top=float(m.get("top", 0.0)),
                bottom=float(m.get("bottom", 0.0)),
                left=float(m.get("left", 0.0)),
                right=float(m.get("right", 0.0)),
            ),
        )
        self.document.pages.append(page)
        self._page_index = page.index
        self.x = page.margins.left
        self.y = page.margins.top
        return page

    def switch_to_page(self, index: int) -> Page:
        if index < 0 or index >= self.page_count:
            raise IndexError(
                f"switch_to_page({index}) out of bounds, buffered pages are 0 to {self.page_count - 1}"
            )
        self._page_index = index
        return self.page

    def flush(self) -> int:
        """Finish content emission and return the number of buffered pages."""
        return self.page_count

    # ------------------------------------------------------------------
    # cursor
    # ------------------------------------------------------------------

    def current_line_height(self) -> float:
        return self.font_size * self.settings.line_height_factor

    def move_down(self, lines: float = 1.0) -> None:
        self.y += lines * self.current_line_height()

    def _next_order(self) -> int:
        order = self._order
        self._order += 1
        return order

    # ------------------------------------------------------------------
    # content
    # ------------------------------------------------------------------

    def text(
        self,
        text: str,
        x: Optional[float] = None,
        y: Optional[float] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        align: str = "left",
        font_size: Optional[float] = None,
        color: Optional[Color] = None,
        role: str = "body",
    ) -> Optional[TextRun]:
        """Write wrapped text at (x, y) or at the cursor.

        Flowed text continues on a new page when a line would cross the
        bottom margin. With an explicit `height` the text is clipped to the
        box instead (the first line is always kept).
        """
        if font_size is not None:
            self.font_size = float(font_size)
        if color is not None:
            self.fill_color = color
        s = "" if text is None else str(text)
        if not s.strip():
            return None

        if x is not None:
            self.x = float(x)
        if y is not None:
            self.y = float(y)
        if width is None:
            width = self.page.width - self.x - self.page.margins.right

        size = self.font_size
        lh = self.current_line_height()
        wrapped = layout_lines(s, lambda t: self.font.width(t, size), width)
        if height is not None:
            max_lines = int(height // lh) if lh > 0 else len(wrapped)
            wrapped = wrapped[: max(1, max_lines)]

        segments: List[Tuple[Page, float, List[TextLine]]] = []
        cur_lines: List[TextLine] = []
        seg_top = self.y
        for line in wrapped:
            page = self.page
            if height is None and self.y + lh > page.max_y and self.y > page.margins.top:
                if cur_lines:
                    segments.append((page, seg_top, cur_lines))
                cur_lines = []
                x_keep = self.x
                self.add_page()
                self.x = x_keep
                seg_top = self.y
            lw = self.font.width(line, size)
            lx = self.x + align_offset(width, lw, align)
            cur_lines.append(
                TextLine(text=line, x=lx, y=self.y, width=lw, baseline=self.y + self.font.ascent(size))
            )
            self.y += lh
        if cur_lines:
            segments.append((self.page, seg_top, cur_lines))

        first: Optional[TextRun] = None
        for page, top, lines in segments:
            run = TextRun(
                page_index=page.index,
                order=self._next_order(),
                text=s if len(segments) == 1 else "\n".join(ln.text for ln in lines),
                x=self.x,
                y=top,
                width=float(width),
                height=len(lines) * lh,
                font_size=size,
                line_height=lh,
                lines=lines,
                align=align,
                color=self.fill_color,
                role=role,
            )
            page.items.append(run)
            if first is None:
                first = run
        return first

    def image(
        self,
        path: str,
        x: Optional[float] = None,
        y: Optional[float] = None,
        fit: Optional[Tuple[float, float]] = None,
        align: Optional[str] = None,
        valign: Optional[str] = None,
    ) -> Optional[ImageItem]:
        """Place an image scaled into `fit` (keeping aspect ratio).

        Raises if the file cannot be read as an image. A degenerate fit box
        places nothing.
        """
        img_w, img_h = probe_image_size(path)
        if fit is not None:
            box_w, box_h = float(fit[0]), float(fit[1])
            w, h = fit_size(img_w, img_h, box_w, box_h)
        else:
            w, h = float(img_w), float(img_h)
            box_w, box_h = w, h
        if w <= 0 or h <= 0:
            return None

        flowed = y is None
        left = self.x if x is None else float(x)
        if flowed:
            page = self.page
            if self.y + h > page.max_y and self.y > page.margins.top:
                self.add_page()
            top = self.y
        else:
            top = float(y)

        item = ImageItem(
            page_index=self.page.index,
            order=self._next_order(),
            src_path=path,
            x=left + align_offset(box_w, w, align),
            y=top + align_offset(box_h, h, valign),
            width=w,
            height=h,
        )
        self.page.items.append(item)
        if flowed:
            self.y = top + h
        return item
