from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

Color = Tuple[float, float, float]

BLACK: Color = (0.0, 0.0, 0.0)
GRAY: Color = (0.5, 0.5, 0.5)


@dataclass
class Margins:
    top: float
    bottom: float
    left: float
    right: float


@dataclass
class TextLine:
    text: str
    x: float
    y: float
    width: float
    baseline: float


@dataclass
class TextRun:
    page_index: int
    order: int
    text: str
    x: float
    y: float
    width: float
    height: float
    font_size: float
    line_height: float
    lines: List[TextLine] = field(default_factory=list)
    align: str = "left"
    color: Color = BLACK
    role: str = "body"


@dataclass
class ImageItem:
    page_index: int
    order: int
    src_path: str
    x: float
    y: float
    width: float
    height: float


PageItem = Union[TextRun, ImageItem]


@dataclass
class Page:
    index: int
    width: float
    height: float
    margins: Margins
    items: List[PageItem] = field(default_factory=list)

    @property
    def max_y(self) -> float:
        return self.height - self.margins.bottom


@dataclass
class Document:
    pages: List[Page] = field(default_factory=list)
    font_name: str = "Helvetica"
    font_file: Optional[str] = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def iter_items(self) -> List[PageItem]:
        out: List[PageItem] = []
        for p in self.pages:
            # ensure stable order by 'order'
            out.extend(sorted(p.items, key=lambda it: getattr(it, "order", 0)))
        return out

    def texts(self, role: Optional[str] = None) -> List[str]:
        """Plain text of every TextRun in document order, optionally by role."""
        return [
            it.text
            for it in self.iter_items()
            if isinstance(it, TextRun) and (role is None or it.role == role)
        ]
