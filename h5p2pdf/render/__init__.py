"""Rendering engine: generic tree walker, positioned slides, page numbers."""

from .engine import render_content
from .pagination import stamp_page_numbers
from .slides import SlideRenderer
from .tree import TreeRenderer

__all__ = [
    "render_content",
    "stamp_page_numbers",
    "SlideRenderer",
    "TreeRenderer",
]
