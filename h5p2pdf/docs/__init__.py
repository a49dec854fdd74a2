"""Document layer: buffered page model, writer handle and output formats.

Exposes:
- Data model: Document, Page, TextRun, ImageItem
- DocumentWriter: cursor the renderers write into
- BufferManager: per-conversion extraction directory
- Writers: pdf (reportlab), docx (python-docx), txt
"""

from .model import Document, Page, TextRun, ImageItem
from .buffer import BufferManager
from .writer import DocumentWriter

__all__ = [
    "Document",
    "Page",
    "TextRun",
    "ImageItem",
    "BufferManager",
    "DocumentWriter",
]
