"""Generic renderer for arbitrary H5P content trees.

Walks the parsed content.json depth-first and flows every piece of
readable text and every resolvable image into the document. Used for all
content types that have no dedicated positioned layout.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Set

from h5p2pdf.config import RenderSettings
from h5p2pdf.content import (
    AssetResolver,
    choice_letter,
    has_image_extension,
    is_image_reference,
    is_meaningful,
    strip_markup,
)

# Printed first, in this order
TEXT_KEYS = (
    "title",
    "name",
    "label",
    "question",
    "text",
    "body",
    "prompt",
    "description",
    "alt",
    "subtitle",
    "summary",
)
CHOICE_KEYS = ("choices", "answers", "options")
CHOICE_LABEL_KEYS = ("text", "title", "label")
# Structural / metadata keys that never hold printable content
SKIP_KEYS = frozenset({"library", "mime", "type", "subContent", "files", "params", "metadata"})
IMAGE_FIELD_KEYS = ("path", "file")


def is_present(value: Any) -> bool:
    """Truthiness of a JSON value where empty containers still count as present."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return True


def embed_image(writer, path: str, embedded: Set[str], **kwargs) -> bool:
    """Embed an image, reporting (not raising) files that cannot be drawn."""
    try:
        item = writer.image(path, **kwargs)
    except Exception as e:
        print(f"Warning: Couldn't embed image: {path} ({e})")
        return False
    if item is None:
        return False
    embedded.add(os.path.abspath(path))
    return True


class TreeRenderer:
    """Flowed rendering of an untyped content tree.

    Doxygen:
    - @param writer: DocumentWriter receiving text and images.
    - @param resolver: AssetResolver for image references.
    - @param settings: Font sizes and image limits.
    - @param embedded: Set collecting absolute paths of embedded images.
    """

    def __init__(
        self,
        writer,
        resolver: AssetResolver,
        settings: Optional[RenderSettings] = None,
        embedded: Optional[Set[str]] = None,
    ) -> None:
        self.writer = writer
        self.resolver = resolver
        self.settings = settings or writer.settings
        self.embedded: Set[str] = embedded if embedded is not None else set()

    def render(self, node: Any) -> None:
        if node is None:
            return
        if isinstance(node, str):
            self._render_string(node)
        elif isinstance(node, list):
            for item in node:
                self.render(item)
        elif isinstance(node, dict):
            self._render_mapping(node)
        # numbers and booleans carry nothing printable

    # ------------------------------------------------------------------

    def _add_image(self, path: str) -> None:
        fit = (self.writer.content_width, self.settings.image_max_height)
        if embed_image(self.writer, path, self.embedded, fit=fit, align="center"):
            self.writer.move_down(1)

    def _emit_text(self, text: str) -> None:
        self.writer.text(text, font_size=self.settings.body_font_size)

    def _render_string(self, value: str) -> None:
        if is_image_reference(value):
            found = self.resolver.resolve(value)
            if found:
                self._add_image(found)
                return
        cleaned = strip_markup(value)
        if is_meaningful(cleaned):
            self._emit_text(cleaned)
            self.writer.move_down(0.25)

    def _render_mapping(self, obj: Dict[str, Any]) -> None:
        for key in TEXT_KEYS:
            if is_present(obj.get(key)):
                self.render(obj[key])

        choice_key = next((k for k in CHOICE_KEYS if is_present(obj.get(k))), None)
        if choice_key is not None:
            items = obj[choice_key]
            if isinstance(items, list) and items:
                self._render_choices(items)

        for key, value in obj.items():
            if key in SKIP_KEYS or key in TEXT_KEYS:
                continue
            self.render(value)

        for key in IMAGE_FIELD_KEYS:
            value = obj.get(key)
            if has_image_extension(value):
                found = self.resolver.resolve(value)
                if found:
                    self._add_image(found)

    def _render_choices(self, items: List[Any]) -> None:
        self.writer.move_down(0.2)
        for i, item in enumerate(items):
            cleaned = strip_markup(choice_label(item))
            if is_meaningful(cleaned):
                self._emit_text(f"{choice_letter(i)}) {cleaned}")
            self.render(item)
        self.writer.move_down(0.3)


def choice_label(item: Any) -> str:
    """Return the label of one choice/answer/option entry."""
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        for key in CHOICE_LABEL_KEYS:
            value = item.get(key)
            if isinstance(value, str) and value:
                return value
    return ""
