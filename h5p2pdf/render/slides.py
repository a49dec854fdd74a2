"""Positioned rendering for H5P.CoursePresentation.

Every slide becomes one page. Slide elements carry percentage geometry
(x, y, width, height in 0..100) relative to the page content box; they are
placed absolutely instead of being flowed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from h5p2pdf.config import RenderSettings
from h5p2pdf.content import AssetResolver, choice_letter, library_name, strip_markup

from .tree import embed_image

COURSE_PRESENTATION = "H5P.CoursePresentation"
TEXT_LIBRARIES = ("H5P.AdvancedText", "H5P.Text")
IMAGE_LIBRARY = "H5P.Image"


@dataclass
class Rect:
    left: float
    top: float
    width: float
    height: float


def _percent(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(out) or math.isinf(out):
        return 0.0
    return out


def element_rect(element: Dict[str, Any], writer) -> Rect:
    """Absolute rectangle of a slide element on the current page."""
    m = writer.page.margins
    content_w = writer.content_width
    content_h = writer.content_height
    return Rect(
        left=m.left + (_percent(element.get("x")) / 100.0) * content_w,
        top=m.top + (_percent(element.get("y")) / 100.0) * content_h,
        width=(_percent(element.get("width")) / 100.0) * content_w,
        height=(_percent(element.get("height")) / 100.0) * content_h,
    )


def fallback_text(params: Dict[str, Any]) -> str:
    """Text residue of an element type without a dedicated renderer."""
    parts: List[str] = []
    text = strip_markup(params.get("text"))
    if text:
        parts.append(text)
    question = strip_markup(params.get("question"))
    if question:
        parts.append(question)
    choices = params.get("choices")
    if isinstance(choices, list):
        for i, choice in enumerate(choices):
            choice_text = strip_markup(choice.get("text")) if isinstance(choice, dict) else ""
            if choice_text:
                parts.append(f"{choice_letter(i)}) {choice_text}")
    return "\n".join(parts).strip()


class SlideRenderer:
    """Render `presentation.slides`, one page per slide."""

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

    def render_slides(self, content: Any) -> None:
        presentation = content.get("presentation") if isinstance(content, dict) else None
        if not isinstance(presentation, dict):
            return
        slides = presentation.get("slides")
        if not isinstance(slides, list):
            return

        for index, slide in enumerate(slides):
            if index > 0:
                self.writer.add_page()
            if isinstance(slide, dict):
                self._render_slide(slide)

    def _render_slide(self, slide: Dict[str, Any]) -> None:
        title = strip_markup(slide.get("title"))
        if title:
            m = self.writer.page.margins
            self.writer.text(
                title,
                m.left,
                m.top,
                font_size=self.settings.heading_font_size,
                role="heading",
            )
            self.writer.move_down(0.5)

        elements = slide.get("elements")
        if not isinstance(elements, list):
            return
        for element in elements:
            if not isinstance(element, dict):
                continue
            action = element.get("action")
            if not isinstance(action, dict) or not action:
                continue
            self._render_element(element, action)

    def _render_element(self, element: Dict[str, Any], action: Dict[str, Any]) -> None:
        lib = library_name(action.get("library"))
        params = action.get("params")
        if not isinstance(params, dict):
            params = {}
        rect = element_rect(element, self.writer)

        if lib in TEXT_LIBRARIES:
            text = strip_markup(params.get("text"))
            if text:
                self._text_in(rect, text)
        elif lib == IMAGE_LIBRARY:
            file_info = params.get("file")
            rel = file_info.get("path") if isinstance(file_info, dict) else None
            found = self.resolver.resolve(rel)
            if found:
                embed_image(
                    self.writer,
                    found,
                    self.embedded,
                    x=rect.left,
                    y=rect.top,
                    fit=(rect.width, rect.height),
                    align="center",
                    valign="center",
                )
        else:
            text = fallback_text(params)
            if text:
                self._text_in(rect, text)

    def _text_in(self, rect: Rect, text: str) -> None:
        self.writer.text(
            text,
            rect.left,
            rect.top,
            width=rect.width,
            height=rect.height,
            align="left",
            font_size=self.settings.body_font_size,
        )
