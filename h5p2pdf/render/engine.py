from __future__ import annotations

from typing import Any, Optional, Set

from h5p2pdf.config import RenderSettings
from h5p2pdf.content import AssetResolver, library_name

from .pagination import stamp_page_numbers
from .slides import COURSE_PRESENTATION, SlideRenderer
from .tree import TreeRenderer


def render_content(
    content: Any,
    main_library: Optional[str],
    writer,
    resolver: AssetResolver,
    settings: Optional[RenderSettings] = None,
) -> Set[str]:
    """Render a parsed content tree into `writer` and stamp page numbers.

    Doxygen:
    - @param content: Parsed content.json value.
    - @param main_library: `mainLibrary` from h5p.json, with or without version.
    - @param writer: DocumentWriter owned by this conversion.
    - @param resolver: AssetResolver rooted at the extracted package.
    - @param settings: Render settings; defaults to the writer's.
    - @return: Absolute paths of every image embedded during the conversion.
    """
    settings = settings or writer.settings
    embedded: Set[str] = set()

    if library_name(main_library) == COURSE_PRESENTATION:
        SlideRenderer(writer, resolver, settings, embedded).render_slides(content)
    else:
        TreeRenderer(writer, resolver, settings, embedded).render(content)

    page_count = writer.flush()
    stamp_page_numbers(writer, page_count)
    return embedded
