from __future__ import annotations

import os
from typing import Dict, Optional

from h5p2pdf.config import RenderSettings, load_settings
from h5p2pdf.content import AssetResolver
from h5p2pdf.render import render_content

from .buffer import BufferManager
from .docx_io import write_docx
from .package import read_h5p
from .pdf_io import write_pdf
from .txt import write_txt
from .writer import DocumentWriter

WRITERS = {
    "pdf": write_pdf,
    "docx": write_docx,
    "txt": write_txt,
}


def convert_h5p(
    file_path: str,
    out_format: str = "pdf",
    out_path: Optional[str] = None,
    debug_buffer: bool = False,
    settings: Optional[RenderSettings] = None,
    buffer_root: Optional[str] = None,
) -> Dict[str, str]:
    """High-level pipeline: extract .h5p → render content → paginate → write.

    - The whole content tree is rendered into a buffered document first; the
      output file is only written once rendering has fully succeeded.
    - The extraction directory is always cleaned up (kept in debug mode).
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    fmt = out_format.lower()
    if fmt not in WRITERS:
        raise ValueError(f"Unsupported output format: {out_format}")

    settings = settings or load_settings()
    buffer = BufferManager(root=buffer_root, debug=debug_buffer)

    try:
        # 1) Unzip and read content.json + h5p.json
        package = read_h5p(file_path, buffer)

        # 2) Render into the buffered document model
        writer = DocumentWriter(settings)
        resolver = AssetResolver(package.base_dir)
        embedded = render_content(package.content, package.main_library, writer, resolver, settings)

        # 3) Write output
        if out_path is None:
            base_dir = os.path.dirname(os.path.abspath(file_path))
            base_name = os.path.splitext(os.path.basename(file_path))[0]
            out_path = os.path.join(base_dir, f"{base_name}.{fmt}")

        out: Dict[str, str] = {}
        out[fmt] = WRITERS[fmt](writer.document, out_path)
        out["pages"] = str(writer.page_count)
        out["images"] = str(len(embedded))
        return out
    finally:
        # 4) Cleanup buffer depending on mode
        buffer.cleanup()
