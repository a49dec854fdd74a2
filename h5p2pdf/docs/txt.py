from __future__ import annotations

import os
from typing import List

from .model import Document, ImageItem, TextRun


def write_txt(doc: Document, out_path: str) -> str:
    lines: List[str] = []
    for item in doc.iter_items():
        if isinstance(item, TextRun):
            if item.role == "page_number":
                continue
            lines.append((item.text or "").strip())
        elif isinstance(item, ImageItem):
            # inline marker
            lines.append(f"[image: {os.path.basename(item.src_path)}]")
    txt = "\n\n".join([ln for ln in lines if ln])
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(txt)
    return out_path
