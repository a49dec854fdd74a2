"""Reading .h5p packages.

An .h5p file is a zip archive with an ``h5p.json`` manifest (naming the
main library) and the content description, normally at
``content/content.json``, next to the media it references.
"""

from __future__ import annotations

import json
import os
import zipfile
from dataclasses import dataclass
from typing import Any, List, Optional

from .buffer import BufferManager

CONTENT_CANDIDATES = (
    os.path.join("content", "content.json"),
    "content.json",
    "content",
)
MANIFEST_NAME = "h5p.json"


@dataclass
class H5PPackage:
    base_dir: str
    content: Any
    main_library: Optional[str] = None


def extract_package(h5p_path: str, dest_dir: str) -> str:
    """Unzip the package into `dest_dir` and return it."""
    with zipfile.ZipFile(h5p_path) as archive:
        archive.extractall(dest_dir)
    return dest_dir


def _load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8-sig") as f:
        return json.load(f)


def find_content_json(base_dir: str) -> Any:
    """Locate and parse the content description of an extracted package.

    Doxygen:
    - @param base_dir: Root of the extracted archive.
    - @return: Parsed content value.
    - @throws FileNotFoundError: If no content description can be found.
    - @throws json.JSONDecodeError: If content.json exists but is not valid JSON.
    """
    for rel in CONTENT_CANDIDATES:
        p = os.path.join(base_dir, rel)
        if os.path.isfile(p):
            return _load_json(p)

    # fallback: any top-level json that looks like H5P content
    names: List[str] = sorted(os.listdir(base_dir)) if os.path.isdir(base_dir) else []
    for name in names:
        p = os.path.join(base_dir, name)
        if not name.lower().endswith(".json") or not os.path.isfile(p):
            continue
        try:
            cand = _load_json(p)
        except (OSError, ValueError):
            continue
        if isinstance(cand, dict) and (cand.get("title") or cand.get("library") or cand.get("params")):
            return cand

    raise FileNotFoundError("Could not find content.json in the extracted H5P package.")


def read_main_library(base_dir: str) -> Optional[str]:
    manifest = os.path.join(base_dir, MANIFEST_NAME)
    if not os.path.exists(manifest):
        return None
    try:
        data = _load_json(manifest)
    except Exception as e:
        print(f"Warning: Error parsing {MANIFEST_NAME}: {e}")
        return None
    main_library = data.get("mainLibrary") if isinstance(data, dict) else None
    return main_library if isinstance(main_library, str) else None


def read_h5p(path: str, buffer: BufferManager) -> H5PPackage:
    """Extract an .h5p archive into the buffer and read its content tree."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"H5P file not found: {path}")
    base_dir = extract_package(path, buffer.base_dir)
    content = find_content_json(base_dir)
    return H5PPackage(
        base_dir=base_dir,
        content=content,
        main_library=read_main_library(base_dir),
    )
