"""Text classification helpers for H5P content strings.

H5P content.json mixes prose with library names, MIME types, UUIDs and
enum codes. These helpers decide which strings are worth printing and
reduce HTML fragments to plain text.
"""

from __future__ import annotations

import html
import re
from typing import Any

STRUCTURAL_NAMESPACE = "H5P"

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "svg")

_TAG_RE = re.compile(r"<[^>]*>?")
_WHITESPACE_RE = re.compile(r"\s+")
_NAMESPACED_RE = re.compile(r"^" + re.escape(STRUCTURAL_NAMESPACE) + r"\.", re.IGNORECASE)
_MIME_RE = re.compile(r"^(image|application|text)/", re.IGNORECASE)
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
_ENUM_CODE_RE = re.compile(r"^[A-Z_]{1,10}$")
_LATIN_RE = re.compile(r"[A-Za-z]")
_IMAGE_EXT_RE = re.compile(r"\.(png|jpe?g|gif|svg)\Z", re.IGNORECASE)
_IMAGE_DIR_RE = re.compile(r"^images?/", re.IGNORECASE)


def strip_markup(text: Any) -> str:
    """Remove markup tags and entities, collapse whitespace and trim.

    Decoding an entity can reveal a new tag (``&lt;b&gt;``), so the
    cleanup repeats until the result no longer changes.
    """
    if not isinstance(text, str):
        return ""
    cur = text
    while True:
        out = _TAG_RE.sub(" ", cur)
        out = html.unescape(out)
        out = _WHITESPACE_RE.sub(" ", out).strip()
        if out == cur:
            return out
        cur = out


def is_meaningful(text: Any) -> bool:
    """Return True if the string looks like human-readable content."""
    if not isinstance(text, str):
        return False
    t = text.strip()
    if not t:
        return False
    if _NAMESPACED_RE.match(t):
        return False
    if _MIME_RE.match(t):
        return False
    if _UUID_RE.match(t):
        return False
    if _ENUM_CODE_RE.match(t):
        return False
    if not _LATIN_RE.search(t):
        return False
    return True


def has_image_extension(value: Any) -> bool:
    return isinstance(value, str) and bool(_IMAGE_EXT_RE.search(value))


def is_image_reference(value: Any) -> bool:
    """Image heuristic for inline strings: known extension or images/ prefix."""
    if not isinstance(value, str):
        return False
    return has_image_extension(value) or bool(_IMAGE_DIR_RE.match(value))


def choice_letter(index: int) -> str:
    """Letter label for a 0-based choice index: A..Z, then AA, AB, ..."""
    n = max(0, int(index)) + 1
    letters = ""
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def library_name(tag: Any) -> str:
    """Strip the version suffix from a content-type tag ("H5P.Image 1.1")."""
    if not isinstance(tag, str):
        return ""
    parts = tag.split(" ")
    return parts[0]
