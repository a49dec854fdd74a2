import json
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from reportlab.lib.pagesizes import A3, A4, A5, LEGAL, LETTER, landscape, portrait

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SETTINGS_PATH = os.path.join(PROJECT_ROOT, "config", "settings.json")

PAGE_SIZES: Dict[str, Tuple[float, float]] = {
    "A3": A3,
    "A4": A4,
    "A5": A5,
    "LETTER": LETTER,
    "LEGAL": LEGAL,
}


def _default_margins() -> Dict[str, float]:
    return {"top": 50.0, "bottom": 70.0, "left": 50.0, "right": 50.0}


@dataclass
class RenderSettings:
    page_size: str = "A4"
    orientation: str = "landscape"
    margins: Dict[str, float] = field(default_factory=_default_margins)
    font_file: Optional[str] = None
    body_font_size: float = 12.0
    heading_font_size: float = 16.0
    page_number_font_size: float = 10.0
    image_max_height: float = 400.0
    line_height_factor: float = 1.2

    def page_dimensions(self) -> Tuple[float, float]:
        """Return (width, height) of a page in points."""
        size = PAGE_SIZES.get(str(self.page_size).upper(), A4)
        if str(self.orientation).lower() == "portrait":
            return portrait(size)
        return landscape(size)


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


def load_settings(path: Optional[str] = None) -> RenderSettings:
    """Load render settings from config/settings.json (or an explicit path).

    Unknown keys are ignored. A missing or unreadable file falls back to the
    defaults with a warning, the conversion itself never depends on it.
    """
    settings = RenderSettings()
    settings_path = path or SETTINGS_PATH

    if not os.path.exists(settings_path):
        if path is not None:
            print(f"Warning: settings file not found at {settings_path}; using defaults")
        return settings

    try:
        with open(settings_path, "r", encoding="utf-8") as settings_file:
            data = json.load(settings_file) or {}
    except Exception as exc:
        print(f"Warning: Could not load settings from {settings_path}: {exc}")
        return settings

    if not isinstance(data, dict):
        print(f"Warning: settings in {settings_path} must be a JSON object; using defaults")
        return settings

    page_size = data.get("page_size")
    if isinstance(page_size, str):
        if page_size.upper() in PAGE_SIZES:
            settings.page_size = page_size.upper()
        else:
            print(f"Warning: unknown page_size '{page_size}', keeping {settings.page_size}")

    orientation = data.get("orientation")
    if isinstance(orientation, str) and orientation.lower() in ("landscape", "portrait"):
        settings.orientation = orientation.lower()

    margins = data.get("margins")
    if isinstance(margins, dict):
        for side in ("top", "bottom", "left", "right"):
            value = margins.get(side)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0:
                settings.margins[side] = float(value)

    font_rel = data.get("font_file")
    if font_rel:
        # relative font paths are resolved against the project root
        font_abs = _resolve_path(PROJECT_ROOT, str(font_rel))
        if os.path.isfile(font_abs):
            settings.font_file = font_abs
        else:
            print(f"Warning: font file from settings does not exist: {font_abs}")

    for key in (
        "body_font_size",
        "heading_font_size",
        "page_number_font_size",
        "image_max_height",
        "line_height_factor",
    ):
        value = data.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            setattr(settings, key, float(value))

    return settings
