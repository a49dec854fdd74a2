"""Content inspection helpers: asset lookup and text classification."""

from .assets import AssetResolver
from .text import (
    choice_letter,
    has_image_extension,
    is_image_reference,
    is_meaningful,
    library_name,
    strip_markup,
)

__all__ = [
    "AssetResolver",
    "choice_letter",
    "has_image_extension",
    "is_image_reference",
    "is_meaningful",
    "library_name",
    "strip_markup",
]
