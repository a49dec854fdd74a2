from __future__ import annotations

import os
from typing import Any, List, Optional


class AssetResolver:
    """Locate files referenced from content.json inside an extracted package.

    H5P authoring tools are inconsistent about where media ends up, so a
    relative reference is tried against several conventional locations.
    """

    def __init__(self, base_dir: str) -> None:
        self.base_dir = os.path.abspath(base_dir)

    def candidates(self, rel: str) -> List[str]:
        # references are always package-relative, even with a leading slash
        rel = rel.lstrip("/\\")
        name = os.path.basename(rel)
        return [
            os.path.join(self.base_dir, rel),
            os.path.join(self.base_dir, "content", rel),
            os.path.join(self.base_dir, name),
            os.path.join(self.base_dir, "content", "images", name),
            os.path.join(self.base_dir, "images", name),
        ]

    def resolve(self, rel: Any) -> Optional[str]:
        """Return the first existing candidate path for `rel`, or None."""
        if not rel or not isinstance(rel, str):
            return None
        for candidate in self.candidates(rel):
            if os.path.isfile(candidate):
                return candidate
        return None
