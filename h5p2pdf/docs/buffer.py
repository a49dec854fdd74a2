from __future__ import annotations

import os
import shutil
import tempfile
import time
from typing import Optional


class BufferManager:
    """Per-conversion scratch directory holding the extracted .h5p package.

    Each conversion gets its own ``temp_h5p_<timestamp>_*`` directory, so
    concurrent conversions never share files. Debug mode keeps the
    directory on disk; release mode removes it on cleanup().
    """

    def __init__(self, root: Optional[str] = None, debug: bool = False) -> None:
        self.debug = bool(debug)
        base = root or tempfile.gettempdir()
        os.makedirs(base, exist_ok=True)
        ts = time.strftime("%Y%m%d-%H%M%S")
        self.base_dir = tempfile.mkdtemp(prefix=f"temp_h5p_{ts}_", dir=base)

    def path(self, *parts: str) -> str:
        p = os.path.join(self.base_dir, *parts)
        os.makedirs(os.path.dirname(p), exist_ok=True)
        return p

    def cleanup(self) -> None:
        if self.debug:
            print(f"Debug buffer kept at: {self.base_dir}")
            return
        shutil.rmtree(self.base_dir, ignore_errors=True)
