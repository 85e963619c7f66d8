"""
File writer for the rewrite engine.

Content is fully computed in memory before the write, and written atomically
(temp file + rename) so a failure never leaves a half-written workflow.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import tempfile
from pathlib import Path


def write_text_atomic(path: Path | str, text: str, encoding: str = "utf-8") -> None:
    """
    Replace a file's content atomically.

    Args:
        path: File to overwrite
        text: New content
        encoding: Codec the content is encoded with

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    content = text.encode(encoding)

    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".action_pin_",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        if path.exists():
            shutil.copymode(path, temp_path)
        # Rename (atomic on most filesystems)
        os.replace(temp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(temp_path)
        raise
