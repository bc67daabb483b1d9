"""Atomic file replacement helpers."""

import os
import shutil
import tempfile
from pathlib import Path


def atomic_write_text(path: Path, content: str, preserve_mode: bool = False) -> None:
    """Write ``content`` to ``path`` via a temp file + rename.

    Readers see either the old or the new content, never a truncated file.
    Newlines are written untranslated.

    Raises:
        OSError: If the temp file cannot be written or renamed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if preserve_mode and path.exists():
            shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except BaseException:
        # Clean up temp file on failure
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise
