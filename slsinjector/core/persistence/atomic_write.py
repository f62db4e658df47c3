"""
Atomic file writes — temp file in the target directory, then rename.

A crash mid-write leaves either the old file or nothing at the target
path, never a truncated one.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# rw-r--r--
DEFAULT_MODE = 0o644


def write_atomic(path: Path, content: str | bytes, *, mode: int = DEFAULT_MODE) -> None:
    """Write *content* to *path* atomically with permission bits *mode*.

    Creates the parent directory if needed.

    Raises:
        OSError: The write or rename failed.  The temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode("utf-8") if isinstance(content, str) else content

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, mode)
        os.replace(tmp, path)
        logger.debug("Wrote %s (%d bytes, mode %o)", path, len(data), mode)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
