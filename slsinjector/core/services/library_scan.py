"""
Library scanning — build the LibrarySet from a directory listing.

Read-only.  Raises before anything downstream can mutate state.
"""

from __future__ import annotations

import logging
from pathlib import Path

from slsinjector.core.errors import EmptySetError, SourceMissingError
from slsinjector.core.models.config import HOME_PLACEHOLDER
from slsinjector.core.models.library import LibrarySet

logger = logging.getLogger(__name__)


def list_libraries(directory: Path, suffix: str = ".so") -> list[Path]:
    """Immediate entries of *directory* ending in *suffix*, sorted by path.

    Only regular files count (symlinks to files included).  Returns
    ``[]`` for a missing directory; callers that need the distinction
    use ``scan_libraries``.
    """
    if not directory.is_dir():
        return []
    found = [
        entry for entry in directory.iterdir()
        if entry.name.endswith(suffix) and entry.is_file()
    ]
    return sorted(found, key=str)


def to_portable(path: Path | str, home: Path | str, placeholder: str = HOME_PLACEHOLDER) -> str:
    """Replace a leading home directory with *placeholder*.

    Only a whole-component prefix matches: with home ``/home/u`` the
    path ``/home/user2/x.so`` is left alone.
    """
    text = str(path)
    home_str = str(home).rstrip("/")
    if not home_str:
        return text
    if text == home_str:
        return placeholder
    if text.startswith(home_str + "/"):
        return placeholder + text[len(home_str):]
    return text


def scan_libraries(
    directory: Path,
    home: Path | str,
    *,
    suffix: str = ".so",
    placeholder: str = HOME_PLACEHOLDER,
) -> LibrarySet:
    """Scan *directory* into a ``LibrarySet``.

    Raises:
        SourceMissingError: The directory does not exist.
        EmptySetError: No entry matches *suffix*.
    """
    if not directory.is_dir():
        raise SourceMissingError(f"SLSsteam directory not found at: {directory}")

    paths = list_libraries(directory, suffix)
    if not paths:
        raise EmptySetError(f"No {suffix} files found in {directory}. Cannot install.")

    for p in paths:
        logger.info("Found library: %s", p)

    return LibrarySet(
        paths=tuple(paths),
        portable=tuple(to_portable(p, home, placeholder) for p in paths),
    )
