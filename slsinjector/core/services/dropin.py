"""
Drop-in rendering — LibrarySet → DropInDocument.

Pure.  Output is byte-for-byte deterministic for a given set.
"""

from __future__ import annotations

from slsinjector.core.models.library import DropInDocument, LibrarySet


def build_document(libraries: LibrarySet) -> DropInDocument:
    return DropInDocument(value=libraries.value, sources=libraries.paths)
