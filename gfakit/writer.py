"""
GFA Writer - serialize GFA / GFA2 documents.

Records are written one per line in document order: headers first, then
every other kind in the order the dialect lists them. Output parses back to
an equal document with the same id strategy and tag storage.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class GFAWriter:
    """
    Usage:
        data = GFAWriter.serialize(gfa)
        GFAWriter.write(gfa, "out.gfa")
    """

    @staticmethod
    def serialize(document: Any) -> bytes:
        return b"".join(record.render() + b"\n" for record in document.lines())

    @staticmethod
    def write(document: Any, path: str | Path) -> int:
        """Write line by line. Returns the number of bytes written."""
        written = 0
        with open(path, "wb") as f:
            for record in document.lines():
                written += f.write(record.render() + b"\n")
        logger.info("Wrote %d records (%d bytes) to %s", len(document), written, path)
        return written
