"""
GFA Reader - streaming line parser for GFA 1 and GFA 2 files.

Features:
  - Dispatch on the first field of each line, per-kind on/off switches
  - Pluggable id strategy (OpaqueId / DenseId) and tag storage
    (OptionalFields / NoOptionalFields)
  - Error tolerance: pedantic, safe (default) or ignore-all
  - Streaming: files are read line by line, never loaded whole
  - A record is built completely before it is handed out; a failing line
    never leaves a partial record behind
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

import tqdm

from gfakit import gfa1, gfa2
from gfakit.errors import (
    EmptyLine,
    ExtensionError,
    GFAIOError,
    InvalidLine,
    ParseError,
    ParseFieldError,
    ParserTolerance,
    UnknownLineType,
)
from gfakit.ids import OpaqueId
from gfakit.spec import (
    CONTAINMENT,
    EDGE,
    EXTENSIONS,
    FIELD_SEPARATOR,
    FRAGMENT,
    GAP,
    GROUP_O,
    GROUP_U,
    HEADER,
    LINK,
    PATH,
    SEGMENT,
)
from gfakit.tag import OptionalFields

logger = logging.getLogger(__name__)

# Builder switch name -> record kind letter
_SWITCHES = {
    "headers": HEADER,
    "segments": SEGMENT,
    "links": LINK,
    "containments": CONTAINMENT,
    "paths": PATH,
    "fragments": FRAGMENT,
    "edges": EDGE,
    "gaps": GAP,
    "groups_o": GROUP_O,
    "groups_u": GROUP_U,
}


class GFAParserBuilder:
    """
    Configure which lines to parse and how strictly.

    Usage:
        parser = (
            GFAParserBuilder.all()
            .containments(False)
            .ignore_errors()
            .build_gfa1(ids=DenseId)
        )
    """

    def __init__(self, enabled: set[bytes], tolerance: ParserTolerance = ParserTolerance.SAFE) -> None:
        self.enabled = set(enabled)
        self.tolerance = tolerance

    @classmethod
    def all(cls) -> GFAParserBuilder:
        """Parse every line kind."""
        return cls(set(_SWITCHES.values()))

    @classmethod
    def none(cls) -> GFAParserBuilder:
        """Parse nothing; switch on the kinds you want."""
        return cls(set())

    def _switch(self, name: str, include: bool) -> GFAParserBuilder:
        kind = _SWITCHES[name]
        if include:
            self.enabled.add(kind)
        else:
            self.enabled.discard(kind)
        return self

    def headers(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("headers", include)

    def segments(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("segments", include)

    def links(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("links", include)

    def containments(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("containments", include)

    def paths(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("paths", include)

    def fragments(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("fragments", include)

    def edges(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("edges", include)

    def gaps(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("gaps", include)

    def groups_o(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("groups_o", include)

    def groups_u(self, include: bool = True) -> GFAParserBuilder:
        return self._switch("groups_u", include)

    def error_tolerance(self, tolerance: ParserTolerance) -> GFAParserBuilder:
        self.tolerance = tolerance
        return self

    def ignore_errors(self) -> GFAParserBuilder:
        return self.error_tolerance(ParserTolerance.IGNORE_ALL)

    def ignore_safe_errors(self) -> GFAParserBuilder:
        return self.error_tolerance(ParserTolerance.SAFE)

    def pedantic_errors(self) -> GFAParserBuilder:
        return self.error_tolerance(ParserTolerance.PEDANTIC)

    def build_gfa1(self, ids: type = OpaqueId, tags: type = OptionalFields) -> GFA1Parser:
        return GFA1Parser(ids=ids, tags=tags, tolerance=self.tolerance, kinds=self.enabled)

    def build_gfa2(self, ids: type = OpaqueId, tags: type = OptionalFields) -> GFA2Parser:
        return GFA2Parser(ids=ids, tags=tags, tolerance=self.tolerance, kinds=self.enabled)


class _GFAParser:
    """Line dispatch and tolerance handling shared by both dialects."""

    RECORDS: dict[bytes, Any] = {}
    DOCUMENT: type = object

    def __init__(
        self,
        ids: type = OpaqueId,
        tags: type = OptionalFields,
        tolerance: ParserTolerance = ParserTolerance.SAFE,
        kinds: Iterable[bytes] | None = None,
    ) -> None:
        self.ids = ids
        self.tags = tags
        self.tolerance = tolerance
        enabled = set(self.RECORDS) if kinds is None else set(kinds)
        self._records = {k: v for k, v in self.RECORDS.items() if k in enabled}

    def parse_line(self, line: bytes) -> Any:
        """
        Parse one line into a record.

        Raises EmptyLine, UnknownLineType (also for disabled kinds) or
        InvalidLine wrapping the field error.
        """
        stripped = bytes(line).strip()
        if not stripped:
            raise EmptyLine()

        tokens = iter(stripped.split(FIELD_SEPARATOR))
        kind = next(tokens)
        record = self._records.get(kind)
        if record is None:
            raise UnknownLineType(kind)

        try:
            return record.parse_line(tokens, self.ids, self.tags)
        except ParseFieldError as e:
            raise InvalidLine(e, line) from e

    def iter_lines(self, lines: Iterable[bytes]) -> Iterator[Any]:
        """
        Yield a record for every parsable line. Bad lines are skipped or
        raised according to the tolerance.
        """
        for lineno, line in enumerate(lines, 1):
            try:
                record = self.parse_line(line)
            except ParseError as e:
                if not e.can_safely_continue(self.tolerance):
                    raise
                logger.debug("Skipping line %d: %s", lineno, e)
                continue
            yield record

    def parse_lines(self, lines: Iterable[bytes]) -> Any:
        """Parse an iterable of byte lines into a document."""
        document = self.DOCUMENT()
        for record in self.iter_lines(lines):
            document.insert(record)
        return document

    def parse_bytes(self, data: bytes) -> Any:
        return self.parse_lines(data.splitlines())

    def parse_file(self, path: str | Path, progress: bool = False) -> Any:
        """
        Parse a .gfa / .gfa1 / .gfa2 file, streaming it line by line.

        Raises ExtensionError before touching the file if the extension is not
        allowed, GFAIOError for I/O failures, and the first fatal ParseError.
        """
        path = Path(path)
        if path.suffix.lower() not in EXTENSIONS:
            raise ExtensionError(str(path))

        try:
            with open(path, "rb") as f:
                lines = tqdm.tqdm(f, desc=f"Parsing {path.name}", unit=" lines", disable=not progress)
                document = self.parse_lines(lines)
        except OSError as e:
            if isinstance(e, GFAIOError):
                raise
            raise GFAIOError(e) from e

        logger.info("Parsed %s: %s", path, document.counts())
        return document


class GFA1Parser(_GFAParser):
    """
    GFA 1 parser.

    Usage:
        gfa = GFA1Parser().parse_file("graph.gfa")

        # Integer ids, no tags, stop on the first bad line
        parser = GFA1Parser(ids=DenseId, tags=NoOptionalFields,
                            tolerance=ParserTolerance.PEDANTIC)
        for record in parser.iter_lines(open("graph.gfa", "rb")):
            ...
    """

    RECORDS = {
        HEADER: gfa1.Header,
        SEGMENT: gfa1.Segment,
        LINK: gfa1.Link,
        CONTAINMENT: gfa1.Containment,
        PATH: gfa1.Path,
    }
    DOCUMENT = gfa1.GFA


class GFA2Parser(_GFAParser):
    """GFA 2 parser. Same interface as GFA1Parser."""

    RECORDS = {
        HEADER: gfa2.Header,
        SEGMENT: gfa2.Segment,
        FRAGMENT: gfa2.Fragment,
        EDGE: gfa2.Edge,
        GAP: gfa2.Gap,
        GROUP_O: gfa2.GroupO,
        GROUP_U: gfa2.GroupU,
    }
    DOCUMENT = gfa2.GFA2

