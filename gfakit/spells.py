"""
GFA Spells - Aliased API with Harry Potter spell names.

    accio()            → Summon every record of one kind from a file
    polyjuice()        → Transform a GFA 1 document into GFA 2
    revelio()          → Reveal the name hidden in a dense integer id
    prior_incantato()  → Check a file strictly and report what is in it
    geminio()          → Merge several documents of the same dialect

Usage:
    from gfakit.spells import accio, polyjuice, revelio, prior_incantato, geminio

    links = accio("graph.gfa", "L")
    gfa2 = polyjuice(gfa)
    name = revelio(8317)                  # b"s1"
    report = prior_incantato("graph.gfa")
    merged = geminio(gfa_a, gfa_b)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gfakit.gfa1 import GFA
    from gfakit.gfa2 import GFA2


# =============================================================================
# accio - Summon records from a .gfa file
# =============================================================================

def accio(path: str, kind: str | bytes, gfa2: bool = False, **kwargs: Any) -> list:
    """
    Summon every record of one kind from a file.

    Only the requested kind is parsed; every other line is skipped.

        segments = accio("graph.gfa", "S")
        edges = accio("graph.gfa2", "E", gfa2=True)
    """
    from gfakit.reader import GFA1Parser, GFA2Parser

    if isinstance(kind, str):
        kind = kind.encode("ascii")
    parser_cls = GFA2Parser if gfa2 else GFA1Parser
    if kind not in parser_cls.RECORDS:
        raise ValueError(f"Unknown record kind for this dialect: {kind!r}")
    parser = parser_cls(kinds={kind}, **kwargs)
    return list(parser.parse_file(path).lines())


# =============================================================================
# polyjuice - Transform GFA 1 into GFA 2
# =============================================================================

def polyjuice(gfa: GFA) -> GFA2:
    """
    Transform a GFA 1 document into its GFA 2 counterpart.

        gfa2 = polyjuice(GFA1Parser().parse_file("graph.gfa"))
        gfa2.write("graph.gfa2")
    """
    from gfakit.converters import convert_gfa1_to_gfa2
    return convert_gfa1_to_gfa2(gfa)


# =============================================================================
# revelio - Reveal a dense id
# =============================================================================

def revelio(value: int, reference: bool = False) -> bytes:
    """
    Cast Revelio: reveal the name hidden in a DenseId integer.

        revelio(8317)                     # b"s1"
        revelio(83171, reference=True)    # b"s1-"
    """
    from gfakit.ids import DenseId, render_reference

    if reference:
        return render_reference(value, DenseId.orientation(value))
    return DenseId.decode(value)


# =============================================================================
# prior_incantato - Strict validation report
# =============================================================================

def prior_incantato(path: str, gfa2: bool = False) -> dict:
    """
    Cast Prior Incantato: parse a file pedantically and report the result.

        result = prior_incantato("graph.gfa")
        assert result["valid"]
        result["counts"]["segments"]
    """
    from gfakit.errors import GFAError, ParserTolerance
    from gfakit.reader import GFA1Parser, GFA2Parser

    parser_cls = GFA2Parser if gfa2 else GFA1Parser
    try:
        document = parser_cls(tolerance=ParserTolerance.PEDANTIC).parse_file(path)
    except GFAError as e:
        return {"valid": False, "error": str(e), "counts": None}
    return {"valid": True, "error": None, "counts": document.counts()}


# =============================================================================
# geminio - Merge documents (Doubling Charm)
# =============================================================================

def geminio(*documents: GFA | GFA2) -> GFA | GFA2:
    """
    Cast Geminio: merge documents of the same dialect into a new one.
    Records keep their order: all of the first document, then the second...

        merged = geminio(part1, part2, part3)
    """
    if len(documents) < 2:
        raise ValueError("Geminio requires at least 2 documents to merge")
    kinds = {type(d) for d in documents}
    if len(kinds) != 1:
        raise ValueError("Geminio cannot merge GFA and GFA2 documents")

    merged = type(documents[0])()
    for document in documents:
        for record in document.lines():
            merged.insert(record)
    return merged
