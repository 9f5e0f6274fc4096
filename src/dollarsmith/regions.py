"""Safe region extraction.

Turns a set of protected spans into the complement set: ascending, disjoint
TextRegions covering every offset of the document that no protected span
covers. Only these regions are ever scanned for math delimiters.

Example:
    >>> spans = [ProtectedSpan(SpanKind.INLINE_CODE, 5, 11)]
    >>> extract_safe_regions(spans, 16)
    [TextRegion(start=0, end=5, kind='text'), TextRegion(start=11, end=16, kind='text')]

Spans may arrive in any order and may nest or overlap. An empty span
still splits the region around it. Malformed spans (``start > end`` or
negative offsets) are the producer's problem and are not corrected here.

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

from bisect import bisect_right
from collections.abc import Iterable, Sequence
from typing import Protocol

from dollarsmith.nodes import TextRegion


class Span(Protocol):
    """Anything with half-open ``start``/``end`` offsets."""

    @property
    def start(self) -> int: ...

    @property
    def end(self) -> int: ...


def merge_spans(spans: Iterable[Span]) -> list[tuple[int, int]]:
    """Merge overlapping spans into ascending ``(start, end)`` pairs.

    A span whose start precedes the current merged end is folded into it.
    Spans that merely touch stay separate; inversion treats both the same.

    """
    ordered = sorted(((s.start, s.end) for s in spans), key=lambda pair: pair[0])
    if not ordered:
        return []

    merged: list[tuple[int, int]] = []
    cur_start, cur_end = ordered[0]
    for start, end in ordered[1:]:
        if start < cur_end:
            cur_end = max(cur_end, end)
        else:
            merged.append((cur_start, cur_end))
            cur_start, cur_end = start, end
    merged.append((cur_start, cur_end))
    return merged


def extract_safe_regions(spans: Iterable[Span], length: int) -> list[TextRegion]:
    """Compute the safe regions of a document of ``length`` characters.

    Args:
        spans: Protected spans, any order, possibly overlapping
        length: Document length

    Returns:
        Ascending, pairwise disjoint regions. Their union with the protected
        spans covers ``[0, length)`` exactly once.

    """
    regions: list[TextRegion] = []
    cursor = 0

    for start, end in merge_spans(spans):
        if start > cursor:
            regions.append(TextRegion(cursor, start))
        cursor = max(cursor, end)

    if cursor < length:
        regions.append(TextRegion(cursor, length))

    return regions


def is_position_safe(pos: int, regions: Sequence[TextRegion]) -> bool:
    """Check whether ``pos`` falls inside one of the ascending ``regions``.

    Region ends are exclusive.

    """
    # Rightmost region starting at or before pos
    idx = bisect_right(regions, pos, key=lambda r: r.start) - 1
    return idx >= 0 and regions[idx].contains(pos)


__all__ = [
    "Span",
    "extract_safe_regions",
    "is_position_safe",
    "merge_spans",
]
