"""Apply normalization edits to a string.

The planner never mutates anything; this module is the reference way to
commit its edits to an immutable text buffer. Bounds are re-checked against
the text actually passed in, so edits planned against a different version
of the document are rejected instead of corrupting it.

Example:
    >>> result = analyze("This is \\\\(inline\\\\) math.")
    >>> apply_edits("This is \\\\(inline\\\\) math.", result.edits)
    'This is $inline$ math.'

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

from collections.abc import Sequence

from dollarsmith.errors import InvalidEditError
from dollarsmith.nodes import NormalizationEdit
from dollarsmith.utils.logger import get_logger

logger = get_logger(__name__)


def check_edits(edits: Sequence[NormalizationEdit], length: int) -> None:
    """Verify every edit fits a text of ``length`` and none overlap.

    Raises:
        InvalidEditError: On the first out-of-bounds or overlapping edit.

    """
    for edit in edits:
        if edit.start < 0 or edit.end > length or edit.start > edit.end:
            raise InvalidEditError("edit out of bounds", edit=edit, length=length)

    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.start < prev.end:
            raise InvalidEditError(
                f"edit overlaps [{prev.start}, {prev.end})", edit=cur, length=length
            )


def apply_edits(text: str, edits: Sequence[NormalizationEdit]) -> str:
    """Apply all edits to ``text`` as one atomic replacement.

    Edits are applied back to front regardless of the order given.

    Raises:
        InvalidEditError: If any edit does not fit ``text``. Nothing is
            applied in that case.

    """
    if not edits:
        return text

    check_edits(edits, len(text))

    parts: list[str] = []
    cursor = len(text)
    for edit in sorted(edits, key=lambda e: e.start, reverse=True):
        parts.append(text[edit.end : cursor])
        parts.append(edit.insert)
        cursor = edit.start
    parts.append(text[:cursor])

    logger.debug("Applied %d edit(s)", len(edits))
    return "".join(reversed(parts))


__all__ = ["apply_edits", "check_edits"]
