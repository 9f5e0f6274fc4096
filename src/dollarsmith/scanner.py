"""Math delimiter scanner.

Finds ``\\(...\\)`` (inline) and ``\\[...\\]`` (display) pairs inside safe
regions. Each region is scanned on its own; a match never crosses a region
boundary.

Scanning Rules:
- ``\\\\`` (escaped backslash) is consumed as one unit and never opens
- ``\\(`` opens inline math, ``\\[`` opens display math
- any other backslash is consumed alone
- the closer search skips backslash pairs the same way, and the first
  matching closer wins
- an opener with no closer in its region is consumed (two characters) and
  scanning resumes right after it

Nested same-type delimiters are not supported: in ``\\( a \\( b \\) c \\)``
the first opener pairs with the first closer and the tail stays literal.

Complexity:
    O(n) per region. Dispatch uses str.find and explicit character checks
    rather than regular expressions so escaping stays auditable.

Thread Safety:
    Stateless. Safe to call from any thread.

"""

from collections.abc import Iterable

from dollarsmith.nodes import DelimiterKind, MathDelimiter, TextRegion
from dollarsmith.utils.logger import get_logger

logger = get_logger(__name__)

# opener follower -> (kind, open token, closer follower, close token)
_OPENERS: dict[str, tuple[DelimiterKind, str, str, str]] = {
    "(": ("inline", "\\(", ")", "\\)"),
    "[": ("display", "\\[", "]", "\\]"),
}


def scan_delimiters(text: str, regions: Iterable[TextRegion]) -> list[MathDelimiter]:
    """Find all math delimiters inside the given safe regions.

    Args:
        text: Full document text
        regions: Safe regions in ascending order

    Returns:
        Delimiters in strictly increasing position order.

    """
    delimiters: list[MathDelimiter] = []
    for region in regions:
        _scan_region(text, region.start, region.end, delimiters)

    logger.debug("Found %d math delimiter(s)", len(delimiters))
    return delimiters


def _scan_region(text: str, start: int, end: int, out: list[MathDelimiter]) -> None:
    """Scan ``text[start:end]`` left to right, appending matches to ``out``."""
    pos = start
    while pos < end:
        slash = text.find("\\", pos, end)
        if slash == -1:
            return

        # A follower outside the region cannot complete a token
        follower = text[slash + 1] if slash + 1 < end else ""

        if follower == "\\":
            pos = slash + 2
            continue

        opener = _OPENERS.get(follower)
        if opener is None:
            pos = slash + 1
            continue

        kind, open_token, close_char, close_token = opener
        content_start = slash + 2
        closer = _find_closer(text, content_start, end, close_char)
        if closer == -1:
            pos = content_start
            continue

        out.append(
            MathDelimiter(
                kind=kind,
                start=slash,
                end=closer + 2,
                open_token=open_token,
                close_token=close_token,
                content=text[content_start:closer],
                content_start=content_start,
                content_end=closer,
            )
        )
        pos = closer + 2


def _find_closer(text: str, pos: int, limit: int, close_char: str) -> int:
    """Return the offset of the first unescaped ``\\<close_char>`` before limit.

    Returns -1 if there is none.

    """
    while pos < limit:
        slash = text.find("\\", pos, limit)
        if slash == -1 or slash + 1 >= limit:
            return -1

        follower = text[slash + 1]
        if follower == "\\":
            pos = slash + 2
        elif follower == close_char:
            return slash
        else:
            pos = slash + 1
    return -1


__all__ = ["scan_delimiters"]
