"""Typed data model for dollarsmith.

All records are frozen dataclasses with slots for:
- Immutability: Safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Model Overview:
ProtectedSpan       (input from a syntax collaborator)
TextRegion          (safe span, output of region extraction)
MathDelimiter       (matched \\( \\) or \\[ \\] pair)
ValidationIssue     (diagnostic about math content)
ValidationResult
NormalizationEdit   (single replace operation)
NormalizationStats
NormalizationResult

All offsets are half-open ``[start, end)`` indices into the document string.

Thread Safety:
All records are frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, TypeAlias

# =============================================================================
# Protected spans and safe regions
# =============================================================================


class SpanKind(Enum):
    """Closed set of syntax elements whose text must never be rewritten."""

    FENCED_CODE = "fenced-code"
    INDENTED_CODE = "indented-code"
    INLINE_CODE = "inline-code"
    HTML_BLOCK = "html-block"
    COMMENT_BLOCK = "comment-block"
    FRONT_MATTER = "front-matter"
    LINK_TARGET = "link-target"
    BARE_URL = "bare-url"
    IMAGE = "image"


@dataclass(frozen=True, slots=True)
class ProtectedSpan:
    """A protected syntax element, as reported by a parser.

    Spans may nest or overlap; region extraction merges them.

    """

    kind: SpanKind
    start: int
    end: int


RegionKind: TypeAlias = Literal["text"]


@dataclass(frozen=True, slots=True)
class TextRegion:
    """A contiguous span outside every protected element.

    Safe to scan for math delimiters.

    """

    start: int
    end: int
    kind: RegionKind = "text"

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, pos: int) -> bool:
        """True if ``pos`` lies in ``[start, end)``."""
        return self.start <= pos < self.end


# =============================================================================
# Delimiters
# =============================================================================

DelimiterKind: TypeAlias = Literal["inline", "display"]


@dataclass(frozen=True, slots=True)
class MathDelimiter:
    """Matched opener/closer pair with the math content between them.

    Source: \\(x^2\\)  ->  kind="inline", content="x^2"
    Source: \\[x^2\\]  ->  kind="display", content="x^2"

    ``content_start == start + len(open_token)`` and
    ``content_end == end - len(close_token)`` always hold.

    """

    kind: DelimiterKind
    start: int
    end: int
    open_token: str
    close_token: str
    content: str
    content_start: int
    content_end: int


# =============================================================================
# Validation
# =============================================================================

IssueKind: TypeAlias = Literal[
    "unbalanced-braces",
    "unbalanced-brackets",
    "unbalanced-parentheses",
    "empty-content",
    "suspicious-pattern",  # reserved, never produced
]

STRICT_ISSUE_KINDS: frozenset[str] = frozenset(("unbalanced-braces", "unbalanced-brackets"))


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Structural problem found in math content.

    ``position`` is relative to the content string, not the document.

    """

    kind: IssueKind
    message: str
    position: int | None = None

    @property
    def is_strict(self) -> bool:
        """Strict issues make content invalid; the rest are advisory."""
        return self.kind in STRICT_ISSUE_KINDS


@dataclass(frozen=True, slots=True)
class ValidationResult:
    is_valid: bool
    issues: tuple[ValidationIssue, ...] = ()


# =============================================================================
# Edits
# =============================================================================


@dataclass(frozen=True, slots=True)
class NormalizationEdit:
    """Replace ``[start, end)`` of the untouched document with ``insert``."""

    start: int
    end: int
    insert: str
    original: str
    delimiter_kind: DelimiterKind


@dataclass(frozen=True, slots=True)
class NormalizationStats:
    """Counts for one analysis run.

    ``converted + skipped == total_found`` always holds.

    """

    total_found: int = 0
    converted: int = 0
    skipped: int = 0


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Edits (descending by ``start``), stats and collected diagnostics.

    ``issues`` holds the diagnostics of skipped delimiters only; it stays
    empty outside strict mode.

    """

    edits: tuple[NormalizationEdit, ...]
    stats: NormalizationStats
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.edits)
