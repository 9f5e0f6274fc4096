"""
dollarsmith: LaTeX math delimiter normalizer for Markdown

Rewrites ``\\(...\\)`` and ``\\[...\\]`` into ``$...$`` and ``$$...$$``
without touching code, HTML, comments, front matter, link targets, URLs or
images. Analysis is pure: it returns an edit plan that callers apply.

Quick Start:
    >>> from dollarsmith import normalize
    >>> normalize("This is \\\\(inline\\\\) math.")
    'This is $inline$ math.'

    >>> # Inspect the plan instead
    >>> from dollarsmith import analyze
    >>> result = analyze("Bad \\\\({math\\\\)", strict_mode=True)
    >>> result.stats.skipped
    1

    >>> # Spans from your own parser
    >>> from dollarsmith import ProtectedSpan, SpanKind
    >>> analyze(text, [ProtectedSpan(SpanKind.INLINE_CODE, 5, 11)])

Pipeline:
    extract_safe_regions -> scan_delimiters -> validate_content -> plan_edits

Installation:
    pip install dollarsmith              # Core (zero deps)
    pip install dollarsmith[test]        # + pytest, hypothesis
"""

from dollarsmith.config import (
    NormalizeConfig,
    get_normalize_config,
    normalize_config_context,
    reset_normalize_config,
    set_normalize_config,
)
from dollarsmith.edits import apply_edits, check_edits
from dollarsmith.errors import DollarSmithError, InvalidEditError, SerializationError
from dollarsmith.markdown import parse_outline
from dollarsmith.nodes import (
    MathDelimiter,
    NormalizationEdit,
    NormalizationResult,
    NormalizationStats,
    ProtectedSpan,
    SpanKind,
    TextRegion,
    ValidationIssue,
    ValidationResult,
)
from dollarsmith.normalizer import Normalizer, analyze, normalize
from dollarsmith.planner import convert_delimiter, plan_edits
from dollarsmith.regions import extract_safe_regions, is_position_safe, merge_spans
from dollarsmith.scanner import scan_delimiters
from dollarsmith.serialization import from_dict, from_json, spans_from_json, to_dict, to_json
from dollarsmith.validator import check_balance, validate_content
from dollarsmith.walker import PROTECTED_NODES, SyntaxNode, collect_protected_spans

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "analyze",
    "normalize",
    "Normalizer",
    # Pipeline stages
    "extract_safe_regions",
    "merge_spans",
    "is_position_safe",
    "scan_delimiters",
    "check_balance",
    "validate_content",
    "convert_delimiter",
    "plan_edits",
    # Edit application
    "apply_edits",
    "check_edits",
    # Syntax collaborators
    "parse_outline",
    "SyntaxNode",
    "PROTECTED_NODES",
    "collect_protected_spans",
    # Records
    "ProtectedSpan",
    "SpanKind",
    "TextRegion",
    "MathDelimiter",
    "ValidationIssue",
    "ValidationResult",
    "NormalizationEdit",
    "NormalizationStats",
    "NormalizationResult",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "spans_from_json",
    # Configuration (ContextVar-based)
    "NormalizeConfig",
    "get_normalize_config",
    "set_normalize_config",
    "reset_normalize_config",
    "normalize_config_context",
    # Errors
    "DollarSmithError",
    "InvalidEditError",
    "SerializationError",
]
