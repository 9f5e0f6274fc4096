"""End-to-end normalization.

Wires the pipeline stages together:

    protected spans -> safe regions -> delimiters -> validation -> edits

When no spans are supplied, the built-in outline parser provides them.

Thread Safety:
    analyze() and normalize() are pure apart from reading the ContextVar
    config. Normalizer instances are immutable and may be shared.

"""

from collections.abc import Iterable

from dollarsmith.config import (
    NormalizeConfig,
    get_normalize_config,
    reset_normalize_config,
    set_normalize_config,
)
from dollarsmith.edits import apply_edits
from dollarsmith.markdown import parse_outline
from dollarsmith.nodes import NormalizationResult
from dollarsmith.planner import plan_edits
from dollarsmith.regions import Span, extract_safe_regions
from dollarsmith.scanner import scan_delimiters
from dollarsmith.walker import collect_protected_spans


def analyze(
    text: str,
    spans: Iterable[Span] | None = None,
    *,
    strict_mode: bool | None = None,
) -> NormalizationResult:
    """Plan the conversion of every math delimiter in ``text``.

    Args:
        text: Document text
        spans: Protected spans from a parser. None means parse ``text`` as
            Markdown with the built-in outline parser.
        strict_mode: Override the active NormalizeConfig.

    Returns:
        NormalizationResult; edits are sorted by descending start.

    Example:
        >>> analyze("Bad \\\\({math\\\\)", strict_mode=True).stats
        NormalizationStats(total_found=1, converted=0, skipped=1)

    """
    if strict_mode is None:
        strict_mode = get_normalize_config().strict_mode
    if spans is None:
        spans = collect_protected_spans(parse_outline(text))

    regions = extract_safe_regions(spans, len(text))
    delimiters = scan_delimiters(text, regions)
    return plan_edits(text, delimiters, strict_mode=strict_mode)


def normalize(
    text: str,
    spans: Iterable[Span] | None = None,
    *,
    strict_mode: bool | None = None,
) -> str:
    """Return ``text`` with math delimiters converted to dollar syntax.

    Example:
        >>> normalize("This is \\\\(inline\\\\) math.")
        'This is $inline$ math.'

    """
    result = analyze(text, spans, strict_mode=strict_mode)
    return apply_edits(text, result.edits)


class Normalizer:
    """Reusable normalizer bound to one configuration.

    Usage:
        >>> normalizer = Normalizer(strict_mode=True)
        >>> normalizer("\\\\[E=mc^2\\\\]")
        '$$E=mc^2$$'

        >>> result = normalizer.analyze(source)
        >>> result.stats.skipped
        0

    Thread Safety:
        Sets config via ContextVar (thread-local) for the duration of each
        call. Safe for concurrent use.

    """

    __slots__ = ("_config",)

    def __init__(self, *, strict_mode: bool = False, config: NormalizeConfig | None = None) -> None:
        """Initialize normalizer.

        Args:
            strict_mode: Skip math with unbalanced braces or brackets
            config: Complete config; takes precedence over ``strict_mode``
        """
        self._config = config or NormalizeConfig(strict_mode=strict_mode)

    @property
    def config(self) -> NormalizeConfig:
        return self._config

    def analyze(self, text: str, spans: Iterable[Span] | None = None) -> NormalizationResult:
        """Plan edits for ``text`` under this normalizer's config."""
        set_normalize_config(self._config)
        try:
            return analyze(text, spans)
        finally:
            reset_normalize_config()

    def __call__(self, text: str, spans: Iterable[Span] | None = None) -> str:
        """Normalize ``text`` in one call."""
        result = self.analyze(text, spans)
        return apply_edits(text, result.edits)

    def normalize_many(self, sources: Iterable[str]) -> list[str]:
        """Normalize several Markdown documents.

        Sets config once, processes all, resets once.

        """
        set_normalize_config(self._config)
        try:
            return [normalize(source) for source in sources]
        finally:
            reset_normalize_config()


__all__ = ["Normalizer", "analyze", "normalize"]
