"""Edit planning.

Combines scanner output and content validation into the final edit list.

Policy:
- valid content is always converted
- invalid content (unbalanced braces or brackets) is converted as-is unless
  strict mode is on, in which case it is skipped and its issues are
  collected into the result
- outside strict mode no issues are surfaced

Edit Ordering:
    Edits are returned sorted by descending ``start``. Applying them one at a
    time in that order to an immutable string keeps every not-yet-applied
    offset valid, since each replacement only shifts text after itself.

Thread Safety:
    Stateless. Safe to call from any thread.

"""

from collections.abc import Sequence

from dollarsmith.nodes import (
    MathDelimiter,
    NormalizationEdit,
    NormalizationResult,
    NormalizationStats,
    ValidationIssue,
)
from dollarsmith.utils.logger import get_logger
from dollarsmith.validator import validate_content

logger = get_logger(__name__)

# delimiter kind -> dollar token wrapped around the content
_DOLLARS = {"inline": "$", "display": "$$"}


def convert_delimiter(delimiter: MathDelimiter, text: str) -> NormalizationEdit:
    """Build the edit replacing one delimiter pair with dollar syntax."""
    dollars = _DOLLARS[delimiter.kind]
    return NormalizationEdit(
        start=delimiter.start,
        end=delimiter.end,
        insert=f"{dollars}{delimiter.content}{dollars}",
        original=text[delimiter.start : delimiter.end],
        delimiter_kind=delimiter.kind,
    )


def plan_edits(
    text: str,
    delimiters: Sequence[MathDelimiter],
    *,
    strict_mode: bool,
) -> NormalizationResult:
    """Decide which delimiters to convert.

    Args:
        text: Full document text the delimiters were scanned from
        delimiters: Delimiters in scan order
        strict_mode: Skip content that fails strict validation

    Returns:
        NormalizationResult with edits sorted by descending start.

    """
    edits: list[NormalizationEdit] = []
    issues: list[ValidationIssue] = []
    skipped = 0

    for delimiter in delimiters:
        validation = validate_content(delimiter.content)

        if not validation.is_valid and strict_mode:
            skipped += 1
            issues.extend(validation.issues)
            logger.debug(
                "Skipping %s math at %d: %s",
                delimiter.kind,
                delimiter.start,
                ", ".join(issue.kind for issue in validation.issues),
            )
            continue

        edits.append(convert_delimiter(delimiter, text))

    edits.sort(key=lambda edit: edit.start, reverse=True)

    stats = NormalizationStats(
        total_found=len(delimiters),
        converted=len(edits),
        skipped=skipped,
    )
    logger.info(
        "Math delimiters: %d found, %d converted, %d skipped",
        stats.total_found,
        stats.converted,
        stats.skipped,
    )
    return NormalizationResult(edits=tuple(edits), stats=stats, issues=tuple(issues))


__all__ = ["convert_delimiter", "plan_edits"]
