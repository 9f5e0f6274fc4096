"""Structural validation of math content.

Checks only what can be checked without understanding LaTeX: balanced
``{}``, ``[]`` and ``()`` pairs, and non-empty content. A backslash escapes
the character that follows it, so ``\\{`` or ``\\left(`` never count as
openers or closers of their own.

Classification:
- unbalanced braces / brackets: strict, content is invalid
- unbalanced parentheses / empty content: advisory, content stays valid

Issues are always reported in the order braces, brackets, parentheses,
emptiness.

Example:
    >>> validate_content("x^{2")
    ValidationResult(is_valid=False, issues=(ValidationIssue(kind='unbalanced-braces', ...),))

Thread Safety:
    Stateless. Safe to call from any thread.

"""

from dollarsmith.nodes import STRICT_ISSUE_KINDS, IssueKind, ValidationIssue, ValidationResult

# (opener, closer, issue kind, message), in reporting order
_PAIRS: tuple[tuple[str, str, IssueKind, str], ...] = (
    ("{", "}", "unbalanced-braces", "Unbalanced braces {}"),
    ("[", "]", "unbalanced-brackets", "Unbalanced brackets []"),
    ("(", ")", "unbalanced-parentheses", "Unbalanced parentheses ()"),
)


def check_balance(content: str, opener: str, closer: str) -> int | None:
    """Find the first imbalance of one bracket pair.

    Args:
        content: Math content without delimiter tokens
        opener: Opening character
        closer: Closing character

    Returns:
        Position of an unexpected closer (reported as soon as it is seen),
        else position of the innermost unclosed opener, else None when
        balanced.

    """
    stack: list[int] = []
    i = 0
    n = len(content)
    while i < n:
        char = content[i]
        if char == "\\":
            i += 2
            continue
        if char == opener:
            stack.append(i)
        elif char == closer:
            if not stack:
                return i
            stack.pop()
        i += 1

    if stack:
        return stack[-1]
    return None


def validate_content(content: str) -> ValidationResult:
    """Validate math content for structural correctness.

    Args:
        content: Math content (without delimiters)

    Returns:
        ValidationResult; ``is_valid`` is False only if a strict issue is
        present, however many advisory issues accompany it.

    """
    issues: list[ValidationIssue] = []

    for opener, closer, kind, message in _PAIRS:
        position = check_balance(content, opener, closer)
        if position is not None:
            issues.append(ValidationIssue(kind=kind, message=message, position=position))

    if not content.strip():
        issues.append(ValidationIssue(kind="empty-content", message="Math content is empty"))

    is_valid = not any(issue.kind in STRICT_ISSUE_KINDS for issue in issues)
    return ValidationResult(is_valid=is_valid, issues=tuple(issues))


__all__ = ["check_balance", "validate_content"]
