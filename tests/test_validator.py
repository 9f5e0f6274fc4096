"""Tests for math content validation."""

import pytest

from dollarsmith.validator import check_balance, validate_content


class TestCheckBalance:
    def test_balanced(self) -> None:
        assert check_balance("{a}{b{c}}", "{", "}") is None

    def test_unexpected_close_reported_immediately(self) -> None:
        assert check_balance("a}{", "{", "}") == 1

    def test_innermost_unclosed_opener(self) -> None:
        assert check_balance("{a{b", "{", "}") == 2

    def test_escape_skips_next_character(self) -> None:
        assert check_balance(r"\{", "{", "}") is None

    def test_escaped_backslash_then_real_brace(self) -> None:
        r"""``\\{`` is an escaped backslash followed by a real opener."""
        assert check_balance(r"\\{", "{", "}") == 2

    def test_trailing_backslash(self) -> None:
        assert check_balance("a\\", "(", ")") is None


class TestValidateContent:
    def test_accepts_balanced_content(self) -> None:
        result = validate_content("x^2 + {a} + [b] + (c)")
        assert result.is_valid is True
        assert result.issues == ()

    def test_rejects_unbalanced_braces(self) -> None:
        result = validate_content("x^{2")
        assert result.is_valid is False
        assert len(result.issues) == 1
        assert result.issues[0].kind == "unbalanced-braces"
        assert result.issues[0].position == 2

    def test_rejects_extra_closing_brace(self) -> None:
        result = validate_content("x}")
        assert result.is_valid is False
        assert result.issues[0].kind == "unbalanced-braces"
        assert result.issues[0].position == 1

    def test_rejects_unbalanced_brackets(self) -> None:
        result = validate_content("[a")
        assert result.is_valid is False
        assert result.issues[0].kind == "unbalanced-brackets"
        assert result.issues[0].position == 0

    def test_parentheses_are_advisory(self) -> None:
        result = validate_content("(a")
        assert result.is_valid is True
        assert len(result.issues) == 1
        assert result.issues[0].kind == "unbalanced-parentheses"
        assert result.issues[0].is_strict is False

    def test_escaped_braces(self) -> None:
        result = validate_content(r"\{ a \}")
        assert result.is_valid is True
        assert result.issues == ()

    def test_left_right_commands(self) -> None:
        result = validate_content(r"\left( a \right)")
        assert result.is_valid is True
        assert result.issues == ()

    @pytest.mark.parametrize("content", ["", "   ", "\n\t "])
    def test_empty_content_is_advisory(self, content: str) -> None:
        result = validate_content(content)
        assert result.is_valid is True
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert issue.kind == "empty-content"
        assert issue.position is None
        assert issue.message == "Math content is empty"

    def test_issue_order(self) -> None:
        """Issues come out braces, brackets, parentheses, emptiness."""
        result = validate_content(")]}")
        assert [i.kind for i in result.issues] == [
            "unbalanced-braces",
            "unbalanced-brackets",
            "unbalanced-parentheses",
        ]
        assert [i.position for i in result.issues] == [2, 1, 0]

    def test_strict_issue_with_advisory_is_invalid(self) -> None:
        result = validate_content("{(")
        assert result.is_valid is False
        assert [i.kind for i in result.issues] == ["unbalanced-braces", "unbalanced-parentheses"]

    def test_messages(self) -> None:
        result = validate_content("{[(")
        assert [i.message for i in result.issues] == [
            "Unbalanced braces {}",
            "Unbalanced brackets []",
            "Unbalanced parentheses ()",
        ]

    def test_never_reports_suspicious_pattern(self) -> None:
        result = validate_content(r"\frac{1}{0} \\ $$ \( \)")
        assert all(i.kind != "suspicious-pattern" for i in result.issues)
