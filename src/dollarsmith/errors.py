"""Exception classes for dollarsmith.

The analysis pipeline itself never raises: it reports problems as
ValidationIssue records. Exceptions are reserved for the outer layers
(edit application, serialization, command line).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dollarsmith.nodes import NormalizationEdit


class DollarSmithError(Exception):
    """Base exception for all dollarsmith errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidEditError(DollarSmithError):
    """Edit cannot be applied to the current text.

    Raised when an edit falls outside the document or overlaps another
    edit, typically because the text changed after analysis.
    """

    def __init__(
        self,
        message: str,
        edit: NormalizationEdit | None = None,
        length: int | None = None,
    ) -> None:
        """Initialize invalid edit error.

        Args:
            message: Description of the problem
            edit: The offending edit (optional)
            length: Length of the text the edit was checked against (optional)
        """
        self.message = message
        self.edit = edit
        self.length = length

        location = ""
        if edit is not None:
            location = f"[{edit.start}, {edit.end})"
            if length is not None:
                location += f" in text of length {length}"
            location += ": "

        super().__init__(f"{location}{message}")


class SerializationError(DollarSmithError):
    """Payload cannot be converted to or from dollarsmith records."""

    pass
