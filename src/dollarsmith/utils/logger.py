"""Logger lookup under the ``dollarsmith`` namespace.

Library modules only emit records (stats at info, skipped delimiters and
applied edits at debug); handlers and levels belong to the application.
The command line sets them from ``-v``.

Example:
    >>> from dollarsmith.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Found %d math delimiter(s)", 3)
"""

from __future__ import annotations

import logging

_NAMESPACE = "dollarsmith"


def get_logger(name: str) -> logging.Logger:
    """Return the standard library logger for ``name`` inside the namespace.

    Names already under ``dollarsmith`` are used as they are; anything else,
    including look-alikes such as ``dollarsmith_extra``, gets the prefix so
    one ``logging.getLogger("dollarsmith")`` setting reaches every record.

    Example:
        >>> get_logger("scanner").name
        'dollarsmith.scanner'
        >>> get_logger("dollarsmith.planner").name
        'dollarsmith.planner'
    """
    if name != _NAMESPACE and not name.startswith(f"{_NAMESPACE}."):
        name = f"{_NAMESPACE}.{name}"
    return logging.getLogger(name)
