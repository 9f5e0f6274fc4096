"""ContextVar-based normalization configuration for dollarsmith.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Normalizer call, read by the pipeline in the context.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage and
    needs no locks.

Usage:
    # In Normalizer class
    normalizer = Normalizer(strict_mode=True)
    text = normalizer(source)  # Sets config internally via ContextVar

    # Direct pipeline usage (advanced)
    from dollarsmith.config import set_normalize_config, reset_normalize_config

    set_normalize_config(NormalizeConfig(strict_mode=True))
    try:
        result = analyze(source)
    finally:
        reset_normalize_config()

    # Or use the context manager
    with normalize_config_context(NormalizeConfig(strict_mode=True)):
        result = analyze(source)

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class NormalizeConfig:
    """Immutable normalization configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        strict_mode: Leave math with unbalanced braces or brackets unconverted
            and report why, instead of converting it as-is

    """

    strict_mode: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "NormalizeConfig":
        """Create NormalizeConfig from dictionary.

        Useful when settings come from an external source (a host
        application's saved settings, a JSON or TOML file).

        Only includes keys that are valid NormalizeConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = NormalizeConfig.from_dict({
            ...     "strict_mode": True,
            ...     "show_ribbon_button": False,
            ... })
            >>> config.strict_mode
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: NormalizeConfig = NormalizeConfig()

_normalize_config: ContextVar[NormalizeConfig] = ContextVar(
    "normalize_config",
    default=_DEFAULT_CONFIG,
)


def get_normalize_config() -> NormalizeConfig:
    """Get current normalization configuration (thread-local)."""
    return _normalize_config.get()


def set_normalize_config(config: NormalizeConfig) -> None:
    """Set normalization configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _normalize_config.set(config)


def reset_normalize_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _normalize_config.set(_DEFAULT_CONFIG)


@contextmanager
def normalize_config_context(config: NormalizeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Example:
        >>> with normalize_config_context(NormalizeConfig(strict_mode=True)):
        ...     result = analyze("\\\\({x\\\\)")
        ...     # strict_mode is True here
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _normalize_config.get()
    _normalize_config.set(config)
    try:
        yield
    finally:
        _normalize_config.set(previous)


__all__ = [
    "NormalizeConfig",
    "get_normalize_config",
    "set_normalize_config",
    "reset_normalize_config",
    "normalize_config_context",
]
