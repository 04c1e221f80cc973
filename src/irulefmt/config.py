"""ContextVar-based format configuration for irulefmt.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Formatter built without an explicit config reads the active one.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from irulefmt.config import FormatConfig, format_config_context

    with format_config_context(FormatConfig(indent=b"\\t")):
        output = format_ast(tree)

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Attributes:
        indent: Indentation unit, repeated once per nesting level
        max_blank_lines: Longest run of blank lines kept in the output

    """

    indent: bytes = b"    "
    max_blank_lines: int = 2

    def __post_init__(self) -> None:
        if not isinstance(self.indent, bytes):
            msg = f"indent must be bytes, got {type(self.indent).__name__}"
            raise TypeError(msg)
        if self.max_blank_lines < 0:
            msg = f"max_blank_lines must be >= 0, got {self.max_blank_lines}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "FormatConfig":
        """Create FormatConfig from a mapping.

        Unknown keys are ignored. A ``str`` indent is UTF-8 encoded.

        Example:
            >>> FormatConfig.from_dict({"indent": "  ", "other": 1}).indent
            b'  '

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if isinstance(filtered.get("indent"), str):
            filtered["indent"] = filtered["indent"].encode("utf-8")
        return cls(**filtered)


_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (context-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for the current context."""
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to the default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
]
