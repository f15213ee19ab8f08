from __future__ import annotations

from typing import Any


class ConfigurationError(Exception):
    """Raised when there is a problem loading or applying toml variables."""


class DocumentError(ConfigurationError):
    """Raised when a document cannot be read or parsed."""


class UnknownVariableError(ConfigurationError, KeyError):
    """Raised when a path is not declared in the variable set."""

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"no such tomlvar {self.path}"


class ConversionError(ConfigurationError, ValueError):
    """
    Raised when a document node cannot be assigned to a variable.

    The node exists but has the wrong shape, is out of range, or is not
    a valid duration literal.
    """

    def __init__(self, message: str, *, path: str | None = None, raw: Any = None):
        super().__init__(message)
        self.path = path
        self.raw = raw


class TomlVarPanic(BaseException):
    """
    Unrecoverable fault.

    Raised for a redeclared path and by sets using PANIC_ON_ERROR.
    Not caught by ``except Exception``.
    """
