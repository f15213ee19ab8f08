"""
Module-level functions operating on the default TomlVarSet.

The default set is named after the program (sys.argv[0]) and exits the
process with status 2 when parse() meets a bad value.
"""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path
from typing import IO, Any, Callable, Optional, TextIO

from .document import Document
from .registry import CONTINUE_ON_ERROR, EXIT_ON_ERROR, TomlVar, TomlVarSet
from .values import Ref, Value


def _program_name() -> str:
    return sys.argv[0] if sys.argv else ""


_default_set = TomlVarSet(_program_name(), EXIT_ON_ERROR)


def default_set() -> TomlVarSet:
    """Return the TomlVarSet used by the module-level functions."""
    return _default_set


def reset_for_testing() -> None:
    """
    Replace the default set with an empty one.

    The new set uses CONTINUE_ON_ERROR, so parse errors raise instead of
    exiting the test run.
    """
    global _default_set
    _default_set = TomlVarSet(_program_name(), CONTINUE_ON_ERROR)


def set_output(output: Optional[TextIO]) -> None:
    _default_set.set_output(output)


def visit_all(fn: Callable[[TomlVar], Any]) -> None:
    _default_set.visit_all(fn)


def visit(fn: Callable[[TomlVar], Any]) -> None:
    _default_set.visit(fn)


def lookup(path: str) -> Optional[TomlVar]:
    return _default_set.lookup(path)


def set(path: str) -> None:
    _default_set.set(path)


def n_var() -> int:
    return _default_set.n_var()


def var(value: Value, path: str) -> None:
    _default_set.var(value, path)


def boolean_var(ref: Ref[bool], path: str, value: bool = False) -> None:
    _default_set.boolean_var(ref, path, value)


def boolean(path: str, value: bool = False) -> Ref[bool]:
    return _default_set.boolean(path, value)


def integer_var(ref: Ref[int], path: str, value: int = 0) -> None:
    _default_set.integer_var(ref, path, value)


def integer(path: str, value: int = 0) -> Ref[int]:
    return _default_set.integer(path, value)


def int64_var(ref: Ref[int], path: str, value: int = 0) -> None:
    _default_set.int64_var(ref, path, value)


def int64(path: str, value: int = 0) -> Ref[int]:
    return _default_set.int64(path, value)


def uint_var(ref: Ref[int], path: str, value: int = 0) -> None:
    _default_set.uint_var(ref, path, value)


def uint(path: str, value: int = 0) -> Ref[int]:
    return _default_set.uint(path, value)


def uint64_var(ref: Ref[int], path: str, value: int = 0) -> None:
    _default_set.uint64_var(ref, path, value)


def uint64(path: str, value: int = 0) -> Ref[int]:
    return _default_set.uint64(path, value)


def string_var(ref: Ref[str], path: str, value: str = "") -> None:
    _default_set.string_var(ref, path, value)


def string(path: str, value: str = "") -> Ref[str]:
    return _default_set.string(path, value)


def float64_var(ref: Ref[float], path: str, value: float = 0.0) -> None:
    _default_set.float64_var(ref, path, value)


def float64(path: str, value: float = 0.0) -> Ref[float]:
    return _default_set.float64(path, value)


def duration_var(
    ref: Ref[timedelta], path: str, value: timedelta | str = timedelta(0)
) -> None:
    _default_set.duration_var(ref, path, value)


def duration(path: str, value: timedelta | str = timedelta(0)) -> Ref[timedelta]:
    return _default_set.duration(path, value)


def parse() -> None:
    _default_set.parse()


def parsed() -> bool:
    return _default_set.parsed()


def load(content: str, *, format: str = "toml") -> None:
    _default_set.load(content, format=format)


def load_file(path: str | Path) -> None:
    _default_set.load_file(path)


def load_reader(reader: IO[Any], *, format: str = "toml") -> None:
    _default_set.load_reader(reader, format=format)


def config() -> Optional[Document]:
    return _default_set.config()
