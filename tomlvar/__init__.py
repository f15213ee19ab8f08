from __future__ import annotations

"""
tomlvar - Typed configuration variables populated from a TOML document.

This package provides:
- TomlVarSet: declares variables bound to dotted document paths and
  fills them from a loaded document.
- Value / Getter: the interface built-in and user-defined variable types
  implement.
- Module-level functions mirroring TomlVarSet that use a default set.
"""

from .default import (
    boolean,
    boolean_var,
    config,
    default_set,
    duration,
    duration_var,
    float64,
    float64_var,
    int64,
    int64_var,
    integer,
    integer_var,
    load,
    load_file,
    load_reader,
    lookup,
    n_var,
    parse,
    parsed,
    reset_for_testing,
    set,
    set_output,
    string,
    string_var,
    uint,
    uint64,
    uint64_var,
    uint_var,
    var,
    visit,
    visit_all,
)
from .document import Document
from .exceptions import (
    ConfigurationError,
    ConversionError,
    DocumentError,
    TomlVarPanic,
    UnknownVariableError,
)
from .registry import (
    CONTINUE_ON_ERROR,
    EXIT_ON_ERROR,
    PANIC_ON_ERROR,
    ErrorHandling,
    TomlVar,
    TomlVarSet,
)
from .values import Getter, Ref, TypedValue, Value

__all__ = [
    "CONTINUE_ON_ERROR",
    "EXIT_ON_ERROR",
    "PANIC_ON_ERROR",
    "ConfigurationError",
    "ConversionError",
    "Document",
    "DocumentError",
    "ErrorHandling",
    "Getter",
    "Ref",
    "TomlVar",
    "TomlVarPanic",
    "TomlVarSet",
    "TypedValue",
    "UnknownVariableError",
    "Value",
    "boolean",
    "boolean_var",
    "config",
    "default_set",
    "duration",
    "duration_var",
    "float64",
    "float64_var",
    "int64",
    "int64_var",
    "integer",
    "integer_var",
    "load",
    "load_file",
    "load_reader",
    "lookup",
    "n_var",
    "parse",
    "parsed",
    "reset_for_testing",
    "set",
    "set_output",
    "string",
    "string_var",
    "uint",
    "uint64",
    "uint64_var",
    "uint_var",
    "var",
    "visit",
    "visit_all",
]
