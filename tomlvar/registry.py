from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import IO, Any, Callable, Dict, List, Optional, TextIO

from .document import Document, parse_document, parse_document_file, parse_document_stream
from .exceptions import ConversionError, TomlVarPanic, UnknownVariableError
from .values import (
    BoolValue,
    DurationValue,
    Float64Value,
    Int64Value,
    IntValue,
    Ref,
    StringValue,
    Uint64Value,
    UintValue,
    Value,
)

logger = logging.getLogger(__name__)


class ErrorHandling(enum.Enum):
    """How TomlVarSet.parse (and set) react to a value that cannot be applied."""

    CONTINUE_ON_ERROR = 0  # raise the ConversionError to the caller
    EXIT_ON_ERROR = 1  # sys.exit(2)
    PANIC_ON_ERROR = 2  # raise TomlVarPanic


CONTINUE_ON_ERROR = ErrorHandling.CONTINUE_ON_ERROR
EXIT_ON_ERROR = ErrorHandling.EXIT_ON_ERROR
PANIC_ON_ERROR = ErrorHandling.PANIC_ON_ERROR


@dataclass(frozen=True)
class TomlVar:
    """A declared variable: the document path and the value bound to it."""

    path: str
    value: Value


def _sorted_vars(tomlvars: Dict[str, TomlVar]) -> List[TomlVar]:
    return [tomlvars[path] for path in sorted(tomlvars)]


class TomlVarSet:
    """
    A set of declared toml variables.

    Typical usage:

        from tomlvar import TomlVarSet, CONTINUE_ON_ERROR

        tvs = TomlVarSet("myapp", CONTINUE_ON_ERROR)
        debug = tvs.boolean("app.debug", False)
        port = tvs.integer("server.port", 8080)
        timeout = tvs.duration("server.timeout", "30s")

        tvs.load_file("config.toml")
        tvs.parse()

        print(port.value, timeout.value)

    The set is not synchronized. To reload, build and parse a fresh set
    and publish its results, instead of re-parsing a shared one.
    """

    def __init__(
        self,
        name: str = "",
        error_handling: ErrorHandling = CONTINUE_ON_ERROR,
        *,
        int_bits: int = 64,
    ):
        if int_bits not in (32, 64):
            raise ValueError(f"int_bits must be 32 or 64, not {int_bits!r}")
        self._name = name
        self._error_handling = error_handling
        self._int_bits = int_bits
        self._parsed = False
        self._formal: Dict[str, TomlVar] = {}
        self._actual: Dict[str, TomlVar] = {}
        self._document: Optional[Document] = None
        self._output: Optional[TextIO] = None

    def init(self, name: str, error_handling: ErrorHandling) -> None:
        """Set the name and error handling policy of the set."""
        self._name = name
        self._error_handling = error_handling

    @property
    def name(self) -> str:
        return self._name

    @property
    def error_handling(self) -> ErrorHandling:
        return self._error_handling

    @property
    def int_bits(self) -> int:
        return self._int_bits

    @property
    def output(self) -> TextIO:
        """Destination for diagnostics. Defaults to sys.stderr."""
        if self._output is None:
            return sys.stderr
        return self._output

    def set_output(self, output: Optional[TextIO]) -> None:
        """Set the diagnostics destination. None restores sys.stderr."""
        self._output = output

    def __repr__(self) -> str:
        return (
            f"<TomlVarSet name={self._name!r} vars={len(self._formal)} "
            f"parsed={self._parsed}>"
        )

    def visit_all(self, fn: Callable[[TomlVar], Any]) -> None:
        """Call fn for every declared variable, in path order."""
        for tomlvar in _sorted_vars(self._formal):
            fn(tomlvar)

    def visit(self, fn: Callable[[TomlVar], Any]) -> None:
        """Call fn for every variable that has been set, in path order."""
        for tomlvar in _sorted_vars(self._actual):
            fn(tomlvar)

    def lookup(self, path: str) -> Optional[TomlVar]:
        """Return the declared variable for path, or None."""
        return self._formal.get(path)

    def n_var(self) -> int:
        """Return the number of variables that have been set."""
        return len(self._actual)

    def __len__(self) -> int:
        return len(self._actual)

    def config(self) -> Optional[Document]:
        """Return the loaded document, or None before a successful load."""
        return self._document

    def parsed(self) -> bool:
        """Report whether parse() has been called."""
        return self._parsed

    def load(self, content: str, *, format: str = "toml") -> None:
        """Parse document text and make it the set's document."""
        self._document = parse_document(content, format=format)
        logger.debug("%s: loaded document from text", self._label())

    def load_file(self, path: str | Path) -> None:
        """Read and parse a document file and make it the set's document."""
        self._document = parse_document_file(path)
        logger.debug("%s: loaded document from %s", self._label(), path)

    def load_reader(self, reader: IO[Any], *, format: str = "toml") -> None:
        """Read a stream to the end and make its document the set's document."""
        self._document = parse_document_stream(reader, format=format)
        logger.debug("%s: loaded document from stream", self._label())

    def set(self, path: str) -> None:
        """
        Apply the document value at path to the variable declared there.

        The variable is marked as set even if the document has nothing at
        path, in which case it keeps its current value.

        :raises UnknownVariableError: if path was never declared.
        :raises ConversionError: if the value cannot be applied and the set
            uses CONTINUE_ON_ERROR.
        """
        tomlvar = self._formal.get(path)
        if tomlvar is None:
            raise UnknownVariableError(path)
        try:
            self._parse_one(tomlvar)
        except ConversionError as exc:
            self._handle_error(exc)

    def parse(self) -> None:
        """
        Apply the loaded document to every declared variable.

        Processing stops at the first variable that fails; variables
        applied before it keep their new values. What happens next is
        decided by the set's ErrorHandling.
        """
        self._parsed = True
        logger.debug("%s: parsing %d variables", self._label(), len(self._formal))

        for tomlvar in list(self._formal.values()):
            try:
                self._parse_one(tomlvar)
            except ConversionError as exc:
                self._handle_error(exc)

    def _parse_one(self, tomlvar: TomlVar) -> None:
        try:
            tomlvar.value.set(tomlvar.path, self._document)
        except ValueError as exc:
            raise self._failf(tomlvar.path, exc) from exc
        self._actual[tomlvar.path] = tomlvar
        logger.debug("%s: set %s = %s", self._label(), tomlvar.path, tomlvar.value)

    def _failf(self, path: str, exc: Exception) -> ConversionError:
        err = ConversionError(
            f"invalid value for toml var {path}: {exc}",
            path=path,
            raw=getattr(exc, "raw", None),
        )
        print(err, file=self.output)
        return err

    def _handle_error(self, exc: ConversionError) -> None:
        if self._error_handling is EXIT_ON_ERROR:
            sys.exit(2)
        if self._error_handling is PANIC_ON_ERROR:
            raise TomlVarPanic(str(exc)) from exc
        raise exc

    def _label(self) -> str:
        return self._name or "tomlvar"

    def var(self, value: Value, path: str) -> None:
        """
        Declare a variable with a caller-supplied Value.

        :raises TomlVarPanic: if path is already declared in this set.
        """
        if path in self._formal:
            if self._name:
                msg = f"{self._name} sets TomlVar redefined: {path}"
            else:
                msg = f"TomlVar redefined: {path}"
            print(msg, file=self.output)
            raise TomlVarPanic(msg)
        self._formal[path] = TomlVar(path, value)

    def boolean_var(self, ref: Ref[bool], path: str, value: bool = False) -> None:
        self.var(BoolValue(value, ref), path)

    def boolean(self, path: str, value: bool = False) -> Ref[bool]:
        """Declare a bool variable and return the Ref that will hold its value."""
        ref: Ref[bool] = Ref(value)
        self.boolean_var(ref, path, value)
        return ref

    def integer_var(self, ref: Ref[int], path: str, value: int = 0) -> None:
        self.var(IntValue(value, ref, bits=self._int_bits), path)

    def integer(self, path: str, value: int = 0) -> Ref[int]:
        """Declare an int variable limited to the set's int_bits."""
        ref: Ref[int] = Ref(value)
        self.integer_var(ref, path, value)
        return ref

    def int64_var(self, ref: Ref[int], path: str, value: int = 0) -> None:
        self.var(Int64Value(value, ref), path)

    def int64(self, path: str, value: int = 0) -> Ref[int]:
        ref: Ref[int] = Ref(value)
        self.int64_var(ref, path, value)
        return ref

    def uint_var(self, ref: Ref[int], path: str, value: int = 0) -> None:
        self.var(UintValue(value, ref, bits=self._int_bits), path)

    def uint(self, path: str, value: int = 0) -> Ref[int]:
        """Declare an unsigned variable limited to the set's int_bits."""
        ref: Ref[int] = Ref(value)
        self.uint_var(ref, path, value)
        return ref

    def uint64_var(self, ref: Ref[int], path: str, value: int = 0) -> None:
        self.var(Uint64Value(value, ref), path)

    def uint64(self, path: str, value: int = 0) -> Ref[int]:
        ref: Ref[int] = Ref(value)
        self.uint64_var(ref, path, value)
        return ref

    def string_var(self, ref: Ref[str], path: str, value: str = "") -> None:
        self.var(StringValue(value, ref), path)

    def string(self, path: str, value: str = "") -> Ref[str]:
        ref: Ref[str] = Ref(value)
        self.string_var(ref, path, value)
        return ref

    def float64_var(self, ref: Ref[float], path: str, value: float = 0.0) -> None:
        self.var(Float64Value(value, ref), path)

    def float64(self, path: str, value: float = 0.0) -> Ref[float]:
        ref: Ref[float] = Ref(value)
        self.float64_var(ref, path, value)
        return ref

    def duration_var(
        self, ref: Ref[timedelta], path: str, value: timedelta | str = timedelta(0)
    ) -> None:
        self.var(DurationValue(value, ref), path)

    def duration(self, path: str, value: timedelta | str = timedelta(0)) -> Ref[timedelta]:
        """Declare a duration variable; the default may be a literal such as "5s"."""
        ref: Ref[timedelta] = Ref(timedelta(0))
        self.duration_var(ref, path, value)
        return ref
