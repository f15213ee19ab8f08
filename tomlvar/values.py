from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Generic, TypeVar

from .document import Document
from .exceptions import ConversionError
from .utils import format_duration, format_float, parse_duration

T = TypeVar("T")

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1


class Ref(Generic[T]):
    """
    Mutable cell holding a variable's current value.

    Declaring a variable returns a Ref (or writes into one supplied by the
    caller); parsing updates ``ref.value`` in place.
    """

    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


class Value(ABC):
    """
    The interface to the dynamic value stored in a toml variable.

    ``set`` is called once per variable while parsing, with the variable's
    path and the loaded document (None when nothing was loaded). A path
    missing from the document must leave the value untouched.
    ``str(value)`` renders the current value as text.

    User-defined types may implement this directly. The path they receive
    is exactly the string they were declared with, so a custom value can
    treat it as e.g. a comma-separated list of paths.
    """

    @abstractmethod
    def __str__(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def set(self, path: str, document: Document | None) -> None:
        raise NotImplementedError


class Getter(Value):
    """A Value whose typed contents can be retrieved with ``get()``."""

    @abstractmethod
    def get(self) -> Any:
        raise NotImplementedError


class TypedValue(Getter, Generic[T]):
    """
    Built-in value bound to a Ref.

    The default is written into the Ref on construction, so it is visible
    before anything is loaded. Subclasses supply ``convert`` and may
    override ``normalize`` and ``format``.
    """

    type_name = "value"

    def __init__(self, value: T, ref: Ref[T]):
        ref.value = self.normalize(value)
        self._ref = ref

    @property
    def ref(self) -> Ref[T]:
        return self._ref

    def set(self, path: str, document: Document | None) -> None:
        if document is None:
            return
        raw = document.lookup(path)
        if raw is None:
            return
        self._ref.value = self.convert(raw, path)

    def get(self) -> T:
        return self._ref.value

    def __str__(self) -> str:
        return self.format(self._ref.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._ref.value!r})"

    def normalize(self, value: Any) -> T:
        return value

    def format(self, value: T) -> str:
        return str(value)

    @abstractmethod
    def convert(self, raw: Any, path: str) -> T:
        raise NotImplementedError

    def _mismatch(self, raw: Any, path: str) -> ConversionError:
        return ConversionError(
            f"can't convert {raw!r} ({type(raw).__name__}) at {path!r} to {self.type_name}",
            path=path,
            raw=raw,
        )


class BoolValue(TypedValue[bool]):
    type_name = "bool"

    def normalize(self, value: Any) -> bool:
        return bool(value)

    def format(self, value: bool) -> str:
        return "true" if value else "false"

    def convert(self, raw: Any, path: str) -> bool:
        if not isinstance(raw, bool):
            raise self._mismatch(raw, path)
        return raw


class _IntegerValue(TypedValue[int]):
    """Integer value restricted to [minimum, maximum]."""

    minimum = INT64_MIN
    maximum = INT64_MAX

    def normalize(self, value: Any) -> int:
        return int(value)

    def convert(self, raw: Any, path: str) -> int:
        # bool is a subclass of int, but a toml boolean is not an integer
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise self._mismatch(raw, path)
        if not self.minimum <= raw <= self.maximum:
            raise ConversionError(
                f"value {raw} at {path!r} out of range for {self.type_name} "
                f"[{self.minimum}, {self.maximum}]",
                path=path,
                raw=raw,
            )
        return raw


class IntValue(_IntegerValue):
    """Signed integer of a chosen platform width (64 bits unless told otherwise)."""

    type_name = "int"

    def __init__(self, value: int, ref: Ref[int], *, bits: int = 64):
        self.minimum = -(1 << (bits - 1))
        self.maximum = (1 << (bits - 1)) - 1
        super().__init__(value, ref)


class Int64Value(_IntegerValue):
    type_name = "int64"


class UintValue(_IntegerValue):
    """Unsigned integer of a chosen platform width (64 bits unless told otherwise)."""

    type_name = "uint"

    def __init__(self, value: int, ref: Ref[int], *, bits: int = 64):
        self.minimum = 0
        self.maximum = (1 << bits) - 1
        super().__init__(value, ref)


class Uint64Value(_IntegerValue):
    type_name = "uint64"
    minimum = 0
    maximum = UINT64_MAX


class StringValue(TypedValue[str]):
    type_name = "string"

    def normalize(self, value: Any) -> str:
        return str(value)

    def convert(self, raw: Any, path: str) -> str:
        if not isinstance(raw, str):
            raise self._mismatch(raw, path)
        return raw


class Float64Value(TypedValue[float]):
    type_name = "float64"

    def normalize(self, value: Any) -> float:
        return float(value)

    def format(self, value: float) -> str:
        return format_float(value)

    def convert(self, raw: Any, path: str) -> float:
        if not isinstance(raw, float):
            raise self._mismatch(raw, path)
        return raw


class DurationValue(TypedValue[timedelta]):
    """
    Duration read from a string node such as "1h30m" or "250ms".

    A default may be a timedelta, a duration literal, or a number of seconds.
    """

    type_name = "duration"

    def normalize(self, value: Any) -> timedelta:
        if isinstance(value, timedelta):
            return value
        if isinstance(value, str):
            return parse_duration(value)
        return timedelta(seconds=value)

    def format(self, value: timedelta) -> str:
        return format_duration(value)

    def convert(self, raw: Any, path: str) -> timedelta:
        if not isinstance(raw, str):
            raise self._mismatch(raw, path)
        try:
            return parse_duration(raw)
        except ValueError as exc:
            raise ConversionError(f"{exc} at {path!r}", path=path, raw=raw) from exc
