"""Dynamically-typed value tree shared by the ORT parser and generator."""

import json
import math
from typing import Any, Dict, Iterator, List, Optional, Union
from .types import ValueKind


Key = Union[str, int]


class OrtValue:
    """
    Tagged union over null, bool, number, string, array and object.

    Numbers are always stored as floats. Objects are backed by an
    insertion-ordered dict so that the generator derives a stable column
    order from them. Lookups never raise: a missing key, an out-of-range
    index or a lookup on a scalar yields the NULL value.
    """

    __slots__ = ("_kind", "_value")

    def __init__(self, kind: ValueKind = ValueKind.NULL, value: Any = None):
        self._kind = kind
        self._value = value

    # -- Construction ----------------------------------------------------

    @classmethod
    def null(cls) -> "OrtValue":
        return cls(ValueKind.NULL, None)

    @classmethod
    def from_bool(cls, value: bool) -> "OrtValue":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def from_number(cls, value: Union[int, float]) -> "OrtValue":
        return cls(ValueKind.NUMBER, float(value))

    @classmethod
    def from_string(cls, value: str) -> "OrtValue":
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def from_array(cls, items: Optional[List["OrtValue"]] = None) -> "OrtValue":
        return cls(ValueKind.ARRAY, list(items) if items is not None else [])

    @classmethod
    def from_object(cls, entries: Optional[Dict[str, "OrtValue"]] = None) -> "OrtValue":
        return cls(ValueKind.OBJECT, dict(entries) if entries is not None else {})

    @classmethod
    def from_native(cls, data: Any) -> "OrtValue":
        """
        Build a value tree from Python/JSON native data.

        Args:
            data: None, bool, int, float, str, list/tuple or dict (recursively)

        Returns:
            Equivalent OrtValue; integers are widened to float

        Raises:
            TypeError: If data contains an unsupported type
        """
        if isinstance(data, OrtValue):
            return data
        if data is None:
            return cls.null()
        # bool is a subclass of int, so it must be tested first
        if isinstance(data, bool):
            return cls.from_bool(data)
        if isinstance(data, (int, float)):
            return cls.from_number(data)
        if isinstance(data, str):
            return cls.from_string(data)
        if isinstance(data, (list, tuple)):
            return cls.from_array([cls.from_native(item) for item in data])
        if isinstance(data, dict):
            return cls.from_object({str(k): cls.from_native(v) for k, v in data.items()})
        raise TypeError(f"Unsupported type for OrtValue: {type(data).__name__}")

    def to_native(self) -> Any:
        """Convert back to plain Python data (dict/list/str/float/bool/None)."""
        if self._kind == ValueKind.ARRAY:
            return [item.to_native() for item in self._value]
        if self._kind == ValueKind.OBJECT:
            return {k: v.to_native() for k, v in self._value.items()}
        return self._value

    # -- Type predicates -------------------------------------------------

    @property
    def kind(self) -> ValueKind:
        return self._kind

    def is_null(self) -> bool:
        return self._kind == ValueKind.NULL

    def is_bool(self) -> bool:
        return self._kind == ValueKind.BOOL

    def is_number(self) -> bool:
        return self._kind == ValueKind.NUMBER

    def is_string(self) -> bool:
        return self._kind == ValueKind.STRING

    def is_array(self) -> bool:
        return self._kind == ValueKind.ARRAY

    def is_object(self) -> bool:
        return self._kind == ValueKind.OBJECT

    # -- Narrowing accessors (None on tag mismatch) ------------------------

    def as_bool(self) -> Optional[bool]:
        return self._value if self._kind == ValueKind.BOOL else None

    def as_number(self) -> Optional[float]:
        return self._value if self._kind == ValueKind.NUMBER else None

    def as_int(self) -> Optional[int]:
        """Number truncated toward zero, or None for non-numbers and non-finite values."""
        if self._kind != ValueKind.NUMBER or not math.isfinite(self._value):
            return None
        return int(self._value)

    def as_string(self) -> Optional[str]:
        return self._value if self._kind == ValueKind.STRING else None

    def as_array(self) -> Optional[List["OrtValue"]]:
        return self._value if self._kind == ValueKind.ARRAY else None

    def as_object(self) -> Optional[Dict[str, "OrtValue"]]:
        return self._value if self._kind == ValueKind.OBJECT else None

    # -- Lookup ----------------------------------------------------------

    def get(self, key: Key, default: Optional["OrtValue"] = None) -> Optional["OrtValue"]:
        """
        Look up a key in an object or an index in an array.

        Args:
            key: Object key (str) or array index (int, negatives not allowed)
            default: Returned when nothing is found

        Returns:
            The contained value, or default
        """
        if self._kind == ValueKind.OBJECT and isinstance(key, str):
            return self._value.get(key, default)
        if (self._kind == ValueKind.ARRAY and isinstance(key, int)
                and not isinstance(key, bool) and 0 <= key < len(self._value)):
            return self._value[key]
        return default

    def __getitem__(self, key: Key) -> "OrtValue":
        return self.get(key, NULL)

    def __contains__(self, item: Any) -> bool:
        if self._kind == ValueKind.OBJECT:
            return item in self._value
        if self._kind == ValueKind.ARRAY:
            return OrtValue.from_native(item) in self._value
        return False

    def __len__(self) -> int:
        if self._kind in (ValueKind.ARRAY, ValueKind.OBJECT):
            return len(self._value)
        return 0

    def __iter__(self) -> Iterator[Any]:
        if self._kind in (ValueKind.ARRAY, ValueKind.OBJECT):
            return iter(self._value)
        return iter(())

    def keys(self) -> List[str]:
        return list(self._value.keys()) if self._kind == ValueKind.OBJECT else []

    def items(self) -> List[tuple]:
        return list(self._value.items()) if self._kind == ValueKind.OBJECT else []

    # -- Comparison and display ------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrtValue):
            return NotImplemented
        # dict equality ignores insertion order
        return self._kind == other._kind and self._value == other._value

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self) -> str:
        return f"OrtValue({self._kind.value}, {self.to_native()!r})"

    def __str__(self) -> str:
        if self._kind == ValueKind.NULL:
            return "null"
        if self._kind == ValueKind.BOOL:
            return "true" if self._value else "false"
        if self._kind == ValueKind.NUMBER:
            return _display_number(self._value)
        if self._kind == ValueKind.STRING:
            return json.dumps(self._value, ensure_ascii=False)
        if self._kind == ValueKind.ARRAY:
            return "[" + ", ".join(str(item) for item in self._value) + "]"
        pairs = (f"{json.dumps(k, ensure_ascii=False)}: {v}" for k, v in self._value.items())
        return "{" + ", ".join(pairs) + "}"


def _display_number(value: float) -> str:
    if value.is_integer() and abs(value) < 2 ** 53:
        return str(int(value))
    return repr(value)


NULL = OrtValue.null()
