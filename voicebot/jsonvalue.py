"""A dynamically typed JSON value with sorted members, comments and strict conversions."""

from __future__ import annotations

import math
from collections.abc import Iterator
from enum import Enum, IntEnum
from typing import Any, Union

MIN_INT = -(2**31)
MAX_INT = 2**31 - 1
MAX_UINT = 2**32 - 1
MIN_INT64 = -(2**63)
MAX_INT64 = 2**63 - 1
MAX_UINT64 = 2**64 - 1
# 2**64 - 1 cannot be held by a double; it rounds up to 2**64.
_MAX_UINT64_AS_DOUBLE = 18446744073709551615.0

Key = Union[int, str]


class JsonError(Exception):
    """Raised when a value is used in a way its type does not allow."""


class ValueType(IntEnum):
    """The kind of a value; the order is the order used when comparing values."""

    NULL = 0
    INT = 1
    UINT = 2
    REAL = 3
    STRING = 4
    BOOLEAN = 5
    ARRAY = 6
    OBJECT = 7


class CommentPlacement(Enum):
    """Where a comment sits relative to its value."""

    BEFORE = 0
    AFTER_ON_SAME_LINE = 1
    AFTER = 2


_CONTAINERS = (ValueType.ARRAY, ValueType.OBJECT)


def _format_real(value: float) -> str:
    if math.isnan(value):
        return "null"
    if math.isinf(value):
        return "-1e+9999" if value < 0 else "1e+9999"
    return "%.16g" % value


def _in_range(value: float, low: int, high: int) -> bool:
    return float(low) <= value <= float(high)


def _is_integral(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value)


def _key_kind(key: Any) -> ValueType:
    if isinstance(key, bool):
        raise TypeError("a boolean cannot be used as a key")
    if isinstance(key, int):
        return ValueType.ARRAY
    if isinstance(key, str):
        return ValueType.OBJECT
    raise TypeError(f"unsupported key type: {type(key).__name__}")


def _to_value(obj: Any) -> Value:
    return obj.copy() if isinstance(obj, Value) else Value(obj)


class Value:
    """A JSON value.

    Arrays are sparse: assigning index ``n`` makes the size ``n + 1``.
    Object members are kept in sorted key order. Indexing with ``[]`` creates
    missing members (and turns a null value into an array or object); use
    :meth:`get` or :meth:`is_member` to look without creating.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: Any = None) -> None:
        self._comments: dict[CommentPlacement, str] = {}
        self.offset_start = 0
        self.offset_limit = 0
        if isinstance(value, Value):
            self._type = value._type
            self._data = value._copied_data()
            self._comments = dict(value._comments)
            self.offset_start = value.offset_start
            self.offset_limit = value.offset_limit
            return
        self._type, self._data = self._coerce(value)

    @staticmethod
    def _coerce(value: Any) -> tuple[ValueType, Any]:
        if value is None:
            return ValueType.NULL, None
        if isinstance(value, ValueType):
            defaults = {
                ValueType.NULL: None,
                ValueType.INT: 0,
                ValueType.UINT: 0,
                ValueType.REAL: 0.0,
                ValueType.STRING: None,
                ValueType.BOOLEAN: False,
            }
            return value, ({} if value in _CONTAINERS else defaults[value])
        if isinstance(value, bool):
            return ValueType.BOOLEAN, value
        if isinstance(value, int):
            if MIN_INT64 <= value <= MAX_INT64:
                return ValueType.INT, value
            if 0 <= value <= MAX_UINT64:
                return ValueType.UINT, value
            raise JsonError(f"integer {value} does not fit in 64 bits")
        if isinstance(value, float):
            return ValueType.REAL, value
        if isinstance(value, str):
            return ValueType.STRING, value
        if isinstance(value, (list, tuple)):
            return ValueType.ARRAY, {index: _to_value(item) for index, item in enumerate(value)}
        if isinstance(value, dict):
            members: dict[str, Value] = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError("object member names must be strings")
                members[key] = _to_value(item)
            return ValueType.OBJECT, members
        raise TypeError(f"cannot build a JSON value from {type(value).__name__}")

    @classmethod
    def from_python(cls, obj: Any) -> Value:
        """Build a value tree from None, bool, int, float, str, list and dict."""
        return cls(obj)

    @classmethod
    def unsigned(cls, number: int) -> Value:
        """Build an unsigned integer value."""
        if not 0 <= number <= MAX_UINT64:
            raise JsonError(f"{number} is out of UInt64 range")
        result = cls()
        result._type = ValueType.UINT
        result._data = int(number)
        return result

    def _copied_data(self) -> Any:
        if self._type in _CONTAINERS:
            return {key: item.copy() for key, item in self._data.items()}
        return self._data

    def copy(self) -> Value:
        """Return a deep copy, comments included."""
        return Value(self)

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> Value:
        return self.copy()

    @property
    def type(self) -> ValueType:
        return self._type

    def to_python(self) -> Any:
        """Convert to plain Python objects; array holes become None."""
        if self._type is ValueType.ARRAY:
            return [
                self._data[index].to_python() if index in self._data else None
                for index in range(self.size())
            ]
        if self._type is ValueType.OBJECT:
            return {key: self._data[key].to_python() for key in sorted(self._data)}
        if self._type is ValueType.STRING:
            return self._data if self._data is not None else ""
        return self._data

    # Conversions -----------------------------------------------------------

    def as_string(self) -> str:
        t = self._type
        if t is ValueType.NULL:
            return ""
        if t is ValueType.STRING:
            return self._data or ""
        if t is ValueType.BOOLEAN:
            return "true" if self._data else "false"
        if t in (ValueType.INT, ValueType.UINT):
            return str(self._data)
        if t is ValueType.REAL:
            return _format_real(self._data)
        raise JsonError("Type is not convertible to string")

    def as_int(self) -> int:
        t = self._type
        if t is ValueType.INT:
            if not self.is_int():
                raise JsonError("LargestInt out of Int range")
            return self._data
        if t is ValueType.UINT:
            if not self.is_int():
                raise JsonError("LargestUInt out of Int range")
            return self._data
        if t is ValueType.REAL:
            if not _in_range(self._data, MIN_INT, MAX_INT):
                raise JsonError("double out of Int range")
            return int(self._data)
        if t is ValueType.NULL:
            return 0
        if t is ValueType.BOOLEAN:
            return 1 if self._data else 0
        raise JsonError("Value is not convertible to Int.")

    def as_uint(self) -> int:
        t = self._type
        if t in (ValueType.INT, ValueType.UINT):
            if not self.is_uint():
                raise JsonError("integer out of UInt range")
            return self._data
        if t is ValueType.REAL:
            if not _in_range(self._data, 0, MAX_UINT):
                raise JsonError("double out of UInt range")
            return int(self._data)
        if t is ValueType.NULL:
            return 0
        if t is ValueType.BOOLEAN:
            return 1 if self._data else 0
        raise JsonError("Value is not convertible to UInt.")

    def as_int64(self) -> int:
        t = self._type
        if t is ValueType.INT:
            return self._data
        if t is ValueType.UINT:
            if not self.is_int64():
                raise JsonError("LargestUInt out of Int64 range")
            return self._data
        if t is ValueType.REAL:
            if not _in_range(self._data, MIN_INT64, MAX_INT64):
                raise JsonError("double out of Int64 range")
            return int(self._data)
        if t is ValueType.NULL:
            return 0
        if t is ValueType.BOOLEAN:
            return 1 if self._data else 0
        raise JsonError("Value is not convertible to Int64.")

    def as_uint64(self) -> int:
        t = self._type
        if t is ValueType.INT:
            if not self.is_uint64():
                raise JsonError("LargestInt out of UInt64 range")
            return self._data
        if t is ValueType.UINT:
            return self._data
        if t is ValueType.REAL:
            if not _in_range(self._data, 0, MAX_UINT64):
                raise JsonError("double out of UInt64 range")
            return int(self._data)
        if t is ValueType.NULL:
            return 0
        if t is ValueType.BOOLEAN:
            return 1 if self._data else 0
        raise JsonError("Value is not convertible to UInt64.")

    def as_double(self) -> float:
        t = self._type
        if t in (ValueType.INT, ValueType.UINT, ValueType.REAL):
            return float(self._data)
        if t is ValueType.NULL:
            return 0.0
        if t is ValueType.BOOLEAN:
            return 1.0 if self._data else 0.0
        raise JsonError("Value is not convertible to double.")

    def as_bool(self) -> bool:
        t = self._type
        if t is ValueType.BOOLEAN:
            return self._data
        if t is ValueType.NULL:
            return False
        if t in (ValueType.INT, ValueType.UINT, ValueType.REAL):
            return bool(self._data)
        raise JsonError("Value is not convertible to bool.")

    def is_convertible_to(self, other: ValueType) -> bool:
        t = self._type
        loose = t in (ValueType.BOOLEAN, ValueType.NULL)
        if other is ValueType.NULL:
            return (
                (self.is_numeric() and self.as_double() == 0.0)
                or (t is ValueType.BOOLEAN and not self._data)
                or (t is ValueType.STRING and self.as_string() == "")
                or (t in _CONTAINERS and not self._data)
                or t is ValueType.NULL
            )
        if other is ValueType.INT:
            return (
                self.is_int()
                or (t is ValueType.REAL and _in_range(self._data, MIN_INT, MAX_INT))
                or loose
            )
        if other is ValueType.UINT:
            return (
                self.is_uint()
                or (t is ValueType.REAL and _in_range(self._data, 0, MAX_UINT))
                or loose
            )
        if other in (ValueType.REAL, ValueType.BOOLEAN):
            return self.is_numeric() or loose
        if other is ValueType.STRING:
            return self.is_numeric() or loose or t is ValueType.STRING
        if other is ValueType.ARRAY:
            return t in (ValueType.ARRAY, ValueType.NULL)
        if other is ValueType.OBJECT:
            return t in (ValueType.OBJECT, ValueType.NULL)
        raise JsonError(f"unknown value type {other!r}")

    # Type predicates ------------------------------------------------------

    def is_null(self) -> bool:
        return self._type is ValueType.NULL

    def is_bool(self) -> bool:
        return self._type is ValueType.BOOLEAN

    def is_string(self) -> bool:
        return self._type is ValueType.STRING

    def is_array(self) -> bool:
        return self._type is ValueType.ARRAY

    def is_object(self) -> bool:
        return self._type is ValueType.OBJECT

    def is_int(self) -> bool:
        t = self._type
        if t in (ValueType.INT, ValueType.UINT):
            return MIN_INT <= self._data <= MAX_INT
        if t is ValueType.REAL:
            return MIN_INT <= self._data <= MAX_INT and _is_integral(self._data)
        return False

    def is_uint(self) -> bool:
        t = self._type
        if t in (ValueType.INT, ValueType.UINT):
            return 0 <= self._data <= MAX_UINT
        if t is ValueType.REAL:
            return 0 <= self._data <= MAX_UINT and _is_integral(self._data)
        return False

    def is_int64(self) -> bool:
        t = self._type
        if t is ValueType.INT:
            return True
        if t is ValueType.UINT:
            return self._data <= MAX_INT64
        if t is ValueType.REAL:
            return (
                float(MIN_INT64) <= self._data < float(MAX_INT64)
                and _is_integral(self._data)
            )
        return False

    def is_uint64(self) -> bool:
        t = self._type
        if t is ValueType.INT:
            return self._data >= 0
        if t is ValueType.UINT:
            return True
        if t is ValueType.REAL:
            return 0 <= self._data < _MAX_UINT64_AS_DOUBLE and _is_integral(self._data)
        return False

    def is_integral(self) -> bool:
        return self.is_int64() or self.is_uint64()

    def is_double(self) -> bool:
        return self._type is ValueType.REAL or self.is_integral()

    def is_numeric(self) -> bool:
        return self.is_integral() or self.is_double()

    # Containers -----------------------------------------------------------

    def size(self) -> int:
        """Array: highest index plus one. Object: member count. Otherwise 0."""
        if self._type is ValueType.ARRAY:
            return max(self._data) + 1 if self._data else 0
        if self._type is ValueType.OBJECT:
            return len(self._data)
        return 0

    def empty(self) -> bool:
        if self._type is ValueType.NULL or self._type in _CONTAINERS:
            return self.size() == 0
        return False

    def clear(self) -> None:
        """Remove all elements of an array or object."""
        if self._type not in (ValueType.NULL, ValueType.ARRAY, ValueType.OBJECT):
            raise JsonError("clear() requires a complex value")
        self.offset_start = 0
        self.offset_limit = 0
        if self._type in _CONTAINERS:
            self._data.clear()

    def resize(self, new_size: int) -> None:
        """Grow an array with nulls or drop its trailing elements."""
        if self._type not in (ValueType.NULL, ValueType.ARRAY):
            raise JsonError("resize() requires arrayValue")
        if new_size < 0:
            raise JsonError("size cannot be negative")
        self._become(ValueType.ARRAY)
        old_size = self.size()
        if new_size == 0:
            self.clear()
        elif new_size > old_size:
            self[new_size - 1]
        else:
            for index in [key for key in self._data if key >= new_size]:
                del self._data[index]

    def append(self, value: Any) -> Value:
        """Add a copy of ``value`` at the end of the array and return it."""
        index = self.size()
        self[index] = value
        return self._data[index]

    def _check_key(self, key: Any) -> ValueType:
        kind = _key_kind(key)
        if kind is ValueType.ARRAY:
            if key < 0:
                raise JsonError("index cannot be negative")
            if self._type not in (ValueType.NULL, ValueType.ARRAY):
                raise JsonError("integer index requires arrayValue")
        elif self._type not in (ValueType.NULL, ValueType.OBJECT):
            raise JsonError("member name requires objectValue")
        return kind

    def _become(self, kind: ValueType) -> None:
        if self._type is ValueType.NULL:
            self._type = kind
            self._data = {}

    def _lookup(self, key: Key) -> Value | None:
        self._check_key(key)
        if self._type is ValueType.NULL:
            return None
        return self._data.get(key)

    def __getitem__(self, key: Key) -> Value:
        kind = self._check_key(key)
        self._become(kind)
        return self._data.setdefault(key, Value())

    def __setitem__(self, key: Key, value: Any) -> None:
        kind = self._check_key(key)
        self._become(kind)
        self._data[key] = _to_value(value)

    def __iter__(self) -> Iterator[Value]:
        if self._type in _CONTAINERS:
            return iter([self._data[key] for key in sorted(self._data)])
        return iter(())

    def get(self, key: Key, default: Any = None) -> Value:
        """Return a copy of the element at ``key``, or ``default`` without creating it."""
        member = self._lookup(key)
        return member.copy() if member is not None else _to_value(default)

    def remove_member(self, key: str) -> Value:
        """Remove a member and return it; a null value when it was absent."""
        if self._type not in (ValueType.NULL, ValueType.OBJECT):
            raise JsonError("remove_member() requires objectValue")
        if self._type is ValueType.NULL:
            return Value()
        removed = self._data.pop(key, None)
        return removed if removed is not None else Value()

    def is_member(self, key: str) -> bool:
        if self._type not in (ValueType.NULL, ValueType.OBJECT):
            raise JsonError("is_member() requires objectValue")
        return self._type is ValueType.OBJECT and key in self._data

    def member_names(self) -> list[str]:
        """Member names in sorted order."""
        if self._type not in (ValueType.NULL, ValueType.OBJECT):
            raise JsonError("member_names() requires objectValue")
        if self._type is ValueType.NULL:
            return []
        return sorted(self._data)

    # Comparison -----------------------------------------------------------

    @staticmethod
    def _other(other: Any) -> Value | None:
        if isinstance(other, Value):
            return other
        if isinstance(other, ValueType):
            return None
        if other is None or isinstance(other, (bool, int, float, str, list, tuple, dict)):
            try:
                return Value(other)
            except (JsonError, TypeError):
                return None
        return None

    def _less(self, other: Value) -> bool:
        if self._type != other._type:
            return self._type < other._type
        t = self._type
        if t is ValueType.NULL:
            return False
        if t is ValueType.STRING:
            mine, theirs = self._data, other._data
            return (mine is None and theirs is not None) or (
                mine is not None and theirs is not None and mine < theirs
            )
        if t in _CONTAINERS:
            if len(self._data) != len(other._data):
                return len(self._data) < len(other._data)
            return sorted(self._data.items()) < sorted(other._data.items())
        return self._data < other._data

    def __eq__(self, other: Any) -> bool:
        value = self._other(other)
        if value is None:
            return NotImplemented
        if self._type != value._type:
            return False
        if self._type is ValueType.NULL:
            return True
        return self._data == value._data

    def __lt__(self, other: Any) -> bool:
        value = self._other(other)
        if value is None:
            return NotImplemented
        return self._less(value)

    def __gt__(self, other: Any) -> bool:
        value = self._other(other)
        if value is None:
            return NotImplemented
        return value._less(self)

    def __le__(self, other: Any) -> bool:
        value = self._other(other)
        if value is None:
            return NotImplemented
        return not value._less(self)

    def __ge__(self, other: Any) -> bool:
        value = self._other(other)
        if value is None:
            return NotImplemented
        return not self._less(value)

    def compare(self, other: Any) -> int:
        """Return -1, 0 or 1 as this value orders before, with or after ``other``."""
        value = self._other(other)
        if value is None:
            raise TypeError(f"cannot compare with {type(other).__name__}")
        if self._less(value):
            return -1
        if value._less(self):
            return 1
        return 0

    # Comments -------------------------------------------------------------

    def set_comment(self, comment: str, placement: CommentPlacement = CommentPlacement.BEFORE) -> None:
        if comment and not comment.startswith("/"):
            raise JsonError("Comments must start with /")
        self._comments[placement] = comment

    def has_comment(self, placement: CommentPlacement) -> bool:
        return placement in self._comments

    def get_comment(self, placement: CommentPlacement) -> str:
        return self._comments.get(placement, "")

    def __repr__(self) -> str:
        return f"Value({self._type.name}, {self.to_python()!r})"