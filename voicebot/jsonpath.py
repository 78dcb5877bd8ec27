"""Address nested JSON values with dotted paths such as ``data[0].params.%``."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .jsonvalue import Value

ArgumentLike = Union["PathArgument", int, str]


class ArgKind(Enum):
    """What a path step selects."""

    NONE = 0
    INDEX = 1
    KEY = 2


@dataclass(frozen=True)
class PathArgument:
    """One step of a path: an array index or an object member name."""

    kind: ArgKind = ArgKind.NONE
    key: str = ""
    index: int = 0

    @classmethod
    def of(cls, value: ArgumentLike) -> PathArgument:
        """Build a step from an int (index), a str (member name) or a step."""
        if isinstance(value, PathArgument):
            return value
        if isinstance(value, bool):
            raise TypeError("a boolean cannot be a path argument")
        if isinstance(value, int):
            if value < 0:
                raise ValueError("path index cannot be negative")
            return cls(ArgKind.INDEX, index=value)
        if isinstance(value, str):
            return cls(ArgKind.KEY, key=value)
        raise TypeError(f"unsupported path argument: {type(value).__name__}")


class Path:
    """A parsed path.

    Member names are separated by ``.``, array indices are written ``[n]``.
    A ``%`` stands for a member name and ``[%]`` for an index, both taken in
    order from the extra arguments.
    """

    def __init__(self, path: str, *args: ArgumentLike) -> None:
        self.path = path
        self.args: tuple[PathArgument, ...] = tuple(self._parse(path, args))

    @staticmethod
    def _parse(path: str, in_args: tuple[ArgumentLike, ...]) -> Iterator[PathArgument]:
        supplied = iter(PathArgument.of(arg) for arg in in_args)

        def take(kind: ArgKind, position: int) -> PathArgument:
            arg = next(supplied, None)
            if arg is None:
                raise ValueError(f"missing path argument at position {position} of {path!r}")
            if arg.kind is not kind:
                raise ValueError(
                    f"path argument at position {position} of {path!r} must be "
                    f"{'an index' if kind is ArgKind.INDEX else 'a member name'}"
                )
            return arg

        pos = 0
        end = len(path)
        while pos < end:
            char = path[pos]
            if char == "[":
                pos += 1
                if pos < end and path[pos] == "%":
                    yield take(ArgKind.INDEX, pos)
                    pos += 1
                else:
                    start = pos
                    while pos < end and path[pos].isdigit() and path[pos].isascii():
                        pos += 1
                    digits = path[start:pos]
                    yield PathArgument(ArgKind.INDEX, index=int(digits) if digits else 0)
                if pos >= end or path[pos] != "]":
                    raise ValueError(f"invalid path {path!r} at position {pos}")
                pos += 1
            elif char == "%":
                yield take(ArgKind.KEY, pos)
                pos += 1
            elif char == ".":
                pos += 1
            else:
                start = pos
                while pos < end and path[pos] not in "[.":
                    pos += 1
                yield PathArgument(ArgKind.KEY, key=path[start:pos])

    @staticmethod
    def _step(arg: PathArgument) -> int | str:
        return arg.index if arg.kind is ArgKind.INDEX else arg.key

    def resolve(self, root: Value) -> Value:
        """Return the value at the path, or null where it is missing.

        Raises :class:`~voicebot.jsonvalue.JsonError` when a step meets a value
        of the wrong kind. The tree is never modified.
        """
        node = root
        for arg in self.args:
            if arg.kind is ArgKind.NONE:
                continue
            found = node._lookup(self._step(arg))
            if found is None:
                return Value()
            node = found
        return node

    def resolve_or(self, root: Value, default: Any) -> Value:
        """Return the value at the path, or ``default`` when it cannot be reached."""
        fallback = default if isinstance(default, Value) else Value(default)
        node = root
        for arg in self.args:
            if arg.kind is ArgKind.INDEX:
                if not node.is_array() or arg.index >= node.size():
                    return fallback
                found = node._lookup(arg.index)
                node = found if found is not None else Value()
            elif arg.kind is ArgKind.KEY:
                if not node.is_object():
                    return fallback
                found = node._lookup(arg.key)
                if found is None:
                    return fallback
                node = found
        return node

    def make(self, root: Value) -> Value:
        """Return the value at the path, creating every missing step on the way."""
        node = root
        for arg in self.args:
            if arg.kind is not ArgKind.NONE:
                node = node[self._step(arg)]
        return node

    def __repr__(self) -> str:
        return f"Path({self.path!r})"