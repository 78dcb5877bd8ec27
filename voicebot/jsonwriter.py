"""Serialise JSON values compactly or in an indented, human-readable layout."""

from __future__ import annotations

import math
from typing import Any, TextIO

from .jsonvalue import CommentPlacement, Value, ValueType

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_RIGHT_MARGIN = 74


def _is_control(char: str) -> bool:
    return 0 < ord(char) <= 0x1F


def value_to_string(value: bool | int | float) -> str:
    """Render a boolean or number the way it appears in a JSON document."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "null"
        if math.isinf(value):
            return "-1e+9999" if value < 0 else "1e+9999"
        return ("%.16g" % value).replace(",", ".")
    raise TypeError(f"cannot render {type(value).__name__} as a JSON scalar")


def value_to_quoted_string(value: str | None) -> str:
    """Quote a string, escaping quotes, backslashes and control characters."""
    if value is None:
        return ""
    parts = ['"']
    for char in value:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif _is_control(char):
            parts.append("\\u%04X" % ord(char))
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def _as_value(root: Any) -> Value:
    return root if isinstance(root, Value) else Value(root)


def _scalar_text(value: Value) -> str | None:
    """Text of a non-container value, or None for arrays and objects."""
    kind = value.type
    if kind is ValueType.NULL:
        return "null"
    if kind is ValueType.INT:
        return value_to_string(value.as_int64())
    if kind is ValueType.UINT:
        return value_to_string(value.as_uint64())
    if kind is ValueType.REAL:
        return value_to_string(value.as_double())
    if kind is ValueType.STRING:
        return value_to_quoted_string(value.as_string())
    if kind is ValueType.BOOLEAN:
        return value_to_string(value.as_bool())
    return None


def _normalize_eol(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _has_children(value: Value) -> bool:
    return (value.is_array() or value.is_object()) and value.size() > 0


class FastWriter:
    """Write a value on a single line with no extra whitespace."""

    def __init__(
        self,
        yaml_compatible: bool = False,
        drop_null_placeholders: bool = False,
        omit_ending_line_feed: bool = False,
    ) -> None:
        self.yaml_compatible = yaml_compatible
        self.drop_null_placeholders = drop_null_placeholders
        self.omit_ending_line_feed = omit_ending_line_feed

    def write(self, root: Any) -> str:
        """Return the document, ending in a newline unless that is switched off."""
        parts: list[str] = []
        self._write_value(_as_value(root), parts)
        if not self.omit_ending_line_feed:
            parts.append("\n")
        return "".join(parts)

    def _write_value(self, value: Value, parts: list[str]) -> None:
        kind = value.type
        if kind is ValueType.NULL:
            if not self.drop_null_placeholders:
                parts.append("null")
        elif kind is ValueType.ARRAY:
            parts.append("[")
            for index in range(value.size()):
                if index:
                    parts.append(",")
                self._write_value(value.get(index), parts)
            parts.append("]")
        elif kind is ValueType.OBJECT:
            separator = ": " if self.yaml_compatible else ":"
            parts.append("{")
            for position, name in enumerate(value.member_names()):
                if position:
                    parts.append(",")
                parts.append(value_to_quoted_string(name))
                parts.append(separator)
                self._write_value(value.get(name), parts)
            parts.append("}")
        else:
            parts.append(_scalar_text(value))


class StyledWriter:
    """Write a value indented by three spaces, keeping short arrays on one line."""

    def __init__(self) -> None:
        self.right_margin = _RIGHT_MARGIN
        self.indent_size = 3
        self._document = ""
        self._indent = ""
        self._child_values: list[str] = []
        self._add_child_values = False

    def write(self, root: Any) -> str:
        """Return the styled document with its comments and a final newline."""
        root = _as_value(root)
        self._document = ""
        self._indent = ""
        self._add_child_values = False
        self._write_comment_before(root)
        self._write_value(root)
        self._write_comment_after(root)
        self._document += "\n"
        return self._document

    def _write_value(self, value: Value) -> None:
        kind = value.type
        if kind is ValueType.ARRAY:
            self._write_array(value)
        elif kind is ValueType.OBJECT:
            names = value.member_names()
            if not names:
                self._push("{}")
                return
            self._write_with_indent("{")
            self._indent += " " * self.indent_size
            for position, name in enumerate(names):
                child = value.get(name)
                self._write_comment_before(child)
                self._write_with_indent(value_to_quoted_string(name))
                self._document += " : "
                self._write_value(child)
                if position < len(names) - 1:
                    self._document += ","
                self._write_comment_after(child)
            self._unindent()
            self._write_with_indent("}")
        else:
            self._push(_scalar_text(value))

    def _write_array(self, value: Value) -> None:
        size = value.size()
        if size == 0:
            self._push("[]")
            return
        if self._is_multiline(value):
            self._write_with_indent("[")
            self._indent += " " * self.indent_size
            child_texts = list(self._child_values)
            for index in range(size):
                child = value.get(index)
                self._write_comment_before(child)
                if child_texts:
                    self._write_with_indent(child_texts[index])
                else:
                    self._write_indent()
                    self._write_value(child)
                if index < size - 1:
                    self._document += ","
                self._write_comment_after(child)
            self._unindent()
            self._write_with_indent("]")
        else:
            self._document += "[ " + ", ".join(self._child_values) + " ]"

    def _is_multiline(self, value: Value) -> bool:
        size = value.size()
        multiline = size * 3 >= self.right_margin
        self._child_values = []
        if not multiline:
            multiline = any(_has_children(value.get(index)) for index in range(size))
        if not multiline:
            self._add_child_values = True
            line_length = 4 + (size - 1) * 2
            for index in range(size):
                self._write_value(value.get(index))
                line_length += len(self._child_values[index])
            self._add_child_values = False
            multiline = line_length >= self.right_margin
        return multiline

    def _push(self, text: str) -> None:
        if self._add_child_values:
            self._child_values.append(text)
        else:
            self._document += text

    def _write_indent(self) -> None:
        if self._document:
            last = self._document[-1]
            if last == " ":
                return
            if last != "\n":
                self._document += "\n"
        self._document += self._indent

    def _write_with_indent(self, text: str) -> None:
        self._write_indent()
        self._document += text

    def _unindent(self) -> None:
        self._indent = self._indent[: -self.indent_size]

    def _write_comment_before(self, value: Value) -> None:
        if not value.has_comment(CommentPlacement.BEFORE):
            return
        self._document += "\n"
        self._write_indent()
        comment = _normalize_eol(value.get_comment(CommentPlacement.BEFORE))
        for position, char in enumerate(comment):
            self._document += char
            if char == "\n" and comment[position + 1 : position + 2] == "/":
                self._write_indent()
        self._document += "\n"

    def _write_comment_after(self, value: Value) -> None:
        if value.has_comment(CommentPlacement.AFTER_ON_SAME_LINE):
            self._document += " " + _normalize_eol(
                value.get_comment(CommentPlacement.AFTER_ON_SAME_LINE)
            )
        if value.has_comment(CommentPlacement.AFTER):
            self._document += "\n" + _normalize_eol(value.get_comment(CommentPlacement.AFTER)) + "\n"


class StyledStreamWriter:
    """Write a styled document to a text stream, indenting with a chosen string."""

    def __init__(self, indentation: str = "\t") -> None:
        self.indentation = indentation
        self.right_margin = _RIGHT_MARGIN
        self._out: TextIO | None = None
        self._indent = ""
        self._child_values: list[str] = []
        self._add_child_values = False

    def write(self, out: TextIO, root: Any) -> None:
        """Write the styled document for ``root`` to ``out``."""
        root = _as_value(root)
        self._out = out
        self._indent = ""
        self._add_child_values = False
        try:
            self._write_comment_before(root)
            self._write_value(root)
            self._write_comment_after(root)
            out.write("\n")
        finally:
            self._out = None

    def _emit(self, text: str) -> None:
        self._out.write(text)

    def _write_value(self, value: Value) -> None:
        kind = value.type
        if kind is ValueType.ARRAY:
            self._write_array(value)
        elif kind is ValueType.OBJECT:
            names = value.member_names()
            if not names:
                self._push("{}")
                return
            self._write_with_indent("{")
            self._indent += self.indentation
            for position, name in enumerate(names):
                child = value.get(name)
                self._write_comment_before(child)
                self._write_with_indent(value_to_quoted_string(name))
                self._emit(" : ")
                self._write_value(child)
                if position < len(names) - 1:
                    self._emit(",")
                self._write_comment_after(child)
            self._unindent()
            self._write_with_indent("}")
        else:
            self._push(_scalar_text(value))

    def _write_array(self, value: Value) -> None:
        size = value.size()
        if size == 0:
            self._push("[]")
            return
        if self._is_multiline(value):
            self._write_with_indent("[")
            self._indent += self.indentation
            child_texts = list(self._child_values)
            for index in range(size):
                child = value.get(index)
                self._write_comment_before(child)
                if child_texts:
                    self._write_with_indent(child_texts[index])
                else:
                    self._write_indent()
                    self._write_value(child)
                if index < size - 1:
                    self._emit(",")
                self._write_comment_after(child)
            self._unindent()
            self._write_with_indent("]")
        else:
            self._emit("[ " + ", ".join(self._child_values) + " ]")

    def _is_multiline(self, value: Value) -> bool:
        size = value.size()
        multiline = size * 3 >= self.right_margin
        self._child_values = []
        if not multiline:
            multiline = any(_has_children(value.get(index)) for index in range(size))
        if not multiline:
            self._add_child_values = True
            line_length = 4 + (size - 1) * 2
            for index in range(size):
                self._write_value(value.get(index))
                line_length += len(self._child_values[index])
            self._add_child_values = False
            multiline = line_length >= self.right_margin
        return multiline

    def _push(self, text: str) -> None:
        if self._add_child_values:
            self._child_values.append(text)
        else:
            self._emit(text)

    def _write_indent(self) -> None:
        self._emit("\n" + self._indent)

    def _write_with_indent(self, text: str) -> None:
        self._write_indent()
        self._emit(text)

    def _unindent(self) -> None:
        if self.indentation:
            self._indent = self._indent[: -len(self.indentation)]

    def _write_comment_before(self, value: Value) -> None:
        if not value.has_comment(CommentPlacement.BEFORE):
            return
        self._emit(_normalize_eol(value.get_comment(CommentPlacement.BEFORE)))
        self._emit("\n")

    def _write_comment_after(self, value: Value) -> None:
        if value.has_comment(CommentPlacement.AFTER_ON_SAME_LINE):
            self._emit(" " + _normalize_eol(value.get_comment(CommentPlacement.AFTER_ON_SAME_LINE)))
        if value.has_comment(CommentPlacement.AFTER):
            self._emit("\n" + _normalize_eol(value.get_comment(CommentPlacement.AFTER)) + "\n")


def to_styled_string(value: Any) -> str:
    """Return ``value`` written by a :class:`StyledWriter`."""
    return StyledWriter().write(value)