import io
import json

import pytest

from voicebot.jsonvalue import CommentPlacement, Value
from voicebot.jsonwriter import (
    FastWriter,
    StyledStreamWriter,
    StyledWriter,
    to_styled_string,
    value_to_quoted_string,
    value_to_string,
)

SAMPLE = {
    "name": "robot",
    "count": 3,
    "ratio": 0.25,
    "ok": True,
    "none": None,
    "list": [1, 2, {"deep": "x"}],
    "empty_list": [],
    "empty_obj": {},
}


def test_value_to_string_non_finite():
    assert value_to_string(float("nan")) == "null"
    assert value_to_string(float("inf")) == "1e+9999"
    assert value_to_string(float("-inf")) == "-1e+9999"


def test_value_to_string_scalars():
    assert value_to_string(True) == "true"
    assert value_to_string(False) == "false"
    assert value_to_string(-42) == "-42"
    assert float(value_to_string(0.1)) == 0.1


def test_value_to_string_rejects_other_types():
    with pytest.raises(TypeError):
        value_to_string("x")


@pytest.mark.parametrize("text", ['a"b', "back\\slash", "tab\tnew\nline\r", "\b\f", "plain", "中文"])
def test_quoted_string_round_trip(text):
    assert json.loads(value_to_quoted_string(text)) == text


def test_quoted_string_control_character_and_none():
    assert value_to_quoted_string("\x01") == '"\\u0001"'
    assert value_to_quoted_string(None) == ""


def test_fast_writer_round_trip():
    out = FastWriter().write(Value.from_python(SAMPLE))
    assert out.endswith("\n")
    assert "\n" not in out[:-1]
    assert json.loads(out) == SAMPLE


def test_fast_writer_orders_members():
    out = FastWriter(omit_ending_line_feed=True).write(Value.from_python({"b": 1, "a": 2}))
    assert out.index('"a"') < out.index('"b"')
    assert not out.endswith("\n")


def test_fast_writer_yaml_separator():
    out = FastWriter(yaml_compatible=True, omit_ending_line_feed=True).write(Value({"a": 1}))
    assert out == '{"a": 1}'


def test_fast_writer_drop_nulls():
    out = FastWriter(drop_null_placeholders=True).write(Value([None, 1]))
    assert "null" not in out
    assert out.count(",") == 1


def test_fast_writer_array_holes_become_null():
    value = Value()
    value[2] = 1
    assert json.loads(FastWriter().write(value)) == value.to_python()


def test_styled_writer_simple_object():
    assert StyledWriter().write(Value({"a": 1})) == '{\n   "a" : 1\n}\n'


def test_styled_writer_round_trip():
    out = to_styled_string(Value.from_python(SAMPLE))
    assert json.loads(out) == SAMPLE
    assert out.endswith("\n")


def test_styled_writer_short_array_single_line():
    out = StyledWriter().write(Value({"a": [1, 2, 3]}))
    assert "[ 1, 2, 3 ]" in out


def test_styled_writer_long_array_multiline():
    numbers = list(range(30))
    out = StyledWriter().write(Value(numbers))
    assert json.loads(out) == numbers
    assert len(out.strip().splitlines()) == len(numbers) + 2


def test_styled_writer_comments():
    value = Value.from_python({"a": 1})
    value["a"].set_comment("// before", CommentPlacement.BEFORE)
    value["a"].set_comment("// same", CommentPlacement.AFTER_ON_SAME_LINE)
    out = StyledWriter().write(value)
    assert out.index("// before") < out.index('"a"') < out.index("// same")
    assert " // same" in out


def test_styled_writer_reusable():
    writer = StyledWriter()
    first = writer.write(Value.from_python(SAMPLE))
    second = writer.write(Value.from_python(SAMPLE))
    assert first == second


def test_styled_stream_writer_round_trip():
    stream = io.StringIO()
    StyledStreamWriter().write(stream, Value.from_python(SAMPLE))
    out = stream.getvalue()
    assert json.loads(out) == SAMPLE
    assert any(line.startswith("\t") for line in out.splitlines())


def test_styled_stream_writer_custom_indentation():
    stream = io.StringIO()
    StyledStreamWriter("  ").write(stream, Value.from_python({"a": {"b": 1}}))
    lines = stream.getvalue().splitlines()
    assert any(line.startswith('    "b"') for line in lines)
    assert json.loads(stream.getvalue()) == {"a": {"b": 1}}


def test_styled_stream_writer_scalar():
    stream = io.StringIO()
    StyledStreamWriter().write(stream, Value("hi"))
    assert json.loads(stream.getvalue()) == "hi"


def test_writers_agree_on_content():
    value = Value.from_python(SAMPLE)
    stream = io.StringIO()
    StyledStreamWriter().write(stream, value)
    assert (
        json.loads(FastWriter().write(value))
        == json.loads(StyledWriter().write(value))
        == json.loads(stream.getvalue())
    )