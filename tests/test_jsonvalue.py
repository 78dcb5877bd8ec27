import pytest

from voicebot.jsonvalue import CommentPlacement, JsonError, Value, ValueType


def test_default_is_null():
    value = Value()
    assert value.type is ValueType.NULL
    assert value.as_string() == ""
    assert value.as_int() == 0
    assert value.as_bool() is False


def test_bool_as_string():
    assert Value(True).as_string() == "true"
    assert Value(False).as_string() == "false"


def test_int_as_string_round_trip():
    assert int(Value(-42).as_string()) == -42


def test_real_as_string():
    assert Value(0.1).as_string() == "0.1"
    assert float(Value(1.25e-7).as_string()) == 1.25e-7


def test_non_finite_reals_as_string():
    assert Value(float("inf")).as_string() == "1e+9999"
    assert Value(float("-inf")).as_string() == "-1e+9999"
    assert Value(float("nan")).as_string() == "null"


def test_container_not_convertible_to_string():
    with pytest.raises(JsonError):
        Value([1]).as_string()
    with pytest.raises(JsonError):
        Value({}).as_bool()


def test_integer_types_by_range():
    assert Value(5).type is ValueType.INT
    assert Value(2**64 - 1).type is ValueType.UINT
    with pytest.raises(JsonError):
        Value(2**64)


def test_int_range_checks():
    big = Value(2**31)
    with pytest.raises(JsonError):
        big.as_int()
    assert big.as_int64() == 2**31
    assert big.as_uint() == 2**31


def test_negative_not_unsigned():
    with pytest.raises(JsonError):
        Value(-1).as_uint()
    with pytest.raises(JsonError):
        Value(-1).as_uint64()
    assert Value(-1).is_uint() is False


def test_uint_beyond_int64():
    value = Value(2**63)
    with pytest.raises(JsonError):
        value.as_int64()
    assert value.as_uint64() == 2**63


def test_real_truncates_and_range_checks():
    assert Value(3.7).as_int() == 3
    with pytest.raises(JsonError):
        Value(1e20).as_int64()


def test_string_not_convertible_to_int():
    with pytest.raises(JsonError):
        Value("3").as_int()


def test_numeric_predicates():
    assert Value(2.0).is_int() is True
    assert Value(2.5).is_int() is False
    assert Value(1.5).is_numeric() is True
    assert Value("1").is_numeric() is False
    assert Value(2.5).is_integral() is False


def test_as_bool_of_numbers():
    assert Value(0).as_bool() is False
    assert Value(0.5).as_bool() is True


@pytest.mark.parametrize(
    "value, target, expected",
    [
        (Value(0), ValueType.NULL, True),
        (Value(1), ValueType.NULL, False),
        (Value(""), ValueType.NULL, True),
        (Value([]), ValueType.NULL, True),
        (Value(1.5), ValueType.INT, True),
        (Value("x"), ValueType.INT, False),
        (Value(True), ValueType.STRING, True),
        (Value([1]), ValueType.OBJECT, False),
        (Value(), ValueType.OBJECT, True),
    ],
)
def test_is_convertible_to(value, target, expected):
    assert value.is_convertible_to(target) is expected


def test_array_autovivification():
    value = Value()
    value[3] = "x"
    assert value.type is ValueType.ARRAY
    assert value.size() == 4
    assert value[0].type is ValueType.NULL
    assert value.to_python() == [None, None, None, "x"]


def test_nested_object_creation():
    value = Value()
    value["a"]["b"] = 1
    assert value.to_python() == {"a": {"b": 1}}


def test_wrong_key_kinds_raise():
    with pytest.raises(JsonError):
        Value([1])["k"]
    with pytest.raises(JsonError):
        Value({"a": 1})[0]
    with pytest.raises(JsonError):
        Value([1])[-1]


def test_resize_shrinks_and_grows():
    value = Value([1, 2, 3])
    value.resize(1)
    assert value.to_python() == [1]
    value.resize(3)
    assert value.to_python() == [1, None, None]
    value.resize(0)
    assert value.empty() is True


def test_resize_requires_array():
    with pytest.raises(JsonError):
        Value({"a": 1}).resize(2)


def test_append_grows_array():
    value = Value([1])
    stored = value.append("two")
    assert stored == "two"
    assert value.size() == 2
    assert value.to_python() == [1, "two"]


def test_get_returns_default_without_creating():
    value = Value({"a": 1})
    assert value.get("missing", "d").as_string() == "d"
    assert value.is_member("missing") is False
    assert Value([1]).get(5, "d") == "d"


def test_get_returns_copy():
    value = Value({"a": [1]})
    copy = value.get("a")
    copy.append(2)
    assert value.to_python() == {"a": [1]}


def test_get_on_scalar_raises():
    with pytest.raises(JsonError):
        Value("s").get("k")


def test_indexing_creates_member():
    value = Value({})
    value["k"]
    assert value.is_member("k") is True


def test_remove_member():
    value = Value({"a": 1, "b": 2})
    removed = value.remove_member("a")
    assert removed == 1
    assert value.member_names() == ["b"]
    assert value.remove_member("zz").is_null()


def test_member_names_sorted():
    assert Value({"b": 1, "a": 2, "c": 3}).member_names() == ["a", "b", "c"]


def test_clear_requires_container():
    with pytest.raises(JsonError):
        Value("s").clear()
    value = Value({"a": 1})
    value.clear()
    assert value.empty() is True
    assert value.type is ValueType.OBJECT


def test_empty_only_for_containers_and_null():
    assert Value([]).empty() is True
    assert Value().empty() is True
    assert Value(0).empty() is False


def test_type_ordering():
    assert Value() < Value(0)
    assert Value(5) < Value("a")
    assert Value(True) > Value("z")
    assert Value("a") < Value("b")


def test_compare_is_antisymmetric():
    pairs = [(Value(1), Value(2)), (Value("b"), Value("a")), (Value([1]), Value([1]))]
    for first, second in pairs:
        assert first.compare(second) == -second.compare(first)
    assert Value([1]).compare(Value([1])) == 0


def test_arrays_compare_by_size_first():
    assert Value([9]) < Value([1, 2])
    assert Value([1, 2]) < Value([1, 3])


def test_null_string_orders_before_empty_string():
    unset = Value(ValueType.STRING)
    assert unset.as_string() == ""
    assert unset < Value("")
    assert unset != Value("")


def test_equality():
    assert Value({"a": [1, 2]}) == Value.from_python({"a": [1, 2]})
    assert Value(1) != Value(1.0)
    assert Value(1) == 1


def test_default_of_type():
    value = Value(ValueType.UINT)
    assert value.type is ValueType.UINT
    assert value.as_uint() == 0
    assert Value.unsigned(7).type is ValueType.UINT


def test_comments():
    value = Value(1)
    assert value.get_comment(CommentPlacement.BEFORE) == ""
    value.set_comment("// hi", CommentPlacement.BEFORE)
    assert value.has_comment(CommentPlacement.BEFORE) is True
    assert value.get_comment(CommentPlacement.BEFORE) == "// hi"
    assert value.has_comment(CommentPlacement.AFTER) is False
    with pytest.raises(JsonError):
        value.set_comment("no slash", CommentPlacement.AFTER)


def test_copy_keeps_comments_and_is_independent():
    value = Value({"a": 1})
    value.set_comment("/* c */", CommentPlacement.AFTER)
    clone = value.copy()
    clone["a"] = 2
    assert value["a"] == 1
    assert clone.get_comment(CommentPlacement.AFTER) == "/* c */"


def test_python_round_trip():
    data = {"tech": "user", "slots": [{"name": "n", "normValue": "v"}], "n": 1.5, "ok": True}
    assert Value.from_python(data).to_python() == data


def test_iteration_in_key_order():
    value = Value({"b": 2, "a": 1})
    assert [item.as_int() for item in value] == [1, 2]
    assert list(Value(3)) == []