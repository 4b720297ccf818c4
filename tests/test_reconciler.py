"""型突き合わせのユニットテスト"""

from typing import Any

import pytest
from k1s0_flag_provider.exceptions import ErrorCode, FlagResolutionError
from k1s0_flag_provider.models import FlagType
from k1s0_flag_provider.reconciler import INT64_MAX, INT64_MIN, ValueKind, kind_of, reconcile


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, ValueKind.NULL),
        (True, ValueKind.BOOL),
        (False, ValueKind.BOOL),
        ("on", ValueKind.STRING),
        (1, ValueKind.INT),
        (1.5, ValueKind.FLOAT),
        ({"a": 1}, ValueKind.OBJECT),
        ([1, 2], ValueKind.OBJECT),
    ],
)
def test_kind_of(value: Any, kind: ValueKind) -> None:
    assert kind_of(value) is kind


def test_exact_kind_passes_through() -> None:
    assert reconcile("f", True, FlagType.BOOLEAN) is True
    assert reconcile("f", "CC0000", FlagType.STRING) == "CC0000"
    assert reconcile("f", 100.25, FlagType.FLOAT) == 100.25
    assert reconcile("f", 100, FlagType.INTEGER) == 100


def test_integer_number_accepted_as_float() -> None:
    value = reconcile("f", 3, FlagType.FLOAT)
    assert value == 3.0
    assert isinstance(value, float)


def test_integral_float_accepted_as_integer() -> None:
    value = reconcile("f", 100.0, FlagType.INTEGER)
    assert value == 100
    assert isinstance(value, int)


@pytest.mark.parametrize("value", [None, True, "x", 1, 1.5, {"k": None}, [1, "a"]])
def test_object_accepts_anything(value: Any) -> None:
    assert reconcile("f", value, FlagType.OBJECT) == value


@pytest.mark.parametrize(
    ("value", "flag_type"),
    [
        ("true", FlagType.BOOLEAN),
        (1, FlagType.BOOLEAN),
        (True, FlagType.STRING),
        (1, FlagType.STRING),
        (True, FlagType.FLOAT),
        ("1.5", FlagType.FLOAT),
        (True, FlagType.INTEGER),
        ("1", FlagType.INTEGER),
        (100.25, FlagType.INTEGER),
        (None, FlagType.BOOLEAN),
        ({"a": 1}, FlagType.STRING),
    ],
)
def test_mismatch_is_rejected(value: Any, flag_type: FlagType) -> None:
    """ファミリーをまたぐ変換や小数の切り捨ては行わないこと。"""
    with pytest.raises(FlagResolutionError) as exc_info:
        reconcile("my_flag", value, flag_type)
    assert exc_info.value.code == ErrorCode.TYPE_MISMATCH
    assert exc_info.value.message == "unexpected type for flag my_flag"


def test_number_too_large_for_float_is_rejected() -> None:
    with pytest.raises(FlagResolutionError) as exc_info:
        reconcile("my_flag", 10**400, FlagType.FLOAT)
    assert exc_info.value.code == ErrorCode.TYPE_MISMATCH
    assert exc_info.value.message == "unexpected type for flag my_flag"
    assert isinstance(exc_info.value.__cause__, OverflowError)


@pytest.mark.parametrize("value", [INT64_MAX, INT64_MIN, float(2**62)])
def test_integer_within_int64_is_accepted(value: Any) -> None:
    assert reconcile("f", value, FlagType.INTEGER) == int(value)


@pytest.mark.parametrize("value", [INT64_MAX + 1, INT64_MIN - 1, 10**30, 1e308, -1e308])
def test_integer_outside_int64_is_rejected(value: Any) -> None:
    """符号付き 64 ビットに収まらない整数は TYPE_MISMATCH。"""
    with pytest.raises(FlagResolutionError) as exc_info:
        reconcile("my_flag", value, FlagType.INTEGER)
    assert exc_info.value.code == ErrorCode.TYPE_MISMATCH
