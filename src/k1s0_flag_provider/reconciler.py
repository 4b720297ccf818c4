"""デコード済みの値と期待する型の突き合わせ"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from .exceptions import ErrorCode, FlagResolutionError
from .models import FlagType

# INTEGER として返せる範囲（符号付き 64 ビット）
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(StrEnum):
    """JSON 値の動的な種別。"""

    BOOL = "BOOL"
    STRING = "STRING"
    FLOAT = "FLOAT"
    INT = "INT"
    OBJECT = "OBJECT"
    NULL = "NULL"


def kind_of(value: Any) -> ValueKind:
    # bool は int のサブクラスなので先に判定する
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    return ValueKind.OBJECT


def reconcile(flag_key: str, value: Any, flag_type: FlagType) -> Any:
    """値を期待する型として返す。種別が合わなければ TYPE_MISMATCH。

    数値同士以外の暗黙変換は行わない。INTEGER は整数値の数値のみ受け付ける。
    """
    kind = kind_of(value)
    if flag_type == FlagType.OBJECT:
        return value
    if flag_type == FlagType.BOOLEAN and kind is ValueKind.BOOL:
        return value
    if flag_type == FlagType.STRING and kind is ValueKind.STRING:
        return value
    if flag_type == FlagType.FLOAT and kind in (ValueKind.FLOAT, ValueKind.INT):
        try:
            return float(value)
        except OverflowError as e:
            raise _type_mismatch(flag_key) from e
    if flag_type == FlagType.INTEGER:
        if kind is ValueKind.FLOAT and value.is_integer():
            value = int(value)
            kind = ValueKind.INT
        if kind is ValueKind.INT and INT64_MIN <= value <= INT64_MAX:
            return value
    raise _type_mismatch(flag_key)


def _type_mismatch(flag_key: str) -> FlagResolutionError:
    return FlagResolutionError(
        code=ErrorCode.TYPE_MISMATCH,
        message=f"unexpected type for flag {flag_key}",
    )
