"""flag provider データモデル"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from .exceptions import ErrorCode, FlagResolutionError

T = TypeVar("T")

# 無効化されたフラグに対して返すバリアント名
SDK_DEFAULT_VARIANT = "SdkDefault"


class Reason(StrEnum):
    """既知の評価理由。リモートが返す理由はこれ以外もそのまま通す。"""

    TARGETING_MATCH = "TARGETING_MATCH"
    SPLIT = "SPLIT"
    DISABLED = "DISABLED"
    DEFAULT = "DEFAULT"
    STATIC = "STATIC"
    CACHED = "CACHED"
    UNKNOWN = "UNKNOWN"
    ERROR = "ERROR"


class FlagType(StrEnum):
    """呼び出し側が期待するフラグ値の型。"""

    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    FLOAT = "FLOAT"
    INTEGER = "INTEGER"
    OBJECT = "OBJECT"


@dataclass(frozen=True, eq=True)
class EvaluationContext:
    """フラグ評価コンテキスト。

    attributes は生成時に再帰的に複製され、入れ子の dict は読み取り専用の
    Mapping、list は tuple になる。呼び出し側の元データを変更しても影響しない。
    attributes がハッシュ不可能なため、インスタンスもハッシュ不可能。
    """

    __hash__ = None  # type: ignore[assignment]

    targeting_key: str = ""
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", _freeze(dict(self.attributes)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "targetingKey": self.targeting_key,
            "custom": _thaw(self.attributes),
        }


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass
class EvaluationResponse:
    """リモート評価サービスのレスポンス。"""

    value: Any = None
    variant: str = ""
    reason: str = ""
    error_code: str = ""
    error_message: str = ""
    failed: bool = False
    track_events: bool = False
    version: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvaluationResponse:
        metadata = data.get("metadata")
        return cls(
            value=data.get("value"),
            variant=data.get("variant") or "",
            reason=data.get("reason") or "",
            error_code=data.get("errorCode") or "",
            error_message=data.get("errorMessage") or "",
            failed=bool(data.get("failed", False)),
            track_events=bool(data.get("trackEvents", False)),
            version=data.get("version") or "",
            metadata=metadata if isinstance(metadata, dict) else {},
        )


@dataclass
class ResolutionDetails(Generic[T]):
    """型付きのフラグ解決結果。

    error_code が空でない場合、value は常に呼び出し側のデフォルト値。
    """

    value: T
    variant: str = ""
    reason: str = ""
    error_code: str = ""
    error_message: str = ""
    flag_metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_error(cls, default_value: T, error: FlagResolutionError) -> ResolutionDetails[T]:
        return cls(
            value=default_value,
            reason=Reason.ERROR,
            error_code=error.code,
            error_message=error.message,
        )

    def raise_for_error(self) -> None:
        """エラーが記録されていれば FlagResolutionError を送出する。"""
        if self.error_code:
            raise FlagResolutionError(ErrorCode(self.error_code), self.error_message)
