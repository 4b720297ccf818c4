"""flag provider ライブラリの例外型定義"""

from __future__ import annotations

from enum import StrEnum

TARGETING_KEY_MISSING_MESSAGE = "no targetingKey provided in the evaluation context"


class ErrorCode(StrEnum):
    """フラグ解決エラーの分類。"""

    FLAG_NOT_FOUND = "FLAG_NOT_FOUND"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    TARGETING_KEY_MISSING = "TARGETING_KEY_MISSING"
    PARSE_ERROR = "PARSE_ERROR"
    GENERAL = "GENERAL"

    @classmethod
    def from_remote(cls, code: str) -> ErrorCode:
        """リモートの errorCode 文字列を対応するコードに変換する。未知のコードは GENERAL。"""
        try:
            return cls(code)
        except ValueError:
            return cls.GENERAL


class FlagResolutionError(Exception):
    """フラグ解決パイプラインのエラー。"""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"error code: {self.code}: {self.message}"


class ProviderConfigError(Exception):
    """プロバイダ設定の読み込みエラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ProviderConfigErrorCodes:
    """ProviderConfigError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
