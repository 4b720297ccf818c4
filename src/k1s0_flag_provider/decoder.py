"""評価レスポンスのデコード"""

from __future__ import annotations

import json
from typing import Any

from .exceptions import ErrorCode, FlagResolutionError
from .models import EvaluationResponse


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def decode_response(flag_key: str, body: bytes) -> EvaluationResponse:
    """JSON ボディを EvaluationResponse に変換する。

    構文エラー、NaN/Infinity、オブジェクト以外のトップレベル値は PARSE_ERROR。
    エラーメッセージには生のボディをそのまま含める。
    """
    text = body.decode("utf-8", errors="replace")
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise _parse_error(flag_key, text, e) from e
    if not isinstance(data, dict):
        raise _parse_error(flag_key, text)
    return EvaluationResponse.from_dict(data)


def _parse_error(flag_key: str, text: str, cause: Exception | None = None) -> FlagResolutionError:
    return FlagResolutionError(
        code=ErrorCode.PARSE_ERROR,
        message=f"impossible to parse response for flag {flag_key}: {text}",
        cause=cause,
    )
