"""InMemoryEvaluationClient 実装"""

from __future__ import annotations

from typing import Any

from .client import EvaluationClient
from .exceptions import TARGETING_KEY_MISSING_MESSAGE, ErrorCode, FlagResolutionError
from .models import EvaluationContext, EvaluationResponse


class InMemoryEvaluationClient(EvaluationClient):
    """テスト用インメモリ評価クライアント。"""

    def __init__(self) -> None:
        self._responses: dict[str, EvaluationResponse] = {}
        self.calls: list[str] = []

    def set_response(self, flag_key: str, response: EvaluationResponse) -> None:
        """フラグに対するレスポンスを設定する。"""
        self._responses[flag_key] = response

    async def resolve(
        self,
        flag_key: str,
        context: EvaluationContext,
        default_value: Any = None,
    ) -> EvaluationResponse:
        if not context.targeting_key:
            raise FlagResolutionError(
                code=ErrorCode.TARGETING_KEY_MISSING,
                message=TARGETING_KEY_MISSING_MESSAGE,
            )
        self.calls.append(flag_key)
        response = self._responses.get(flag_key)
        if response is None:
            raise FlagResolutionError(
                code=ErrorCode.FLAG_NOT_FOUND,
                message=f"flag {flag_key} was not found",
            )
        return response
