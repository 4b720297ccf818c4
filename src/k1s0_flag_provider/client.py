"""EvaluationClient 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import EvaluationContext, EvaluationResponse


class EvaluationClient(ABC):
    """フラグ評価クライアント抽象基底クラス。"""

    @abstractmethod
    async def resolve(
        self,
        flag_key: str,
        context: EvaluationContext,
        default_value: Any = None,
    ) -> EvaluationResponse:
        """フラグを評価してレスポンスを返す。失敗時は FlagResolutionError を送出する。"""
        ...

    async def aclose(self) -> None:
        """保持しているリソースを解放する。"""
