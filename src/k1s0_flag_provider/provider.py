"""リモート評価プロバイダ

型ごとのエントリポイントは共通の _resolve に委譲する。解決中のエラーは
すべてここで ResolutionDetails に変換され、呼び出し側には送出されない。
"""

from __future__ import annotations

from typing import Any, TypeVar

import structlog

from .client import EvaluationClient
from .config import ProviderOptions
from .exceptions import FlagResolutionError
from .http_client import HttpEvaluationClient
from .models import (
    SDK_DEFAULT_VARIANT,
    EvaluationContext,
    FlagType,
    Reason,
    ResolutionDetails,
)
from .reconciler import reconcile
from .transport import HttpTransport

logger = structlog.get_logger(__name__)

T = TypeVar("T")

PROVIDER_NAME = "k1s0-remote-flag-provider"


class RemoteFlagProvider:
    """リモート評価サービスに問い合わせるフラグプロバイダ。"""

    def __init__(self, client: EvaluationClient) -> None:
        self._client = client

    @classmethod
    def from_options(
        cls,
        options: ProviderOptions,
        transport: HttpTransport | None = None,
    ) -> RemoteFlagProvider:
        return cls(HttpEvaluationClient(options, transport))

    def metadata(self) -> dict[str, str]:
        return {"name": PROVIDER_NAME}

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RemoteFlagProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def resolve_boolean_details(
        self, flag_key: str, default_value: bool, context: EvaluationContext
    ) -> ResolutionDetails[bool]:
        return await self._resolve(flag_key, default_value, context, FlagType.BOOLEAN)

    async def resolve_string_details(
        self, flag_key: str, default_value: str, context: EvaluationContext
    ) -> ResolutionDetails[str]:
        return await self._resolve(flag_key, default_value, context, FlagType.STRING)

    async def resolve_float_details(
        self, flag_key: str, default_value: float, context: EvaluationContext
    ) -> ResolutionDetails[float]:
        return await self._resolve(flag_key, default_value, context, FlagType.FLOAT)

    async def resolve_integer_details(
        self, flag_key: str, default_value: int, context: EvaluationContext
    ) -> ResolutionDetails[int]:
        return await self._resolve(flag_key, default_value, context, FlagType.INTEGER)

    async def resolve_object_details(
        self, flag_key: str, default_value: Any, context: EvaluationContext
    ) -> ResolutionDetails[Any]:
        return await self._resolve(flag_key, default_value, context, FlagType.OBJECT)

    async def _resolve(
        self,
        flag_key: str,
        default_value: T,
        context: EvaluationContext,
        flag_type: FlagType,
    ) -> ResolutionDetails[T]:
        try:
            response = await self._client.resolve(flag_key, context, default_value)
            if response.reason == Reason.DISABLED:
                return ResolutionDetails(
                    value=default_value,
                    variant=SDK_DEFAULT_VARIANT,
                    reason=Reason.DISABLED,
                )
            value = reconcile(flag_key, response.value, flag_type)
        except FlagResolutionError as e:
            logger.warning(
                "flag resolution failed",
                flag_key=flag_key,
                flag_type=str(flag_type),
                error_code=str(e.code),
                error_message=e.message,
            )
            return ResolutionDetails.from_error(default_value, e)
        return ResolutionDetails(
            value=value,
            variant=response.variant,
            reason=response.reason,
            flag_metadata=response.metadata,
        )
