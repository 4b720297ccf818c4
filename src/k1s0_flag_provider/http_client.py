"""リモート評価サービスの HTTP クライアント実装"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from .client import EvaluationClient
from .config import ProviderOptions
from .decoder import decode_response
from .exceptions import TARGETING_KEY_MISSING_MESSAGE, ErrorCode, FlagResolutionError
from .models import EvaluationContext, EvaluationResponse
from .transport import HttpTransport, create_transport

logger = structlog.get_logger(__name__)

UNAUTHORIZED_MESSAGE = "invalid token used to contact the remote evaluation service"


class HttpEvaluationClient(EvaluationClient):
    """httpx を使ったリモート評価クライアント。

    transport を渡さない場合は設定から AsyncClient を生成し、aclose で閉じる。
    渡された transport の寿命は呼び出し側が管理する。
    """

    def __init__(
        self,
        options: ProviderOptions,
        transport: HttpTransport | None = None,
    ) -> None:
        self._options = options
        self._owns_transport = transport is None
        self._transport: HttpTransport = (
            create_transport(options) if transport is None else transport
        )
        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if options.api_key:
            headers["Authorization"] = f"Bearer {options.api_key}"
        self._headers = headers

    def _url(self, flag_key: str) -> str:
        endpoint = self._options.endpoint.rstrip("/")
        return f"{endpoint}/v1/feature/{quote(flag_key, safe='')}/eval"

    def _build_request(
        self, flag_key: str, context: EvaluationContext, default_value: Any
    ) -> httpx.Request:
        body = {
            "evaluationContext": context.to_dict(),
            "defaultValue": default_value,
        }
        # send() はクライアント既定のタイムアウトを付与しないのでリクエスト側に載せる
        timeout = httpx.Timeout(self._options.timeout_seconds)
        try:
            return httpx.Request(
                "POST",
                self._url(flag_key),
                headers=self._headers,
                json=body,
                extensions={"timeout": timeout.as_dict()},
            )
        except (TypeError, ValueError) as e:
            raise FlagResolutionError(
                code=ErrorCode.GENERAL,
                message=f"impossible to serialize evaluation context for flag {flag_key}: {e}",
                cause=e,
            ) from e

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
        request = self._build_request(flag_key, context, default_value)
        try:
            resp = await self._transport.send(request)
            logger.debug(
                "remote evaluation answered", flag_key=flag_key, status_code=resp.status_code
            )
            return self._handle_response(flag_key, resp)
        except FlagResolutionError:
            raise
        except Exception as e:
            raise FlagResolutionError(
                code=ErrorCode.GENERAL,
                message=f"impossible to contact the remote evaluation service: {e!r}",
                cause=e,
            ) from e

    def _handle_response(self, flag_key: str, resp: httpx.Response) -> EvaluationResponse:
        if resp.status_code in (401, 403):
            raise FlagResolutionError(code=ErrorCode.GENERAL, message=UNAUTHORIZED_MESSAGE)
        if resp.status_code == 404:
            raise _flag_not_found(flag_key)
        if resp.is_success:
            response = decode_response(flag_key, resp.content)
        else:
            response = self._decode_error_body(flag_key, resp)
        if response.error_code:
            if response.error_code == ErrorCode.FLAG_NOT_FOUND:
                raise _flag_not_found(flag_key)
            raise FlagResolutionError(
                code=ErrorCode.from_remote(response.error_code),
                message=response.error_message
                or f"remote evaluation failed for flag {flag_key} ({response.error_code})",
            )
        return response

    def _decode_error_body(self, flag_key: str, resp: httpx.Response) -> EvaluationResponse:
        # 2xx 以外でも errorCode を含むボディであればそれを使う
        message = (
            "unexpected answer from the remote evaluation service "
            f"for flag {flag_key}: HTTP {resp.status_code}"
        )
        try:
            response = decode_response(flag_key, resp.content)
        except FlagResolutionError as e:
            raise FlagResolutionError(code=ErrorCode.GENERAL, message=message, cause=e) from e
        if not response.error_code:
            raise FlagResolutionError(code=ErrorCode.GENERAL, message=message)
        return response

    async def aclose(self) -> None:
        if self._owns_transport and isinstance(self._transport, httpx.AsyncClient):
            await self._transport.aclose()


def _flag_not_found(flag_key: str) -> FlagResolutionError:
    return FlagResolutionError(
        code=ErrorCode.FLAG_NOT_FOUND,
        message=f"flag {flag_key} was not found",
    )
