"""HTTP トランスポートの抽象と httpx による既定実装"""

from __future__ import annotations

from typing import Protocol

import httpx

from .config import ProviderOptions


class HttpTransport(Protocol):
    """リクエストを送信してレスポンスを返す能力。

    httpx.AsyncClient はこのプロトコルを満たす。
    """

    async def send(self, request: httpx.Request) -> httpx.Response: ...


def create_transport(options: ProviderOptions) -> httpx.AsyncClient:
    """設定から既定の AsyncClient を組み立てる。"""
    return httpx.AsyncClient(timeout=options.timeout_seconds)
