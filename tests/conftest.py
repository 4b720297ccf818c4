"""テスト共通フィクスチャ"""

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
from k1s0_flag_provider import EvaluationContext, ProviderOptions, RemoteFlagProvider

FIXTURE_DIR = Path(__file__).parent / "fixtures"
ENDPOINT = "https://flags.example.com/"


def read_fixture(name: str) -> bytes:
    return (FIXTURE_DIR / f"{name}.json").read_bytes()


class FixtureServer:
    """フラグ名に対応する JSON フィクスチャを返すモックサーバー。"""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        flag_key = request.url.path.removeprefix("/v1/feature/").removesuffix("/eval")
        if flag_key == "unauthorized":
            return httpx.Response(401, content=b"")
        path = FIXTURE_DIR / f"{flag_key}.json"
        if not path.exists():
            path = FIXTURE_DIR / "flag_not_found.json"
        return httpx.Response(200, content=path.read_bytes())


@pytest.fixture
def evaluation_context() -> EvaluationContext:
    return EvaluationContext(
        targeting_key="d45e303a-38c2-11ed-a261-0242ac120002",
        attributes={
            "email": "john.doe@example.com",
            "firstname": "john",
            "lastname": "doe",
            "anonymous": False,
            "professional": True,
            "rate": 3.14,
            "age": 30,
            "admin": True,
            "company_info": {"name": "my_company", "size": 120},
            "labels": ["pro", "beta"],
        },
    )


@pytest.fixture
def fixture_server() -> FixtureServer:
    return FixtureServer()


@pytest.fixture
async def provider(fixture_server: FixtureServer) -> AsyncIterator[RemoteFlagProvider]:
    transport = httpx.AsyncClient(transport=httpx.MockTransport(fixture_server.handler))
    provider = RemoteFlagProvider.from_options(ProviderOptions(endpoint=ENDPOINT), transport)
    yield provider
    await provider.aclose()
    await transport.aclose()
