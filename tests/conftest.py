"""Shared fixtures for request_store tests."""

import asyncio
from typing import Any, Awaitable, Callable

import pytest
from request_store.core.provider import ProviderParameter

ERROR_MESSAGE = "No storm in our love"

REQUEST_STORE_ENV_VARS = [
    "REQUEST_STORE_BASE_URL",
    "REQUEST_STORE_TIMEOUT",
    "REQUEST_STORE_FAILURE_POLICY",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_request_store_env(monkeypatch):
    """AUTOUSE: Keep values loaded from a local .env out of the tests."""
    for name in REQUEST_STORE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def echo_provider() -> Callable[[ProviderParameter], Awaitable[dict[str, Any]]]:
    """Provider that resolves with the url, body and method it was given."""

    async def provider(parameter: ProviderParameter) -> dict[str, Any]:
        await asyncio.sleep(0)
        return {"url": parameter.url, "body": parameter.body, "method": parameter.method}

    return provider


@pytest.fixture
def failing_provider() -> Callable[[ProviderParameter], Awaitable[Any]]:
    """Provider that rejects unless called with {"emitError": False}."""

    async def provider(parameter: ProviderParameter) -> Any:
        await asyncio.sleep(0)
        body = parameter.body if parameter.body is not None else {"emitError": True}
        if body.get("emitError"):
            raise RuntimeError(ERROR_MESSAGE)
        return {"ok": True}

    return provider


class GatedProvider:
    """Provider whose calls settle only when the test releases them, in any order."""

    def __init__(self) -> None:
        self.calls: list[ProviderParameter] = []
        self._gates: list[asyncio.Future] = []

    async def __call__(self, parameter: ProviderParameter) -> Any:
        gate = asyncio.get_running_loop().create_future()
        self.calls.append(parameter)
        self._gates.append(gate)
        return await gate

    def resolve(self, index: int, value: Any) -> None:
        self._gates[index].set_result(value)

    def reject(self, index: int, error: Exception) -> None:
        self._gates[index].set_exception(error)


@pytest.fixture
def gated_provider() -> GatedProvider:
    return GatedProvider()
