from typing import Any

import pytest
from fastapi.testclient import TestClient

from smartppt.api.deps import get_model_invoker, get_settings
from smartppt.core.config import Settings
from smartppt.main import app

# 1x1 transparent PNG
PNG_DATA_URL = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def image_response(url: str | None = PNG_DATA_URL) -> dict[str, Any]:
    """Shape of an image-model chat completion as the gateway returns it."""
    message: dict[str, Any] = {"role": "assistant", "content": "Here is your image."}
    if url is not None:
        message["images"] = [{"type": "image_url", "image_url": {"url": url}}]
    return {"choices": [{"index": 0, "message": message}]}


class FakeInvoker:
    """Stands in for ModelInvoker; replays canned answers and records prompts."""

    def __init__(self) -> None:
        self.text: str | Exception = ""
        self.image_responses: list[dict[str, Any] | Exception] = []
        self.text_calls: list[tuple[str, str]] = []
        self.image_prompts: list[str] = []

    async def complete(self, system_instruction: str, user_instruction: str) -> str:
        self.text_calls.append((system_instruction, user_instruction))
        if isinstance(self.text, Exception):
            raise self.text
        return self.text

    async def complete_image(self, prompt: str) -> dict[str, Any]:
        self.image_prompts.append(prompt)
        response = self.image_responses.pop(0) if self.image_responses else image_response(None)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, LLM_API_KEY="test-key", MODE="testing")


@pytest.fixture
def fake_invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def client(fake_invoker, test_settings):
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_model_invoker] = lambda: fake_invoker
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client():
    """Real invoker dependency, but settings without a credential."""
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, LLM_API_KEY="")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
