from types import SimpleNamespace

import httpx
import openai
import pytest
from pydantic_ai.exceptions import ModelHTTPError
from pydantic_ai.messages import ModelResponse, SystemPromptPart, TextPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from smartppt.core.ai_generators import generate_deck_content
from smartppt.core.config import Settings
from smartppt.core.exceptions import ConfigurationError, ExtractionError, UpstreamError
from smartppt.core.model_invoker import TRANSPORT_FAILURE_STATUS, ModelInvoker
from smartppt.schemas.generation import GenerateContentRequest

from conftest import image_response


class DummyCompletion:
    def __init__(self, payload):
        self.payload = payload

    def model_dump(self):
        return self.payload


def make_client(create):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def api_status_error(status: int, text: str) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
    response = httpx.Response(status, text=text, request=request)
    return openai.APIStatusError(text, response=response, body=None)


def test_missing_key_raises_configuration_error():
    with pytest.raises(ConfigurationError) as excinfo:
        ModelInvoker(Settings(_env_file=None, LLM_API_KEY=""))
    assert excinfo.value.message == "LLM_API_KEY is not configured"


async def test_complete_returns_model_text_and_sends_both_instructions(test_settings):
    seen = {}

    def answer(messages, info: AgentInfo) -> ModelResponse:
        parts = [part for message in messages for part in message.parts]
        seen["system"] = [p.content for p in parts if isinstance(p, SystemPromptPart)]
        seen["user"] = [p.content for p in parts if isinstance(p, UserPromptPart)]
        return ModelResponse(parts=[TextPart('{"title": "X", "bullets": ["a"]}')])

    invoker = ModelInvoker(test_settings, text_model=FunctionModel(answer))
    text = await invoker.complete("Be concise.", "Make a slide.")

    assert text == '{"title": "X", "bullets": ["a"]}'
    assert seen["system"] == ["Be concise."]
    assert seen["user"] == ["Make a slide."]


async def test_complete_maps_http_errors_to_upstream_error(test_settings):
    def rate_limited(messages, info):
        raise ModelHTTPError(status_code=429, model_name="test-model", body="slow down")

    invoker = ModelInvoker(test_settings, text_model=FunctionModel(rate_limited))
    with pytest.raises(UpstreamError) as excinfo:
        await invoker.complete("system", "user")

    assert excinfo.value.status_code == 429
    assert excinfo.value.body == "slow down"


async def test_complete_maps_connection_errors_to_upstream_error(test_settings):
    def unreachable(messages, info):
        raise openai.APIConnectionError(request=httpx.Request("POST", "https://gateway.test"))

    invoker = ModelInvoker(test_settings, text_model=FunctionModel(unreachable))
    with pytest.raises(UpstreamError) as excinfo:
        await invoker.complete("system", "user")

    assert excinfo.value.status_code == TRANSPORT_FAILURE_STATUS


async def test_empty_reply_is_a_parse_failure_after_a_single_call(test_settings):
    calls = []

    def filtered(messages, info):
        calls.append(messages)
        return ModelResponse(parts=[])

    invoker = ModelInvoker(test_settings, text_model=FunctionModel(filtered))
    with pytest.raises(ExtractionError):
        await generate_deck_content(invoker, GenerateContentRequest(topic="Photosynthesis"))

    assert len(calls) == 1


async def test_complete_image_requests_image_modality(test_settings):
    calls = []

    async def create(**kwargs):
        calls.append(kwargs)
        return DummyCompletion(image_response())

    invoker = ModelInvoker(test_settings, client=make_client(create))
    data = await invoker.complete_image("A tree")

    assert data == image_response()
    assert calls[0]["model"] == test_settings.IMAGE_MODEL
    assert calls[0]["messages"] == [{"role": "user", "content": "A tree"}]
    assert calls[0]["extra_body"] == {"modalities": ["image", "text"]}


async def test_complete_image_maps_status_errors(test_settings):
    async def create(**kwargs):
        raise api_status_error(402, "payment required")

    invoker = ModelInvoker(test_settings, client=make_client(create))
    with pytest.raises(UpstreamError) as excinfo:
        await invoker.complete_image("A tree")

    assert excinfo.value.status_code == 402
    assert excinfo.value.body == "payment required"
