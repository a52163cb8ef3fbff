"""
Single-shot calls to the OpenAI-compatible model gateway.

- **complete**        – chat completion with a system + user message,
                        returns the raw response text (text model)
- **complete_image**  – chat completion asking for image output,
                        returns the decoded response body (image model)

One call per operation: the OpenAI client is created with ``max_retries=0``
and no explicit timeout, and the text agent never re-prompts the model
(``retries=0``, ``output_retries=0``), so a failed call is terminal for the
request and the caller must re-trigger it.
"""

import logging
from typing import Any

import openai
from openai import AsyncOpenAI
from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

from smartppt.core.config import Settings
from smartppt.core.exceptions import ConfigurationError, ExtractionError, UpstreamError

logger = logging.getLogger(__name__)

# openai.APIConnectionError carries no HTTP status
TRANSPORT_FAILURE_STATUS = 502


def _body_text(body: object) -> str:
    if body is None:
        return ""
    return body if isinstance(body, str) else str(body)


class ModelInvoker:
    """Issue one request per call against the configured model gateway.

    Parameters
    ----------
    settings:
        Application settings; ``LLM_API_KEY`` must be non-empty.
    text_model:
        Optional pydantic-ai model used instead of the gateway chat model
        (tests pass a ``FunctionModel``).
    client:
        Optional ``AsyncOpenAI`` client for image completions.
    """

    def __init__(
        self,
        settings: Settings,
        text_model: Model | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        if not settings.LLM_API_KEY:
            raise ConfigurationError("LLM_API_KEY is not configured")

        self.settings = settings
        self._client = client or AsyncOpenAI(
            api_key=settings.LLM_API_KEY,
            base_url=settings.LLM_BASE_URL,
            max_retries=0,
        )
        self._text_model = text_model or OpenAIChatModel(
            settings.TEXT_MODEL,
            provider=OpenAIProvider(openai_client=self._client),
        )
        self._model_settings = ModelSettings(
            temperature=settings.TEMPERATURE,
            max_tokens=settings.MAX_OUTPUT_TOKENS,
        )

    async def complete(self, system_instruction: str, user_instruction: str) -> str:
        """Return the model's raw text answer to *user_instruction*."""
        agent = Agent(
            self._text_model,
            output_type=str,
            system_prompt=system_instruction,
            model_settings=self._model_settings,
            retries=0,
            output_retries=0,
        )
        logger.info("Calling text model %s", self.settings.TEXT_MODEL)
        try:
            result = await agent.run(user_instruction)
        except ModelHTTPError as exc:
            body = _body_text(exc.body)
            logger.error("Model API error: %s %s", exc.status_code, body[:500])
            raise UpstreamError(exc.status_code, body) from exc
        except UnexpectedModelBehavior as exc:
            # e.g. a content-filtered reply with no text parts
            logger.error("Model returned no usable text: %s", exc)
            raise ExtractionError("model returned no text") from exc
        except openai.APIConnectionError as exc:
            logger.error("Model API unreachable: %s", exc)
            raise UpstreamError(TRANSPORT_FAILURE_STATUS, str(exc)) from exc
        return result.output

    async def complete_image(self, prompt: str) -> dict[str, Any]:
        """Ask the image model for a picture and return the response as a dict.

        The gateway returns generated images next to the text content, under
        ``choices[0].message.images``; the OpenAI client keeps such unknown
        fields, so they survive ``model_dump``.
        """
        logger.info("Calling image model %s", self.settings.IMAGE_MODEL)
        try:
            completion = await self._client.chat.completions.create(
                model=self.settings.IMAGE_MODEL,
                messages=[{"role": "user", "content": prompt}],
                extra_body={"modalities": ["image", "text"]},
            )
        except openai.APIStatusError as exc:
            body = exc.response.text
            logger.error("Image generation API error: %s %s", exc.status_code, body[:500])
            raise UpstreamError(exc.status_code, body) from exc
        except openai.APIConnectionError as exc:
            logger.error("Image API unreachable: %s", exc)
            raise UpstreamError(TRANSPORT_FAILURE_STATUS, str(exc)) from exc
        return completion.model_dump()
