"""Talking to the completion gateway.

The gateway speaks the OpenAI chat completions dialect so the `openai` client
does the heavy lifting. We only ever ask for one non-streamed choice.
"""

import logging
from typing import Protocol

import httpx
import openai
from openai.types.chat import (
    ChatCompletionMessageParam,
    ChatCompletionSystemMessageParam,
)

from domain.errors import CreditsExhausted, RateLimited, ServiceUnavailable


logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"
TIMEOUT = 60


type Context = list[ChatCompletionMessageParam]


class CompletionClient(Protocol):
    async def complete(self, system_prompt: str, context: Context) -> str:
        ...


def openai_client_factory(
    token: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = TIMEOUT,
    http_client: httpx.AsyncClient | None = None,
) -> openai.AsyncClient:
    return openai.AsyncClient(
        api_key=token,
        base_url=base_url,
        timeout=timeout,
        # Retrying is the orchestrator's call, not ours.
        max_retries=0,
        http_client=http_client,
    )


class GatewayClient:
    def __init__(
        self,
        openai_client: openai.AsyncClient,
        *,
        model: str = DEFAULT_MODEL,
    ) -> None:
        self.openai_client = openai_client
        self.model = model

    async def complete(self, system_prompt: str, context: Context) -> str:
        system_message: ChatCompletionSystemMessageParam = {
            "role": "system",
            "content": system_prompt,
        }
        messages: Context = [system_message, *context]

        try:
            resp = await self.openai_client.chat.completions.create(
                model=self.model,
                messages=messages,
                stream=False,
            )
        except openai.RateLimitError as e:
            logger.warning("Gateway rate limited: %s", e.status_code)
            raise RateLimited() from e
        except openai.APIStatusError as e:
            if e.status_code == 402:
                logger.warning("Gateway credits exhausted.")
                raise CreditsExhausted() from e
            logger.error("Gateway error: %s %s", e.status_code, e.message)
            raise ServiceUnavailable() from e
        except openai.APITimeoutError as e:
            logger.error("Gateway timed out.")
            raise ServiceUnavailable() from e
        except openai.APIError as e:
            logger.error("Gateway unreachable: %r", e)
            raise ServiceUnavailable() from e

        choices = getattr(resp, "choices", None)
        if not choices:
            logger.error("Gateway returned no choices.")
            raise ServiceUnavailable()
        content = getattr(choices[0].message, "content", None)
        if not isinstance(content, str) or not content.strip():
            logger.error("Gateway returned no text content.")
            raise ServiceUnavailable()
        return content.strip()

    async def close(self) -> None:
        await self.openai_client.close()
