"""Server-sent event framing for the chat stream."""

import json
import logging
from typing import AsyncGenerator, AsyncIterator

from starlette.requests import Request

from domain.models import StreamEvent


logger = logging.getLogger(__name__)


DONE = "data: [DONE]\n\n"


def frame(event: StreamEvent) -> str:
    return f"data: {json.dumps(event.to_dict())}\n\n"


async def frames(
    events: AsyncGenerator[StreamEvent, None],
    request: Request,
    *,
    done_sentinel: bool = False,
) -> AsyncIterator[str]:
    """Frame events as they are produced, stopping after the terminal one."""
    try:
        async for event in events:
            if await request.is_disconnected():
                logger.info("Client disconnected, dropping %s event.", event.type.value)
                return
            yield frame(event)
            if event.terminal:
                break
        if done_sentinel:
            yield DONE
    finally:
        await events.aclose()
