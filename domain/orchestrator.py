"""Runs the kitchen brigade for one chat request.

The director turns the conversation into a creative brief and a rubric. The
writer drafts a recipe from the brief and the reviewer judges it against the
rubric. A rejected draft goes back to the writer with the reviewer's feedback,
at most `MAX_REVIEW_ROUNDS` times.

Progress is reported as a sequence of `StreamEvent`s: any number of status
events followed by exactly one assistant or error event. How those events get
to the browser is somebody else's problem.
"""

import logging
from typing import AsyncGenerator, AsyncIterator, Awaitable, Callable

from domain.aopenai import CompletionClient
from domain.codecs import extract_recipe_data
from domain.errors import KitchenError, RubricNotSatisfied, ServiceUnavailable
from domain.models import StreamEvent, Transcript, latest_user_message
from domain.roles import CHEF, DIRECTOR, REVIEWER, WRITER


logger = logging.getLogger(__name__)


MAX_REVIEW_ROUNDS = 3
PREVIEW_LENGTH = 80


type IsCancelled = Callable[[], Awaitable[bool]]


async def never_cancelled() -> bool:
    return False


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    text = " ".join(text.split())
    if len(text) <= length:
        return text
    return text[: length - 1].rstrip() + "…"


class Orchestrator:
    def __init__(self, client: CompletionClient, *, multi_agent: bool = True) -> None:
        self.client = client
        self.multi_agent = multi_agent

    async def run(
        self,
        transcript: Transcript,
        *,
        is_cancelled: IsCancelled | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """Produce the events for one request. Never raises a `KitchenError`."""
        is_cancelled = never_cancelled if is_cancelled is None else is_cancelled

        yield StreamEvent.status(
            f"Request received: {preview(latest_user_message(transcript))}"
        )

        steps = (
            self._brigade(transcript, is_cancelled)
            if self.multi_agent
            else self._single(transcript, is_cancelled)
        )
        try:
            async for event in steps:
                yield event
        except KitchenError as e:
            logger.warning("%s: %s", type(e).__name__, e.message)
            yield StreamEvent.error(e.message)
        except Exception:
            logger.exception("Unexpected failure while cooking.")
            yield StreamEvent.error(ServiceUnavailable().message)

    async def _brigade(
        self,
        transcript: Transcript,
        is_cancelled: IsCancelled,
    ) -> AsyncIterator[StreamEvent]:
        yield StreamEvent.status("Coordinating the kitchen brigade...")
        logger.info("Director briefing from %d messages.", len(transcript))
        brief = await DIRECTOR(self.client, transcript=transcript)
        if await is_cancelled():
            logger.info("Client left during the briefing.")
            return
        logger.info("Brief ready with %d rubric criteria.", len(brief.rubric))
        yield StreamEvent.status("Creative brief ready. Handing over to the writer...")

        feedback = ""
        last_feedback = ""
        for attempt in range(1, MAX_REVIEW_ROUNDS + 1):
            progress = f"Attempt {attempt}/{MAX_REVIEW_ROUNDS}"

            yield StreamEvent.status(f"{progress}: drafting the recipe...")
            draft = await WRITER(
                self.client,
                brief=brief,
                transcript=transcript,
                feedback=feedback,
            )
            if await is_cancelled():
                logger.info("Client left during attempt %d drafting.", attempt)
                return

            yield StreamEvent.status(f"{progress}: reviewing against the rubric...")
            verdict = await REVIEWER(self.client, brief=brief, draft=draft)
            if await is_cancelled():
                logger.info("Client left during attempt %d review.", attempt)
                return
            logger.info(
                "Attempt %d reviewed: passed=%s score=%s",
                attempt,
                verdict.passed,
                verdict.score,
            )

            if verdict.passed:
                data = extract_recipe_data(draft)
                title = data.get("title") if data else None
                logger.info("Approved on attempt %d: %s", attempt, title or "untitled")
                yield StreamEvent.status("Recipe approved by the reviewer.")
                yield StreamEvent.assistant(draft)
                return

            feedback = verdict.feedback
            last_feedback = verdict.feedback or last_feedback
            if attempt < MAX_REVIEW_ROUNDS:
                yield StreamEvent.status(
                    f"Reviewer feedback: {verdict.feedback}"
                    if verdict.feedback
                    else f"Reviewer asked for another attempt (score {verdict.score})."
                )

        raise RubricNotSatisfied(last_feedback or None)

    async def _single(
        self,
        transcript: Transcript,
        is_cancelled: IsCancelled,
    ) -> AsyncIterator[StreamEvent]:
        logger.info("Single chef call from %d messages.", len(transcript))
        answer = await CHEF(self.client, transcript=transcript)
        if await is_cancelled():
            logger.info("Client left before the answer was ready.")
            return
        yield StreamEvent.assistant(answer)
