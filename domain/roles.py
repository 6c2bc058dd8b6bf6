"""The kitchen brigade.

Every role is the same gateway call with a different system prompt, a
different way of laying out its context, and a different way of reading its
answer.
"""

import json
from typing import Any, Callable

from openai.types.chat import ChatCompletionMessageParam, ChatCompletionUserMessageParam

from domain.aopenai import CompletionClient, Context
from domain.codecs import decode_brief, decode_verdict
from domain.models import CreativeBrief, Draft, ReviewVerdict, Transcript
from domain.prompts import CHEF_PROMPT, DIRECTOR_PROMPT, REVIEWER_PROMPT, WRITER_PROMPT


class Station[T]:
    def __init__(
        self,
        *,
        name: str,
        system_prompt: str,
        build_context: Callable[..., Context],
        decode: Callable[[str], T],
    ) -> None:
        self.name = name
        self.system_prompt = system_prompt
        self.build_context = build_context
        self.decode = decode

    def __repr__(self) -> str:
        return f"<Station(name={self.name})>"

    async def __call__(self, client: CompletionClient, **kwargs: Any) -> T:
        raw = await client.complete(self.system_prompt, self.build_context(**kwargs))
        return self.decode(raw)


def _user(content: str) -> ChatCompletionUserMessageParam:
    return {"role": "user", "content": content}


def conversation_context(*, transcript: Transcript) -> Context:
    messages: list[ChatCompletionMessageParam] = []
    for msg in transcript:
        messages.append(msg.to_dict())  # type: ignore[arg-type]
    return messages


def render_transcript(transcript: Transcript) -> str:
    return "\n\n".join(f"{m.role.value.upper()}: {m.content}" for m in transcript)


def render_rubric(brief: CreativeBrief) -> str:
    return json.dumps([r.to_dict() for r in brief.rubric], indent=2)


def render_failure_conditions(brief: CreativeBrief) -> str:
    if not brief.failure_conditions:
        return "None."
    return "\n".join(f"- {c}" for c in brief.failure_conditions)


def writer_context(
    *,
    brief: CreativeBrief,
    transcript: Transcript,
    feedback: str = "",
) -> Context:
    sections = [
        f"## Creative brief\n\n{brief.writer_brief}",
        f"## Rubric\n\n{render_rubric(brief)}",
        f"## Failure conditions\n\n{render_failure_conditions(brief)}",
        f"## Conversation\n\n{render_transcript(transcript)}",
    ]
    if feedback:
        sections.append(
            "## Reviewer feedback on your previous attempt\n\n"
            f"{feedback}\n\nRevise the recipe to address all of it."
        )
    return [_user("\n\n".join(sections))]


def reviewer_context(*, brief: CreativeBrief, draft: Draft) -> Context:
    sections = [
        f"## Rubric\n\n{render_rubric(brief)}",
        f"## Failure conditions\n\n{render_failure_conditions(brief)}",
        f"## Recipe to review\n\n{draft}",
    ]
    return [_user("\n\n".join(sections))]


def _as_draft(raw: str) -> Draft:
    return raw


DIRECTOR: Station[CreativeBrief] = Station(
    name="director",
    system_prompt=DIRECTOR_PROMPT,
    build_context=conversation_context,
    decode=decode_brief,
)

WRITER: Station[Draft] = Station(
    name="writer",
    system_prompt=WRITER_PROMPT,
    build_context=writer_context,
    decode=_as_draft,
)

REVIEWER: Station[ReviewVerdict] = Station(
    name="reviewer",
    system_prompt=REVIEWER_PROMPT,
    build_context=reviewer_context,
    decode=decode_verdict,
)

# Single call mode, no brief and no review.
CHEF: Station[Draft] = Station(
    name="chef",
    system_prompt=CHEF_PROMPT,
    build_context=conversation_context,
    decode=_as_draft,
)
