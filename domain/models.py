from enum import Enum
from typing import Any, Self

from domain.errors import InvalidInput


class Role(Enum):
    user = "user"
    assistant = "assistant"


class ChatMsg:
    def __init__(self, *, role: Role, content: str) -> None:
        self.role = role
        self.content = content

    def __repr__(self) -> str:
        return f"<ChatMsg(role={self.role.value}, content={self.content[:20]!r})>"

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        if not isinstance(data, dict):
            raise InvalidInput("Each message must be an object.")
        try:
            role = Role(data.get("role"))
        except ValueError:
            raise InvalidInput("Message role must be 'user' or 'assistant'.")
        content = data.get("content")
        if not isinstance(content, str):
            raise InvalidInput("Message content must be a string.")
        return cls(role=role, content=content)

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


type Transcript = tuple[ChatMsg, ...]
type Draft = str


def transcript_from_body(body: Any) -> Transcript:
    """Pull the conversation out of a request body."""
    if not isinstance(body, dict):
        raise InvalidInput()
    messages = body.get("messages")
    if not isinstance(messages, list):
        raise InvalidInput()
    return tuple(ChatMsg.from_dict(m) for m in messages)


def latest_user_message(transcript: Transcript) -> str:
    for msg in reversed(transcript):
        if msg.role == Role.user:
            return msg.content
    return ""


class RubricItem:
    def __init__(self, *, criterion: str, expectations: str) -> None:
        self.criterion = criterion
        self.expectations = expectations

    def to_dict(self) -> dict[str, str]:
        return {"criterion": self.criterion, "expectations": self.expectations}


class CreativeBrief:
    def __init__(
        self,
        *,
        writer_brief: str,
        rubric: tuple[RubricItem, ...],
        failure_conditions: tuple[str, ...] = (),
    ) -> None:
        self.writer_brief = writer_brief
        self.rubric = rubric
        self.failure_conditions = failure_conditions

    def __repr__(self) -> str:
        return f"<CreativeBrief(criteria={len(self.rubric)})>"


class ReviewVerdict:
    def __init__(self, *, passed: bool, score: float, feedback: str = "") -> None:
        self.passed = passed
        self.score = score
        self.feedback = feedback

    def __repr__(self) -> str:
        return f"<ReviewVerdict(passed={self.passed}, score={self.score})>"


class EventType(Enum):
    status = "status"
    assistant = "assistant"
    error = "error"


class StreamEvent:
    def __init__(self, type: EventType, content: str) -> None:
        self.type = type
        self.content = content

    def __repr__(self) -> str:
        return f"<StreamEvent(type={self.type.value}, content={self.content[:30]!r})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StreamEvent):
            return NotImplemented
        return self.type == other.type and self.content == other.content

    @classmethod
    def status(cls, content: str) -> Self:
        return cls(EventType.status, content)

    @classmethod
    def assistant(cls, content: str) -> Self:
        return cls(EventType.assistant, content)

    @classmethod
    def error(cls, content: str) -> Self:
        return cls(EventType.error, content)

    @property
    def terminal(self) -> bool:
        return self.type != EventType.status

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value, "content": self.content}
