"""Turn what the director and reviewer say into something we can act on.

Models like to wrap JSON in a markdown fence even when asked not to, so the
fence is stripped before parsing.
"""

import json
import math
import re
from typing import Any

from domain.errors import MalformedBrief, MalformedVerdict
from domain.models import CreativeBrief, ReviewVerdict, RubricItem


FENCE = re.compile(r"^```[\w-]*[ \t]*\n?(?P<body>.*?)\n?```$", re.DOTALL)
RECIPE_DATA = re.compile(r"```recipe-json[ \t]*\n(?P<body>.*?)\n?```", re.DOTALL)


def strip_fence(raw: str) -> str:
    text = raw.strip()
    match = FENCE.match(text)
    if match is None:
        return text
    return match.group("body").strip()


def _load(raw: str) -> Any:
    return json.loads(strip_fence(raw))


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def decode_brief(raw: str) -> CreativeBrief:
    try:
        data = _load(raw)
    except json.JSONDecodeError as e:
        raise MalformedBrief(f"The director's brief was not valid JSON: {e.msg}.")
    except RecursionError:
        raise MalformedBrief("The director's brief was nested too deeply.")
    if not isinstance(data, dict):
        raise MalformedBrief()

    writer_brief = _first(data, "writerBrief", "writer_brief")
    if not isinstance(writer_brief, str) or not writer_brief.strip():
        raise MalformedBrief("The director's brief had no writer instructions.")

    rubric_data = data.get("rubric")
    if not isinstance(rubric_data, list) or not rubric_data:
        raise MalformedBrief("The director's brief had no rubric.")
    rubric: list[RubricItem] = []
    for item in rubric_data:
        if not isinstance(item, dict):
            raise MalformedBrief("Rubric entries must be objects.")
        criterion = item.get("criterion")
        if not isinstance(criterion, str) or not criterion.strip():
            raise MalformedBrief("Rubric entries must name a criterion.")
        rubric.append(
            RubricItem(
                criterion=criterion,
                expectations=str(item.get("expectations") or ""),
            )
        )

    conditions = _first(data, "failureConditions", "failure_conditions") or []
    if not isinstance(conditions, list):
        raise MalformedBrief("Failure conditions must be a list.")

    return CreativeBrief(
        writer_brief=writer_brief.strip(),
        rubric=tuple(rubric),
        failure_conditions=tuple(str(c) for c in conditions),
    )


def decode_verdict(raw: str) -> ReviewVerdict:
    try:
        data = _load(raw)
    except json.JSONDecodeError as e:
        raise MalformedVerdict(f"The reviewer's verdict was not valid JSON: {e.msg}.")
    except RecursionError:
        raise MalformedVerdict("The reviewer's verdict was nested too deeply.")
    if not isinstance(data, dict):
        raise MalformedVerdict()

    passed = data.get("passed")
    if not isinstance(passed, bool):
        raise MalformedVerdict("The reviewer's verdict had no pass/fail decision.")
    score = data.get("score")
    # bool is an int subclass
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise MalformedVerdict("The reviewer's verdict had no numeric score.")
    if isinstance(score, float) and not math.isfinite(score):
        raise MalformedVerdict("The reviewer's score was not a finite number.")
    feedback = data.get("feedback")
    feedback = feedback.strip() if isinstance(feedback, str) else ""

    return ReviewVerdict(passed=passed, score=score, feedback=feedback)


def extract_recipe_data(draft: str) -> dict[str, Any] | None:
    """The structured recipe block at the end of a draft, if it parses."""
    matches = list(RECIPE_DATA.finditer(draft))
    if not matches:
        return None
    try:
        data = json.loads(matches[-1].group("body"))
    except (json.JSONDecodeError, RecursionError):
        return None
    return data if isinstance(data, dict) else None
