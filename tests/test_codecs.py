import pytest

from domain.codecs import decode_brief, decode_verdict, extract_recipe_data, strip_fence
from domain.errors import MalformedBrief, MalformedVerdict
from fakes import brief, verdict


@pytest.mark.parametrize(
    "raw,expected",
    (
        ('{"a": 1}', '{"a": 1}'),
        ('  {"a": 1}\n', '{"a": 1}'),
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('```JSON\n  {"a": 1}  \n```\n', '{"a": 1}'),
        ('```{"a": 1}```', '{"a": 1}'),
    ),
)
def test_strip_fence(raw: str, expected: str) -> None:
    assert strip_fence(raw) == expected


def test_decode_brief() -> None:
    got = decode_brief(brief())
    assert got.writer_brief.startswith("Classic Bordeaux canelés")
    assert [r.criterion for r in got.rubric] == ["Structure", "Nutrition"]
    assert got.rubric[1].expectations == "Full nutrition table."
    assert got.failure_conditions == ("Missing recipe-json block",)


def test_decode_brief_fenced_and_snake_case() -> None:
    raw = (
        "```json\n"
        '{"writer_brief": "Pot-au-feu", "rubric": [{"criterion": "Broth"}], '
        '"failure_conditions": []}\n'
        "```"
    )
    got = decode_brief(raw)
    assert got.writer_brief == "Pot-au-feu"
    assert got.rubric[0].expectations == ""
    assert got.failure_conditions == ()


def test_decode_brief_without_failure_conditions() -> None:
    raw = '{"writerBrief": "Brisket", "rubric": [{"criterion": "Bark"}]}'
    assert decode_brief(raw).failure_conditions == ()


@pytest.mark.parametrize(
    "raw",
    (
        "Here is your brief!",
        "[]",
        brief(writerBrief=""),
        brief(writerBrief="   "),
        brief(writerBrief=None),
        brief(rubric=[]),
        brief(rubric="be tasty"),
        brief(rubric=["be tasty"]),
        brief(rubric=[{"expectations": "no criterion"}]),
        brief(failureConditions="none"),
    ),
)
def test_decode_brief_malformed(raw: str) -> None:
    with pytest.raises(MalformedBrief):
        decode_brief(raw)


def test_decode_verdict() -> None:
    got = decode_verdict(verdict(False, 40, "Nutrition table incomplete"))
    assert got.passed is False
    assert got.score == 40
    assert got.feedback == "Nutrition table incomplete"


def test_decode_verdict_fenced_without_feedback() -> None:
    got = decode_verdict('```json\n{"passed": true, "score": 88.5}\n```')
    assert got.passed is True
    assert got.score == 88.5
    assert got.feedback == ""


def test_verdict_score_does_not_decide() -> None:
    got = decode_verdict(verdict(True, 5))
    assert got.passed is True


@pytest.mark.parametrize(
    "raw",
    (
        "Looks great to me.",
        '"passed"',
        '{"passed": "yes", "score": 90}',
        '{"score": 90}',
        '{"passed": true}',
        '{"passed": true, "score": "90"}',
        '{"passed": true, "score": true}',
        '{"passed": true, "score": NaN}',
        '{"passed": false, "score": Infinity}',
        '{"passed": false, "score": -Infinity}',
    ),
)
def test_decode_verdict_malformed(raw: str) -> None:
    with pytest.raises(MalformedVerdict):
        decode_verdict(raw)


def test_extract_recipe_data() -> None:
    draft = (
        "### 1. Introduction\n\nCanelés de Bordeaux...\n\n"
        '```recipe-json\n{"title": "Canelés de Bordeaux", "servings": 12}\n```\n'
    )
    assert extract_recipe_data(draft) == {"title": "Canelés de Bordeaux", "servings": 12}


@pytest.mark.parametrize(
    "draft",
    (
        "No structured data here.",
        "```recipe-json\n{not json}\n```",
        "```recipe-json\n[1, 2]\n```",
    ),
)
def test_extract_recipe_data_missing(draft: str) -> None:
    assert extract_recipe_data(draft) is None


def test_decode_brief_deeply_nested() -> None:
    raw = "[" * 100_000 + "]" * 100_000
    with pytest.raises(MalformedBrief, match="nested too deeply"):
        decode_brief(raw)


def test_decode_verdict_deeply_nested() -> None:
    raw = '{"passed": false, "score": 1, "feedback": ' + "[" * 100_000 + "]" * 100_000 + "}"
    with pytest.raises(MalformedVerdict, match="nested too deeply"):
        decode_verdict(raw)
