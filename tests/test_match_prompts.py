import json
import types

import pytest

from app.utils.match_prompts import (
    DEFAULT_MODEL_REASON,
    build_workspace_chat_system_prompt,
    fallback_match_reason,
    fallback_recommendation_reason,
    parse_score_payload,
)
from app.utils.skill_matcher import calculate_skill_overlap


def test_parse_score_payload_with_surrounding_text():
    content = 'Sure! ```json\n{"score": 82, "reason": "Great React fit"}\n``` Hope this helps.'
    assert parse_score_payload(content) == (82, "Great React fit")


def test_parse_score_payload_clamps_score():
    assert parse_score_payload('{"score": 150, "reason": "x"}')[0] == 100
    assert parse_score_payload('{"score": -5, "reason": "x"}')[0] == 0
    assert parse_score_payload('{"score": 71.6, "reason": "x"}')[0] == 72


def test_parse_score_payload_defaults_missing_reason():
    score, reason = parse_score_payload('{"score": 40}')
    assert score == 40
    assert reason == DEFAULT_MODEL_REASON


@pytest.mark.parametrize("content", [
    "I think this is a great match",
    "",
    '{"score": 80, "reason": }',
    '{"score": "high", "reason": "x"}',
])
def test_parse_score_payload_rejects_unusable_content(content):
    with pytest.raises(ValueError):
        parse_score_payload(content)


def test_fallback_match_reason_mentions_overlap_and_experience():
    overlap = calculate_skill_overlap(["React", "Node.js"], ["react"])
    reason = fallback_match_reason(overlap, 4)
    assert reason.startswith("Strong skill match with 1 matching skills")
    assert "50%" in reason
    assert "4 years of experience" in reason


def test_fallback_match_reason_without_experience():
    overlap = calculate_skill_overlap(["React"], ["react"])
    assert "0 years of experience" in fallback_match_reason(overlap, None)


def test_fallback_recommendation_reason():
    overlap = calculate_skill_overlap(["Go", "SQL"], ["go", "sql"])
    assert "2 relevant skills" in fallback_recommendation_reason(overlap)


def test_chat_system_prompt_embeds_context_as_json():
    context = {"workspace": {"name": "Acme", "member_count": 1}, "members": [], "projects": []}
    prompt = build_workspace_chat_system_prompt(context)
    embedded = prompt.split("Context Data:\n", 1)[1]
    assert json.loads(embedded) == context


def test_chat_system_prompt_serializes_unknown_types():
    context = {"workspace": {"name": "Acme"}, "extra": types.SimpleNamespace()}
    assert "Acme" in build_workspace_chat_system_prompt(context)


@pytest.mark.parametrize("content", [85, ["score", 80], {"score": 80}])
def test_parse_score_payload_rejects_non_text(content):
    with pytest.raises(ValueError):
        parse_score_payload(content)
