# app/utils/match_prompts.py
# 媒合用的 prompt 模板、AI 失敗時的備用理由，以及 AI 分數回應的解析
import json
import re
from typing import Any, Dict, Optional, Tuple

from app.utils.skill_matcher import SkillOverlap

# --- System 指令 ---
PROJECT_MATCH_SYSTEM_PROMPT = (
    "You are an AI matchmaker. Explain in 1-3 sentences why this freelancer is a good match "
    "for this project. Be specific about skills and experience."
)

USER_MATCH_SYSTEM_PROMPT = (
    "You are an AI matchmaking expert. Analyze the freelancer profile and project requirements "
    "to determine match quality. Return ONLY a JSON object with 'score' (0-100) and 'reason' "
    "(max 100 words explaining the match)."
)

WORKSPACE_RECOMMENDATION_SYSTEM_PROMPT = (
    "You are a talent matchmaker. Explain in 1-3 sentences why this freelancer would be a great "
    "addition to the workspace based on their skills and experience."
)

WORKSPACE_CHAT_SYSTEM_PROMPT = (
    "You are an AI assistant for a collaborative workspace. You have access to workspace data "
    "including members, projects, and activities. Answer the user's question using the attached "
    "JSON context. Be helpful, specific, and provide actionable insights when possible."
)

DEFAULT_MODEL_REASON = "AI-generated match based on profile analysis"
EMPTY_CHAT_ANSWER = "I couldn't generate a response."

_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def _amount(value) -> str:
    # DECIMAL / None 轉成顯示用字串
    if value is None:
        return "0"
    number = float(value)
    return str(int(number)) if number.is_integer() else f"{number:.2f}"


def _join(skills) -> str:
    return ", ".join(skills or []) or "None"


def build_project_match_message(project, freelancer, detail) -> str:
    """案件刊登後的媒合：專案 + 候選人資料"""
    return (
        f"Project: {project.title}\n"
        f"Required Skills: {_join(project.required_skills)}\n"
        f"Budget: ${_amount(project.budget_min)}-${_amount(project.budget_max)}\n\n"
        f"Freelancer: {freelancer.full_name or 'Unnamed freelancer'}\n"
        f"Skills: {_join(detail.skills)}\n"
        f"Experience: {detail.years_experience or 0} years\n"
        f"Rate: ${_amount(detail.hourly_rate)}/hr\n\n"
        "Why is this a good match?"
    )


def build_freelancer_context(profile, detail) -> str:
    looking_for = ", ".join(profile.looking_for or []) or "Any opportunities"
    return (
        f"Skills: {_join(detail.skills)}\n"
        f"Experience: {detail.years_experience or 0} years\n"
        f"Hourly Rate: ${_amount(detail.hourly_rate)}\n"
        f"Availability: {detail.availability or 'Not specified'}\n"
        f"Bio: {profile.bio or 'No bio'}\n"
        f"Looking for: {looking_for}"
    )


def build_project_context(project) -> str:
    project_type = project.project_type.value if project.project_type else "Not specified"
    owner_bio = project.owner.bio if project.owner is not None and project.owner.bio else "No bio available"
    return (
        f"Title: {project.title}\n"
        f"Description: {project.description}\n"
        f"Required Skills: {_join(project.required_skills)}\n"
        f"Budget: ${_amount(project.budget_min)} - ${_amount(project.budget_max)}\n"
        f"Timeline: {project.timeline or 'Not specified'}\n"
        f"Project Type: {project_type}\n"
        f"Owner Bio: {owner_bio}"
    )


def build_user_match_message(freelancer_context: str, project_context: str) -> str:
    """工作者主動媒合：要求模型自己回傳 0~100 分數與理由 (JSON)"""
    return (
        "Analyze this match:\n\n"
        f"FREELANCER PROFILE:\n{freelancer_context}\n\n"
        f"PROJECT REQUIREMENTS:\n{project_context}\n\n"
        "Provide a match score (0-100) based on:\n"
        "1. Skill alignment (40%)\n"
        "2. Experience level match (20%)\n"
        "3. Budget/rate compatibility (20%)\n"
        "4. Availability and timeline fit (10%)\n"
        "5. Overall profile compatibility (10%)\n\n"
        'Return ONLY valid JSON: {"score": number, "reason": "string"}'
    )


def build_workspace_recommendation_message(workspace, workspace_skills, project_count, freelancer, detail) -> str:
    return (
        f"Workspace: {workspace.name}\n"
        f"Workspace Skills Needed: {_join(workspace_skills)}\n"
        f"Projects: {project_count}\n\n"
        f"Freelancer: {freelancer.full_name or 'Unnamed freelancer'}\n"
        f"Skills: {_join(detail.skills)}\n"
        f"Experience: {detail.years_experience or 0} years\n"
        f"Rate: ${_amount(detail.hourly_rate)}/hr\n\n"
        "Why recommend for this workspace?"
    )


def build_workspace_chat_system_prompt(context: Dict[str, Any]) -> str:
    return f"{WORKSPACE_CHAT_SYSTEM_PROMPT}\n\nContext Data:\n{json.dumps(context, indent=2, default=str)}"


def fallback_match_reason(overlap: SkillOverlap, years_experience: Optional[int]) -> str:
    """AI 失敗時的固定理由 (由本地重疊率與年資組成)"""
    return (
        f"Strong skill match with {overlap.matched_count} matching skills "
        f"({overlap.rounded_percentage}% of required skills) and "
        f"{years_experience or 0} years of experience"
    )


def fallback_recommendation_reason(overlap: SkillOverlap) -> str:
    return (
        f"Strong skill match with {overlap.matched_count} relevant skills "
        f"for workspace projects ({overlap.rounded_percentage}% coverage)"
    )


def parse_score_payload(content: str) -> Tuple[int, str]:
    """
    從模型回應中取出第一個 {...} 區段並解析 score / reason。

    找不到 JSON 或格式錯誤時丟出 ValueError；分數限制在 0~100。
    """
    if content is not None and not isinstance(content, str):
        raise ValueError(f"Response is not text: {type(content).__name__}")

    found = _JSON_OBJECT_PATTERN.search(content or "")
    if not found:
        raise ValueError("No JSON found in response")

    try:
        data = json.loads(found.group(0))
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in response: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("JSON payload is not an object")

    try:
        score = float(data.get("score") or 0)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid score in response: {data.get('score')!r}") from e

    score = int(round(min(100.0, max(0.0, score))))
    reason = data.get("reason") or DEFAULT_MODEL_REASON
    return score, str(reason)
