# app/utils/skill_matcher.py
from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass
class SkillOverlap:
    matched_skills: List[str] = field(default_factory=list)
    required_count: int = 0
    percentage: float = 0.0

    @property
    def matched_count(self) -> int:
        return len(self.matched_skills)

    @property
    def rounded_percentage(self) -> int:
        return int(round(self.percentage))


# (輔助函式) 兩個技能是否互相包含 (不分大小寫)
# "Node.js" 與 "Node" 不論哪一邊是需求，都算符合
def _skills_match(required: str, candidate: str) -> bool:
    required = required.lower()
    candidate = candidate.lower()
    return required in candidate or candidate in required


def _distinct_skills(skills: Iterable[str]) -> List[str]:
    # 依出現順序去重 (不分大小寫)，忽略空字串
    seen = set()
    distinct = []
    for skill in skills or []:
        if not skill or not skill.strip():
            continue
        key = skill.lower()
        if key in seen:
            continue
        seen.add(key)
        distinct.append(skill)
    return distinct


def calculate_skill_overlap(
    # 需求技能 (e.g., 案件的 required_skills)
    required_skills: Iterable[str],
    # 候選人技能 (e.g., 工作者的 skills)
    candidate_skills: Iterable[str]
) -> SkillOverlap:
    """
    計算需求技能中，有多少項能在候選人技能中找到 (子字串比對)。

    percentage = 符合數 / 需求數 * 100；需求為空時為 0。
    重複的需求技能只算一次。這是啟發式比對，不做同義詞或權重處理。
    """
    required = _distinct_skills(required_skills)
    candidate = _distinct_skills(candidate_skills)

    if not required:
        return SkillOverlap()

    matched = [
        skill for skill in required
        if any(_skills_match(skill, c_skill) for c_skill in candidate)
    ]

    return SkillOverlap(
        matched_skills=matched,
        required_count=len(required),
        percentage=len(matched) / len(required) * 100
    )


def merge_skills(skill_lists: Iterable[Iterable[str]]) -> List[str]:
    """
    合併多個技能列表，保留第一次出現的順序並去除重複
    """
    merged: List[str] = []
    for skills in skill_lists:
        merged.extend(skills or [])
    return _distinct_skills(merged)
