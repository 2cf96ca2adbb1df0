# app/services/matching_service.py
import asyncio
import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.core.ai_client import AIClient, AIServiceError
from app.core.config import settings
from app.models.profile import Profile
from app.repositories.match_repo import MatchRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.utils.skill_matcher import calculate_skill_overlap
from app.utils.match_prompts import (
    PROJECT_MATCH_SYSTEM_PROMPT, USER_MATCH_SYSTEM_PROMPT,
    build_project_match_message, build_freelancer_context, build_project_context,
    build_user_match_message, fallback_match_reason, parse_score_payload,
)

logger = logging.getLogger(__name__)


class MatchingService:
    """
    案件 <-> 工作者的媒合流程。

    每個流程都是單次、循序執行：讀資料、算技能重疊率、過門檻的候選人才呼叫 AI、
    最後 upsert 媒合紀錄。單一候選人的 AI 失敗只記錄 log，不影響其他候選人。
    """

    def __init__(self, db: AsyncSession, ai_client: AIClient):
        self.db = db
        self.ai_client = ai_client
        self.profile_repo = ProfileRepository(db)
        self.project_repo = ProjectRepository(db)
        self.match_repo = MatchRepository(db)

    async def generate_project_matches(self, project_id: str) -> dict:
        """
        案件刊登後：對所有候選工作者計算重疊率，達門檻者產生 AI 理由並寫入媒合
        """
        logger.info(f"Generating matches for project: {project_id}")

        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Project not found")

        # 先取出需要的值，避免後續 commit / rollback 後再讀取 ORM 屬性
        project_title = project.title
        required_skills = list(project.required_skills or [])

        candidates = await self.profile_repo.list_candidate_profiles(
            roles=settings.MATCH_CANDIDATE_ROLES,
            exclude_ids=[project.owner_id]
        )
        logger.info(f"Found {len(candidates)} candidate freelancers")

        # 每位候選人的資料同樣先取出
        candidate_rows = [
            (
                candidate.id,
                calculate_skill_overlap(required_skills, candidate.freelancer_detail.skills),
                candidate.freelancer_detail.years_experience,
                build_project_match_message(project, candidate, candidate.freelancer_detail),
            )
            for candidate in candidates
        ]

        match_count = 0
        ai_calls_made = 0

        for freelancer_id, overlap, years_experience, user_message in candidate_rows:
            if overlap.percentage < settings.PROJECT_MATCH_THRESHOLD:
                continue

            reason = ""
            ai_calls_made += 1
            try:
                reason = await self.ai_client.generate_text(PROJECT_MATCH_SYSTEM_PROMPT, user_message)
            except AIServiceError as e:
                logger.error(f"AI reasoning error for freelancer {freelancer_id}: {e}")

            await self.match_repo.upsert_match(
                project_id=project_id,
                freelancer_id=freelancer_id,
                score=overlap.rounded_percentage,
                reason=reason.strip() or fallback_match_reason(overlap, years_experience)
            )
            match_count += 1

        logger.info(f"Matches generated for project {project_id}: {match_count} ({ai_calls_made} AI calls)")

        return {
            "success": True,
            "matchCount": match_count,
            "aiCallsMade": ai_calls_made,
            "projectTitle": project_title,
        }

    async def generate_user_matches(self, user_id: str) -> dict:
        """
        工作者進入 Dashboard 時：比對開放中的案件，由模型回傳分數與理由
        """
        logger.info(f"Generating matches for user: {user_id}")

        profile = await self.profile_repo.get_profile_by_id(user_id)
        detail = profile.freelancer_detail if profile else None
        if detail is None:
            logger.error(f"No freelancer profile found for user {user_id}")
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Freelancer profile not found")

        freelancer_skills = list(detail.skills or [])
        freelancer_context = build_freelancer_context(profile, detail)

        projects = await self.project_repo.list_open_projects(
            limit=settings.USER_MATCH_PROJECT_LIMIT,
            exclude_owner_id=user_id
        )
        if not projects:
            logger.info("No open projects found")
            return {"success": True, "matchCount": 0, "message": "No open projects available"}

        logger.info(f"Found {len(projects)} open projects to match against")

        project_rows = [
            (
                project.id,
                project.title,
                calculate_skill_overlap(project.required_skills, freelancer_skills),
                build_user_match_message(freelancer_context, build_project_context(project)),
            )
            for project in projects
        ]

        match_count = 0
        threshold = settings.USER_MATCH_THRESHOLD
        batch_size = max(1, settings.USER_MATCH_BATCH_SIZE)

        for start in range(0, len(project_rows), batch_size):
            batch = project_rows[start:start + batch_size]

            for project_id, project_title, overlap, user_message in batch:
                # 本地重疊率未達門檻的案件不送給模型
                if overlap.percentage < threshold:
                    continue

                try:
                    content = await self.ai_client.generate_text(
                        USER_MATCH_SYSTEM_PROMPT,
                        user_message,
                        temperature=0.3,
                        max_tokens=200
                    )
                except AIServiceError as e:
                    logger.error(f"AI API error for project {project_id}: {e}")
                    continue

                try:
                    match_score, reason = parse_score_payload(content)
                except ValueError as e:
                    logger.error(f"Failed to parse AI response for project {project_id}: {e}")
                    continue

                # 模型分數必須高於門檻才寫入
                if match_score <= threshold:
                    continue

                await self.match_repo.upsert_match(
                    project_id=project_id,
                    freelancer_id=user_id,
                    score=match_score,
                    reason=reason
                )
                logger.info(f"Created match for project \"{project_title}\" - Score: {match_score}")
                match_count += 1

            # 批次之間稍作停頓，配合 AI 服務的速率限制
            if start + batch_size < len(project_rows) and settings.USER_MATCH_BATCH_DELAY_SECONDS > 0:
                await asyncio.sleep(settings.USER_MATCH_BATCH_DELAY_SECONDS)

        logger.info(f"Match generation complete! Created {match_count} matches")

        return {
            "success": True,
            "matchCount": match_count,
            "message": f"Generated {match_count} AI-powered matches",
        }

    async def ensure_user_matches(self, user_id: str) -> dict:
        """
        「確保工作者有媒合結果」：已有紀錄就直接回傳數量，不重複呼叫 AI
        """
        existing_count = await self.match_repo.count_matches_for_freelancer(user_id)
        if existing_count > 0:
            return {
                "success": True,
                "matchCount": existing_count,
                "message": "Matches already exist",
                "generated": False,
            }

        result = await self.generate_user_matches(user_id)
        result["generated"] = True
        return result

    async def get_my_matches(self, user: Profile, limit: int = 10) -> List:
        return await self.match_repo.list_matches_for_freelancer(user.id, limit=limit)

    async def get_project_matches(self, project_id: str, user: Profile) -> List:
        """案件擁有者查看該案件的媒合結果"""
        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Project not found")
        if project.owner_id != user.id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Only the project owner can view its matches")
        return await self.match_repo.list_matches_for_project(project_id)
