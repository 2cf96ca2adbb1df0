# app/services/workspace_insight_service.py
import logging
from typing import Any, Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.core.ai_client import AIClient, AIServiceError
from app.core.config import settings
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.repositories.workspace_repo import WorkspaceRepository
from app.utils.skill_matcher import calculate_skill_overlap, merge_skills
from app.utils.match_prompts import (
    WORKSPACE_RECOMMENDATION_SYSTEM_PROMPT, EMPTY_CHAT_ANSWER,
    build_workspace_recommendation_message, build_workspace_chat_system_prompt,
    fallback_recommendation_reason,
)

logger = logging.getLogger(__name__)


class WorkspaceInsightService:
    def __init__(self, db: AsyncSession, ai_client: AIClient):
        self.db = db
        self.ai_client = ai_client
        self.workspace_repo = WorkspaceRepository(db)
        self.project_repo = ProjectRepository(db)
        self.profile_repo = ProfileRepository(db)

    async def _get_workspace_or_404(self, workspace_id: str):
        workspace = await self.workspace_repo.get_workspace_by_id(workspace_id)
        if not workspace:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Workspace not found")
        return workspace

    async def get_recommendations(self, workspace_id: str) -> dict:
        """
        推薦工作者給工作區

        邏輯：
        1. 彙總工作區所有案件所需的 '不重複技能'。
        2. 找出所有候選工作者，排除目前的成員。
        3. 以技能重疊率篩選，達門檻者產生 AI 推薦理由。
        4. 依重疊率由高到低排序回傳 (不寫入媒合表)。
        """
        logger.info(f"Generating member recommendations for workspace: {workspace_id}")

        workspace = await self._get_workspace_or_404(workspace_id)
        projects = await self.project_repo.list_projects_by_workspace_id(workspace_id)
        members = await self.workspace_repo.list_members(workspace_id)
        member_ids = {member.user_id for member in members}

        workspace_skills = merge_skills(project.required_skills for project in projects)

        candidates = await self.profile_repo.list_candidate_profiles(
            roles=settings.MATCH_CANDIDATE_ROLES,
            exclude_ids=member_ids
        )
        logger.info(f"Found {len(candidates)} potential candidates")

        recommendations: List[Dict[str, Any]] = []

        for candidate in candidates:
            # 查詢已排除成員，這裡再確認一次
            if candidate.id in member_ids:
                continue

            detail = candidate.freelancer_detail
            overlap = calculate_skill_overlap(workspace_skills, detail.skills)
            if overlap.rounded_percentage < settings.WORKSPACE_RECOMMENDATION_THRESHOLD:
                continue

            reason = ""
            try:
                reason = await self.ai_client.generate_text(
                    WORKSPACE_RECOMMENDATION_SYSTEM_PROMPT,
                    build_workspace_recommendation_message(
                        workspace, workspace_skills, len(projects), candidate, detail
                    )
                )
            except AIServiceError as e:
                logger.error(f"AI reasoning error for freelancer {candidate.id}: {e}")

            recommendations.append({
                "freelancer_id": candidate.id,
                "freelancer_name": candidate.full_name,
                "freelancer_email": candidate.email,
                "skills": list(detail.skills or []),
                "match_percentage": overlap.rounded_percentage,
                "reason": reason.strip() or fallback_recommendation_reason(overlap),
            })

        # 排序邏輯：重疊率由高到低
        recommendations.sort(key=lambda x: x["match_percentage"], reverse=True)

        logger.info(f"Generated {len(recommendations)} recommendations")
        return {"success": True, "recommendations": recommendations}

    async def build_workspace_context(self, workspace_id: str) -> Dict[str, Any]:
        """
        組合工作區的唯讀快照：成員、案件、近期活動
        """
        workspace = await self._get_workspace_or_404(workspace_id)
        members = await self.workspace_repo.list_members(workspace_id)
        projects = await self.project_repo.list_projects_by_workspace_id(workspace_id)
        application_counts = await self.project_repo.count_applications_by_project(
            [project.id for project in projects]
        )
        activities = await self.workspace_repo.list_recent_activity(
            workspace_id, limit=settings.WORKSPACE_CHAT_ACTIVITY_LIMIT
        )

        member_rows = []
        for member in members:
            profile = member.profile
            detail = profile.freelancer_detail if profile else None
            member_rows.append({
                "name": profile.full_name if profile else None,
                "email": profile.email if profile else None,
                "role": member.role.value,
                "skills": list(detail.skills or []) if detail else [],
                "experience": (detail.years_experience or 0) if detail else 0,
                "joined": member.joined_at.isoformat() if member.joined_at else None,
            })

        project_rows = []
        for project in projects:
            budget_min = float(project.budget_min) if project.budget_min is not None else 0
            budget_max = float(project.budget_max) if project.budget_max is not None else 0
            project_rows.append({
                "title": project.title,
                "description": project.description,
                "status": project.status.value,
                "skills": list(project.required_skills or []),
                "budget": f"${budget_min:g} - ${budget_max:g}",
                "timeline": project.timeline,
                "applications": application_counts.get(project.id, 0),
            })

        return {
            "workspace": {
                "name": workspace.name,
                "description": workspace.description,
                "member_count": len(members),
                "project_count": len(projects),
            },
            "members": member_rows,
            "projects": project_rows,
            "recent_activity": [
                {
                    "type": activity.activity_type,
                    "description": activity.description,
                    "date": activity.created_at.isoformat() if activity.created_at else None,
                }
                for activity in activities
            ],
        }

    async def answer_question(self, workspace_id: str, question: str) -> dict:
        """
        工作區聊天：不做任何評分，直接把問題與工作區快照交給 AI
        """
        logger.info(f"Processing workspace chat question for workspace {workspace_id}")

        context = await self.build_workspace_context(workspace_id)

        try:
            answer = await self.ai_client.generate_text(
                build_workspace_chat_system_prompt(context),
                question
            )
        except AIServiceError as e:
            logger.error(f"AI API error for workspace chat: {e}")
            raise HTTPException(status.HTTP_502_BAD_GATEWAY, str(e))

        logger.info("Generated answer for workspace chat")
        return {"success": True, "answer": answer or EMPTY_CHAT_ANSWER, "context": context}
