# app/services/project_service.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from typing import List, Optional

# 匯入 Models
from app.models.profile import Profile, UserRoleEnum
from app.models.project import Project

# 匯入 Schemas
from app.schemas.project_schema import ProjectCreate, ProjectStatusUpdate

# 匯入 Repositories
from app.repositories.project_repo import ProjectRepository
from app.repositories.workspace_repo import WorkspaceRepository

logger = logging.getLogger(__name__)

class ProjectService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.project_repo = ProjectRepository(db)
        self.workspace_repo = WorkspaceRepository(db)

    # 輔助函式：檢查案件存在且呼叫者為擁有者
    async def _get_and_check_owner(self, project_id: str, user: Profile) -> Project:
        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Project not found"
            )
        if project.owner_id != user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to modify this project"
            )
        return project

    async def create_project(self, project_data: ProjectCreate, user: Profile) -> Project:
        """
        業務邏輯：建立案件

        建立後由前端呼叫 /matching/generate-matches 觸發媒合。
        """
        # 1. 權限驗證：必須是案件擁有者角色
        if user.user_role != UserRoleEnum.project_owner:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only project owners can post projects"
            )

        # 2. 必須是目標工作區的成員
        workspace = await self.workspace_repo.get_workspace_by_id(project_data.workspace_id)
        if not workspace:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Workspace not found")
        if not await self.workspace_repo.get_member(project_data.workspace_id, user.id):
            raise HTTPException(status.HTTP_403_FORBIDDEN, "You are not a member of this workspace")

        # 3. 技能去除前後空白與空字串
        project_data.required_skills = [
            skill.strip() for skill in project_data.required_skills if skill and skill.strip()
        ]

        # 4. 執行 Repository 建立
        new_project = await self.project_repo.create_project(
            project_data=project_data,
            owner_id=user.id
        )

        await self.workspace_repo.log_activity(
            new_project.workspace_id, user.id, "project_created",
            description=f"Project \"{new_project.title}\" posted",
            project_id=new_project.id
        )
        await self.db.commit()

        logger.info(f"Project created: {new_project.id} in workspace {new_project.workspace_id}")
        return new_project

    async def search_projects(
        self,
        status: Optional[str] = None,
        project_type: Optional[str] = None
    ) -> List[Project]:
        return await self.project_repo.list_projects(status=status, project_type=project_type)

    async def get_project_details(self, project_id: str) -> Project:
        project = await self.project_repo.get_project_by_id(project_id)

        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Project not found"
            )
        return project

    async def get_my_projects(self, user: Profile) -> List[Project]:
        return await self.project_repo.list_projects_by_owner_id(user.id)

    async def update_project_status(
        self, project_id: str, data: ProjectStatusUpdate, user: Profile
    ) -> Project:
        """
        業務邏輯：更新案件狀態 (不限制轉換順序)
        """
        project = await self._get_and_check_owner(project_id, user)

        project.status = data.status
        await self.workspace_repo.log_activity(
            project.workspace_id, user.id, "project_status_updated",
            description=f"Project \"{project.title}\" is now {data.status.value}",
            project_id=project.id
        )
        return await self.project_repo.update_project(project)
