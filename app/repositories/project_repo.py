# app/repositories/project_repo.py

import logging
import uuid
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func

# 匯入 Models
from app.models.project import Project, ProjectStatusEnum
from app.models.application import Application

# 匯入 Schemas
from app.schemas.project_schema import ProjectCreate

logger = logging.getLogger(__name__)

class ProjectRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # 建立新案件
    async def create_project(self, project_data: ProjectCreate, owner_id: str) -> Project:
        """
        建立新案件 (Project)，狀態預設為 open
        """
        new_project_id = str(uuid.uuid4())

        db_project = Project(
            **project_data.model_dump(),
            id=new_project_id,
            owner_id=owner_id,
            status=ProjectStatusEnum.open
        )

        self.db.add(db_project)
        await self.db.commit()

        # 不使用 refresh()，改用 get_project_by_id() 取得完整物件 (含 owner)
        return await self.get_project_by_id(new_project_id)

    # 獲取單一案件
    async def get_project_by_id(self, project_id: str) -> Project | None:
        """
        透過 ID 獲取單一案件 (owner 由 Model 的 lazy="selectin" 一併載入)
        """
        stmt = select(Project).where(Project.id == project_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    # 條件搜尋案件
    async def list_projects(
        self,
        status: Optional[str] = None,
        project_type: Optional[str] = None
    ) -> List[Project]:
        """
        依狀態 / 類型篩選案件，依建立時間由新到舊
        """
        stmt = select(Project)

        if status:
            logger.info(f"Applying status filter: {status}")
            stmt = stmt.where(Project.status == status)

        if project_type:
            logger.info(f"Applying project_type filter: {project_type}")
            stmt = stmt.where(Project.project_type == project_type)

        stmt = stmt.order_by(Project.created_at.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_open_projects(
        self, limit: int, exclude_owner_id: Optional[str] = None
    ) -> List[Project]:
        """
        獲取 'open' 的案件 (最多 limit 筆，由新到舊)
        """
        stmt = select(Project).where(Project.status == ProjectStatusEnum.open)
        if exclude_owner_id:
            stmt = stmt.where(Project.owner_id != exclude_owner_id)
        stmt = stmt.order_by(Project.created_at.desc()).limit(limit)

        result = await self.db.execute(stmt)
        return result.scalars().all()

    # 查看特定擁有者的所有案件
    async def list_projects_by_owner_id(self, owner_id: str) -> List[Project]:
        stmt = select(Project).where(Project.owner_id == owner_id).order_by(Project.created_at.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_projects_by_workspace_id(self, workspace_id: str) -> List[Project]:
        stmt = select(Project).where(Project.workspace_id == workspace_id).order_by(Project.created_at)
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def count_applications_by_project(self, project_ids: List[str]) -> dict:
        """
        回傳 {project_id: 申請數}
        """
        if not project_ids:
            return {}
        stmt = (
            select(Application.project_id, func.count(Application.id))
            .where(Application.project_id.in_(project_ids))
            .group_by(Application.project_id)
        )
        result = await self.db.execute(stmt)
        return {project_id: count for project_id, count in result.all()}

    # 通用的更新方法
    async def update_project(self, project: Project) -> Project:
        """
        儲存對現有 Project 物件的變更
        """
        await self.db.commit()
        await self.db.refresh(project)
        return project
