# app/services/application_service.py

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.models.application import Application
from app.models.profile import Profile
from app.models.project import ProjectStatusEnum
from app.repositories.application_repo import ApplicationRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.repositories.workspace_repo import WorkspaceRepository
from app.schemas.application_schema import ApplicationCreate, ApplicationStatusUpdate


class ApplicationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.application_repo = ApplicationRepository(db)
        self.project_repo = ProjectRepository(db)
        self.profile_repo = ProfileRepository(db)
        self.workspace_repo = WorkspaceRepository(db)

    async def apply_to_project(
        self, project_id: str, data: ApplicationCreate, user: Profile
    ) -> Application:
        """
        工作者申請案件
        1. 必須已建立接案資料
        2. 案件必須存在且為 open
        3. 同一案件只能申請一次
        """
        detail = await self.profile_repo.get_freelancer_detail_by_user_id(user.id)
        if not detail:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Only freelancers can apply to projects")

        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Project not found")
        if project.status != ProjectStatusEnum.open:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "This project is not accepting applications")
        if project.owner_id == user.id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "You cannot apply to your own project")

        existing = await self.application_repo.check_existing_application(project_id, user.id)
        if existing:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "You have already applied to this project")

        application = await self.application_repo.create_application(project_id, user.id, data)

        await self.workspace_repo.log_activity(
            project.workspace_id, user.id, "application_submitted",
            description=f"{user.full_name or user.email} applied to \"{project.title}\"",
            project_id=project_id
        )
        await self.db.commit()
        return application

    async def get_my_applications(self, user: Profile) -> List[Application]:
        return await self.application_repo.list_applications_by_freelancer(user.id)

    async def get_project_applications(self, project_id: str, user: Profile) -> List[Application]:
        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Project not found")
        if project.owner_id != user.id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Only the project owner can view applications")
        return await self.application_repo.list_applications_by_project(project_id)

    async def update_application_status(
        self, application_id: str, data: ApplicationStatusUpdate, user: Profile
    ) -> Application:
        """案件擁有者審核申請"""
        application = await self.application_repo.get_application_by_id(application_id)
        if not application:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Application not found")
        if application.project.owner_id != user.id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Only the project owner can review applications")

        application.status = data.status
        return await self.application_repo.update_application(application)
