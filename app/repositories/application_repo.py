# app/repositories/application_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import List, Optional
import uuid

from app.models.application import Application
from app.schemas.application_schema import ApplicationCreate

class ApplicationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_application_by_id(self, application_id: str) -> Optional[Application]:
        """
        透過 ID 獲取單一申請 (project 由 lazy="selectin" 一併載入，用於權限檢查)
        """
        stmt = select(Application).where(Application.id == application_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def check_existing_application(self, project_id: str, freelancer_id: str) -> Optional[Application]:
        """
        檢查特定使用者是否已申請過特定案件
        """
        stmt = select(Application).where(
            Application.project_id == project_id,
            Application.freelancer_id == freelancer_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_application(
        self, project_id: str, freelancer_id: str, data: ApplicationCreate
    ) -> Application:
        application = Application(
            id=str(uuid.uuid4()),
            project_id=project_id,
            freelancer_id=freelancer_id,
            **data.model_dump()
        )
        self.db.add(application)
        await self.db.commit()
        await self.db.refresh(application)
        return application

    async def list_applications_by_freelancer(self, freelancer_id: str) -> List[Application]:
        stmt = (
            select(Application)
            .where(Application.freelancer_id == freelancer_id)
            .order_by(Application.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_applications_by_project(self, project_id: str) -> List[Application]:
        stmt = (
            select(Application)
            .where(Application.project_id == project_id)
            .order_by(Application.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def update_application(self, application: Application) -> Application:
        await self.db.commit()
        await self.db.refresh(application)
        return application
