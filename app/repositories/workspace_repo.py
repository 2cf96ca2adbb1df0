# app/repositories/workspace_repo.py
import uuid
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.models.workspace import Workspace, WorkspaceMember, WorkspaceActivity, WorkspaceRoleEnum


class WorkspaceRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_workspace(self, name: str, description: Optional[str], owner_id: str) -> Workspace:
        """
        建立工作區，並同時把建立者寫入成員表 (role = owner)
        """
        workspace_id = str(uuid.uuid4())
        workspace = Workspace(
            id=workspace_id,
            name=name,
            description=description,
            owner_id=owner_id
        )
        owner_member = WorkspaceMember(
            id=str(uuid.uuid4()),
            workspace_id=workspace_id,
            user_id=owner_id,
            role=WorkspaceRoleEnum.owner
        )
        self.db.add(workspace)
        self.db.add(owner_member)
        await self.db.commit()
        return await self.get_workspace_by_id(workspace_id)

    async def get_workspace_by_id(self, workspace_id: str) -> Workspace | None:
        stmt = select(Workspace).where(Workspace.id == workspace_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_workspace_with_members(self, workspace_id: str) -> Workspace | None:
        """
        透過 ID 獲取工作區，並預先載入成員 (及成員的 Profile)
        """
        stmt = select(Workspace).where(Workspace.id == workspace_id).options(
            selectinload(Workspace.members).selectinload(WorkspaceMember.profile)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_workspaces_for_user(self, user_id: str) -> List[Workspace]:
        """
        使用者所屬的所有工作區 (由新到舊)
        """
        stmt = (
            select(Workspace)
            .join(WorkspaceMember, WorkspaceMember.workspace_id == Workspace.id)
            .where(WorkspaceMember.user_id == user_id)
            .order_by(Workspace.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    # --- Members ---
    async def list_members(self, workspace_id: str) -> List[WorkspaceMember]:
        stmt = (
            select(WorkspaceMember)
            .where(WorkspaceMember.workspace_id == workspace_id)
            .order_by(WorkspaceMember.joined_at)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def get_member(self, workspace_id: str, user_id: str) -> WorkspaceMember | None:
        stmt = select(WorkspaceMember).where(
            WorkspaceMember.workspace_id == workspace_id,
            WorkspaceMember.user_id == user_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_member_by_id(self, member_id: str) -> WorkspaceMember | None:
        stmt = select(WorkspaceMember).where(WorkspaceMember.id == member_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def add_member(self, workspace_id: str, user_id: str, role: WorkspaceRoleEnum) -> WorkspaceMember:
        member = WorkspaceMember(
            id=str(uuid.uuid4()),
            workspace_id=workspace_id,
            user_id=user_id,
            role=role
        )
        self.db.add(member)
        await self.db.commit()
        await self.db.refresh(member)
        return member

    async def update_member(self, member: WorkspaceMember) -> WorkspaceMember:
        await self.db.commit()
        await self.db.refresh(member)
        return member

    async def delete_member(self, member: WorkspaceMember):
        await self.db.delete(member)
        await self.db.commit()

    # --- Activity ---
    async def log_activity(
        self,
        workspace_id: str,
        user_id: str,
        activity_type: str,
        description: Optional[str] = None,
        project_id: Optional[str] = None,
        metadata: Optional[dict] = None
    ) -> WorkspaceActivity:
        """
        新增一筆工作區活動紀錄 (commit 由呼叫端負責)
        """
        activity = WorkspaceActivity(
            id=str(uuid.uuid4()),
            workspace_id=workspace_id,
            user_id=user_id,
            project_id=project_id,
            activity_type=activity_type,
            description=description,
            extra=metadata
        )
        self.db.add(activity)
        await self.db.flush()
        return activity

    async def list_recent_activity(self, workspace_id: str, limit: int) -> List[WorkspaceActivity]:
        stmt = (
            select(WorkspaceActivity)
            .where(WorkspaceActivity.workspace_id == workspace_id)
            .order_by(WorkspaceActivity.created_at.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()
