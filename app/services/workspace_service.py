# app/services/workspace_service.py
import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.models.profile import Profile, WORKSPACE_CREATOR_ROLES
from app.models.workspace import Workspace, WorkspaceMember, WorkspaceRoleEnum, MANAGER_ROLES
from app.repositories.profile_repo import ProfileRepository
from app.repositories.workspace_repo import WorkspaceRepository
from app.schemas.workspace_schema import WorkspaceCreate, WorkspaceMemberCreate, WorkspaceMemberRoleUpdate

logger = logging.getLogger(__name__)


class WorkspaceService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = WorkspaceRepository(db)
        self.profile_repo = ProfileRepository(db)

    # 輔助函式：檢查工作區存在且呼叫者是成員
    async def _get_membership(self, workspace_id: str, user: Profile) -> WorkspaceMember:
        workspace = await self.repo.get_workspace_by_id(workspace_id)
        if not workspace:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Workspace not found")

        membership = await self.repo.get_member(workspace_id, user.id)
        if not membership:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "You are not a member of this workspace")
        return membership

    # 輔助函式：只有 owner / admin 可以管理成員
    async def _require_manager(self, workspace_id: str, user: Profile) -> WorkspaceMember:
        membership = await self._get_membership(workspace_id, user)
        if membership.role.value not in MANAGER_ROLES:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Only workspace owners and admins can manage members")
        return membership

    async def _get_member_in_workspace(self, workspace_id: str, member_id: str) -> WorkspaceMember:
        member = await self.repo.get_member_by_id(member_id)
        if not member or member.workspace_id != workspace_id:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Member not found")
        return member

    async def create_workspace(self, data: WorkspaceCreate, user: Profile) -> Workspace:
        if user.user_role.value not in WORKSPACE_CREATOR_ROLES:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Your role cannot create workspaces")

        workspace = await self.repo.create_workspace(data.name, data.description, user.id)
        await self.repo.log_activity(
            workspace.id, user.id, "workspace_created",
            description=f"Workspace \"{workspace.name}\" created"
        )
        await self.db.commit()
        logger.info(f"Workspace created: {workspace.id} by {user.id}")
        return workspace

    async def list_my_workspaces(self, user: Profile) -> List[Workspace]:
        return await self.repo.list_workspaces_for_user(user.id)

    async def get_workspace_detail(self, workspace_id: str, user: Profile) -> Workspace:
        await self._get_membership(workspace_id, user)
        return await self.repo.get_workspace_with_members(workspace_id)

    async def add_member(self, workspace_id: str, data: WorkspaceMemberCreate, user: Profile) -> WorkspaceMember:
        """
        以 Email 新增成員 (僅限 owner / admin)
        """
        await self._require_manager(workspace_id, user)

        if data.role == WorkspaceRoleEnum.owner:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "A workspace can only have one owner")

        new_user = await self.profile_repo.get_profile_by_email(data.email)
        if not new_user:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "User not found")

        if await self.repo.get_member(workspace_id, new_user.id):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "User is already a member of this workspace")

        member = await self.repo.add_member(workspace_id, new_user.id, data.role)
        await self.repo.log_activity(
            workspace_id, user.id, "member_added",
            description=f"{new_user.full_name or new_user.email} joined as {data.role.value}",
            metadata={"member_user_id": new_user.id}
        )
        await self.db.commit()
        return member

    async def update_member_role(
        self, workspace_id: str, member_id: str, data: WorkspaceMemberRoleUpdate, user: Profile
    ) -> WorkspaceMember:
        await self._require_manager(workspace_id, user)
        member = await self._get_member_in_workspace(workspace_id, member_id)

        # 擁有者的角色不可變更，也不能另外指派擁有者
        if member.role == WorkspaceRoleEnum.owner or data.role == WorkspaceRoleEnum.owner:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "The workspace owner role cannot be reassigned")

        member.role = data.role
        await self.repo.log_activity(
            workspace_id, user.id, "member_role_updated",
            description=f"Member role changed to {data.role.value}",
            metadata={"member_user_id": member.user_id}
        )
        return await self.repo.update_member(member)

    async def remove_member(self, workspace_id: str, member_id: str, user: Profile):
        await self._require_manager(workspace_id, user)
        member = await self._get_member_in_workspace(workspace_id, member_id)

        if member.role == WorkspaceRoleEnum.owner:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "The workspace owner cannot be removed")

        removed_user_id = member.user_id
        await self.repo.log_activity(
            workspace_id, user.id, "member_removed",
            description="Member removed",
            metadata={"member_user_id": removed_user_id}
        )
        await self.repo.delete_member(member)

    async def list_activity(self, workspace_id: str, user: Profile, limit: int = 50):
        await self._get_membership(workspace_id, user)
        return await self.repo.list_recent_activity(workspace_id, limit=limit)
