# app/routers/workspace_router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.profile import Profile
from app.services.workspace_service import WorkspaceService
from app.schemas.workspace_schema import (
    WorkspaceCreate, WorkspaceOut, WorkspaceDetailOut,
    WorkspaceMemberCreate, WorkspaceMemberOut, WorkspaceMemberRoleUpdate,
    WorkspaceActivityOut,
)

router = APIRouter(
    prefix="/workspaces",
    tags=["Workspaces"],
    dependencies=[Depends(get_current_user)]
)

@router.post("/", response_model=WorkspaceOut, status_code=status.HTTP_201_CREATED)
async def create_workspace(
    workspace_data: WorkspaceCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    建立工作區，建立者自動成為 owner
    """
    service = WorkspaceService(db)
    return await service.create_workspace(workspace_data, current_user)

@router.get("/", response_model=List[WorkspaceOut])
async def list_my_workspaces(
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    service = WorkspaceService(db)
    return await service.list_my_workspaces(current_user)

@router.get("/{workspace_id}", response_model=WorkspaceDetailOut)
async def get_workspace(
    workspace_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    工作區詳情 (含成員)，僅限成員查看
    """
    service = WorkspaceService(db)
    return await service.get_workspace_detail(workspace_id, current_user)

@router.post(
    "/{workspace_id}/members",
    response_model=WorkspaceMemberOut,
    status_code=status.HTTP_201_CREATED
)
async def add_workspace_member(
    workspace_id: str,
    member_data: WorkspaceMemberCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    (owner / admin) 以 Email 新增成員
    """
    service = WorkspaceService(db)
    return await service.add_member(workspace_id, member_data, current_user)

@router.patch("/{workspace_id}/members/{member_id}", response_model=WorkspaceMemberOut)
async def update_workspace_member_role(
    workspace_id: str,
    member_id: str,
    role_data: WorkspaceMemberRoleUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    service = WorkspaceService(db)
    return await service.update_member_role(workspace_id, member_id, role_data, current_user)

@router.delete("/{workspace_id}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_workspace_member(
    workspace_id: str,
    member_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    service = WorkspaceService(db)
    await service.remove_member(workspace_id, member_id, current_user)

@router.get("/{workspace_id}/activity", response_model=List[WorkspaceActivityOut])
async def list_workspace_activity(
    workspace_id: str,
    limit: int = Query(50, ge=1),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    # 伺服器端上限
    limit = min(limit, 100)

    service = WorkspaceService(db)
    return await service.list_activity(workspace_id, current_user, limit=limit)
