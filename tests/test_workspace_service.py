import pytest
from fastapi import HTTPException
from sqlalchemy import select

from app.models.profile import UserRoleEnum
from app.models.workspace import WorkspaceActivity, WorkspaceRoleEnum
from app.schemas.workspace_schema import WorkspaceCreate, WorkspaceMemberCreate, WorkspaceMemberRoleUpdate
from app.services.workspace_service import WorkspaceService

from helpers import add_member, make_profile, make_workspace


@pytest.mark.asyncio
async def test_create_workspace_adds_owner_and_logs_activity(db_session):
    founder = await make_profile(db_session, "Sam Founder", role=UserRoleEnum.startup_founder)
    service = WorkspaceService(db_session)

    workspace = await service.create_workspace(WorkspaceCreate(name="Rocket"), founder)

    members = await service.repo.list_members(workspace.id)
    assert [(m.user_id, m.role) for m in members] == [(founder.id, WorkspaceRoleEnum.owner)]
    activity_types = (await db_session.execute(
        select(WorkspaceActivity.activity_type).where(WorkspaceActivity.workspace_id == workspace.id)
    )).scalars().all()
    assert activity_types == ["workspace_created"]


@pytest.mark.asyncio
async def test_freelancer_cannot_create_workspace(db_session):
    freelancer = await make_profile(db_session, "Fiona Freelancer", skills=["react"])

    with pytest.raises(HTTPException) as exc_info:
        await WorkspaceService(db_session).create_workspace(WorkspaceCreate(name="Nope"), freelancer)

    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_owner_adds_member_by_email(db_session):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    newcomer = await make_profile(db_session, "New Comer", skills=["go"])
    service = WorkspaceService(db_session)

    member = await service.add_member(workspace.id, WorkspaceMemberCreate(email=newcomer.email), owner)

    assert member.user_id == newcomer.id
    assert member.role == WorkspaceRoleEnum.member

    with pytest.raises(HTTPException) as exc_info:
        await service.add_member(workspace.id, WorkspaceMemberCreate(email=newcomer.email), owner)
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_add_member_unknown_email(db_session):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)

    with pytest.raises(HTTPException) as exc_info:
        await WorkspaceService(db_session).add_member(
            workspace.id, WorkspaceMemberCreate(email="ghost@freelancehub.io"), owner
        )

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_plain_member_cannot_manage_members(db_session):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    member = await make_profile(db_session, "Plain Member", skills=["go"])
    await add_member(db_session, workspace, member)
    outsider = await make_profile(db_session, "Out Sider", skills=["go"])

    with pytest.raises(HTTPException) as exc_info:
        await WorkspaceService(db_session).add_member(
            workspace.id, WorkspaceMemberCreate(email=outsider.email), member
        )

    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_owner_cannot_be_removed_or_reassigned(db_session):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    admin = await make_profile(db_session, "Ada Admin", skills=["go"])
    await add_member(db_session, workspace, admin, role=WorkspaceRoleEnum.admin)
    service = WorkspaceService(db_session)
    owner_member = await service.repo.get_member(workspace.id, owner.id)

    with pytest.raises(HTTPException) as exc_info:
        await service.remove_member(workspace.id, owner_member.id, admin)
    assert exc_info.value.status_code == 400

    with pytest.raises(HTTPException) as exc_info:
        await service.update_member_role(
            workspace.id, owner_member.id, WorkspaceMemberRoleUpdate(role=WorkspaceRoleEnum.member), admin
        )
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_admin_removes_member(db_session):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    member_profile = await make_profile(db_session, "Plain Member", skills=["go"])
    member = await add_member(db_session, workspace, member_profile)
    service = WorkspaceService(db_session)

    await service.remove_member(workspace.id, member.id, owner)

    assert await service.repo.get_member(workspace.id, member_profile.id) is None
    activity_types = (await db_session.execute(
        select(WorkspaceActivity.activity_type).where(WorkspaceActivity.workspace_id == workspace.id)
    )).scalars().all()
    assert activity_types == ["member_removed"]


@pytest.mark.asyncio
async def test_non_member_cannot_view_activity(db_session):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    outsider = await make_profile(db_session, "Out Sider", skills=["go"])

    with pytest.raises(HTTPException) as exc_info:
        await WorkspaceService(db_session).list_activity(workspace.id, outsider)

    assert exc_info.value.status_code == 403
