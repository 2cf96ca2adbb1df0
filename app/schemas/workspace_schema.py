# app/schemas/workspace_schema.py
from pydantic import BaseModel, EmailStr, Field
from typing import Any, List, Optional
from datetime import datetime
from app.models.workspace import WorkspaceRoleEnum
from app.schemas.profile_schema import ProfileSummaryOut

class WorkspaceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None

class WorkspaceOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    owner_id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class WorkspaceMemberOut(BaseModel):
    id: str
    workspace_id: str
    user_id: str
    role: WorkspaceRoleEnum
    joined_at: Optional[datetime] = None
    profile: Optional[ProfileSummaryOut] = None

    class Config:
        from_attributes = True

# 工作區詳情：含成員列表
class WorkspaceDetailOut(WorkspaceOut):
    members: List[WorkspaceMemberOut] = []

# 以 Email 新增成員
class WorkspaceMemberCreate(BaseModel):
    email: EmailStr
    role: WorkspaceRoleEnum = WorkspaceRoleEnum.member

class WorkspaceMemberRoleUpdate(BaseModel):
    role: WorkspaceRoleEnum

class WorkspaceActivityOut(BaseModel):
    id: str
    workspace_id: str
    user_id: str
    project_id: Optional[str] = None
    activity_type: str
    description: Optional[str] = None
    # ORM 上的屬性名稱為 extra (資料庫欄位為 metadata)
    metadata: Optional[Any] = Field(None, validation_alias="extra")
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
