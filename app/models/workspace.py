# app/models/workspace.py
import enum
import uuid
from sqlalchemy import Column, String, TEXT, JSON, CHAR, TIMESTAMP, ForeignKey, Enum, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class WorkspaceRoleEnum(str, enum.Enum):
    owner = "owner"
    admin = "admin"
    member = "member"

# 可以管理成員的角色
MANAGER_ROLES = {WorkspaceRoleEnum.owner.value, WorkspaceRoleEnum.admin.value}

class Workspace(Base):
    __tablename__ = "workspaces"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(TEXT)
    owner_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    members = relationship(
        "WorkspaceMember",
        back_populates="workspace",
        cascade="all, delete-orphan"
    )
    projects = relationship("Project", back_populates="workspace")


class WorkspaceMember(Base):
    __tablename__ = "workspace_members"
    __table_args__ = (
        UniqueConstraint("workspace_id", "user_id", name="uq_workspace_member"),
    )

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    workspace_id = Column(CHAR(36), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(
        Enum(WorkspaceRoleEnum, values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=WorkspaceRoleEnum.member
    )
    joined_at = Column(TIMESTAMP, server_default=func.now())

    workspace = relationship("Workspace", back_populates="members")
    # 成員的 Profile (含 freelancer_detail) 一併載入
    profile = relationship("Profile", lazy="selectin")


class WorkspaceActivity(Base):
    __tablename__ = "workspace_activity"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    workspace_id = Column(CHAR(36), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    project_id = Column(CHAR(36), ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)
    activity_type = Column(String(50), nullable=False)
    description = Column(TEXT)
    # 'metadata' 是 Declarative 保留字，以 extra 屬性對應
    extra = Column("metadata", JSON)
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
