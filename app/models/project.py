# models/project.py
import enum
from sqlalchemy import Column, String, TEXT, DECIMAL, TIMESTAMP, ForeignKey, Enum, CHAR, JSON, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class ProjectStatusEnum(str, enum.Enum):
    open = "open"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"

class ProjectTypeEnum(str, enum.Enum):
    freelance_gig = "freelance_gig"
    open_source_project = "open_source_project"
    startup_opportunity = "startup_opportunity"
    full_time_job = "full_time_job"
    hackathon_team = "hackathon_team"
    contract_work = "contract_work"

class Project(Base):
    # 告訴 SQLAlchemy，這個類別對應到資料庫中名為 projects 的表格 (table)
    __tablename__ = "projects"

    id = Column(CHAR(36), primary_key=True)
    owner_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(CHAR(36), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(TEXT, nullable=False)
    # 所需技能：有序的字串陣列
    required_skills = Column(JSON, nullable=False, default=list)
    budget_min = Column(DECIMAL(10, 2))
    budget_max = Column(DECIMAL(10, 2))
    timeline = Column(String(255))
    # 狀態轉換不在程式中限制
    status = Column(
        Enum(ProjectStatusEnum, values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=ProjectStatusEnum.open
    )
    project_type = Column(
        Enum(ProjectTypeEnum, values_callable=lambda obj: [e.value for e in obj]),
        nullable=True
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # 案件擁有者 (用於 prompt 中的 Owner Bio)
    owner = relationship("Profile", back_populates="projects_owned", lazy="selectin")
    workspace = relationship("Workspace", back_populates="projects")

    applications = relationship(
        "Application",
        back_populates="project",
        cascade="all, delete-orphan"
    )
    matches = relationship(
        "Match",
        back_populates="project",
        cascade="all, delete-orphan"
    )
