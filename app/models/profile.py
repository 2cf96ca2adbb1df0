# app/models/profile.py
import enum
from sqlalchemy import Column, String, TEXT, Boolean, Enum, JSON, INT, DECIMAL, CHAR, TIMESTAMP, ForeignKey, func
from sqlalchemy.orm import relationship
from app.core.database import Base

# 對應 SQL 中的 ENUM 型別
class UserRoleEnum(str, enum.Enum):
    freelancer = "freelancer"
    project_owner = "project_owner"
    open_source_maintainer = "open_source_maintainer"
    open_source_contributor = "open_source_contributor"
    startup_founder = "startup_founder"
    job_seeker = "job_seeker"
    hackathon_participant = "hackathon_participant"

# 可以擁有 FreelancerDetail (接案資料) 的角色
FREELANCE_ROLES = {
    UserRoleEnum.freelancer.value,
    UserRoleEnum.open_source_contributor.value,
    UserRoleEnum.job_seeker.value,
    UserRoleEnum.hackathon_participant.value,
}

# 可以建立工作區的角色
WORKSPACE_CREATOR_ROLES = {
    UserRoleEnum.project_owner.value,
    UserRoleEnum.startup_founder.value,
    UserRoleEnum.open_source_maintainer.value,
}

class Profile(Base):
    __tablename__ = "profiles"

    # 基本欄位 (帳號身分 + 公開資料)
    id = Column(CHAR(36), primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    user_role = Column(Enum(UserRoleEnum, values_callable=lambda obj: [e.value for e in obj]), nullable=False)
    full_name = Column(String(100))
    bio = Column(TEXT)
    location = Column(String(255))
    avatar_url = Column(String(500))
    interests = Column(JSON)
    looking_for = Column(JSON)
    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # 1-to-1：接案資料 (角色為接案類型時才會有)
    freelancer_detail = relationship(
        "FreelancerDetail",
        back_populates="profile",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    projects_owned = relationship("Project", back_populates="owner")


class FreelancerDetail(Base):
    __tablename__ = "freelancer_details"

    id = Column(CHAR(36), primary_key=True)
    user_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    # 技能以字串陣列存放 (可為空)
    skills = Column(JSON, nullable=False, default=list)
    hourly_rate = Column(DECIMAL(10, 2))
    years_experience = Column(INT)
    availability = Column(String(50))
    github_url = Column(String(500))
    linkedin_url = Column(String(500))
    portfolio_url = Column(String(500))
    hackathon_wins = Column(INT)
    open_source_contributions = Column(JSON)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    profile = relationship("Profile", back_populates="freelancer_detail")
