# app/schemas/profile_schema.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from app.models.profile import UserRoleEnum

# --- 接案資料 (FreelancerDetail) ---
class FreelancerDetailBase(BaseModel):
    hourly_rate: Optional[float] = Field(None, ge=0)
    years_experience: Optional[int] = Field(None, ge=0)
    availability: Optional[str] = Field(None, max_length=50)
    github_url: Optional[str] = Field(None, max_length=500)
    linkedin_url: Optional[str] = Field(None, max_length=500)
    portfolio_url: Optional[str] = Field(None, max_length=500)
    hackathon_wins: Optional[int] = Field(None, ge=0)
    open_source_contributions: Optional[List[str]] = None

class FreelancerDetailUpdate(FreelancerDetailBase):
    # 技能列表可為空；更新時全為選填
    skills: Optional[List[str]] = None

class FreelancerDetailOut(FreelancerDetailBase):
    id: str
    user_id: str
    skills: List[str] = []

    class Config:
        from_attributes = True # 啟用 ORM 模式

# --- Profile ---
class ProfileBase(BaseModel):
    full_name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    avatar_url: Optional[str] = Field(None, max_length=500)
    interests: Optional[List[str]] = None
    looking_for: Optional[List[str]] = None

class ProfileUpdate(ProfileBase):
    pass # 更新時全為選填

class ProfileOut(ProfileBase):
    id: str
    email: str
    user_role: UserRoleEnum
    freelancer_detail: Optional[FreelancerDetailOut] = None

    class Config:
        from_attributes = True

# 精簡版：用於巢狀顯示 (案件擁有者、工作區成員)
class ProfileSummaryOut(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True
