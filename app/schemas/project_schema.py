# app/schemas/project_schema.py
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import datetime
from app.models.project import ProjectStatusEnum, ProjectTypeEnum
from app.schemas.profile_schema import ProfileSummaryOut

# 1. 基礎欄位 (對應 Model)
class ProjectBase(BaseModel):
    title: str = Field(..., max_length=255)
    description: str
    required_skills: List[str] = []
    budget_min: Optional[float] = Field(None, ge=0)
    budget_max: Optional[float] = Field(None, ge=0)
    timeline: Optional[str] = Field(None, max_length=255)
    project_type: Optional[ProjectTypeEnum] = None

# 2. 刊登案件時的 Request Body (Input)
class ProjectCreate(ProjectBase):
    # 案件必須屬於一個工作區
    workspace_id: str

    @model_validator(mode="after")
    def check_budget_range(self):
        if self.budget_min is not None and self.budget_max is not None and self.budget_min > self.budget_max:
            raise ValueError("budget_min cannot be greater than budget_max")
        return self

# 3. 更新案件狀態 (不限制狀態轉換順序)
class ProjectStatusUpdate(BaseModel):
    status: ProjectStatusEnum

# 4. 回傳給前端的案件資料 (Output)
class ProjectOut(ProjectBase):
    id: str
    owner_id: str
    workspace_id: str
    status: ProjectStatusEnum
    created_at: Optional[datetime] = None
    owner: Optional[ProfileSummaryOut] = None

    class Config:
        from_attributes = True # 啟用 ORM 模式
