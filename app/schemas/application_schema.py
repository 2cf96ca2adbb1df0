# app/schemas/application_schema.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.application import ApplicationStatusEnum
from app.schemas.profile_schema import ProfileSummaryOut

# 工作者送出申請的 Request Body
class ApplicationCreate(BaseModel):
    cover_letter: Optional[str] = None
    proposed_rate: Optional[float] = Field(None, ge=0)

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatusEnum

class ApplicationOut(BaseModel):
    id: str
    project_id: str
    freelancer_id: str
    cover_letter: Optional[str] = None
    proposed_rate: Optional[float] = None
    status: ApplicationStatusEnum
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# 案件擁有者檢視申請時，附帶申請人資料
class ApplicationWithFreelancerOut(ApplicationOut):
    freelancer: Optional[ProfileSummaryOut] = None
