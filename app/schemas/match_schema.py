# app/schemas/match_schema.py
# 媒合相關的 Request / Response 格式 (欄位名稱沿用前端既有的 camelCase)
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from app.schemas.project_schema import ProjectOut

# --- Requests ---
class GenerateMatchesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., alias="projectId")

class GenerateUserMatchesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")

class WorkspaceRecommendationsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workspace_id: str = Field(..., alias="workspaceId")

class WorkspaceChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workspace_id: str = Field(..., alias="workspaceId")
    question: str = Field(..., min_length=1)

# --- Responses ---
class GenerateMatchesResponse(BaseModel):
    success: bool
    matchCount: int
    aiCallsMade: int
    projectTitle: str

class GenerateUserMatchesResponse(BaseModel):
    success: bool
    matchCount: int
    message: str
    generated: Optional[bool] = None

class RecommendationOut(BaseModel):
    freelancer_id: str
    freelancer_name: Optional[str] = None
    freelancer_email: str
    skills: List[str] = []
    match_percentage: int
    reason: str

class WorkspaceRecommendationsResponse(BaseModel):
    success: bool
    recommendations: List[RecommendationOut]

class WorkspaceChatResponse(BaseModel):
    success: bool
    answer: str
    context: Dict[str, Any]

# --- 已儲存的媒合紀錄 ---
class MatchOut(BaseModel):
    id: str
    project_id: str
    freelancer_id: str
    match_score: int
    match_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class MatchWithProjectOut(MatchOut):
    project: Optional[ProjectOut] = None
