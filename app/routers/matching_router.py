# app/routers/matching_router.py
# 媒合 / 推薦 / 工作區聊天的觸發端點
# 失敗時回傳 {"error": 訊息} 與非 200 狀態碼，前端直接顯示為提示訊息
import logging
from typing import Awaitable, List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.core.ai_client import AIClient, get_ai_client
from app.models.profile import Profile
from app.services.matching_service import MatchingService
from app.services.workspace_insight_service import WorkspaceInsightService
from app.schemas.match_schema import (
    GenerateMatchesRequest, GenerateMatchesResponse,
    GenerateUserMatchesRequest, GenerateUserMatchesResponse,
    WorkspaceRecommendationsRequest, WorkspaceRecommendationsResponse,
    WorkspaceChatRequest, WorkspaceChatResponse,
    MatchWithProjectOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/matching",
    tags=["Matching"],
    dependencies=[Depends(get_current_user)]
)


async def _run_handler(handler_name: str, operation: Awaitable):
    """
    執行媒合流程，並把例外轉成 {"error": ...}：
    HTTPException 保留原狀態碼，其他錯誤 (例如資料庫失敗) 一律 500
    """
    try:
        return await operation
    except HTTPException as e:
        return JSONResponse({"error": e.detail}, status_code=e.status_code)
    except Exception as e:
        logger.exception(f"{handler_name} failed: {e}")
        return JSONResponse({"error": str(e)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/generate-matches", response_model=GenerateMatchesResponse)
async def generate_matches(
    request_data: GenerateMatchesRequest,
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client)
):
    """
    案件刊登後觸發：為該案件產生媒合紀錄
    """
    service = MatchingService(db, ai_client)
    return await _run_handler(
        "generate-matches", service.generate_project_matches(request_data.project_id)
    )


@router.post(
    "/generate-user-matches",
    response_model=GenerateUserMatchesResponse,
    response_model_exclude_none=True
)
async def generate_user_matches(
    request_data: GenerateUserMatchesRequest,
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client)
):
    """
    為指定工作者比對開放中的案件 (模型回傳分數)
    """
    service = MatchingService(db, ai_client)
    return await _run_handler(
        "generate-user-matches", service.generate_user_matches(request_data.user_id)
    )


@router.post(
    "/ensure-user-matches",
    response_model=GenerateUserMatchesResponse,
    response_model_exclude_none=True
)
async def ensure_user_matches(
    request_data: GenerateUserMatchesRequest,
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client)
):
    """
    確保工作者已有媒合結果：已有紀錄就不重新產生 (可重複呼叫)
    """
    service = MatchingService(db, ai_client)
    return await _run_handler(
        "ensure-user-matches", service.ensure_user_matches(request_data.user_id)
    )


@router.post("/workspace-recommendations", response_model=WorkspaceRecommendationsResponse)
async def workspace_recommendations(
    request_data: WorkspaceRecommendationsRequest,
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client)
):
    """
    推薦尚未加入工作區的工作者 (每次重新計算，不寫入資料庫)
    """
    service = WorkspaceInsightService(db, ai_client)
    return await _run_handler(
        "workspace-recommendations", service.get_recommendations(request_data.workspace_id)
    )


@router.post("/workspace-chat", response_model=WorkspaceChatResponse)
async def workspace_chat(
    request_data: WorkspaceChatRequest,
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client)
):
    """
    針對工作區資料提問，回傳 AI 答案與使用的快照
    """
    service = WorkspaceInsightService(db, ai_client)
    return await _run_handler(
        "workspace-chat", service.answer_question(request_data.workspace_id, request_data.question)
    )


@router.get("/me", response_model=List[MatchWithProjectOut])
async def get_my_matches(
    limit: int = Query(10, ge=1),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
    ai_client: AIClient = Depends(get_ai_client)
):
    """
    當前工作者的媒合結果 (分數由高到低)
    """
    limit = min(limit, 50)

    service = MatchingService(db, ai_client)
    return await service.get_my_matches(current_user, limit=limit)
