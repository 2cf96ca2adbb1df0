# app/routers/project_router.py
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

# 匯入核心依賴
from app.core.database import get_db
from app.core.security import get_current_user
from app.core.ai_client import AIClient, get_ai_client
from app.models.profile import Profile
from app.models.project import ProjectStatusEnum, ProjectTypeEnum

# 匯入 Service 和 Schemas
from app.services.project_service import ProjectService
from app.services.matching_service import MatchingService
from app.services.application_service import ApplicationService
from app.schemas.project_schema import ProjectCreate, ProjectOut, ProjectStatusUpdate
from app.schemas.match_schema import MatchOut
from app.schemas.application_schema import ApplicationCreate, ApplicationOut, ApplicationWithFreelancerOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
    # 該模組下的所有 API 都至少需要登入
    dependencies=[Depends(get_current_user)]
)

@router.post(
    "/",
    response_model=ProjectOut,
    status_code=status.HTTP_201_CREATED
)
async def create_new_project(
    project_data: ProjectCreate, # Request Body
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    刊登新案件。

    - (權限) 僅限 project_owner 角色，且須為目標工作區的成員。
    - 建立後請以回傳的 id 呼叫 `/matching/generate-matches`。
    """
    service = ProjectService(db)
    return await service.create_project(project_data=project_data, user=current_user)

@router.get("/", response_model=List[ProjectOut])
async def search_all_projects(
    db: AsyncSession = Depends(get_db),
    status: Optional[ProjectStatusEnum] = None,
    project_type: Optional[ProjectTypeEnum] = None
):
    """
    搜尋/篩選案件 (依狀態、類型)
    """
    logger.info(f"Router received query params - status: {status}, project_type: {project_type}")

    service = ProjectService(db)
    return await service.search_projects(
        status=status.value if status else None,
        project_type=project_type.value if project_type else None
    )

@router.get("/my", response_model=List[ProjectOut])
async def read_my_projects(
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    獲取當前登入者自己刊登的所有案件列表。
    """
    service = ProjectService(db)
    return await service.get_my_projects(current_user)

@router.get("/{project_id}", response_model=ProjectOut)
async def get_project_by_id(
    project_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = ProjectService(db)
    # Service 層會自動處理 404 Not Found
    return await service.get_project_details(project_id)

@router.patch("/{project_id}/status", response_model=ProjectOut)
async def update_project_status(
    project_id: str,
    status_data: ProjectStatusUpdate, # Request Body
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    (擁有者) 更新案件狀態。
    """
    service = ProjectService(db)
    return await service.update_project_status(
        project_id=project_id,
        data=status_data,
        user=current_user
    )

@router.get("/{project_id}/matches", response_model=List[MatchOut])
async def get_project_matches(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
    ai_client: AIClient = Depends(get_ai_client)
):
    """
    (擁有者) 查看此案件的媒合結果，分數由高到低
    """
    service = MatchingService(db, ai_client)
    return await service.get_project_matches(project_id, current_user)

# --- 申請 ---
@router.post(
    "/{project_id}/applications",
    response_model=ApplicationOut,
    status_code=status.HTTP_201_CREATED
)
async def apply_to_project(
    project_id: str,
    application_data: ApplicationCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    service = ApplicationService(db)
    return await service.apply_to_project(project_id, application_data, current_user)

@router.get("/{project_id}/applications", response_model=List[ApplicationWithFreelancerOut])
async def get_project_applications(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    (擁有者) 查看此案件的所有申請
    """
    service = ApplicationService(db)
    return await service.get_project_applications(project_id, current_user)
