# app/routers/application_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.profile import Profile
from app.services.application_service import ApplicationService
from app.schemas.application_schema import ApplicationOut, ApplicationStatusUpdate

router = APIRouter(
    prefix="/applications",
    tags=["Applications"],
    dependencies=[Depends(get_current_user)]
)

@router.get("/my", response_model=List[ApplicationOut])
async def get_my_applications(
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    (工作者) 查看自己送出的所有申請
    """
    service = ApplicationService(db)
    return await service.get_my_applications(current_user)

@router.patch("/{application_id}/status", response_model=ApplicationOut)
async def update_application_status(
    application_id: str,
    status_data: ApplicationStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    (案件擁有者) 接受或拒絕申請
    """
    service = ApplicationService(db)
    return await service.update_application_status(application_id, status_data, current_user)
