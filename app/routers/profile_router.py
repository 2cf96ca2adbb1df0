# app/routers/profile_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.profile import Profile
from app.services.profile_service import ProfileService
from app.schemas.profile_schema import ProfileOut, ProfileUpdate, FreelancerDetailOut, FreelancerDetailUpdate

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
    dependencies=[Depends(get_current_user)]
)

@router.get("/me", response_model=ProfileOut)
async def get_my_profile(
    current_user: Profile = Depends(get_current_user)
):
    """
    獲取當前登入者的 Profile (含接案資料)
    """
    return current_user

@router.put("/me", response_model=ProfileOut)
async def update_my_profile(
    update_data: ProfileUpdate,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    更新當前登入者的基本資料
    """
    service = ProfileService(db)
    return await service.update_my_profile(current_user, update_data)

@router.get("/me/freelancer", response_model=FreelancerDetailOut)
async def get_my_freelancer_detail(
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = ProfileService(db)
    return await service.get_my_freelancer_detail(current_user)

@router.put("/me/freelancer", response_model=FreelancerDetailOut)
async def save_my_freelancer_detail(
    detail_data: FreelancerDetailUpdate,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    (僅限接案類角色) 建立或更新接案資料：技能、時薪、年資等
    """
    service = ProfileService(db)
    return await service.save_my_freelancer_detail(current_user, detail_data)

@router.get("/{user_id}", response_model=ProfileOut)
async def get_public_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    """
    獲取指定 User ID 的公開 Profile
    """
    service = ProfileService(db)
    return await service.get_public_profile(user_id)
