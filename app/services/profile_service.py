# app/services/profile_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from app.models.profile import Profile, FreelancerDetail, FREELANCE_ROLES
from app.repositories.profile_repo import ProfileRepository
from app.schemas.profile_schema import ProfileUpdate, FreelancerDetailUpdate

class ProfileService:
    def __init__(self, db: AsyncSession):
        self.repo = ProfileRepository(db)

    async def update_my_profile(self, user: Profile, update_data: ProfileUpdate) -> Profile:
        """更新 Profile 基本資料"""
        await self.repo.update_profile(user, update_data)
        return await self.repo.get_profile_by_id(user.id)

    async def get_my_freelancer_detail(self, user: Profile) -> FreelancerDetail:
        detail = await self.repo.get_freelancer_detail_by_user_id(user.id)
        if not detail:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Freelancer profile not found")
        return detail

    async def save_my_freelancer_detail(
        self, user: Profile, detail_data: FreelancerDetailUpdate
    ) -> FreelancerDetail:
        """(僅限接案類角色) 建立或更新接案資料"""
        if user.user_role.value not in FREELANCE_ROLES:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "This role cannot have a freelancer profile")

        # 技能去除前後空白與空字串
        if detail_data.skills is not None:
            detail_data.skills = [skill.strip() for skill in detail_data.skills if skill and skill.strip()]

        return await self.repo.save_freelancer_detail(user.id, detail_data)

    async def get_public_profile(self, user_id: str) -> Profile:
        """獲取指定 ID 的公開 Profile"""
        profile = await self.repo.get_profile_by_id(user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Profile not found")
        return profile
