# app/repositories/profile_repo.py
# 負責與 Profile / FreelancerDetail 相關的資料庫操作
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from typing import Iterable, List, Optional
import uuid

from app.models.profile import Profile, FreelancerDetail
from app.schemas.profile_schema import ProfileUpdate, FreelancerDetailUpdate


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile_by_id(self, user_id: str) -> Profile | None:
        """
        透過 id 查詢使用者 Profile (含 freelancer_detail)
        """
        stmt = select(Profile).where(Profile.id == user_id).options(
            selectinload(Profile.freelancer_detail)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_profile_by_email(self, email: str) -> Profile | None:
        """
        透過 email 查詢使用者
        """
        stmt = select(Profile).where(Profile.email == email)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_profile(self, profile: Profile) -> Profile:
        """
        新增使用者到資料庫
        """
        self.db.add(profile)
        await self.db.commit()
        return await self.get_profile_by_id(profile.id)

    async def update_profile(self, profile: Profile, update_data: ProfileUpdate) -> Profile:
        """更新 Profile 基本資料 (只更新有被傳入的欄位)"""
        update_dict = update_data.model_dump(exclude_unset=True)

        for key, value in update_dict.items():
            setattr(profile, key, value)

        await self.db.commit()
        await self.db.refresh(profile)
        return profile

    # --- Freelancer detail ---
    async def get_freelancer_detail_by_user_id(self, user_id: str) -> FreelancerDetail | None:
        stmt = select(FreelancerDetail).where(FreelancerDetail.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def save_freelancer_detail(
        self, user_id: str, detail_data: FreelancerDetailUpdate
    ) -> FreelancerDetail:
        """
        建立或更新接案資料 (一個 Profile 只會有一筆)
        """
        profile = await self.get_profile_by_id(user_id)
        detail = profile.freelancer_detail
        update_dict = detail_data.model_dump(exclude_unset=True)

        if detail is None:
            # 透過關聯掛到 Profile 上 (delete-orphan 需要 parent)
            detail = FreelancerDetail(
                id=str(uuid.uuid4()),
                user_id=user_id,
                skills=[],
            )
            profile.freelancer_detail = detail

        # skills 欄位不可為 NULL
        if update_dict.get("skills", []) is None:
            update_dict.pop("skills")

        for key, value in update_dict.items():
            setattr(detail, key, value)

        await self.db.commit()
        await self.db.refresh(detail)
        return detail

    async def list_candidate_profiles(
        self,
        roles: Iterable[str],
        exclude_ids: Optional[Iterable[str]] = None
    ) -> List[Profile]:
        """
        獲取可被媒合的候選人：角色在 roles 之內，且已建立接案資料
        """
        stmt = (
            select(Profile)
            .join(FreelancerDetail, FreelancerDetail.user_id == Profile.id)
            .where(Profile.user_role.in_(list(roles)), Profile.is_active.is_(True))
            .options(selectinload(Profile.freelancer_detail))
            .order_by(Profile.created_at)
        )

        exclude_ids = list(exclude_ids or [])
        if exclude_ids:
            stmt = stmt.where(Profile.id.not_in(exclude_ids))

        result = await self.db.execute(stmt)
        return result.scalars().all()
