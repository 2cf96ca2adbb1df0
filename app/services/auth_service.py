from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.profile_repo import ProfileRepository
from app.core.security import verify_password, create_access_token, get_password_hash
from app.models.profile import Profile
from fastapi import HTTPException, status
from app.schemas.user_schema import UserCreate
import uuid

class AuthService:
    def __init__(self, db: AsyncSession):
        self.profile_repo = ProfileRepository(db)

    async def authenticate_user(self, email: str, password: str) -> Profile | None:
        """
        驗證使用者帳號密碼。
        成功回傳 Profile 物件，失敗回傳 None。
        """
        user = await self.profile_repo.get_profile_by_email(email)

        # 1. 檢查使用者是否存在
        if not user:
            return None

        # 2. 檢查是否被停權
        if not user.is_active:
            return None

        # 3. 檢查密碼是否正確
        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def register_user(self, user_create: UserCreate) -> Profile:
        """
        處理使用者註冊 (同時建立 Profile)
        """
        # 1. 檢查 Email 是否已被註冊
        existing_user = await self.profile_repo.get_profile_by_email(user_create.email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered",
            )

        # 2. 雜湊密碼
        hashed_password = get_password_hash(user_create.password)

        # 3. 建立 Profile ORM 模型
        new_user = Profile(
            id=str(uuid.uuid4()),
            email=user_create.email,
            password_hash=hashed_password,
            user_role=user_create.role,
            full_name=user_create.full_name,
            is_active=True
        )

        # 4. 呼叫 Repository 儲存到資料庫
        return await self.profile_repo.create_profile(new_user)

    def create_login_token(self, user: Profile) -> str:
        """
        為指定使用者建立 access token
        """
        return create_access_token(
            data={
                "sub": user.email,
                "user_id": str(user.id),
                "role": user.user_role.value # 確保存入的是字串
            }
        )
