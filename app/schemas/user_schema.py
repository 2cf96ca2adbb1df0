# app/schemas/user_schema.py
from pydantic import BaseModel, EmailStr, Field, field_validator
import re
from typing import Optional
from app.models.profile import UserRoleEnum

# Token 回應的格式
class Token(BaseModel):
    access_token: str
    token_type: str

# Token 內的資料
class TokenData(BaseModel):
    user_id: str
    role: str


# 註冊請求 Body
class UserCreate(BaseModel):
    email: EmailStr
    # 密碼要求英數混合
    password: str = Field(..., min_length=8)
    role: UserRoleEnum
    full_name: Optional[str] = Field(None, max_length=100)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        """
        驗證密碼是否至少8碼且包含英文和數字
        """
        if not re.search(r'(?=.*[a-zA-Z])(?=.*[0-9])', v):
            raise ValueError('Password must contain both letters and digits')
        if len(v) < 8:
            raise ValueError('Password must be at least 8 characters long')
        return v
