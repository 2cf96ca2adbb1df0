# app/core/config.py
# 應用程式設定 (資料庫連線字串、JWT 秘鑰、AI 服務與媒合門檻等)
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 資料庫設定
    DATABASE_URL: str
    # (可選) 設為 True 會在 console 印出 SQL 語句
    DB_ECHO: bool = False
    # JWT 設定
    JWT_SECRET_KEY: str
    # JWT 演算法
    JWT_ALGORITHM: str = "HS256"
    # 存取令牌過期時間（分鐘）
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # AI 文字生成服務 (OpenAI 相容的 chat completions 端點)
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    AI_API_KEY: str = ""
    AI_MODEL: str = "google/gemini-2.5-flash"
    AI_TIMEOUT_SECONDS: float = 30.0

    # 媒合門檻 (技能重疊百分比，低於門檻不寫入)
    PROJECT_MATCH_THRESHOLD: int = 40
    USER_MATCH_THRESHOLD: int = 30
    WORKSPACE_RECOMMENDATION_THRESHOLD: int = 30

    # 工作者媒合：最多比對的案件數與批次設定
    USER_MATCH_PROJECT_LIMIT: int = 50
    USER_MATCH_BATCH_SIZE: int = 5
    USER_MATCH_BATCH_DELAY_SECONDS: float = 0.1

    # 可被媒合的角色
    MATCH_CANDIDATE_ROLES: List[str] = ["freelancer"]

    # 工作區聊天：附帶的近期活動筆數
    WORKSPACE_CHAT_ACTIVITY_LIMIT: int = 20

    # 環境變數檔案
    class Config:
        env_file = ".env"

# 建立設定實例
settings = Settings()
