import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.routers import (
    auth_router, profile_router, workspace_router,
    project_router, application_router, matching_router
)

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from app.models import profile
from app.models import workspace
from app.models import project
from app.models import application
from app.models import match


# 設定基礎日誌
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(title="Freelance Matchmaking API")

# --- 設定 CORS (跨來源資源共用) ---
# 允許所有來源；所有端點都能回應 preflight (OPTIONS) 請求
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "Backend is running!"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(profile_router.router)
app.include_router(workspace_router.router)
app.include_router(project_router.router)
app.include_router(application_router.router)
app.include_router(matching_router.router)
