"""
測試用的假 AI 客戶端與資料建立函式
"""
import uuid
from typing import Callable, List, Optional, Union

from app.core.ai_client import AIServiceError
from app.models.profile import Profile, FreelancerDetail, UserRoleEnum
from app.models.project import Project, ProjectStatusEnum
from app.models.workspace import Workspace, WorkspaceMember, WorkspaceRoleEnum


class StubAIClient:
    """
    取代 AIClient：回傳固定文字 (或依 user 訊息計算的文字)，並記錄每次呼叫。
    fail_when(user_message) 為 True 時改為丟出 AIServiceError。
    """

    def __init__(
        self,
        response: Union[str, Callable[[str], str]] = "",
        fail_when: Optional[Callable[[str], bool]] = None
    ):
        self.response = response
        self.fail_when = fail_when
        self.calls: List[dict] = []

    async def generate_text(self, system_prompt, user_message, temperature=None, max_tokens=None):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_message": user_message,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.fail_when and self.fail_when(user_message):
            raise AIServiceError("AI API error: 500", status_code=500)
        if callable(self.response):
            return self.response(user_message)
        return self.response


class FailingAIClient(StubAIClient):
    def __init__(self):
        super().__init__(fail_when=lambda _message: True)


async def make_profile(
    db,
    full_name: str,
    role: UserRoleEnum = UserRoleEnum.freelancer,
    skills: Optional[List[str]] = None,
    years_experience: Optional[int] = None,
    hourly_rate: Optional[float] = None,
    bio: Optional[str] = None,
) -> Profile:
    """建立使用者；skills 不是 None 時同時建立接案資料"""
    profile_id = str(uuid.uuid4())
    profile = Profile(
        id=profile_id,
        email=f"{full_name.lower().replace(' ', '.')}@freelancehub.io",
        password_hash="not-a-real-hash",
        user_role=role,
        full_name=full_name,
        bio=bio,
        is_active=True,
    )
    if skills is not None:
        profile.freelancer_detail = FreelancerDetail(
            id=str(uuid.uuid4()),
            user_id=profile_id,
            skills=skills,
            years_experience=years_experience,
            hourly_rate=hourly_rate,
        )
    db.add(profile)
    await db.commit()
    return profile


async def make_workspace(db, owner: Profile, name: str = "Acme Studio") -> Workspace:
    workspace = Workspace(id=str(uuid.uuid4()), name=name, description="Product team", owner_id=owner.id)
    db.add(workspace)
    db.add(WorkspaceMember(
        id=str(uuid.uuid4()),
        workspace_id=workspace.id,
        user_id=owner.id,
        role=WorkspaceRoleEnum.owner,
    ))
    await db.commit()
    return workspace


async def add_member(db, workspace: Workspace, user: Profile, role=WorkspaceRoleEnum.member) -> WorkspaceMember:
    member = WorkspaceMember(id=str(uuid.uuid4()), workspace_id=workspace.id, user_id=user.id, role=role)
    db.add(member)
    await db.commit()
    return member


async def make_project(
    db,
    owner: Profile,
    workspace: Workspace,
    title: str = "Web App",
    required_skills: Optional[List[str]] = None,
    status: ProjectStatusEnum = ProjectStatusEnum.open,
    budget_min: Optional[float] = None,
    budget_max: Optional[float] = None,
) -> Project:
    project = Project(
        id=str(uuid.uuid4()),
        owner_id=owner.id,
        workspace_id=workspace.id,
        title=title,
        description=f"{title} description",
        required_skills=required_skills if required_skills is not None else [],
        budget_min=budget_min,
        budget_max=budget_max,
        timeline="3 months",
        status=status,
    )
    db.add(project)
    await db.commit()
    return project
