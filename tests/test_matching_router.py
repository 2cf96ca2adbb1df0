import json

import pytest

from app.models.profile import UserRoleEnum

from helpers import StubAIClient, FailingAIClient, make_profile, make_project, make_workspace


@pytest.mark.asyncio
async def test_post_project_then_generate_matches(db_session, override_app, client):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    await make_profile(db_session, "Fiona Freelancer", skills=["react", "express"])
    override_app(owner)

    response = await client.post("/projects/", json={
        "workspace_id": workspace.id,
        "title": "Dashboard",
        "description": "Internal analytics dashboard",
        "required_skills": ["React", "Node.js"],
        "budget_min": 1000,
        "budget_max": 3000,
    })
    assert response.status_code == 201
    project_id = response.json()["id"]
    db_session.expunge_all()

    response = await client.post("/matching/generate-matches", json={"projectId": project_id})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "matchCount": 1,
        "aiCallsMade": 1,
        "projectTitle": "Dashboard",
    }

    response = await client.get(f"/projects/{project_id}/matches")
    assert response.status_code == 200
    assert [m["match_score"] for m in response.json()] == [50]


@pytest.mark.asyncio
async def test_generate_matches_unknown_project_returns_error_body(db_session, override_app, client):
    caller = await make_profile(db_session, "Fiona Freelancer", skills=["react"])
    override_app(caller)

    response = await client.post("/matching/generate-matches", json={"projectId": "does-not-exist"})

    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}


@pytest.mark.asyncio
async def test_generate_user_matches_without_freelancer_profile(db_session, override_app, client):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    override_app(owner)

    response = await client.post("/matching/generate-user-matches", json={"userId": owner.id})

    assert response.status_code == 404
    assert response.json() == {"error": "Freelancer profile not found"}


@pytest.mark.asyncio
async def test_generate_user_matches_then_list_my_matches(db_session, override_app, client):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    freelancer = await make_profile(db_session, "Fiona Freelancer", skills=["react"])
    project = await make_project(db_session, owner, workspace, title="Dashboard", required_skills=["React"])
    db_session.expunge_all()
    override_app(freelancer, StubAIClient(json.dumps({"score": 88, "reason": "Strong React"})))

    response = await client.post("/matching/generate-user-matches", json={"userId": freelancer.id})

    assert response.status_code == 200
    body = response.json()
    assert body["matchCount"] == 1
    assert "generated" not in body

    response = await client.get("/matching/me")
    assert response.status_code == 200
    matches = response.json()
    assert len(matches) == 1
    assert matches[0]["match_score"] == 88
    assert matches[0]["match_reason"] == "Strong React"
    assert matches[0]["project"]["id"] == project.id


@pytest.mark.asyncio
async def test_ensure_user_matches_endpoint(db_session, override_app, client):
    freelancer = await make_profile(db_session, "Fiona Freelancer", skills=["react"])
    override_app(freelancer)

    response = await client.post("/matching/ensure-user-matches", json={"userId": freelancer.id})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "matchCount": 0,
        "message": "No open projects available",
        "generated": True,
    }


@pytest.mark.asyncio
async def test_workspace_recommendations_endpoint(db_session, override_app, client):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    await make_project(db_session, owner, workspace, required_skills=["Go"])
    candidate = await make_profile(db_session, "Gopher", skills=["go"])
    db_session.expunge_all()
    override_app(owner)

    response = await client.post("/matching/workspace-recommendations", json={"workspaceId": workspace.id})

    assert response.status_code == 200
    recommendations = response.json()["recommendations"]
    assert [r["freelancer_id"] for r in recommendations] == [candidate.id]


@pytest.mark.asyncio
async def test_workspace_chat_ai_failure(db_session, override_app, client):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    workspace = await make_workspace(db_session, owner)
    db_session.expunge_all()
    override_app(owner, FailingAIClient())

    response = await client.post(
        "/matching/workspace-chat", json={"workspaceId": workspace.id, "question": "Who is here?"}
    )

    assert response.status_code == 502
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_workspace_chat_requires_question(db_session, override_app, client):
    owner = await make_profile(db_session, "Olivia Owner", role=UserRoleEnum.project_owner)
    override_app(owner)

    response = await client.post("/matching/workspace-chat", json={"workspaceId": "x", "question": ""})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_matching_requires_authentication(client):
    response = await client.post("/matching/generate-matches", json={"projectId": "x"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_cors_preflight(client):
    response = await client.options(
        "/matching/generate-matches",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )

    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers
