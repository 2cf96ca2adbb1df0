import pytest
import pytest_asyncio

from app.main import app as fastapi_app
from app.core.database import get_db
from app.core.security import (
    create_access_token, get_password_hash, verify_access_token, verify_password
)


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong123", hashed)


def test_access_token_carries_user_and_role():
    token = create_access_token({"sub": "a@freelancehub.io", "user_id": "u-1", "role": "freelancer"})
    token_data = verify_access_token(token)
    assert token_data.user_id == "u-1"
    assert token_data.role == "freelancer"


def test_invalid_token_is_rejected():
    assert verify_access_token("not-a-jwt") is None


@pytest_asyncio.fixture
async def db_only_app(db_session):
    async def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_register_login_and_fetch_profile(db_only_app, client):
    response = await client.post("/auth/register", json={
        "email": "fiona@freelancehub.io",
        "password": "react2024",
        "role": "freelancer",
        "full_name": "Fiona Freelancer",
    })
    assert response.status_code == 201
    assert response.json()["user_role"] == "freelancer"

    response = await client.post("/auth/register", json={
        "email": "fiona@freelancehub.io",
        "password": "react2024",
        "role": "freelancer",
    })
    assert response.status_code == 400

    response = await client.post(
        "/auth/token", data={"username": "fiona@freelancehub.io", "password": "react2024"}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    response = await client.get("/profiles/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "fiona@freelancehub.io"


@pytest.mark.asyncio
async def test_login_with_wrong_password(db_only_app, client):
    await client.post("/auth/register", json={
        "email": "olivia@freelancehub.io",
        "password": "owner2024",
        "role": "project_owner",
    })

    response = await client.post(
        "/auth/token", data={"username": "olivia@freelancehub.io", "password": "nope2024"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_weak_password_rejected(db_only_app, client):
    response = await client.post("/auth/register", json={
        "email": "weak@freelancehub.io",
        "password": "onlyletters",
        "role": "freelancer",
    })
    assert response.status_code == 422
