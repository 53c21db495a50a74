# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 현재 인증된 사용자 정보 획득 (get_current_active_user, get_current_admin_user).
- 외부 조직 서비스 클라이언트 (get_organization_client).
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.database import get_session as get_main_app_session
# flake8: noqa
from app.core.security import (
    CurrentUser,
    create_access_token,
    oauth2_scheme,
    get_current_user_from_token,
    get_current_active_user,
    get_current_admin_user,
)
from app.services.organization_client import OrganizationClient, build_async_client


# --- 데이터베이스 세션 의존성 주입 ---
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    app.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session


# --- 외부 조직 서비스 클라이언트 ---
async def get_organization_client(
    request: Request,
    token: str = Depends(oauth2_scheme),
) -> AsyncGenerator[OrganizationClient, None]:
    """
    lifespan에서 생성된 공유 httpx 클라이언트를 사용하고, 호출자의 토큰을 그대로 전달합니다.
    공유 클라이언트가 없으면(예: lifespan 미실행) 요청 범위의 임시 클라이언트를 만듭니다.
    """
    http_client = getattr(request.app.state, "organization_http_client", None)
    if http_client is not None:
        yield OrganizationClient(http_client, token=token)
        return

    async with build_async_client() as temp_client:
        yield OrganizationClient(temp_client, token=token)
