# tests/conftest.py

from typing import AsyncGenerator, Callable, Awaitable, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# app.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from app.main import app as main_app
from app.core import dependencies as deps
from app.core.database import get_session
from app.core.security import create_access_token

# SQLModel.metadata.create_all()이 테이블을 인식하도록 모델을 임포트합니다.
from app.domains.wq import models as wq_models
from app.domains.wq import schemas as wq_schemas


# --- 테스트용 데이터베이스 설정 ---
# PostgreSQL 대신 메모리 SQLite를 사용하며, 'wq' 스키마는 기본 스키마로 변환합니다.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,             # 테스트 시 SQL 쿼리 출력하지 않음
    poolclass=StaticPool,   # 메모리 DB를 모든 세션이 공유하도록 단일 연결 사용
    connect_args={"check_same_thread": False},
).execution_options(schema_translate_map={"wq": None})

# 테스트용 세션 팩토리 생성 (AsyncSession)
TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

ORG_ID = "ORG-001"
OTHER_ORG_ID = "ORG-002"


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    각 테스트 함수마다 테이블을 새로 만들고, 테스트가 끝나면 삭제하여
    테스트 간의 격리를 보장하는 비동기 데이터베이스 세션을 제공합니다.
    저장소가 직접 commit하므로 트랜잭션 롤백 대신 테이블을 재생성합니다.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        await session.close()
        async with test_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)


# --- 채수 지점 팩토리 ---
@pytest_asyncio.fixture(scope="function")
def point_factory(db_session: AsyncSession) -> Callable[..., Awaitable[wq_models.TestingPoint]]:
    """
    속성을 지정하여 채수 지점을 DB에 생성하는 팩토리 함수를 반환합니다.
    """
    async def _create_point(
        point_code: str,
        point_type: wq_models.PointType = wq_models.PointType.RESERVORIO,
        organization_id: str = ORG_ID,
        status: wq_models.PointStatus = wq_models.PointStatus.ACTIVE,
        **kwargs,
    ) -> wq_models.TestingPoint:
        point_data = {
            "organization_id": organization_id,
            "point_code": point_code,
            "point_name": f"지점 {point_code}",
            "point_type": point_type,
            "zone_id": "ZONE-1",
            "latitude": -12.0464,
            "longitude": -77.0428,
            "status": status,
            **kwargs,
        }
        point = wq_models.TestingPoint(**point_data)
        db_session.add(point)
        await db_session.commit()
        await db_session.refresh(point)
        return point
    return _create_point


# --- 외부 조직 서비스 픽스처 ---
@pytest.fixture
def organization() -> wq_schemas.Organization:
    return wq_schemas.Organization(
        organization_id=ORG_ID,
        organization_code="SEDA",
        organization_name="Agua Potable Municipal",
        status="ACTIVE",
    )


@pytest.fixture
def organization_client(organization: wq_schemas.Organization) -> AsyncMock:
    """
    ORG_ID만 알고 있는 조직 서비스 클라이언트 목(mock)입니다.
    """
    async def _lookup(organization_id: str) -> Optional[wq_schemas.Organization]:
        return organization if organization_id == ORG_ID else None

    client = AsyncMock()
    client.get_organization_by_id.side_effect = _lookup
    return client


# --- 토큰 픽스처 ---
# 운영 토큰은 인증 게이트웨이가 발급하므로, 동일한 비밀키로 테스트 토큰을 직접 만듭니다.
def _auth_headers(**claims) -> dict:
    token = create_access_token(data=claims)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict:
    return _auth_headers(sub="sysadm", organization_id=ORG_ID, roles=["ADMIN"])


@pytest.fixture
def user_headers() -> dict:
    return _auth_headers(sub="analyst", organization_id=ORG_ID, roles=["USER"])


@pytest.fixture
def no_org_headers() -> dict:
    return _auth_headers(sub="orphan", roles=["ADMIN"])


# --- 비동기 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(
    db_session: AsyncSession,
    organization_client: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """
    DB 세션과 조직 서비스 클라이언트를 테스트용으로 교체한 AsyncClient를 반환합니다.
    인증은 실제 JWT 검증 경로를 그대로 사용합니다.
    """
    async def override_get_session():
        yield db_session

    async def override_get_organization_client():
        yield organization_client

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides.update({
            get_session: override_get_session,
            deps.get_db_session: override_get_session,
            deps.get_organization_client: override_get_organization_client,
        })

        transport = ASGITransport(app=main_app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        # 테스트가 끝난 후 원래 의존성 상태로 되돌립니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)
