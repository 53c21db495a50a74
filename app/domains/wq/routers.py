# app/domains/wq/routers.py

"""
'wq' 도메인 (수질 채수 지점) 관련 API 엔드포인트를 정의하는 모듈입니다.
"""
from typing import List

from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import APIRouter, Depends, Response, status

from app.core import dependencies as deps
from app.services.organization_client import OrganizationClient

from . import schemas as wq_schemas
from .services import TestingPointService

router = APIRouter(
    tags=["Water Quality Testing Points (수질 채수 지점 관리)"],
    responses={404: {"description": "Not found"}},
)


async def get_testing_point_service(
    db: AsyncSession = Depends(deps.get_db_session),
    organization_client: OrganizationClient = Depends(deps.get_organization_client),
    current_user: deps.CurrentUser = Depends(deps.get_current_active_user),
) -> TestingPointService:
    """요청마다 호출자의 조직 범위로 서비스를 구성합니다."""
    return TestingPointService(
        db, organization_client, current_organization_id=current_user.organization_id
    )


# =============================================================================
# 1. 채수 지점 (TestingPoint) 조회 라우터
# =============================================================================
@router.get("/testing-points", response_model=List[wq_schemas.TestingPointResponse], summary="조직의 모든 채수 지점 조회")
async def read_testing_points(
    service: TestingPointService = Depends(get_testing_point_service),
):
    """현재 사용자 조직의 모든 채수 지점을 상태와 관계없이 조회합니다."""
    return [point async for point in service.get_all()]


@router.get("/testing-points/active", response_model=List[wq_schemas.TestingPointResponse], summary="활성 채수 지점 조회")
async def read_active_testing_points(
    service: TestingPointService = Depends(get_testing_point_service),
):
    return [point async for point in service.get_all_active()]


@router.get("/testing-points/inactive", response_model=List[wq_schemas.TestingPointResponse], summary="비활성 채수 지점 조회")
async def read_inactive_testing_points(
    service: TestingPointService = Depends(get_testing_point_service),
):
    return [point async for point in service.get_all_inactive()]


@router.get(
    "/testing-points/organization/{organization_id}",
    response_model=List[wq_schemas.TestingPointResponse],
    summary="특정 조직의 채수 지점 조회"
)
async def read_testing_points_by_organization(
    organization_id: str,
    service: TestingPointService = Depends(get_testing_point_service),
):
    return [point async for point in service.get_all_by_organization(organization_id)]


@router.get("/testing-points/{point_id}", response_model=wq_schemas.TestingPointResponse, summary="특정 채수 지점 조회")
async def read_testing_point(
    point_id: int,
    service: TestingPointService = Depends(get_testing_point_service),
):
    """ID를 기준으로 채수 지점을 조회합니다. 없으면 404를 반환합니다."""
    return await service.get_by_id(point_id)


# =============================================================================
# 2. 채수 지점 (TestingPoint) 변경 라우터 (관리자)
# =============================================================================
@router.post(
    "/testing-points",
    response_model=wq_schemas.TestingPointResponse,
    status_code=status.HTTP_201_CREATED,
    summary="새 채수 지점 생성"
)
async def create_testing_point(
    point_in: wq_schemas.TestingPointCreate,
    service: TestingPointService = Depends(get_testing_point_service),
    current_admin_user: deps.CurrentUser = Depends(deps.get_current_admin_user),
):
    """
    새로운 채수 지점을 생성합니다. 관리자 권한이 필요합니다.
    `point_code`를 생략하면 지점 유형별 일련 코드가 자동 부여됩니다.
    """
    return await service.save(point_in)


@router.put("/testing-points/{point_id}", response_model=wq_schemas.TestingPointResponse, summary="채수 지점 업데이트")
async def update_testing_point(
    point_id: int,
    point_in: wq_schemas.TestingPointUpdate,
    service: TestingPointService = Depends(get_testing_point_service),
    current_admin_user: deps.CurrentUser = Depends(deps.get_current_admin_user),
):
    return await service.update(point_id, point_in)


@router.delete("/testing-points/{point_id}", status_code=status.HTTP_204_NO_CONTENT, summary="채수 지점 삭제")
async def delete_testing_point(
    point_id: int,
    service: TestingPointService = Depends(get_testing_point_service),
    current_admin_user: deps.CurrentUser = Depends(deps.get_current_admin_user),
):
    """채수 지점을 영구 삭제합니다. 존재하지 않는 ID도 204를 반환합니다."""
    await service.delete(point_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/testing-points/{point_id}/activate", response_model=wq_schemas.TestingPointResponse, summary="채수 지점 활성화")
async def activate_testing_point(
    point_id: int,
    service: TestingPointService = Depends(get_testing_point_service),
    current_admin_user: deps.CurrentUser = Depends(deps.get_current_admin_user),
):
    return await service.activate(point_id)


@router.patch("/testing-points/{point_id}/deactivate", response_model=wq_schemas.TestingPointResponse, summary="채수 지점 비활성화")
async def deactivate_testing_point(
    point_id: int,
    service: TestingPointService = Depends(get_testing_point_service),
    current_admin_user: deps.CurrentUser = Depends(deps.get_current_admin_user),
):
    return await service.deactivate(point_id)
