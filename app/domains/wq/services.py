# app/domains/wq/services.py

"""
'wq' 도메인의 비즈니스 로직(채수 지점 서비스)을 담당하는 모듈입니다.

- 채수 지점의 생성/수정/삭제와 활성/비활성 상태 전환을 조정합니다.
- 코드가 지정되지 않은 신규 지점에 유형별 일련 코드를 부여합니다.
- 응답 직전에 외부 조직 서비스의 조직 정보를 덧붙입니다(Enrichment).
"""

import logging
from datetime import datetime, UTC
from typing import AsyncIterator, Iterable, List, Optional

import httpx
from pydantic import ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from fastapi import HTTPException, status

from app.core.exceptions import EntityNotFoundError
from app.services.organization_client import OrganizationClient
from . import crud as wq_crud
from . import models as wq_models
from . import schemas as wq_schemas

logger = logging.getLogger(__name__)

ENTITY_NAME = "TestingPoint"
CODE_SEQUENCE_WIDTH = 3


def generate_point_code(point_type: wq_models.PointType, existing_codes: Iterable[Optional[str]]) -> str:
    """
    지점 유형의 접두사를 가진 기존 코드 중 가장 큰 일련번호 + 1로 다음 코드를 만듭니다.
    일치하는 코드가 없으면 '<접두사>001'을 반환합니다.

    예: RESERVORIO, ["PR002", "PM007"] -> "PR003"
    """
    prefix = wq_models.POINT_CODE_PREFIXES[wq_models.PointType(point_type)]
    max_sequence = 0
    for code in existing_codes:
        if not code or not code.startswith(prefix):
            continue
        suffix = code[len(prefix):]
        if not (suffix.isascii() and suffix.isdecimal()):
            continue
        max_sequence = max(max_sequence, int(suffix))
    return f"{prefix}{max_sequence + 1:0{CODE_SEQUENCE_WIDTH}d}"


class TestingPointService:
    """
    채수 지점의 상태 전환과 조회 응답 생성을 담당하는 서비스 클래스입니다.
    """

    def __init__(
        self,
        db: AsyncSession,
        organization_client: OrganizationClient,
        *,
        current_organization_id: Optional[str] = None,
        repository: wq_crud.CRUDTestingPoint = wq_crud.testing_point,
    ):
        """
        Args:
            db (AsyncSession): 데이터베이스 세션.
            organization_client (OrganizationClient): 외부 조직 조회 클라이언트.
            current_organization_id (Optional[str]): 호출자의 조직 ID (목록 조회 범위).
            repository (CRUDTestingPoint): 채수 지점 저장소.
        """
        self.db = db
        self.organization_client = organization_client
        self.current_organization_id = current_organization_id
        self.repository = repository

    # -------------------------------------------------------------------------
    # Enrichment
    # -------------------------------------------------------------------------
    async def enrich(self, point: wq_models.TestingPoint) -> wq_schemas.TestingPointResponse:
        """
        채수 지점에 조직 정보를 덧붙여 응답 스키마로 변환합니다.
        조직이 없거나 조회에 실패하면 organization은 None이며, 예외를 발생시키지 않습니다.
        """
        organization = None
        if point.organization_id:
            try:
                organization = await self.organization_client.get_organization_by_id(point.organization_id)
            except (httpx.HTTPError, httpx.InvalidURL, ValidationError, ValueError) as e:
                logger.warning(
                    "Organization lookup failed for testing point %s (organization %s): %s",
                    point.id, point.organization_id, e,
                )
        return self._to_response(point, organization)

    @staticmethod
    def _to_response(
        point: wq_models.TestingPoint, organization: Optional[wq_schemas.Organization]
    ) -> wq_schemas.TestingPointResponse:
        return wq_schemas.TestingPointResponse(
            id=point.id,
            point_code=point.point_code,
            point_name=point.point_name,
            point_type=point.point_type,
            zone_id=point.zone_id,
            location_description=point.location_description,
            street=point.street,
            street_id=point.street_id,
            coordinates=wq_schemas.Coordinates(latitude=point.latitude, longitude=point.longitude),
            organization=organization,
            status=point.status,
            created_at=point.created_at,
            updated_at=point.updated_at,
        )

    async def _enrich_each(self, points: List[wq_models.TestingPoint]) -> AsyncIterator[wq_schemas.TestingPointResponse]:
        # 지점마다 개별 조회하며 원래 순서를 유지합니다.
        for point in points:
            yield await self.enrich(point)

    def _in_scope(self, point: wq_models.TestingPoint) -> bool:
        # 조직이 없는 호출자(예: 시스템 토큰)는 범위 제한이 없습니다.
        return not self.current_organization_id or point.organization_id == self.current_organization_id

    async def _get_or_raise(self, id: int, operation: str) -> wq_models.TestingPoint:
        """
        ID로 지점을 조회합니다.
        다른 조직의 지점은 존재 여부를 드러내지 않도록 동일하게 '찾을 수 없음'으로 처리합니다.
        """
        point = await self.repository.get(self.db, id=id)
        if point is None or not self._in_scope(point):
            raise EntityNotFoundError(ENTITY_NAME, id, operation)
        return point

    def _require_organization(self) -> str:
        if not self.current_organization_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Current user is not assigned to an organization."
            )
        return self.current_organization_id

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------
    async def get_all(self) -> AsyncIterator[wq_schemas.TestingPointResponse]:
        """호출자 조직의 모든 채수 지점(상태 무관)을 조회합니다."""
        points = await self.repository.get_by_organization_id(self.db, organization_id=self._require_organization())
        async for response in self._enrich_each(points):
            yield response

    async def get_all_active(self) -> AsyncIterator[wq_schemas.TestingPointResponse]:
        async for response in self._get_all_by_status(wq_models.PointStatus.ACTIVE):
            yield response

    async def get_all_inactive(self) -> AsyncIterator[wq_schemas.TestingPointResponse]:
        async for response in self._get_all_by_status(wq_models.PointStatus.INACTIVE):
            yield response

    async def _get_all_by_status(self, point_status: wq_models.PointStatus) -> AsyncIterator[wq_schemas.TestingPointResponse]:
        points = await self.repository.get_by_organization_id_and_status(
            self.db, organization_id=self._require_organization(), status=point_status
        )
        async for response in self._enrich_each(points):
            yield response

    async def get_all_by_organization(self, organization_id: str) -> AsyncIterator[wq_schemas.TestingPointResponse]:
        """지정한 조직의 모든 채수 지점을 조회합니다."""
        points = await self.repository.get_by_organization_id(self.db, organization_id=organization_id)
        async for response in self._enrich_each(points):
            yield response

    async def get_by_id(self, id: int) -> wq_schemas.TestingPointResponse:
        """ID로 채수 지점을 조회합니다."""
        point = await self._get_or_raise(id, "get_by_id")
        return await self.enrich(point)

    # -------------------------------------------------------------------------
    # 생성 / 수정 / 삭제
    # -------------------------------------------------------------------------
    async def generate_point_code(self, point_type: wq_models.PointType) -> str:
        """
        전체 지점을 조회하여 다음 코드를 계산합니다.
        조회와 저장 사이에 잠금이 없으므로 동시 생성 시 같은 코드가 계산될 수 있으며,
        이 경우 코드의 유일성 제약으로 나중 저장이 409로 거부됩니다.
        """
        points = await self.repository.get_all(self.db)
        return generate_point_code(point_type, (point.point_code for point in points))

    async def save(self, obj_in: wq_schemas.TestingPointCreate) -> wq_schemas.TestingPointResponse:
        """새 채수 지점을 ACTIVE 상태로 생성합니다."""
        organization_id = obj_in.organization_id or self._require_organization()

        if obj_in.point_code:
            point_code = obj_in.point_code
            if await self.repository.get_by_code(self.db, point_code=point_code):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Testing point with this code already exists."
                )
        else:
            point_code = await self.generate_point_code(obj_in.point_type)

        now = datetime.now(UTC)
        db_obj = wq_models.TestingPoint(
            organization_id=organization_id,
            point_code=point_code,
            point_name=obj_in.point_name,
            point_type=obj_in.point_type,
            zone_id=obj_in.zone_id,
            location_description=obj_in.location_description,
            street=obj_in.street,
            street_id=obj_in.street_id,
            latitude=obj_in.coordinates.latitude,
            longitude=obj_in.coordinates.longitude,
            status=wq_models.PointStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
        saved = await self.repository.save(self.db, db_obj=db_obj)
        logger.info("Testing point %s created with code %s (organization %s).", saved.id, saved.point_code, organization_id)
        return await self.enrich(saved)

    async def update(self, id: int, obj_in: wq_schemas.TestingPointUpdate) -> wq_schemas.TestingPointResponse:
        """None이 아닌 필드만 기존 지점에 병합합니다. 조직 ID와 상태는 변경하지 않습니다."""
        db_obj = await self._get_or_raise(id, "update")

        update_data = obj_in.model_dump(exclude_none=True)
        coordinates = update_data.pop("coordinates", None)

        new_code = update_data.get("point_code")
        if new_code and new_code != db_obj.point_code:
            existing = await self.repository.get_by_code(self.db, point_code=new_code)
            if existing and existing.id != db_obj.id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Testing point with this code already exists."
                )

        for key, value in update_data.items():
            setattr(db_obj, key, value)
        if coordinates:
            db_obj.latitude = coordinates["latitude"]
            db_obj.longitude = coordinates["longitude"]
        db_obj.updated_at = datetime.now(UTC)

        saved = await self.repository.save(self.db, db_obj=db_obj)
        return await self.enrich(saved)

    async def delete(self, id: int) -> None:
        """지점을 삭제합니다. 지점이 없거나 다른 조직의 지점이어도 오류가 아닙니다."""
        point = await self.repository.get(self.db, id=id)
        if point is None or not self._in_scope(point):
            logger.debug("Delete requested for missing or out-of-scope testing point %s; nothing to do.", id)
            return
        await self.repository.delete(self.db, id=id)

    async def activate(self, id: int) -> wq_schemas.TestingPointResponse:
        return await self._change_status(id, wq_models.PointStatus.ACTIVE, "activate")

    async def deactivate(self, id: int) -> wq_schemas.TestingPointResponse:
        return await self._change_status(id, wq_models.PointStatus.INACTIVE, "deactivate")

    async def _change_status(
        self, id: int, new_status: wq_models.PointStatus, operation: str
    ) -> wq_schemas.TestingPointResponse:
        # 상태만 변경하며, 이미 같은 상태여도 저장 후 정상 응답합니다.
        db_obj = await self._get_or_raise(id, operation)
        db_obj.status = new_status
        db_obj.updated_at = datetime.now(UTC)
        saved = await self.repository.save(self.db, db_obj=db_obj)
        return await self.enrich(saved)
