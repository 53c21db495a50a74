# app/domains/wq/crud.py

"""
'wq' 도메인의 CRUD(저장소) 로직을 담당하는 모듈입니다.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from fastapi import HTTPException, status

from app.core.crud_base import CRUDBase
from . import models as wq_models

logger = logging.getLogger(__name__)


# =============================================================================
# 1. 채수 지점 (TestingPoint) CRUD
# =============================================================================
class CRUDTestingPoint(CRUDBase[wq_models.TestingPoint]):
    def __init__(self):
        super().__init__(model=wq_models.TestingPoint)

    async def get_by_code(self, db: AsyncSession, *, point_code: str) -> Optional[wq_models.TestingPoint]:
        """채수 지점 코드로 조회합니다."""
        statement = select(self.model).where(self.model.point_code == point_code)
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def get_by_organization_id(self, db: AsyncSession, *, organization_id: str) -> List[wq_models.TestingPoint]:
        """조직에 속한 모든 채수 지점을 id 순으로 조회합니다."""
        statement = (
            select(self.model)
            .where(self.model.organization_id == organization_id)
            .order_by(self.model.id)
        )
        result = await db.execute(statement)
        return result.scalars().all()

    async def get_by_organization_id_and_status(
        self, db: AsyncSession, *, organization_id: str, status: wq_models.PointStatus
    ) -> List[wq_models.TestingPoint]:
        """조직에 속한 채수 지점 중 지정한 상태의 지점만 조회합니다."""
        statement = (
            select(self.model)
            .where(
                self.model.organization_id == organization_id,
                self.model.status == wq_models.PointStatus(status).value,
            )
            .order_by(self.model.id)
        )
        result = await db.execute(statement)
        return result.scalars().all()

    async def save(self, db: AsyncSession, *, db_obj: wq_models.TestingPoint) -> wq_models.TestingPoint:
        """
        채수 지점을 저장합니다.
        코드 유일성 제약 위반(동시 생성 경합 포함)은 409로 변환합니다.
        """
        try:
            return await super().save(db, db_obj=db_obj)
        except IntegrityError as e:
            await db.rollback()
            logger.error(f"IntegrityError while saving testing point (code: {db_obj.point_code}): {e}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Testing point with code '{db_obj.point_code}' already exists."
            )


testing_point = CRUDTestingPoint()
