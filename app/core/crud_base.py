# app/core/crud_base.py

"""
공통 CRUD(Create, Read, Update, Delete) 작업을 위한 기본 클래스 모듈입니다.
모든 메서드는 비동기(async) 환경에 맞게 작성되었습니다.
"""

from typing import Generic, List, Optional, Type, TypeVar, Any

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

ModelType = TypeVar("ModelType", bound=SQLModel)


class CRUDBase(Generic[ModelType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 단일 레코드를 조회합니다. 없으면 None을 반환합니다.
        """
        return await db.get(self.model, id)

    async def get_all(self, db: AsyncSession) -> List[ModelType]:
        """
        페이징 없이 테이블 전체를 id 순으로 조회합니다.
        """
        query = select(self.model)
        if hasattr(self.model, 'id'):
            query = query.order_by(self.model.id)
        result = await db.execute(query)
        return result.scalars().all()

    async def save(self, db: AsyncSession, *, db_obj: ModelType) -> ModelType:
        """
        신규 또는 변경된 레코드를 저장(INSERT/UPDATE)하고 새로고침된 객체를 반환합니다.
        """
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 레코드를 삭제합니다. 레코드가 없으면 아무 것도 하지 않고 None을 반환합니다.
        """
        db_obj = await db.get(self.model, id)
        if db_obj:
            await db.delete(db_obj)
            await db.commit()
        return db_obj
