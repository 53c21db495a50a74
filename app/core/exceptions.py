# app/core/exceptions.py

"""
애플리케이션 공통 도메인 예외와 FastAPI 예외 핸들러를 정의하는 모듈입니다.

'찾을 수 없음'은 EntityNotFoundError로 발생시키고, API 경계(app.main)에서 등록된
핸들러가 이를 404 응답으로 변환합니다. 중복 코드(400), 권한(403), 무결성 위반(409)은
crud/서비스 계층에서 HTTPException으로 직접 발생시킵니다.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class EntityNotFoundError(Exception):
    """
    ID 기반 조회가 비어 있을 때 발생하는 단일 '찾을 수 없음' 예외입니다.
    진단을 위해 엔티티 이름, ID, 수행 중이던 작업명을 함께 보관합니다.
    """

    def __init__(self, entity: str, entity_id: Any, operation: str):
        self.entity = entity
        self.entity_id = entity_id
        self.operation = operation
        super().__init__(f"{entity} not found (id={entity_id}, operation={operation})")

    @property
    def detail(self) -> str:
        return f"{self.entity} with id '{self.entity_id}' not found"


async def entity_not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    """EntityNotFoundError를 404 응답으로 변환합니다."""
    logger.info("%s %s -> 404 (%s)", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.detail, "operation": exc.operation},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EntityNotFoundError, entity_not_found_handler)
