# app/domains/wq/models.py

"""
'wq' 도메인 (PostgreSQL 'wq' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime, UTC
from enum import Enum

from sqlalchemy import String
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from sqlmodel import Field, SQLModel, Column


class PointType(str, Enum):
    """채수 지점 유형"""
    DOMICILIO = "DOMICILIO"                # 가정 급수전
    RESERVORIO = "RESERVORIO"              # 배수지
    RED_DISTRIBUCION = "RED_DISTRIBUCION"  # 배수 관망


class PointStatus(str, Enum):
    """채수 지점 상태"""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


# 지점 유형별 코드 접두사 (예: RESERVORIO -> PR001)
POINT_CODE_PREFIXES = {
    PointType.DOMICILIO: "PM",
    PointType.RESERVORIO: "PR",
    PointType.RED_DISTRIBUCION: "PD",
}


# =============================================================================
# 1. wq.testing_points 테이블 모델
# =============================================================================
class TestingPoint(SQLModel, table=True):
    __tablename__ = "testing_points"
    __table_args__ = {'schema': 'wq'}

    id: Optional[int] = Field(default=None, primary_key=True)
    organization_id: str = Field(max_length=64, index=True, description="소속 조직 ID (외부 조직 서비스)")
    point_code: str = Field(max_length=10, unique=True, description="채수 지점 코드 (접두사 + 3자리 일련번호)")
    point_name: str = Field(max_length=100, description="채수 지점명")
    point_type: PointType = Field(sa_column=Column(String(30), nullable=False), description="채수 지점 유형")
    zone_id: str = Field(max_length=64, description="구역 ID")
    location_description: Optional[str] = Field(default=None, max_length=500, description="위치 설명")
    street: Optional[str] = Field(default=None, max_length=255, description="도로명")
    street_id: Optional[str] = Field(default=None, max_length=64, description="도로 ID (DOMICILIO 지점)")
    latitude: float = Field(description="위도")
    longitude: float = Field(description="경도")
    status: PointStatus = Field(
        default=PointStatus.ACTIVE,
        sa_column=Column(String(10), nullable=False, index=True),
        description="상태 (ACTIVE/INACTIVE)"
    )
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )
