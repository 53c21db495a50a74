# app/domains/wq/schemas.py

"""
'wq' 도메인 (수질 채수 지점)의 Pydantic 스키마를 정의하는 모듈입니다.

이 스키마들은 API 요청(Request) 및 응답(Response) 데이터의 유효성을 검사하고,
외부 조직 서비스의 응답을 역직렬화하는 데 사용됩니다.
"""

from typing import Optional
from datetime import datetime
from pydantic import AliasGenerator, BaseModel, ConfigDict, Field as PydanticField
from pydantic.alias_generators import to_camel

from .models import PointType, PointStatus


# =============================================================================
# 1. 좌표 (Coordinates) 스키마
# =============================================================================
class Coordinates(BaseModel):
    latitude: float = PydanticField(ge=-90, le=90, description="위도")
    longitude: float = PydanticField(ge=-180, le=180, description="경도")


# =============================================================================
# 2. 외부 조직 (Organization) 스키마
# =============================================================================
class Organization(BaseModel):
    """
    외부 조직 서비스가 반환하는 조직 정보입니다.
    원격 서비스는 camelCase 키를 사용하므로 입력 시에만 별칭으로 받고, 모르는 키는 무시합니다.
    """
    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel), populate_by_name=True, extra="ignore"
    )

    organization_id: str = PydanticField(description="조직 ID")
    organization_code: Optional[str] = PydanticField(default=None, description="조직 코드")
    organization_name: Optional[str] = PydanticField(default=None, description="조직명")
    legal_representative: Optional[str] = PydanticField(default=None, description="법정 대표자")
    address: Optional[str] = PydanticField(default=None, description="주소")
    phone: Optional[str] = PydanticField(default=None, description="전화번호")
    status: Optional[str] = PydanticField(default=None, description="조직 상태")


# =============================================================================
# 3. 채수 지점 (TestingPoint) 스키마
# =============================================================================
class TestingPointBase(BaseModel):
    point_name: str = PydanticField(min_length=1, max_length=100, description="채수 지점명")
    point_type: PointType = PydanticField(description="채수 지점 유형")
    zone_id: str = PydanticField(max_length=64, description="구역 ID")
    location_description: Optional[str] = PydanticField(default=None, max_length=500, description="위치 설명")
    street: Optional[str] = PydanticField(default=None, max_length=255, description="도로명")
    street_id: Optional[str] = PydanticField(default=None, max_length=64, description="도로 ID")
    coordinates: Coordinates = PydanticField(description="좌표")


class TestingPointCreate(TestingPointBase):
    # 비어 있으면 호출자의 조직, 코드 미지정 시 자동 생성
    organization_id: Optional[str] = PydanticField(default=None, max_length=64, description="소속 조직 ID")
    point_code: Optional[str] = PydanticField(default=None, max_length=10, description="채수 지점 코드")


class TestingPointUpdate(BaseModel):
    """
    채수 지점 부분 업데이트 스키마. None이 아닌 필드만 반영됩니다.
    organization_id는 생성 후 변경할 수 없고, status는 activate/deactivate로만 변경합니다.
    """
    point_code: Optional[str] = PydanticField(None, max_length=10, description="채수 지점 코드")
    point_name: Optional[str] = PydanticField(None, min_length=1, max_length=100, description="채수 지점명")
    point_type: Optional[PointType] = PydanticField(None, description="채수 지점 유형")
    zone_id: Optional[str] = PydanticField(None, max_length=64, description="구역 ID")
    location_description: Optional[str] = PydanticField(None, max_length=500, description="위치 설명")
    street: Optional[str] = PydanticField(None, max_length=255, description="도로명")
    street_id: Optional[str] = PydanticField(None, max_length=64, description="도로 ID")
    coordinates: Optional[Coordinates] = PydanticField(None, description="좌표")


class TestingPointResponse(TestingPointBase):
    id: int = PydanticField(description="채수 지점 고유 ID")
    point_code: str = PydanticField(description="채수 지점 코드")
    organization: Optional[Organization] = PydanticField(default=None, description="소속 조직 정보 (조회 실패 시 null)")
    status: PointStatus = PydanticField(description="상태")
    created_at: Optional[datetime] = PydanticField(default=None, description="레코드 생성 일시")
    updated_at: Optional[datetime] = PydanticField(default=None, description="레코드 마지막 업데이트 일시")
