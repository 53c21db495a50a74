# app/domains/wq/__init__.py

"""
FastAPI 애플리케이션의 'wq' (Water Quality) 도메인 패키지입니다.

이 패키지는 PostgreSQL의 'wq' 스키마에 해당하는 데이터 모델과
관련된 비즈니스 로직 및 API 엔드포인트를 포함합니다.

'wq' 도메인은 수질 검사를 위한 채수 지점(testing point)을 관리합니다.
지점은 외부 조직 서비스의 조직에 소속되며, 활성/비활성 상태를 가지고,
생성 시 지점 유형별 일련 코드(PM001, PR001, PD001 등)를 부여받습니다.

주요 서브모듈:
- `models.py`: 'wq' 스키마의 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 요청/응답 및 외부 조직 정보에 대한 Pydantic 모델.
- `crud.py`: 'wq' 스키마 테이블에 대한 저장소 로직.
- `services.py`: 코드 생성, 조직 정보 보강, 상태 전환을 조정하는 서비스.
- `routers.py`: 'wq' 데이터에 접근하기 위한 FastAPI API 엔드포인트 정의.
"""

__title__ = "MS Water Quality Testing Point Domain"
__description__ = "Manages water quality testing points and their organization enrichment."
__version__ = "0.1.0"
__all__ = []
