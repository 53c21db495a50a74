# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 비동기 엔진, 세션 관리, 개발용 스키마/테이블 생성.
- `crud_base.py`: 도메인 저장소가 공유하는 공통 CRUD 기본 클래스.
- `security.py`: JWT 검증과 역할 기반 권한 부여.
- `dependencies.py`: FastAPI 의존성 주입에서 사용되는 공통 의존성 함수.
- `exceptions.py`: 도메인 예외와 HTTP 예외 핸들러.
- `tasks.py`: ARQ 워커가 실행하는 주기 태스크.
"""

__title__ = "MS Water Quality Core"
__description__ = "Core components for the MS Water Quality FastAPI application."
__version__ = "0.1.0"
__all__ = []
