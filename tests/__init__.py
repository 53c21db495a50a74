# tests/__init__.py

"""
MS Water Quality FastAPI 애플리케이션의 테스트 스위트 패키지입니다.

- `conftest.py`: 메모리 SQLite 세션, 조직 서비스 목(mock), 테스트 토큰, 비동기 클라이언트 픽스처.
- `domains/`: 도메인별(wq) 저장소, 서비스, 라우터 테스트.
- `test_main.py`: 루트/헬스 체크 엔드포인트와 ARQ 태스크 테스트.
"""

__title__ = "MS Water Quality API Tests"
__description__ = "Test suite for the MS Water Quality FastAPI application."
__version__ = "0.1.0"
__all__ = []
