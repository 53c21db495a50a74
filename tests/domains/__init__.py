# tests/domains/__init__.py

"""
도메인별 테스트 스위트 패키지입니다.

- `test_wq_crud_n.py`: 채수 지점 저장소 테스트.
- `test_wq_services_n.py`: 채수 지점 서비스 단위 테스트 (mock 저장소).
- `test_wq_routers_n.py`: 채수 지점 API 통합 테스트.
"""

__title__ = "MS Water Quality Domain Tests"
__version__ = "0.1.0"
__all__ = []
