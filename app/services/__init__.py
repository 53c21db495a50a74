# app/services/__init__.py

"""
외부 시스템과의 통합을 담당하는 서비스 계층 패키지입니다.

- `organization_client.py`: 외부 조직 서비스에서 조직 정보를 조회하는 HTTP 클라이언트.
"""

__title__ = "MS Water Quality Services"
__description__ = "External service integrations for the MS Water Quality API."
__version__ = "0.1.0"
__all__ = []
