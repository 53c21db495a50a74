# app/services/organization_client.py

"""
외부 조직(Organization) 서비스와 통신하는 HTTP 클라이언트 모듈입니다.

- 조직 ID로 조직 정보를 조회합니다. 조직이 없으면 None을 반환합니다.
- 응답은 `{...}` 단일 객체 또는 `{"success": ..., "data": {...}}` 형태를 모두 허용합니다.
- 전송/HTTP 오류는 호출자에게 그대로 전파되며, 완화 정책은 호출자(Enricher)가 결정합니다.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from app.core.config import Settings, settings as default_settings
from app.domains.wq import schemas as wq_schemas

logger = logging.getLogger(__name__)


def build_async_client(app_settings: Optional[Settings] = None) -> httpx.AsyncClient:
    """
    조직 서비스 호출용 httpx.AsyncClient를 생성합니다.
    타임아웃과 기본 헤더를 한 곳에서 관리합니다.
    """
    app_settings = app_settings or default_settings
    return httpx.AsyncClient(
        base_url=app_settings.ORGANIZATION_SERVICE_URL,
        timeout=httpx.Timeout(app_settings.ORGANIZATION_SERVICE_TIMEOUT),
        headers={"Accept": "application/json"},
    )


class OrganizationClient:
    """
    외부 조직 서비스 조회 클라이언트입니다.
    """

    def __init__(self, http_client: httpx.AsyncClient, *, token: Optional[str] = None):
        """
        Args:
            http_client (httpx.AsyncClient): base_url이 설정된 공유 HTTP 클라이언트.
            token (Optional[str]): 원격 서비스로 전달할 호출자의 Bearer 토큰.
        """
        self.http_client = http_client
        self.token = token

    def _headers(self) -> dict:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    @staticmethod
    def _unwrap(payload: Any) -> Optional[dict]:
        # {"success": true, "data": {...}} 봉투를 벗겨냅니다.
        if not isinstance(payload, dict):
            return None
        if "data" in payload:
            data = payload["data"]
            return data if isinstance(data, dict) and data else None
        return payload or None

    async def get_organization_by_id(self, organization_id: str) -> Optional[wq_schemas.Organization]:
        """
        조직 ID로 조직 정보를 조회합니다.

        Returns:
            Optional[Organization]: 조직 정보. 404 또는 빈 응답이면 None.

        Raises:
            httpx.HTTPError: 연결 실패, 타임아웃, 404 이외의 오류 상태 코드.
            pydantic.ValidationError: 응답 형식이 올바르지 않은 경우.
        """
        # 조직 ID는 단일 경로 세그먼트로 인코딩합니다. (예: "../x", 제어 문자)
        path = f"/organization/{quote(organization_id, safe='')}"
        response = await self.http_client.get(path, headers=self._headers())
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("Organization %s not found in organization service.", organization_id)
            return None
        response.raise_for_status()

        if not response.content:
            return None
        data = self._unwrap(response.json())
        if data is None:
            return None
        return wq_schemas.Organization.model_validate(data)
