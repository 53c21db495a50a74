# tests/test_main.py

"""
FastAPI 애플리케이션의 메인 엔드포인트와 ARQ 태스크에 대한 테스트를 정의하는 모듈입니다.

- 애플리케이션의 루트 경로 (`/`) 응답을 테스트합니다.
- 데이터베이스 연결 헬스 체크 엔드포인트 (`/health-check`)를 테스트합니다.
- ARQ 워커의 데이터베이스 헬스 체크 태스크를 테스트합니다.
"""

from contextlib import asynccontextmanager

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import tasks as core_tasks
from app.main import ArqWorkerSettings


@pytest.mark.asyncio
async def test_read_root(client: AsyncClient):
    """
    루트 엔드포인트 (`GET /`)가 올바르게 응답하는지 테스트합니다.
    """
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to MS Water Quality API. Visit /docs for interactive API documentation."}


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """
    헬스 체크 엔드포인트 (`GET /health-check`)가 데이터베이스 연결 상태를 올바르게 반환하는지 테스트합니다.
    """
    print("\n--- Running test_health_check ---")
    response = await client.get("/health-check")
    print(f"Response JSON: {response.json()}")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database_connection": "successful"}


def test_arq_worker_settings_register_health_task():
    assert core_tasks.health_check_database_task in ArqWorkerSettings.functions
    job_names = [job["name"] for job in ArqWorkerSettings.jobs]
    assert "daily_db_health_check" in job_names


@pytest.mark.asyncio
async def test_health_check_database_task_success(db_session: AsyncSession, monkeypatch):
    @asynccontextmanager
    async def _session_context():
        yield db_session

    monkeypatch.setattr(core_tasks, "get_async_session_context", _session_context)

    result = await core_tasks.health_check_database_task({})

    assert result["status"] == "success"


@pytest.mark.asyncio
async def test_health_check_database_task_reports_failure(monkeypatch):
    """DB 연결 실패 시 예외 대신 실패 결과를 반환해야 합니다."""
    @asynccontextmanager
    async def _broken_context():
        raise ConnectionRefusedError("database is down")
        yield  # pragma: no cover

    monkeypatch.setattr(core_tasks, "get_async_session_context", _broken_context)

    result = await core_tasks.health_check_database_task({})

    assert result["status"] == "failed"
    assert "database is down" in result["message"]
