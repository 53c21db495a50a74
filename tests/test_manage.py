# tests/test_manage.py

"""
운영용 명령줄 도구(scripts/manage.py) 테스트 모듈입니다.
"""

from unittest.mock import AsyncMock, MagicMock

from jose import jwt
from typer.testing import CliRunner

from app.core.config import settings
from scripts import manage
from scripts.manage import cli

runner = CliRunner()


def decode(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM])


def test_create_token_with_roles_and_organization():
    result = runner.invoke(cli, ["create-token", "-s", "sysadm", "-o", "ORG-001", "-r", "admin", "-r", "USER"])

    assert result.exit_code == 0
    claims = decode(result.stdout.strip())
    assert claims["sub"] == "sysadm"
    assert claims["organization_id"] == "ORG-001"
    assert claims["roles"] == ["ADMIN", "USER"]


def test_create_token_without_organization():
    result = runner.invoke(cli, ["create-token", "--subject", "analyst"])

    assert result.exit_code == 0
    claims = decode(result.stdout.strip())
    assert "organization_id" not in claims
    assert claims["roles"] == ["USER"]


def test_create_token_rejects_non_positive_expiry():
    result = runner.invoke(cli, ["create-token", "-s", "sysadm", "-e", "0"])

    assert result.exit_code == 1


def test_init_db_creates_tables_and_disposes_engine(monkeypatch):
    create_tables = AsyncMock()
    engine = MagicMock()
    engine.dispose = AsyncMock()
    monkeypatch.setattr(manage, "create_db_and_tables", create_tables)
    monkeypatch.setattr(manage, "engine", engine)

    result = runner.invoke(cli, ["init-db"])

    assert result.exit_code == 0
    create_tables.assert_awaited_once()
    engine.dispose.assert_awaited_once()


def test_init_db_disposes_engine_on_failure(monkeypatch):
    engine = MagicMock()
    engine.dispose = AsyncMock()
    monkeypatch.setattr(manage, "create_db_and_tables", AsyncMock(side_effect=ConnectionRefusedError("db down")))
    monkeypatch.setattr(manage, "engine", engine)

    result = runner.invoke(cli, ["init-db"])

    assert result.exit_code != 0
    assert isinstance(result.exception, ConnectionRefusedError)
    engine.dispose.assert_awaited_once()
