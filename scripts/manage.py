# scripts/manage.py

"""
운영/개발용 명령줄 도구입니다.

사용자 계정은 외부 인증 서비스가 관리하므로, 로컬 개발 시에는
이 도구로 같은 비밀키로 서명된 토큰을 발급해 API를 호출합니다.

    python -m scripts.manage create-token -s sysadm -o ORG-001 -r ADMIN
    python -m scripts.manage init-db
"""

import asyncio
from datetime import timedelta
from typing import List, Optional

import typer

from app.core.security import create_access_token
from app.core.database import create_db_and_tables, engine

cli = typer.Typer()


@cli.command("create-token")
def create_token(
    subject: str = typer.Option(
        ..., '--subject', '-s',
        help="토큰의 sub 클레임(사용자 ID)입니다."
    ),
    organization_id: Optional[str] = typer.Option(
        None, '--organization-id', '-o',
        help="사용자의 소속 조직 ID입니다. 생략하면 조직 범위 조회가 거부됩니다."
    ),
    roles: List[str] = typer.Option(
        ["USER"], '--role', '-r',
        help="역할 (여러 번 지정 가능). 쓰기 작업에는 ADMIN 또는 SUPER_ADMIN이 필요합니다."
    ),
    expires_minutes: Optional[int] = typer.Option(
        None, '--expires-minutes', '-e',
        help="만료 시간(분). 생략하면 ACCESS_TOKEN_EXPIRE_MINUTES 설정을 사용합니다."
    ),
):
    """
    지정한 클레임으로 서명된 Access Token을 출력합니다.
    """
    if expires_minutes is not None and expires_minutes <= 0:
        typer.echo("오류: 만료 시간은 1분 이상이어야 합니다.", err=True)
        raise typer.Exit(code=1)

    claims = {"sub": subject, "roles": [role.upper() for role in roles]}
    if organization_id:
        claims["organization_id"] = organization_id

    expires_delta = timedelta(minutes=expires_minutes) if expires_minutes else None
    typer.echo(create_access_token(data=claims, expires_delta=expires_delta))


@cli.command("init-db")
def init_db():
    """
    'wq' 스키마와 테이블을 생성합니다. (이미 존재하면 그대로 둡니다)
    """
    async def run_init():
        try:
            await create_db_and_tables()
        finally:
            await engine.dispose()

    asyncio.run(run_init())
    typer.echo("데이터베이스 스키마/테이블 생성이 완료되었습니다.")


if __name__ == "__main__":
    cli()
