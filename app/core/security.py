# app/core/security.py

"""
애플리케이션의 보안 관련 유틸리티 함수 및 의존성 주입을 정의하는 모듈입니다.

- JWT(JSON Web Token) 생성 및 검증.
- OAuth2 Password Bearer 스키마를 사용하여 현재 사용자(토큰 클레임) 획득.
- 사용자 역할(role) 기반 권한 부여(Authorization) 검사.

사용자 계정은 외부 인증 서비스가 관리하므로, 이 서비스는 토큰 클레임
(sub, organization_id, roles)만 신뢰하며 DB 조회를 하지 않습니다.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from jose import jwt, JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, Field

from app.core.config import settings
from app import API_PREFIX

logger = logging.getLogger(__name__)

# 관리자 권한으로 인정하는 역할 목록
ADMIN_ROLES = {"ADMIN", "SUPER_ADMIN"}


class CurrentUser(BaseModel):
    """토큰에서 복원한 현재 사용자 정보입니다."""
    user_id: str = Field(description="사용자 ID (토큰 sub)")
    organization_id: Optional[str] = Field(default=None, description="소속 조직 ID")
    roles: List[str] = Field(default_factory=list, description="역할 목록")
    is_active: bool = Field(default=True, description="활성 여부")

    @property
    def is_admin(self) -> bool:
        return bool(ADMIN_ROLES.intersection(self.roles))


# --- OAuth2 스키마 설정 ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{API_PREFIX}/auth/token")


# --- JWT 토큰 생성 및 검증 ---
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Access Token을 생성합니다. (개발 및 테스트용, 운영 토큰은 인증 게이트웨이가 발급)
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


async def get_current_user_from_token(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """
    JWT 토큰을 디코딩하고 검증하여 현재 사용자를 반환합니다.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.debug("JWTError: %s", e)
        raise credentials_exception

    user_id: Optional[str] = payload.get("sub")
    if user_id is None:
        raise credentials_exception

    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]

    return CurrentUser(
        user_id=user_id,
        organization_id=payload.get("organization_id"),
        roles=[str(role).upper() for role in roles],
        is_active=payload.get("is_active", True),
    )


# --- 역할 기반 권한 부여 의존성 ---
def get_current_active_user(
    current_user: CurrentUser = Depends(get_current_user_from_token),
) -> CurrentUser:
    """
    현재 인증된 활성 사용자를 반환합니다.
    계정이 비활성화된 경우 400 Bad Request를 발생시킵니다.
    """
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return current_user


def get_current_admin_user(
    current_user: CurrentUser = Depends(get_current_active_user),
) -> CurrentUser:
    """
    현재 인증된 관리자 사용자를 반환합니다.
    관리자 권한이 없는 경우 403 Forbidden을 발생시킵니다.
    """
    if not current_user.is_admin:
        logger.info("User '%s' with roles %s denied admin access.", current_user.user_id, current_user.roles)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions. Admin role required."
        )
    return current_user
