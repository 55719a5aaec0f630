# app/core/security.py

"""
애플리케이션의 보안 관련 유틸리티 함수 및 의존성 주입을 정의하는 모듈입니다.

- 비밀번호 해싱 및 검증.
- JWT(JSON Web Token) 생성 및 검증. 토큰에는 권한 범위 세션 ID(`sid`)가 함께 담깁니다.
- OAuth2 Password Bearer 스키마를 사용하여 현재 관리자 획득.
- 관리자 등급(최고 관리자 여부) 기반 권한 검사.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app import API_PREFIX
from app.core.config import settings
from app.core.database import get_session
from app.domains.rgn.models import ScopeLevel
from app.domains.usr import models as usr_models
from app.domains.usr import schemas as usr_schemas
from app.domains.usr.services import scope_level_for


logger = logging.getLogger(__name__)

# --- 비밀번호 해싱 설정 ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# --- OAuth2 스키마 설정 ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{API_PREFIX}/usr/auth/token")

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


# --- JWT 토큰 생성 및 검증 ---
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Access Token을 생성합니다.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


def get_token_payload(token: str = Depends(oauth2_scheme)) -> usr_schemas.TokenPayload:
    """토큰을 디코딩하여 사용자명(sub)과 세션 ID(sid)를 꺼냅니다."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM])
        return usr_schemas.TokenPayload(**payload)
    except (JWTError, ValidationError) as e:
        logger.debug("Rejected token: %s", e)
        raise credentials_exception


async def get_current_admin_from_token(
    payload: usr_schemas.TokenPayload = Depends(get_token_payload),
    db: AsyncSession = Depends(get_session),
) -> usr_models.Admin:
    """토큰의 사용자명으로 데이터베이스에서 관리자를 조회합니다."""
    statement = select(usr_models.Admin).where(usr_models.Admin.username == payload.sub)
    result = await db.execute(statement)
    admin = result.scalars().one_or_none()
    if admin is None:
        raise credentials_exception
    return admin


# --- 등급 기반 권한 부여 의존성 ---
def get_current_active_admin(
    current_admin: usr_models.Admin = Depends(get_current_admin_from_token),
) -> usr_models.Admin:
    """
    현재 인증된 활성 관리자를 반환합니다.
    계정이 비활성화된 경우 400 Bad Request를 발생시킵니다.
    """
    if not current_admin.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return current_admin


def get_current_superadmin(
    current_admin: usr_models.Admin = Depends(get_current_active_admin),
) -> usr_models.Admin:
    """
    전체 구역 권한(UNRESTRICTED)을 가진 최고 관리자만 통과시킵니다.
    그렇지 않으면 403 Forbidden을 발생시킵니다.
    """
    if scope_level_for(current_admin) != ScopeLevel.UNRESTRICTED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions. Super admin required."
        )
    return current_admin
