# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 (database.get_session 재노출).
- 현재 인증된 관리자 (security.py 재노출).
- 애플리케이션 수명 동안 공유되는 행정구역 트리(RegionDirectory)와
  세션별 권한 범위 레지스트리(ScopeRegistry).
- 현재 토큰의 세션에 해당하는 ScopeCache.
"""

from fastapi import Depends, HTTPException, Request, status

from app.core.database import get_session  # noqa: F401
# flake8: noqa
from app.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    oauth2_scheme,
    get_token_payload,
    get_current_admin_from_token,
    get_current_active_admin,
    get_current_superadmin,
)
from app.domains.rgn.cache import ScopeCache, ScopeRegistry
from app.domains.rgn.directory import RegionDirectory
from app.domains.usr import schemas as usr_schemas


def get_region_directory(request: Request) -> RegionDirectory:
    """lifespan에서 만든 전체 행정구역 트리"""
    return request.app.state.region_directory


def get_scope_registry(request: Request) -> ScopeRegistry:
    return request.app.state.scope_registry


def get_current_scope(
    payload: usr_schemas.TokenPayload = Depends(get_token_payload),
    registry: ScopeRegistry = Depends(get_scope_registry),
) -> ScopeCache:
    """
    토큰의 세션 ID(sid)에 해당하는 ScopeCache를 반환합니다.
    로그아웃 등으로 세션이 닫혔다면 토큰이 만료 전이어도 401을 발생시킵니다.
    """
    cache = registry.get(payload.sid)
    if cache is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Scope session is closed. Please log in again.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return cache
