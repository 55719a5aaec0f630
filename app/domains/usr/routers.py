# app/domains/usr/routers.py

"""
'usr' 도메인 (관리자 계정 및 인증)과 관련된 API 엔드포인트를 정의하는 모듈입니다.

로그인 시 권한 범위 세션이 열리고(ScopeCache 채움), 로그아웃 시 닫힙니다.
관리자의 관할 정보가 수정되면 그 관리자의 살아 있는 모든 세션이 재계산됩니다.
"""

import logging
from typing import List
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core import dependencies as deps
from app.domains.rgn.cache import ScopeCache, ScopeRegistry
from app.domains.rgn.directory import RegionDirectory

from . import crud as usr_crud
from . import models as usr_models
from . import schemas as usr_schemas
from . import services as usr_services


logger = logging.getLogger(__name__)

SCOPE_FIELDS = ("user_type", "admin_level", "province", "city", "district")


def _check_admin_scope(directory: RegionDirectory, **scope_fields) -> None:
    try:
        usr_services.validate_admin_scope(directory, **scope_fields)
    except usr_services.AdminScopeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


router = APIRouter(
    tags=["Admin & Auth Management (관리자 및 인증)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 인증 (Authentication) 엔드포인트
# =============================================================================
@router.post("/auth/token", response_model=usr_schemas.Token, summary="Access Token 획득")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(deps.get_session),
    registry: ScopeRegistry = Depends(deps.get_scope_registry),
):
    admin = await usr_crud.admin.authenticate(db, username=form_data.username, password=form_data.password)
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not admin.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")

    # 세션은 토큰과 같은 시각에 만료됩니다.
    expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expires_at = datetime.now(timezone.utc) + expires_delta
    session_id = usr_services.open_scope_session(registry, admin, expires_at=expires_at)
    access_token = deps.create_access_token(
        data={"sub": admin.username, "sid": session_id},
        expires_delta=expires_delta,
    )
    logger.info("Admin '%s' logged in (session %s)", admin.username, session_id)
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/auth/logout", status_code=status.HTTP_204_NO_CONTENT, summary="로그아웃 (권한 범위 세션 종료)")
async def logout(
    payload: usr_schemas.TokenPayload = Depends(deps.get_token_payload),
    registry: ScopeRegistry = Depends(deps.get_scope_registry),
):
    if not registry.close(payload.sid):
        logger.debug("Logout for already closed session %s", payload.sid)
    return None


@router.get("/auth/me", response_model=usr_schemas.AdminRead, summary="현재 관리자 정보 조회")
async def read_admin_me(current_admin: usr_models.Admin = Depends(deps.get_current_active_admin)):
    return current_admin


@router.get("/auth/me/scope", response_model=usr_schemas.ScopeSummary, summary="현재 관리자의 권한 범위 요약")
async def read_admin_me_scope(
    current_admin: usr_models.Admin = Depends(deps.get_current_active_admin),
    scope: ScopeCache = Depends(deps.get_current_scope),
):
    return usr_services.build_scope_summary(scope, current_admin)


# =============================================================================
# 2. 관리자 (Admin) 관리 엔드포인트 - 최고 관리자 전용
# =============================================================================
@router.post("/admins", response_model=usr_schemas.AdminRead, status_code=status.HTTP_201_CREATED, summary="새 관리자 생성")
async def create_admin(
    admin_in: usr_schemas.AdminCreate,
    db: AsyncSession = Depends(deps.get_session),
    directory: RegionDirectory = Depends(deps.get_region_directory),
    current_superadmin: usr_models.Admin = Depends(deps.get_current_superadmin),
):
    """관할 이름이 범위 단계까지 해석되지 않는 관리자는 만들 수 없습니다."""
    _check_admin_scope(directory, **admin_in.model_dump(include=set(SCOPE_FIELDS)))
    return await usr_crud.admin.create(db, obj_in=admin_in)


@router.get("/admins", response_model=List[usr_schemas.AdminRead], summary="관리자 목록 조회")
async def read_admins(
    db: AsyncSession = Depends(deps.get_session),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1),
    current_superadmin: usr_models.Admin = Depends(deps.get_current_superadmin),
):
    return await usr_crud.admin.get_multi(db, skip=skip, limit=limit)


@router.get("/admins/{admin_id}", response_model=usr_schemas.AdminRead, summary="특정 관리자 조회")
async def read_admin(
    admin_id: int,
    db: AsyncSession = Depends(deps.get_session),
    current_superadmin: usr_models.Admin = Depends(deps.get_current_superadmin),
):
    admin = await usr_crud.admin.get(db, admin_id)
    if not admin:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin not found")
    return admin


@router.put("/admins/{admin_id}", response_model=usr_schemas.AdminRead, summary="관리자 정보 수정")
async def update_admin(
    admin_id: int,
    admin_in: usr_schemas.AdminUpdate,
    db: AsyncSession = Depends(deps.get_session),
    registry: ScopeRegistry = Depends(deps.get_scope_registry),
    directory: RegionDirectory = Depends(deps.get_region_directory),
    current_superadmin: usr_models.Admin = Depends(deps.get_current_superadmin),
):
    """
    관리자 정보를 수정합니다.
    관할 필드(user_type, admin_level, province, city, district)가 바뀌면
    해당 관리자의 살아 있는 모든 세션의 권한 범위를 재계산합니다.
    비활성화되면 해당 관리자의 모든 세션을 닫습니다.
    """
    db_admin = await usr_crud.admin.get(db, admin_id)
    if not db_admin:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin not found")

    scope_changed = bool(admin_in.model_fields_set & set(SCOPE_FIELDS))
    if scope_changed:
        # 바뀌지 않은 관할 필드는 기존 레코드 값으로 채워 검증합니다.
        merged = {
            field: getattr(admin_in, field) if field in admin_in.model_fields_set else getattr(db_admin, field)
            for field in SCOPE_FIELDS
        }
        _check_admin_scope(directory, **merged)

    updated = await usr_crud.admin.update(db, db_obj=db_admin, obj_in=admin_in)

    if not updated.is_active:
        closed = registry.close_all_for(updated.id)
        logger.info("Admin '%s' deactivated; closed %d session(s)", updated.username, closed)
    elif scope_changed:
        refreshed = usr_services.refresh_admin_sessions(registry, updated)
        logger.info("Admin '%s' scope changed; refreshed %d session(s)", updated.username, refreshed)
    return updated


@router.delete("/admins/{admin_id}", status_code=status.HTTP_204_NO_CONTENT, summary="관리자 삭제")
async def delete_admin(
    admin_id: int,
    db: AsyncSession = Depends(deps.get_session),
    registry: ScopeRegistry = Depends(deps.get_scope_registry),
    current_superadmin: usr_models.Admin = Depends(deps.get_current_superadmin),
):
    if admin_id == current_superadmin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account.")

    await usr_crud.admin.remove(db, id=admin_id)
    registry.close_all_for(admin_id)
    return None
