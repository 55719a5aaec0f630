# app/domains/rgn/routers.py

"""
'rgn' 도메인 (행정구역 권한 범위)의 API 엔드포인트를 정의하는 모듈입니다.

- 전체 트리는 최고 관리자만 조회할 수 있습니다.
- 그 외 엔드포인트는 토큰의 세션(ScopeCache)을 기준으로 동작하며,
  범위가 비어 있으면 200과 함께 빈 결과를 돌려줍니다 (전체 트리로 대체하지 않음).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core import dependencies as deps
from app.domains.usr import models as usr_models
from app.domains.usr import services as usr_services

from .cache import ScopeCache
from .directory import RegionDirectory
from .models import RegionNode
from .options import AreaFilter, AreaOptions, area_filter_for, check_area_permission, select_options
from . import schemas as rgn_schemas


router = APIRouter(
    tags=["Region Scope (행정구역 권한 범위)"],
    responses={404: {"description": "Not found"}},
)


def _scoped_tree_read(scope: ScopeCache) -> rgn_schemas.ScopedTreeRead:
    descriptor = scope.descriptor
    return rgn_schemas.ScopedTreeRead(
        level=descriptor.level if descriptor else None,
        code=descriptor.code if descriptor else "",
        label=scope.anchor_label(),
        regions=scope.scoped_tree,
    )


# =============================================================================
# 1. 트리 조회
# =============================================================================
@router.get("/tree", response_model=List[RegionNode], response_model_exclude_none=True, summary="전체 행정구역 트리 조회")
async def read_full_tree(
    directory: RegionDirectory = Depends(deps.get_region_directory),
    current_superadmin: usr_models.Admin = Depends(deps.get_current_superadmin),
):
    return directory.full_tree()


@router.get("/scoped-tree", response_model=rgn_schemas.ScopedTreeRead, response_model_exclude_none=True, summary="권한 범위 내 트리 조회")
async def read_scoped_tree(scope: ScopeCache = Depends(deps.get_current_scope)):
    return _scoped_tree_read(scope)


@router.post("/scoped-tree/refresh", response_model=rgn_schemas.ScopedTreeRead, response_model_exclude_none=True, summary="권한 범위 재계산")
async def refresh_scoped_tree(
    current_admin: usr_models.Admin = Depends(deps.get_current_active_admin),
    scope: ScopeCache = Depends(deps.get_current_scope),
):
    """관리자 레코드의 현재 관할 정보로 이 세션의 권한 범위를 다시 채웁니다."""
    usr_services.populate_scope(scope, current_admin)
    return _scoped_tree_read(scope)


# =============================================================================
# 2. 코드 / 이름 조회
# =============================================================================
@router.get("/resolve", response_model=rgn_schemas.RegionCodeRead, summary="성/시/구 이름으로 지역 코드 조회")
async def resolve_region_code(
    province: str = Query(..., description="성 이름"),
    city: str = Query("", description="시 이름 (선택)"),
    district: str = Query("", description="구 이름 (선택)"),
    directory: RegionDirectory = Depends(deps.get_region_directory),
    current_admin: usr_models.Admin = Depends(deps.get_current_active_admin),
):
    """
    가장 구체적으로 일치하는 코드를 반환합니다.
    성을 찾지 못하면 '000000'과 빈 이름을 반환합니다.
    """
    code = directory.resolve_code(province, city, district)
    return rgn_schemas.RegionCodeRead(code=code, label=directory.find_label_by_code(code))


@router.get("/labels/{code}", response_model=rgn_schemas.RegionCodeRead, summary="지역 코드로 이름 조회")
async def read_region_label(
    code: str,
    directory: RegionDirectory = Depends(deps.get_region_directory),
    current_admin: usr_models.Admin = Depends(deps.get_current_active_admin),
):
    return rgn_schemas.RegionCodeRead(code=code, label=directory.find_label_by_code(code))


# =============================================================================
# 3. 권한 판정 및 화면 보조
# =============================================================================
@router.get("/within-scope/{code}", response_model=rgn_schemas.WithinScopeRead, summary="지역 코드 권한 판정")
async def read_within_scope(code: str, scope: ScopeCache = Depends(deps.get_current_scope)):
    return rgn_schemas.WithinScopeRead(code=code, within_scope=scope.is_within_scope(code))


@router.get("/permission-check", response_model=rgn_schemas.PermissionCheckRead, summary="성/시/구 이름 권한 판정")
async def check_permission_by_names(
    province: str = Query(...),
    city: str = Query(""),
    district: str = Query(""),
    scope: ScopeCache = Depends(deps.get_current_scope),
):
    allowed = check_area_permission(scope.scoped_tree, province, city, district)
    return rgn_schemas.PermissionCheckRead(province=province, city=city, district=district, allowed=allowed)


@router.get("/options", response_model=AreaOptions, summary="권한 범위 내 연쇄 선택 옵션")
async def read_area_options(
    province: str = Query(""),
    city: str = Query(""),
    scope: ScopeCache = Depends(deps.get_current_scope),
):
    return select_options(scope.scoped_tree, province, city)


@router.get("/filters/{code}", response_model=AreaFilter, summary="지역 코드를 검색 필터로 변환")
async def read_area_filter(
    code: str,
    directory: RegionDirectory = Depends(deps.get_region_directory),
    scope: ScopeCache = Depends(deps.get_current_scope),
):
    """범위 밖이거나 존재하지 않는 코드는 404로 응답합니다."""
    label = directory.find_label_by_code(code)
    if not label or not scope.is_within_scope(code):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Region not found in scope")
    return area_filter_for(code, label)
