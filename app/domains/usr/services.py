# app/domains/usr/services.py

"""
관리자 신원(usr)과 권한 범위(rgn)를 잇는 경계 서비스입니다.

레거시 숫자 값(user_type, admin_level)은 이 모듈에서만 ScopeLevel로 변환됩니다.
- user_type이 최고 관리자 값(settings.SUPER_ADMIN_USER_TYPE)이면 admin_level과 무관하게 UNRESTRICTED.
- 그 외에는 admin_level 1/2/3 -> PROVINCE/CITY/DISTRICT.
- 어느 쪽에도 해당하지 않으면 권한 범위 없음(None) -> 빈 트리.
"""

import logging
from datetime import datetime
from typing import Optional

from app.core.config import settings
from app.domains.rgn.cache import ScopeCache, ScopeRegistry
from app.domains.rgn.directory import RegionDirectory
from app.domains.rgn.models import SCOPE_REGION_LEVEL, ScopeLevel
from app.domains.rgn.options import format_full_address
from app.domains.rgn.tree import level_of_code
from . import models as usr_models
from . import schemas as usr_schemas


logger = logging.getLogger(__name__)

ADMIN_LEVEL_TO_SCOPE = {
    usr_models.AdminLevel.PROVINCE: ScopeLevel.PROVINCE,
    usr_models.AdminLevel.CITY: ScopeLevel.CITY,
    usr_models.AdminLevel.DISTRICT: ScopeLevel.DISTRICT,
}


def scope_level_from_legacy(user_type: Optional[int], admin_level: Optional[int]) -> Optional[ScopeLevel]:
    if user_type == settings.SUPER_ADMIN_USER_TYPE:
        if admin_level:
            # 두 권한 신호가 어긋나는 레코드: 최고 관리자 등급을 우선합니다.
            logger.warning(
                "Super admin user_type=%s also carries admin_level=%s; treating as unrestricted",
                user_type, admin_level,
            )
        return ScopeLevel.UNRESTRICTED
    return ADMIN_LEVEL_TO_SCOPE.get(admin_level)


def scope_level_for(admin: usr_models.Admin) -> Optional[ScopeLevel]:
    return scope_level_from_legacy(admin.user_type, admin.admin_level)


def legacy_user_type_for(super_admin: bool) -> int:
    """새 관리자 레코드에 기록할 user_type. 최고 관리자 값은 설정을 따릅니다."""
    return settings.SUPER_ADMIN_USER_TYPE if super_admin else usr_models.UserType.ADMIN


class AdminScopeError(ValueError):
    """관리자 레코드의 관할 이름이 권한 범위 단계까지 해석되지 않을 때 발생합니다."""


def validate_admin_scope(
    directory: RegionDirectory,
    user_type: Optional[int],
    admin_level: Optional[int],
    province: Optional[str] = None,
    city: Optional[str] = None,
    district: Optional[str] = None,
) -> str:
    """
    관리자 레코드를 저장하기 전에 관할 이름을 검증하고 앵커 코드를 반환합니다.

    범위 단계가 성/시/구인 경우, 이름이 그 단계의 노드까지 해석되어야 합니다.
    예를 들어 시 단위 관리자의 시 이름이 틀리면 성 코드로 후퇴하는데,
    이런 레코드는 로그인 시 빈 권한 범위가 되므로 저장 단계에서 거부합니다.
    최고 관리자와 범위 단계가 없는 관리자는 검증하지 않고 빈 문자열을 반환합니다.
    """
    level = scope_level_from_legacy(user_type, admin_level)
    if level is None or level == ScopeLevel.UNRESTRICTED:
        return ""

    code = directory.anchor_code_for(level, province or "", city or "", district or "")
    resolved = level_of_code(code)
    if resolved is None or resolved < SCOPE_REGION_LEVEL[level]:
        raise AdminScopeError(
            f"Region names do not resolve to a {level.value}: "
            f"province={province!r}, city={city!r}, district={district!r}"
        )
    return code


def populate_scope(cache: ScopeCache, admin: usr_models.Admin) -> None:
    """관리자 레코드로부터 세션의 권한 범위를 (다시) 채웁니다."""
    level = scope_level_for(admin)
    if level is None:
        logger.warning("Admin '%s' has no region scope (user_type=%s, admin_level=%s)",
                       admin.username, admin.user_type, admin.admin_level)
    subtree = cache.on_login_names(level, admin.province or "", admin.city or "", admin.district or "")
    logger.info("Scope loaded for '%s': level=%s, %d top-level region(s)",
                admin.username, level.value if level else None, len(subtree))


def open_scope_session(
    registry: ScopeRegistry, admin: usr_models.Admin, expires_at: Optional[datetime] = None
) -> str:
    """
    로그인 시 호출: 새 권한 범위 세션을 열고 채운 뒤 세션 ID를 반환합니다.
    expires_at에는 함께 발급되는 액세스 토큰의 만료 시각을 넘깁니다.
    """
    session_id, cache = registry.open(admin.id, expires_at=expires_at)
    populate_scope(cache, admin)
    return session_id


def refresh_admin_sessions(registry: ScopeRegistry, admin: usr_models.Admin) -> int:
    """관리자의 관할 정보가 바뀌었을 때 살아 있는 모든 세션의 범위를 재계산합니다."""
    caches = registry.sessions_for(admin.id)
    for cache in caches:
        populate_scope(cache, admin)
    return len(caches)


def build_scope_summary(cache: ScopeCache, admin: usr_models.Admin) -> usr_schemas.ScopeSummary:
    descriptor = cache.descriptor
    return usr_schemas.ScopeSummary(
        username=admin.username,
        user_type=admin.user_type,
        admin_level=admin.admin_level,
        scope_level=descriptor.level if descriptor else None,
        scope_code=descriptor.code if descriptor else "",
        scope_label=cache.anchor_label(),
        full_address=format_full_address(admin.province, admin.city, admin.district),
        department=admin.department,
    )
