# app/domains/rgn/cache.py

"""
로그인 세션별 권한 범위 상태를 보관하는 모듈입니다.

- ScopeCache: 한 세션의 ScopeDescriptor와 추출된 부분 트리를 보관합니다.
  로그인(on_login), 신원 변경 시 재계산(refresh), 로그아웃(on_logout)을
  명시적인 수명 주기 호출로 처리합니다.
- ScopeRegistry: 세션 ID -> ScopeCache 매핑. 세션끼리 상태를 공유하지 않으며, 토큰이 만료된 세션은 정리됩니다.

채워지기 전이나 로그아웃 후의 조회는 항상 빈 트리를 반환합니다 (fail-closed).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .directory import RegionDirectory
from .models import RegionNode, ScopeDescriptor, ScopeLevel
from .scope import contains_code


logger = logging.getLogger(__name__)


class ScopeCache:
    def __init__(self, directory: RegionDirectory):
        self._directory = directory
        self._descriptor: Optional[ScopeDescriptor] = None
        self._subtree: List[RegionNode] = []

    @property
    def descriptor(self) -> Optional[ScopeDescriptor]:
        return self._descriptor

    @property
    def scoped_tree(self) -> List[RegionNode]:
        return list(self._subtree)

    @property
    def is_populated(self) -> bool:
        return self._descriptor is not None

    def on_login(self, descriptor: Optional[ScopeDescriptor]) -> List[RegionNode]:
        """
        권한 범위를 저장하고 부분 트리를 새로 추출합니다.
        descriptor가 None이면 (권한 범위 없음) 빈 상태로 둡니다.
        """
        self._descriptor = descriptor
        return self.refresh()

    def on_login_names(
        self, level: Optional[ScopeLevel], province: str = "", city: str = "", district: str = ""
    ) -> List[RegionNode]:
        """
        관리자 레코드의 성/시/구 이름을 앵커 코드로 해석하여 로그인 처리합니다.
        """
        if level is None:
            return self.on_login(None)
        if level == ScopeLevel.UNRESTRICTED:
            return self.on_login(ScopeDescriptor(level=level))

        code = self._directory.anchor_code_for(level, province, city, district)
        return self.on_login(ScopeDescriptor(level=level, code=code))

    def refresh(self) -> List[RegionNode]:
        """저장된 권한 범위로 부분 트리를 다시 계산합니다."""
        if self._descriptor is None:
            self._subtree = []
        else:
            self._subtree = self._directory.extract_scope(self._descriptor)
        return self.scoped_tree

    def on_logout(self) -> None:
        self._descriptor = None
        self._subtree = []

    def is_within_scope(self, code: str) -> bool:
        if self._descriptor is None:
            return False
        if self._descriptor.level == ScopeLevel.UNRESTRICTED:
            return True
        return contains_code(self._subtree, code)

    def anchor_label(self) -> str:
        if self._descriptor is None or self._descriptor.level == ScopeLevel.UNRESTRICTED:
            return ""
        return self._directory.find_label_by_code(self._descriptor.code)


class ScopeRegistry:
    """
    세션 ID별 ScopeCache 보관소입니다.
    한 관리자가 여러 세션(브라우저 탭, 기기)을 가질 수 있으므로 관리자 ID도 함께 기록합니다.

    세션은 발급된 토큰의 만료 시각(expires_at)을 함께 기록하며,
    만료된 세션은 open()/get()/sessions_for() 호출 시 정리됩니다.
    """

    def __init__(self, directory: RegionDirectory):
        self._directory = directory
        self._caches: Dict[str, ScopeCache] = {}
        self._owners: Dict[str, int] = {}
        self._expires: Dict[str, Optional[datetime]] = {}

    def __len__(self) -> int:
        return len(self._caches)

    def open(self, admin_id: int, expires_at: Optional[datetime] = None) -> tuple[str, ScopeCache]:
        """새 세션 ID와 비어 있는 ScopeCache를 만듭니다. expires_at이 None이면 만료되지 않습니다."""
        self.purge_expired()
        session_id = uuid.uuid4().hex
        cache = ScopeCache(self._directory)
        self._caches[session_id] = cache
        self._owners[session_id] = admin_id
        self._expires[session_id] = expires_at
        logger.debug("Scope session opened: %s (admin_id=%s, expires_at=%s)", session_id, admin_id, expires_at)
        return session_id, cache

    def get(self, session_id: str) -> Optional[ScopeCache]:
        self.purge_expired()
        return self._caches.get(session_id)

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        """만료 시각이 지난 세션을 모두 닫고, 닫은 개수를 반환합니다."""
        now = now or datetime.now(timezone.utc)
        expired = [sid for sid, expires_at in self._expires.items() if expires_at is not None and expires_at <= now]
        for sid in expired:
            self.close(sid)
        if expired:
            logger.info("Purged %d expired scope session(s)", len(expired))
        return len(expired)

    def close(self, session_id: str) -> bool:
        cache = self._caches.pop(session_id, None)
        self._owners.pop(session_id, None)
        self._expires.pop(session_id, None)
        if cache is None:
            return False
        cache.on_logout()
        logger.debug("Scope session closed: %s", session_id)
        return True

    def sessions_for(self, admin_id: int) -> List[ScopeCache]:
        self.purge_expired()
        return [self._caches[sid] for sid, owner in self._owners.items() if owner == admin_id]

    def close_all_for(self, admin_id: int) -> int:
        session_ids = [sid for sid, owner in self._owners.items() if owner == admin_id]
        for sid in session_ids:
            self.close(sid)
        return len(session_ids)
