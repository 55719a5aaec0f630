# app/domains/rgn/schemas.py

"""
'rgn' 도메인의 API 응답 스키마입니다.
트리 노드 자체는 models.RegionNode를 그대로 응답 모델로 사용합니다.
"""

from typing import List, Optional

from pydantic import BaseModel

from .models import RegionNode, ScopeLevel


class ScopedTreeRead(BaseModel):
    """현재 세션의 권한 범위와 부분 트리. 범위가 없으면 regions는 빈 리스트입니다."""
    level: Optional[ScopeLevel] = None
    code: str = ""
    label: str = ""
    regions: List[RegionNode] = []


class RegionCodeRead(BaseModel):
    code: str
    label: str = ""


class WithinScopeRead(BaseModel):
    code: str
    within_scope: bool


class PermissionCheckRead(BaseModel):
    province: str
    city: str = ""
    district: str = ""
    allowed: bool
