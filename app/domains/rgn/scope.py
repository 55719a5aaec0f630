# app/domains/rgn/scope.py

"""
관리자 권한 범위(ScopeDescriptor)를 전체 트리에 적용하는 모듈입니다.

- extract_scope: 범위에 해당하는 부분 트리(ScopeSubtree)를 만듭니다.
- is_within_scope: 대상 코드가 범위 안에 있는지 판정합니다.

조회 실패는 예외 대신 빈 리스트로 반환합니다 (fail-closed).
호출자는 빈 결과를 "접근 가능한 구역 없음"으로 취급해야 하며,
절대 전체 트리로 대체해서는 안 됩니다.
"""

import logging
from typing import List, Sequence

from .models import RegionNode, ScopeDescriptor, ScopeLevel
from .tree import city_code_of, find_child, iter_nodes, province_code_of


logger = logging.getLogger(__name__)


def _province_scope(tree: Sequence[RegionNode], code: str) -> List[RegionNode]:
    # 성 단위 관리자는 성 아래 모든 시/구를 봅니다.
    province = find_child(tree, code=code)
    return [province] if province else []


def _city_scope(tree: Sequence[RegionNode], code: str) -> List[RegionNode]:
    province = find_child(tree, code=province_code_of(code))
    if province is None:
        return []
    city = find_child(province.children, code=code)
    if city is None:
        return []
    return [province.model_copy(update={"children": (city,)})]


def _district_scope(tree: Sequence[RegionNode], code: str) -> List[RegionNode]:
    province = find_child(tree, code=province_code_of(code))
    if province is None:
        return []
    city = find_child(province.children, code=city_code_of(code))
    if city is None:
        return []
    district = find_child(city.children, code=code)
    if district is None:
        return []
    return [province.model_copy(update={"children": (city.model_copy(update={"children": (district,)}),)})]


_EXTRACTORS = {
    ScopeLevel.PROVINCE: _province_scope,
    ScopeLevel.CITY: _city_scope,
    ScopeLevel.DISTRICT: _district_scope,
}


def extract_scope(tree: Sequence[RegionNode], scope: ScopeDescriptor) -> List[RegionNode]:
    """
    권한 범위에 해당하는 부분 트리를 반환합니다.
    - UNRESTRICTED: 전체 트리
    - PROVINCE: [성] (하위 전체 포함)
    - CITY: [성(children=[시])] (시 아래 구 전체 포함)
    - DISTRICT: [성(children=[시(children=[구])])]
    코드가 트리에서 해석되지 않으면 빈 리스트를 반환합니다.
    """
    if scope.level == ScopeLevel.UNRESTRICTED:
        return list(tree)

    subtree = _EXTRACTORS[scope.level](tree, scope.code)
    if not subtree:
        logger.warning("Unresolved scope: level=%s code=%r", scope.level.value, scope.code)
    return subtree


def contains_code(nodes: Sequence[RegionNode], code: str) -> bool:
    """부분 트리 안에 (앵커 노드를 포함하여) 코드가 존재하는지 재귀적으로 확인합니다."""
    return any(node.code == code for node in iter_nodes(nodes))


def is_within_scope(tree: Sequence[RegionNode], code: str, scope: ScopeDescriptor) -> bool:
    """대상 코드가 권한 범위의 앵커 노드 또는 그 하위에 있으면 True."""
    if scope.level == ScopeLevel.UNRESTRICTED:
        return True
    return contains_code(extract_scope(tree, scope), code)
