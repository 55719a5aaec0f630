# app/domains/rgn/directory.py

"""
전체 행정구역 트리를 보관하고 조회 기능을 제공하는 파사드입니다.

애플리케이션 시작 시(lifespan) 한 번 생성되어 app.state에 저장되며,
이후에는 읽기 전용으로 모든 요청과 세션이 공유합니다.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from .models import RegionNode, ScopeDescriptor, ScopeLevel
from .resolver import resolve_code
from .scope import extract_scope, is_within_scope
from .tree import RegionSource, build_region_tree, count_nodes, find_label_by_code, find_node_by_code, load_region_source


class RegionDirectory:
    def __init__(self, tree: Sequence[RegionNode]):
        self._tree = tuple(tree)
        self._node_count = count_nodes(self._tree)

    @classmethod
    def from_source(cls, source: RegionSource, *, skip_empty_provinces: bool = False) -> "RegionDirectory":
        return cls(build_region_tree(source, skip_empty_provinces=skip_empty_provinces))

    @classmethod
    def from_file(cls, path: Union[str, Path], *, skip_empty_provinces: bool = False) -> "RegionDirectory":
        """번들된 JSON 파일로부터 트리를 만듭니다. 구조 오류는 MalformedSourceData로 전파됩니다."""
        return cls.from_source(load_region_source(path), skip_empty_provinces=skip_empty_provinces)

    @property
    def node_count(self) -> int:
        return self._node_count

    def full_tree(self) -> List[RegionNode]:
        return list(self._tree)

    def resolve_code(self, province: str, city: str = "", district: str = "") -> str:
        return resolve_code(self._tree, province, city, district)

    def anchor_code_for(self, level: ScopeLevel, province: str = "", city: str = "", district: str = "") -> str:
        """
        관리자 레코드의 이름들을 범위 단계에 맞는 앵커 코드로 해석합니다.
        범위 단계보다 하위의 이름은 무시합니다. (예: 성 단위 관리자의 시 이름)
        UNRESTRICTED는 앵커가 없으므로 빈 문자열입니다.
        """
        if level == ScopeLevel.UNRESTRICTED:
            return ""
        if level == ScopeLevel.PROVINCE:
            city = district = ""
        elif level == ScopeLevel.CITY:
            district = ""
        return self.resolve_code(province or "", city or "", district or "")

    def find_node(self, code: str) -> Optional[RegionNode]:
        return find_node_by_code(self._tree, code)

    def find_label_by_code(self, code: str) -> str:
        return find_label_by_code(self._tree, code)

    def extract_scope(self, scope: ScopeDescriptor) -> List[RegionNode]:
        return extract_scope(self._tree, scope)

    def is_within_scope(self, code: str, scope: ScopeDescriptor) -> bool:
        return is_within_scope(self._tree, code, scope)
