# app/domains/rgn/options.py

"""
권한 범위 안에서 동작하는 화면 보조 기능입니다.

- select_options: 성 -> 시 -> 구 연쇄 선택 상자의 옵션 (범위 밖 구역은 나오지 않음)
- check_area_permission: 이름으로 지정된 구역이 범위 안에 있는지 확인
- area_filter_for: 지역 코드를 목록 검색용 (성, 시, 구) 필터로 변환
- format_full_address: 비어 있지 않은 이름만 공백으로 이어 붙인 주소
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel

from .models import RegionLevel, RegionNode
from .tree import find_child, level_of_code


class AreaOptions(BaseModel):
    provinces: List[str] = []
    cities: List[str] = []
    districts: List[str] = []


class AreaFilter(BaseModel):
    province: str = ""
    city: str = ""
    district: str = ""


def _labels(nodes: Optional[Sequence[RegionNode]]) -> List[str]:
    return [node.label for node in nodes or ()]


def select_options(scoped_tree: Sequence[RegionNode], province: str = "", city: str = "") -> AreaOptions:
    """
    선택된 성/시 이름에 따라 다음 단계의 옵션을 채웁니다.
    성이 선택되지 않으면 시/구 옵션은 비어 있고, 시가 선택되지 않으면 구 옵션은 비어 있습니다.
    """
    options = AreaOptions(provinces=_labels(scoped_tree))
    if not province:
        return options

    province_node = find_child(scoped_tree, label=province)
    if province_node is None:
        return options
    options.cities = _labels(province_node.children)
    if not city:
        return options

    city_node = find_child(province_node.children, label=city)
    if city_node is not None:
        options.districts = _labels(city_node.children)
    return options


def check_area_permission(scoped_tree: Sequence[RegionNode], province: str, city: str = "", district: str = "") -> bool:
    """
    지정된 가장 하위 단계까지 범위 트리에 존재하면 True.
    범위 트리가 비어 있으면 항상 False 입니다.
    """
    province_node = find_child(scoped_tree, label=province)
    if province_node is None:
        return False
    if not city:
        return True

    city_node = find_child(province_node.children, label=city)
    if city_node is None:
        return False
    if not district:
        return True

    return find_child(city_node.children, label=district) is not None


def area_filter_for(code: str, label: str) -> AreaFilter:
    """
    코드 단계에 해당하는 필드 하나만 채운 검색 필터를 만듭니다.
    (예: '010000' -> province, '010100' -> city, '010101' -> district)
    """
    level = level_of_code(code)
    if level == RegionLevel.PROVINCE:
        return AreaFilter(province=label)
    if level == RegionLevel.CITY:
        return AreaFilter(city=label)
    if level == RegionLevel.DISTRICT:
        return AreaFilter(district=label)
    return AreaFilter()


def format_full_address(*parts: Optional[str]) -> str:
    return " ".join(part for part in parts if part)
