# app/domains/rgn/resolver.py

"""
성/시/구 이름을 트리에서 도달 가능한 가장 구체적인 지역 코드로 변환합니다.
"""

import logging
from typing import Sequence

from .models import NO_MATCH_CODE, RegionNode
from .tree import find_child


logger = logging.getLogger(__name__)


def resolve_code(tree: Sequence[RegionNode], province: str, city: str = "", district: str = "") -> str:
    """
    - 성을 찾지 못하면 NO_MATCH_CODE('000000')를 반환합니다.
    - 시 이름이 비었거나 성 아래에 없으면 성 코드를 반환합니다.
    - 구 이름이 비었거나 시 아래에 없으면 시 코드를 반환합니다.
    - 그 외에는 구 코드를 반환합니다.
    예외를 발생시키지 않습니다.
    """
    province_node = find_child(tree, label=province) if province else None
    if province_node is None:
        logger.debug("Province lookup miss: %r", province)
        return NO_MATCH_CODE
    if not city:
        return province_node.code

    city_node = find_child(province_node.children, label=city)
    if city_node is None:
        logger.debug("City lookup miss: %r under %s", city, province_node.code)
        return province_node.code
    if not district:
        return city_node.code

    district_node = find_child(city_node.children, label=district)
    if district_node is None:
        logger.debug("District lookup miss: %r under %s", district, city_node.code)
        return city_node.code
    return district_node.code
