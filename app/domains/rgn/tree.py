# app/domains/rgn/tree.py

"""
행정구역 원천 데이터를 3단계 트리로 변환하고, 트리를 탐색하는 유틸리티 모듈입니다.

- 원천 데이터: {성 이름: {시 이름: [구 이름, ...]}} 형태의 평면 매핑.
- 코드 규칙: 성 서수(2자리) + 시 서수(2자리, 성이면 00) + 구 서수(2자리, 성/시이면 00).
- 서수는 1부터 시작하며 부모마다 다시 1부터 셉니다. 정렬하지 않습니다.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, Union

from .exceptions import MalformedSourceData
from .models import CODE_LENGTH, NO_MATCH_CODE, RegionLevel, RegionNode


logger = logging.getLogger(__name__)

RegionSource = Mapping[str, Mapping[str, Sequence[str]]]

# 두 자리 서수로 표현 가능한 최대 형제 수
MAX_ORDINAL = 99


# =============================================================================
# 1. 코드 유틸리티
# =============================================================================
def format_code(province: int, city: int = 0, district: int = 0) -> str:
    """서수를 6자리 지역 코드로 변환합니다. (예: 1, 1, 2 -> '010102')"""
    return f"{province:02d}{city:02d}{district:02d}"


def province_code_of(code: str) -> str:
    """코드의 시/구 자리를 0으로 채워 소속 성 코드를 만듭니다."""
    return code[:2] + "0000"


def city_code_of(code: str) -> str:
    """코드의 구 자리를 0으로 채워 소속 시 코드를 만듭니다."""
    return code[:4] + "00"


def level_of_code(code: str) -> Optional[RegionLevel]:
    """
    코드 형태만 보고 행정구역 단계를 판별합니다.
    형식이 잘못되었거나 NO_MATCH_CODE이면 None을 반환합니다.
    """
    if len(code) != CODE_LENGTH or not code.isdigit() or code == NO_MATCH_CODE:
        return None
    if code[:2] == "00":
        return None
    if code[2:] == "0000":
        return RegionLevel.PROVINCE
    if code[2:4] == "00":
        # 시 자리가 00인데 구 자리가 채워진 코드는 존재할 수 없습니다.
        return None
    if code[4:] == "00":
        return RegionLevel.CITY
    return RegionLevel.DISTRICT


# =============================================================================
# 2. 원천 데이터 로드 및 트리 생성
# =============================================================================
def load_region_source(path: Union[str, Path]) -> RegionSource:
    """
    번들된 JSON 파일에서 원천 데이터를 읽습니다.
    JSON 객체의 키 순서는 dict 삽입 순서로 그대로 보존됩니다.
    """
    with open(path, "r", encoding="utf-8") as f:
        source = json.load(f)
    if not isinstance(source, Mapping):
        raise MalformedSourceData(f"Region source '{path}' must be a JSON object of provinces")
    return source


def _checked_label(label: object, what: str) -> str:
    if not isinstance(label, str) or not label.strip():
        raise MalformedSourceData(f"Invalid {what} name: {label!r}")
    return label


def _check_sibling_count(count: int, what: str) -> None:
    if count > MAX_ORDINAL:
        raise MalformedSourceData(f"Too many {what} ({count}); region codes allow at most {MAX_ORDINAL}")


def build_region_tree(source: RegionSource, *, skip_empty_provinces: bool = False) -> List[RegionNode]:
    """
    원천 데이터를 성 -> 시 -> 구 트리로 변환하고 모든 노드에 코드를 부여합니다.

    시가 하나도 없는 성은 코드 기준이 모호하므로 MalformedSourceData를 발생시킵니다.
    `skip_empty_provinces=True`이면 해당 성을 경고 로그와 함께 건너뛰되,
    서수는 그대로 소비하여 나머지 성의 코드가 밀리지 않도록 합니다.
    """
    if not isinstance(source, Mapping):
        raise MalformedSourceData("Region source must be a mapping of province names")
    _check_sibling_count(len(source), "provinces")

    tree: List[RegionNode] = []
    city_count = district_count = 0

    for p, (province_name, cities) in enumerate(source.items(), start=1):
        province_name = _checked_label(province_name, "province")
        if not isinstance(cities, Mapping):
            raise MalformedSourceData(f"Cities of province '{province_name}' must be a mapping")
        if not cities:
            if skip_empty_provinces:
                logger.warning("Skipping province '%s' (ordinal %02d): no cities", province_name, p)
                continue
            raise MalformedSourceData(f"Province '{province_name}' has no cities")
        _check_sibling_count(len(cities), f"cities in '{province_name}'")

        city_nodes: List[RegionNode] = []
        for c, (city_name, districts) in enumerate(cities.items(), start=1):
            city_name = _checked_label(city_name, "city")
            if isinstance(districts, (str, bytes)) or not isinstance(districts, Sequence):
                raise MalformedSourceData(f"Districts of city '{city_name}' must be a list of names")
            _check_sibling_count(len(districts), f"districts in '{city_name}'")

            district_nodes = tuple(
                RegionNode(
                    label=_checked_label(district_name, "district"),
                    code=format_code(p, c, d),
                    level=RegionLevel.DISTRICT,
                )
                for d, district_name in enumerate(districts, start=1)
            )
            district_count += len(district_nodes)
            city_nodes.append(
                RegionNode(label=city_name, code=format_code(p, c), level=RegionLevel.CITY, children=district_nodes)
            )

        city_count += len(city_nodes)
        tree.append(
            RegionNode(label=province_name, code=format_code(p), level=RegionLevel.PROVINCE, children=tuple(city_nodes))
        )

    logger.info(
        "Region tree built: %d provinces, %d cities, %d districts",
        len(tree), city_count, district_count,
    )
    return tree


# =============================================================================
# 3. 트리 탐색
# =============================================================================
def iter_nodes(nodes: Iterable[RegionNode]) -> Iterator[RegionNode]:
    """깊이 우선(전위) 순서로 모든 노드를 순회합니다."""
    for node in nodes:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def count_nodes(nodes: Iterable[RegionNode]) -> int:
    return sum(1 for _ in iter_nodes(nodes))


def find_node_by_code(nodes: Iterable[RegionNode], code: str) -> Optional[RegionNode]:
    """깊이 우선 탐색으로 코드가 일치하는 첫 노드를 찾습니다."""
    for node in iter_nodes(nodes):
        if node.code == code:
            return node
    return None


def find_label_by_code(nodes: Iterable[RegionNode], code: str) -> str:
    """코드에 해당하는 표시 이름을 반환합니다. 없으면 빈 문자열."""
    node = find_node_by_code(nodes, code)
    return node.label if node else ""


def find_child(
    nodes: Optional[Iterable[RegionNode]], *, code: Optional[str] = None, label: Optional[str] = None
) -> Optional[RegionNode]:
    """
    한 단계의 형제 노드 중 코드 또는 이름이 일치하는 첫 노드를 찾습니다.
    이름 비교는 대소문자를 구분하는 정확한 일치입니다.
    """
    for node in nodes or ():
        if code is not None and node.code == code:
            return node
        if label is not None and node.label == label:
            return node
    return None
