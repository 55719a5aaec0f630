# app/domains/rgn/models.py

"""
'rgn' 도메인의 메모리 내 데이터 모델을 정의하는 모듈입니다.

다른 도메인과 달리 테이블 모델이 아니라 불변(frozen) Pydantic 모델입니다.
전체 트리는 한 번 만들어진 뒤 여러 세션이 읽기 전용으로 공유하므로,
범위 추출 시에는 노드를 수정하지 않고 model_copy()로 잘라낸 사본을 만듭니다.
"""

from enum import Enum, IntEnum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# 지역 코드는 항상 6자리 (성 2 + 시 2 + 구 2)
CODE_LENGTH = 6
# 이름 조회에서 성을 찾지 못했을 때 반환하는 코드
NO_MATCH_CODE = "000000"


class RegionLevel(IntEnum):
    """행정구역 단계 (1-성, 2-시, 3-구)"""
    PROVINCE = 1
    CITY = 2
    DISTRICT = 3


class ScopeLevel(str, Enum):
    """
    관리자 권한 범위 단계입니다.
    레거시 숫자 값(user_type, admin_level)은 usr 도메인 경계에서만 이 값으로 변환됩니다.
    """
    UNRESTRICTED = "unrestricted"
    PROVINCE = "province"
    CITY = "city"
    DISTRICT = "district"


# 범위 단계별로 앵커 코드가 가리켜야 하는 행정구역 단계
SCOPE_REGION_LEVEL = {
    ScopeLevel.PROVINCE: RegionLevel.PROVINCE,
    ScopeLevel.CITY: RegionLevel.CITY,
    ScopeLevel.DISTRICT: RegionLevel.DISTRICT,
}


class RegionNode(BaseModel):
    """
    행정구역 트리의 노드입니다.
    - `children`은 성/시 노드에만 존재하는 튜플이며 원천 데이터 순서를 그대로 따릅니다.
      노드는 요청과 세션 사이에서 공유되므로 하위 목록까지 불변이어야 합니다.
    - 구(District) 노드의 `children`은 None 입니다.
    """
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1, description="표시 이름")
    code: str = Field(..., min_length=CODE_LENGTH, max_length=CODE_LENGTH, description="6자리 지역 코드")
    level: RegionLevel = Field(..., description="행정구역 단계")
    children: Optional[Tuple["RegionNode", ...]] = Field(default=None, description="하위 구역 (원천 데이터 순서)")


RegionNode.model_rebuild()


class ScopeDescriptor(BaseModel):
    """
    관리자의 권한 범위입니다.
    `level`이 UNRESTRICTED이면 `code`는 의미가 없습니다.
    """
    model_config = ConfigDict(frozen=True)

    level: ScopeLevel
    code: str = ""
