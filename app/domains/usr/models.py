# app/domains/usr/models.py

"""
'usr' 도메인 (PostgreSQL 'usr' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

관리자 계정(usr.admins)은 레거시 관리 콘솔의 필드를 그대로 유지합니다.
- `user_type`: 관리자 등급 (숫자, 2 = 최고 관리자)
- `admin_level`: 관할 단계 (숫자, 1 = 성, 2 = 시, 3 = 구)
- `province` / `city` / `district`: 관할 구역의 이름 (코드가 아님)
이 숫자 값들은 services.scope_level_from_legacy()에서만 ScopeLevel로 변환됩니다.
"""

from typing import Optional
from datetime import datetime, UTC
from enum import IntEnum
from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


class UserType(IntEnum):
    """레거시 관리자 등급 (DB에는 정수로 저장)"""
    GENERAL = 0       # 일반 사용자 (캐비닛 사용자)
    ADMIN = 1         # 관할 구역 관리자
    SUPER_ADMIN = 2   # 최고 관리자 (전체 구역)


class AdminLevel(IntEnum):
    """레거시 관할 단계 (DB에는 정수로 저장)"""
    NONE = 0
    PROVINCE = 1
    CITY = 2
    DISTRICT = 3


# =============================================================================
# 1. usr.admins 테이블 모델
# =============================================================================
class AdminBase(SQLModel):
    """
    usr.admins 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="관리자 고유 ID")
    username: str = Field(max_length=50, sa_column_kwargs={"unique": True}, description="로그인 사용자명")
    password_hash: str = Field(max_length=255, description="해싱된 비밀번호")
    full_name: Optional[str] = Field(default=None, max_length=100, description="이름")
    department: Optional[str] = Field(default=None, max_length=100, description="소속 부서")
    employee_id: Optional[str] = Field(default=None, max_length=32, description="사번 / 카드 번호")

    user_type: int = Field(default=UserType.ADMIN, description="레거시 관리자 등급")
    admin_level: int = Field(default=AdminLevel.NONE, description="레거시 관할 단계")
    province: Optional[str] = Field(default=None, max_length=50, description="관할 성 이름")
    city: Optional[str] = Field(default=None, max_length=50, description="관할 시 이름")
    district: Optional[str] = Field(default=None, max_length=50, description="관할 구 이름")

    is_active: bool = Field(default=True, description="계정 활성 여부")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )


class Admin(AdminBase, table=True):
    """
    PostgreSQL의 usr.admins 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "admins"
    __table_args__ = {'schema': 'usr'}
