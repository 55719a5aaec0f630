# app/domains/usr/schemas.py

"""
'usr' 도메인 (관리자 계정 및 인증)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel

from app.domains.rgn.models import ScopeLevel
from . import models as usr_models


# =============================================================================
# 1. 관리자 (Admin) 스키마
# =============================================================================
class AdminBase(SQLModel):
    """관리자 정보의 기본 필드"""
    username: str = Field(..., max_length=50)
    full_name: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    employee_id: Optional[str] = Field(None, max_length=32)
    user_type: int = Field(default=usr_models.UserType.ADMIN, description="레거시 관리자 등급 (2 = 최고 관리자)")
    admin_level: int = Field(default=usr_models.AdminLevel.NONE, description="레거시 관할 단계 (1 성, 2 시, 3 구)")
    province: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=50)
    district: Optional[str] = Field(None, max_length=50)
    is_active: bool = True


class AdminCreate(AdminBase):
    password: str = Field(..., min_length=8)


class AdminUpdate(SQLModel):
    """관리자 정보 수정 스키마. 관할 필드가 바뀌면 해당 관리자의 모든 세션 범위가 재계산됩니다."""
    full_name: Optional[str] = None
    department: Optional[str] = None
    employee_id: Optional[str] = None
    user_type: Optional[int] = None
    admin_level: Optional[int] = None
    province: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    is_active: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=8)


class AdminRead(AdminBase):
    """비밀번호 해시 등 민감한 정보는 제외됩니다."""
    id: int
    created_at: datetime = Field(..., description="레코드 생성 일시")
    updated_at: datetime = Field(..., description="레코드 마지막 업데이트 일시")


# =============================================================================
# 2. 인증 토큰 (Token) 스키마
# =============================================================================
class Token(BaseModel):
    """JWT 토큰 응답 스키마"""
    access_token: str
    token_type: str


class TokenPayload(BaseModel):
    """JWT 토큰에 담길 데이터 (sub = 사용자명, sid = 권한 범위 세션 ID)"""
    sub: str
    sid: str


# =============================================================================
# 3. 권한 범위 요약
# =============================================================================
class ScopeSummary(BaseModel):
    username: str
    user_type: int
    admin_level: int
    scope_level: Optional[ScopeLevel] = None
    scope_code: str = ""
    scope_label: str = ""
    full_address: str = ""
    department: Optional[str] = None
