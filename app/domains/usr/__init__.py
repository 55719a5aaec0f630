# app/domains/usr/__init__.py

"""
FastAPI 애플리케이션의 'usr' 도메인 패키지입니다.

관리자 계정(usr.admins), 로그인/로그아웃, 그리고 관리자 레코드의 레거시
등급/관할 값을 'rgn' 도메인의 권한 범위로 변환하는 경계 서비스를 포함합니다.

주요 서브모듈:
- `models.py`: usr 스키마 테이블의 SQLModel 정의.
- `schemas.py`: 요청/응답 Pydantic 모델.
- `crud.py`: 비동기 CRUD 로직.
- `services.py`: 레거시 값 -> ScopeLevel 변환, 세션 범위 채우기/재계산.
- `routers.py`: API 엔드포인트.
"""

__title__ = "SCMS User Domain"
__description__ = "Admin accounts, authentication and the identity side of region scoping."
__version__ = "0.1.0"
__all__ = []
