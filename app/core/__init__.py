# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션의 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 데이터베이스 연결, 세션 관리 (SQLModel 및 AsyncSQLAlchemy).
- `crud_base.py`: 공통 비동기 CRUD 기본 클래스.
- `security.py`: 비밀번호 해싱, JWT, 현재 관리자 획득 및 등급 검사.
- `dependencies.py`: 라우터에서 사용하는 공통 의존성 함수들.
"""

__title__ = "SCMS Core"
__description__ = "Core components for SCMS FastAPI application."
__version__ = "0.1.0"
__all__ = []
