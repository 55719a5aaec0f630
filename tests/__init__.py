# tests/__init__.py

"""
SCMS FastAPI 애플리케이션의 테스트 스위트 패키지입니다.

테스트는 `pytest`와 `pytest-asyncio`를 기반으로 하며, 실제 PostgreSQL 없이 실행됩니다.
관리자 조회는 conftest.py의 메모리 저장소로 대체하고,
행정구역 트리는 작은 테스트용 원천 데이터로 만듭니다.

- `domains/`: 도메인(usr, rgn)별 테스트 모듈.
- `conftest.py`: 테스트 클라이언트, 관리자 픽스처, 행정구역 픽스처.
"""

__title__ = "SCMS API Tests"
__description__ = "Test suite for SCMS FastAPI application."
__version__ = "0.1.0"
__all__ = []
