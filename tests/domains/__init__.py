# tests/domains/__init__.py

"""
도메인별 테스트 모듈 패키지입니다.

- `test_auth_n.py`: 로그인/로그아웃과 권한 범위 세션.
- `test_usr_n.py`: 관리자 관리 API와 레거시 등급 변환.
- `test_rgn_n.py`: 행정구역 트리, 코드 해석, 범위 추출 단위 테스트.
- `test_rgn_api_n.py`: 'rgn' 도메인 API.
"""

__title__ = "SCMS Domain Tests"
__description__ = "Categorized tests for each business domain in SCMS FastAPI application."
__version__ = "0.1.0"
__all__ = []
