# app/__init__.py

"""
SCMS FastAPI 애플리케이션의 메인 패키지입니다.

스마트 보관 캐비닛 관리 콘솔의 백엔드 중, 관리자 계정과
행정구역(성/시/구) 권한 범위를 담당합니다.
FastAPI 애플리케이션의 진입점 (main.py)과
공통 설정, 데이터베이스 연결, 보안 관련 유틸리티를 담는 core 서브패키지,
그리고 각 비즈니스 도메인(usr, rgn)을 대표하는 domains 서브패키지로 구성됩니다.
"""

APP_NAME = "SCMS FastAPI API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api/v1"  # API 라우트의 공통 접두사 (main.py에서 적용)

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Smart Cabinet Management System (SCMS) region scope API backend."
__license__ = "MIT"
__all__ = []
