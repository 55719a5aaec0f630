# app/domains/rgn/__init__.py

"""
FastAPI 애플리케이션의 'rgn' 도메인 패키지입니다.

'rgn' 도메인은 성(Province) -> 시(City) -> 구/현(District) 3단계 행정구역 트리를
구성하고, 관리자 계정의 권한 범위(Scope)에 따라 접근 가능한 구역만 잘라내어
제공하는 역할을 합니다. 데이터베이스 테이블은 없으며, 번들된 정적 데이터
(`data/pca.json`)로부터 애플리케이션 시작 시 한 번 트리를 만듭니다.

주요 서브모듈:
- `models.py`: RegionNode, ScopeDescriptor 등 메모리 내 데이터 모델.
- `tree.py`: 원천 데이터 -> 트리 변환, 코드 유틸리티, 트리 탐색.
- `resolver.py`: 성/시/구 이름 -> 가장 구체적인 지역 코드.
- `scope.py`: 권한 범위 추출기와 권한 판정(Permission Oracle).
- `directory.py`: 전체 트리를 감싸는 조회 파사드 (app.state에 보관).
- `cache.py`: 로그인 세션별 권한 범위 캐시와 세션 레지스트리.
- `options.py`: 범위 내 연쇄 선택 옵션, 이름 기반 권한 확인, 검색 필터.
- `schemas.py` / `routers.py`: API 응답 스키마와 엔드포인트.
"""

__title__ = "SCMS Region Domain"
__description__ = "Province/city/district region tree and admin permission scoping."
__version__ = "0.1.0"
__all__ = []
