# app/domains/rgn/exceptions.py

"""
'rgn' 도메인의 예외 클래스입니다.

원천 데이터 구조 오류만 예외로 올립니다. 실행 중의 조회 실패
(알 수 없는 권한 코드, 이름 조회 실패)는 빈 결과 또는 상위 코드로 흡수됩니다.
"""


class RegionDataError(Exception):
    """행정구역 데이터 관련 오류의 기본 클래스"""


class MalformedSourceData(RegionDataError):
    """
    원천 데이터가 성 -> 시 -> 구 구조 가정을 위반했을 때 발생합니다.
    (예: 시가 하나도 없는 성, 빈 이름, 두 자리 서수 초과)
    애플리케이션 시작 시 치명적 오류로 취급하며 삼키지 않습니다.
    """
