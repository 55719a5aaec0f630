# tests/test_main.py

"""
FastAPI 애플리케이션의 메인 엔드포인트에 대한 통합 테스트를 정의하는 모듈입니다.

- 애플리케이션의 루트 경로 (`/`) 응답을 테스트합니다.
- 헬스 체크 엔드포인트 (`/health-check`)를 테스트합니다.
- 시작 시 행정구역 트리 적재 (init_region_state)를 테스트합니다.
"""

import json

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from app.main import app as main_app, init_region_state
from app.core.config import settings
from app.core.database import get_session
from app.domains.rgn.cache import ScopeRegistry
from app.domains.rgn.directory import RegionDirectory
from app.domains.rgn.exceptions import MalformedSourceData


class _StubResult:
    def __init__(self, value):
        self._value = value

    def first(self):
        return self._value


class _StubSession:
    """select(1) 결과만 흉내 내는 세션"""

    def __init__(self, value=1):
        self._value = value

    async def exec(self, statement):
        return _StubResult(self._value)


@pytest.mark.asyncio
async def test_read_root(client: AsyncClient):
    """
    루트 엔드포인트 (`GET /`)가 올바르게 응답하는지 테스트합니다.
    """
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to SCMS API. Visit /docs for interactive API documentation."}


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient, region_directory: RegionDirectory):
    """
    DB 응답과 트리 적재 상태가 정상이면 노드 수와 함께 ok를 반환합니다.
    """
    async def override_session():
        yield _StubSession()

    main_app.dependency_overrides[get_session] = override_session
    response = await client.get("/health-check")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "database_connection": "successful",
        "region_nodes": region_directory.node_count,
    }


@pytest.mark.asyncio
async def test_health_check_db_without_result(client: AsyncClient):
    async def override_session():
        yield _StubSession(value=None)

    main_app.dependency_overrides[get_session] = override_session
    response = await client.get("/health-check")

    assert response.status_code == 500
    assert "No result" in response.json()["detail"]


@pytest.mark.asyncio
async def test_health_check_without_region_tree(client: AsyncClient):
    """트리가 적재되지 않았다면 503을 반환합니다."""
    async def override_session():
        yield _StubSession()

    main_app.dependency_overrides[get_session] = override_session
    del main_app.state.region_directory
    response = await client.get("/health-check")

    assert response.status_code == 503
    assert response.json()["detail"] == "Region tree is not loaded"


def test_init_region_state_loads_bundled_data():
    """번들된 데이터로 트리와 레지스트리가 app.state에 준비됩니다."""
    app = FastAPI()
    directory = init_region_state(app)

    assert app.state.region_directory is directory
    assert isinstance(app.state.scope_registry, ScopeRegistry)
    assert len(app.state.scope_registry) == 0
    assert directory.node_count > 0
    assert directory.find_label_by_code("030000") == "江苏省"


def test_init_region_state_rejects_malformed_source(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """구조 오류가 있는 원천 데이터는 시작을 중단시킵니다."""
    bad_source = tmp_path / "bad.json"
    bad_source.write_text(json.dumps({"Jiangsu": {}}), encoding="utf-8")
    monkeypatch.setattr(settings, "REGION_DATA_FILE", str(bad_source))
    monkeypatch.setattr(settings, "REGION_EMPTY_PROVINCE_POLICY", "raise")

    app = FastAPI()
    with pytest.raises(MalformedSourceData):
        init_region_state(app)
    assert not hasattr(app.state, "region_directory")


def test_init_region_state_skip_policy(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """skip 정책이면 시가 없는 성을 건너뛰고 나머지 코드는 유지됩니다."""
    source = tmp_path / "skip.json"
    source.write_text(json.dumps({"Empty": {}, "Jiangsu": {"Changzhou": ["Xinbei"]}}), encoding="utf-8")
    monkeypatch.setattr(settings, "REGION_DATA_FILE", str(source))
    monkeypatch.setattr(settings, "REGION_EMPTY_PROVINCE_POLICY", "skip")

    directory = init_region_state(FastAPI())

    assert directory.node_count == 3
    assert directory.resolve_code("Jiangsu", "Changzhou", "Xinbei") == "020101"
