# migrations/env.py

import os
import sys
import asyncio
from logging.config import fileConfig

from alembic import context

from sqlalchemy import pool, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

# --- 1. 프로젝트 루트 경로 설정 ---
# env.py가 어디에서 실행되든 'app' 모듈을 찾을 수 있게 합니다.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# --- 2. 애플리케이션의 핵심 설정 및 모델 임포트 ---
# Alembic이 데이터베이스와 모델을 비교할 수 있으려면
# 모든 SQLModel 클래스가 metadata에 등록되어야 합니다.
# 행정구역 트리는 DB에 저장하지 않으므로 usr 모델만 대상입니다.
from app.core.config import settings        # noqa: E402
from app.core.database import SCHEMAS       # noqa: E402
import app.domains.usr.models               # noqa: F401, E402

# --- 3. Alembic 기본 설정 ---
config = context.config

# .ini 파일에 설정된 로깅 설정을 해석합니다.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata

# alembic.ini에 sqlalchemy.url이 설정되지 않았다면, settings에서 값을 가져와 설정합니다.
if config.get_main_option("sqlalchemy.url") is None:
    config.set_main_option("sqlalchemy.url", settings.DATABASE_URL.get_secret_value())


def include_object(object, name, type_, reflected, compare_to):
    if type_ == "table" and name == "alembic_version":
        return False
    return True


def do_run_migrations(connection) -> None:
    """
    Alembic 컨텍스트를 데이터베이스 연결로 구성하고 마이그레이션을 실행합니다.
    """
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        include_schemas=True,  # 'usr' 스키마를 사용하므로 필수
        version_table_schema='public',  # alembic_version 테이블 위치
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """'온라인' 모드에서 마이그레이션을 실행합니다."""
    engine: AsyncEngine = create_async_engine(
        settings.DATABASE_URL.get_secret_value(),
        echo=settings.DEBUG_MODE,
        future=True,
        poolclass=pool.NullPool,  # 마이그레이션 시에는 풀을 사용하지 않아 즉시 연결/해제
    )

    # --- 1단계: 스키마 생성 전용 연결 ---
    async with engine.connect() as connection:
        print("--- Ensuring all schemas exist before migration... ---")
        async with connection.begin():
            for schema_name in SCHEMAS:
                await connection.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema_name}"))

    # --- 2단계: Alembic 마이그레이션 전용 연결 ---
    async with engine.connect() as connection:
        print("--- Running Alembic migrations... ---")
        await connection.run_sync(do_run_migrations)

    await engine.dispose()
    print("--- Alembic migrations finished. ---")


if context.is_offline_mode():
    print("Offline mode is not supported.")
else:
    asyncio.run(run_migrations_online())
