# app/core/database.py

"""
애플리케이션의 데이터베이스 연결 및 세션 관리를 담당하는 모듈입니다.

- SQLModel의 비동기 엔진을 설정합니다.
- 비동기 세션 생성을 위한 유틸리티 함수를 제공합니다.
- 개발용 스키마/테이블 생성 함수를 포함합니다.

행정구역 트리는 DB에 저장하지 않습니다. DB에는 관리자 계정(usr)만 있습니다.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy import text

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings

# SQLModel.metadata가 모든 테이블을 인식하도록 모델을 임포트합니다.
from app.domains.usr import models  # noqa


logger = logging.getLogger(__name__)

SCHEMAS = ["usr"]

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL.get_secret_value(),
    echo=settings.DEBUG_MODE,  # 디버그 모드일 때만 SQL 쿼리 출력
    future=True,
    pool_recycle=3600,
    pool_size=10,
    max_overflow=20
)

# 비동기 세션을 생성하는 '세션 공장'
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def create_db_and_tables() -> None:
    """
    스키마와 테이블을 생성합니다. (개발용, 기존 테이블은 삭제하지 않음)
    """
    async with engine.begin() as conn:
        for schema_name in SCHEMAS:
            await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema_name}"))
            logger.debug("Schema '%s' ensured", schema_name)
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables created (or already present)")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    요청마다 새로운 세션을 생성하고, 요청 처리 후 세션을 자동으로 닫습니다.
    """
    async with AsyncSessionLocal() as session:
        yield session
