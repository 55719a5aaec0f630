import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware

from app import API_PREFIX
from app.core.config import settings
from app.core.database import engine, get_session

from app.domains.rgn.cache import ScopeRegistry
from app.domains.rgn.directory import RegionDirectory

from app.domains.usr.routers import router as usr_router
from app.domains.rgn.routers import router as rgn_router


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def init_region_state(app: FastAPI) -> RegionDirectory:
    """
    번들된 원천 데이터로 전체 행정구역 트리를 만들고 app.state에 보관합니다.
    MalformedSourceData는 잡지 않고 그대로 전파하여 애플리케이션 시작을 중단시킵니다.
    """
    directory = RegionDirectory.from_file(
        settings.REGION_DATA_FILE,
        skip_empty_provinces=settings.skip_empty_provinces,
    )
    app.state.region_directory = directory
    app.state.scope_registry = ScopeRegistry(directory)
    return directory


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    시작 시 행정구역 트리와 권한 범위 레지스트리를 준비하고,
    종료 시 데이터베이스 연결 풀을 정리합니다.
    """
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.APP_ENV)
    directory = init_region_state(app)
    logger.info("Region directory ready: %d nodes from %s", directory.node_count, settings.REGION_DATA_FILE)

    yield

    logger.info("Shutting down %s", settings.APP_NAME)
    await engine.dispose()


app = FastAPI(
    title="SCMS API",
    description="Smart Cabinet Management System (SCMS) API: admin accounts and province/city/district permission scoping.",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# -- CORS 미들웨어 설정 --
# 프로덕션에서는 allow_origins를 실제 프론트엔드 도메인으로 제한해야 합니다.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- 도메인 라우터 포함 --
app.include_router(usr_router, prefix=f"{API_PREFIX}/usr", tags=["Admin & Auth Management (관리자 및 인증)"])
app.include_router(rgn_router, prefix=f"{API_PREFIX}/rgn", tags=["Region Scope (행정구역 권한 범위)"])


@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    return {"message": "Welcome to SCMS API. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
# 데이터베이스 연결과 행정구역 트리 적재 상태를 함께 확인합니다.
@app.get("/health-check", summary="Health Check", response_description="Status of the application, database and region tree.")
async def health_check(request: Request, session: AsyncSession = Depends(get_session)):
    directory = getattr(request.app.state, "region_directory", None)
    if directory is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Region tree is not loaded"
        )
    try:
        result = await session.exec(select(1))
        if not result.first():
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Database health check failed: No result from test query"
            )
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Database health check failed: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )
    return {"status": "ok", "database_connection": "successful", "region_nodes": directory.node_count}


# 개발용 직접 실행
# if __name__ == "__main__":
#     import uvicorn
#     uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
