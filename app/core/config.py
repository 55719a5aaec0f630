# app/core/config.py

from typing import Any, Literal
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# 번들된 행정구역 원천 데이터 (성 -> 시 -> 구)
DEFAULT_REGION_DATA_FILE = os.path.join(BASE_DIR, "app", "domains", "rgn", "data", "pca.json")


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일을 명시적으로 지정
        env_file_encoding='utf-8',
        extra='ignore',                      # .env 파일에 정의되었지만 모델에 없는 변수는 무시
        case_sensitive=True
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "SCMS FastAPI API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Smart Cabinet Management System (SCMS) region scope API"
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Enable debug mode for detailed logging and error messages")
    LOG_LEVEL: str = Field("INFO", description="Root log level (DEBUG, INFO, WARNING, ...)")

    # --- 데이터베이스 설정 ---
    DATABASE_URL: SecretStr = Field(..., description="PostgreSQL database connection URL")

    # --- JWT (JSON Web Token) 설정 ---
    SECRET_KEY: SecretStr = Field(..., description="Secret key for JWT token signing. Keep this highly secure!")
    ALGORITHM: str = Field("HS256", description="Algorithm used for JWT signing (e.g., HS256)")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(30, description="Access token expiration time in minutes")

    # --- 행정구역 (rgn) 설정 ---
    REGION_DATA_FILE: str = Field(DEFAULT_REGION_DATA_FILE, description="Province/city/district JSON source")
    # 시가 없는 성을 만났을 때: raise(시작 실패) 또는 skip(경고 후 제외)
    REGION_EMPTY_PROVINCE_POLICY: Literal["raise", "skip"] = Field("raise", description="Policy for provinces without cities")
    # 레거시 user_type 중 '최고 관리자(전체 구역)'를 뜻하는 값
    SUPER_ADMIN_USER_TYPE: int = Field(2, description="Legacy user_type value meaning unrestricted super admin")

    def model_post_init(self, __context: Any) -> None:  # noqa: ANN001
        # 상대 경로는 프로젝트 루트 기준으로 해석합니다.
        if not os.path.isabs(self.REGION_DATA_FILE):
            self.REGION_DATA_FILE = os.path.join(BASE_DIR, self.REGION_DATA_FILE)

    @property
    def skip_empty_provinces(self) -> bool:
        return self.REGION_EMPTY_PROVINCE_POLICY == "skip"


settings = Settings()
