from typing import List, Literal, Optional

import sentry_sdk
from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration


class Settings(BaseSettings):
    ############ Common ############
    ENV: Literal["dev", "stag", "prod"] = "dev"
    PROJECT_NAME: str = "SurveyHub Dev"
    SENTRY_DSN: Optional[AnyHttpUrl] = None

    DATABASE_URL: str = "sqlite:///./surveyhub.db"
    DB_SESSION_POOL_SIZE: int = 60
    DB_SESSION_POOL_MAX_OVERFLOW_SIZE: int = 20

    ############ Uploads ############
    UPLOAD_DIR: str = "./uploads"
    MAX_FILE_SIZE: int = 10 * 1024 * 1024

    # e.g. '["file-upload","date"]'
    DISABLED_QUESTION_TYPES: List[str] = []

    ############ Web server only ############
    API_STR: str = "/api"

    DEBUG_BYPASS_BACKEND_CORS: str = "false"
    # Comma separated, e.g. "http://localhost:3000,http://127.0.0.1:8080"
    CORS_ORIGINS: str = "http://localhost:8080"

    class Config:
        case_sensitive = True


settings = Settings()


def get_cors_origins() -> List[str]:
    return [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]


if settings.SENTRY_DSN:
    sentry_sdk.init(
        str(settings.SENTRY_DSN),
        traces_sample_rate=0.2,
        integrations=[
            SqlalchemyIntegration(),
        ],
    )
