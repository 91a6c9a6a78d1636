from typing import Any, MutableMapping, Optional

import logging
import logging.config
log_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "surveyhub_core": {"handlers": ["console"], "level": "INFO", "propagate": False},
    },
    "root": {"handlers": ["console"], "level": "INFO"},
}
logging.config.dictConfig(log_config)
logger = logging.getLogger(__name__)


import fastapi
import sentry_sdk
import sqlalchemy
import starlette
import uvicorn
from fastapi import FastAPI
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request

from surveyhub_core.app.api import health
from surveyhub_core.app.api.api_v1.api import api_router
from surveyhub_core.app.common import is_dev
from surveyhub_core.app.config import get_cors_origins, settings
from surveyhub_core.db.init_db import init_db
from surveyhub_core.db.session import engine
from surveyhub_core.utils.errors import ServiceError

args: MutableMapping[str, Optional[Any]] = {}
if is_dev():
    args["openapi_url"] = f"{settings.API_STR}/openapi.json"
else:
    args["openapi_url"] = None
    args["redoc_url"] = None

app = FastAPI(title=settings.PROJECT_NAME, **args)  # type: ignore


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url}: {exc.message}")
        sentry_sdk.capture_exception(exc)
    else:
        logger.info(f"{request.method} {request.url}: {exc.status_code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url}")
    sentry_sdk.capture_exception(exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


@app.exception_handler(RequestValidationError)
async def custom_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Any:
    request_str = f"request.url: {request.url}\nrequest.method: {request.method}"
    err_msg = f"Validation error:\n{request_str}\nexc: {exc}\nexc.body: {exc.body}"
    if is_dev():
        logger.info(err_msg)
    else:
        sentry_sdk.capture_message(err_msg)
    return await request_validation_exception_handler(request, exc)


def set_backend_cors_origins() -> None:
    origins = []
    if settings.DEBUG_BYPASS_BACKEND_CORS == "magic":
        origins.append("*")
    origins.extend(get_cors_origins())
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("Set CORS allowed origins: " + str(origins))


set_backend_cors_origins()

app.include_router(health.router)
app.include_router(api_router, prefix=settings.API_STR)


def print_app_settings() -> None:
    logger.info("settings:")
    for k, v in settings.__dict__.items():
        if not k.startswith("__"):
            logger.info(f"{k}: {v}")


print_app_settings()
for lib in [fastapi, uvicorn, starlette, sqlalchemy]:
    logger.info("{} version: {}".format(lib.__name__, lib.__version__))

logger.info("Server launches")


@app.on_event("startup")
def create_tables() -> None:
    init_db(engine)


@app.on_event("shutdown")
def shutdown_event() -> None:
    engine.dispose()
    logger.info("Database engine disposed")
