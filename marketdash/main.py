# marketdash/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketdash.api.routes import router
from marketdash.api.health import health_router
from marketdash.db.session import init_db
from marketdash.market_data.market_data_provider import get_provider, reset_provider
from marketdash.utils.config import get_settings
from marketdash.utils.env_validator import validate_env_vars, print_env_validation
from marketdash.utils.error_handler import error_response, safe_execute
from marketdash.utils.logger import log, log_error
from marketdash.utils.sentry_setup import init_sentry, capture_exception


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    env_validation = validate_env_vars()
    print_env_validation(env_validation)

    init_sentry()

    # create tables (the schema is not on any request path)
    safe_execute(init_db, error_message="Database initialization failed")

    # Pick the data source once per process
    reset_provider()
    get_provider()

    yield


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    in_body = any(err.get("loc", ("",))[0] == "body" for err in exc.errors())
    return error_response("Invalid request body" if in_body else "Invalid request parameters", 400)


async def unhandled_exception_handler(request: Request, exc: Exception):
    log_error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    capture_exception(exc, request={"method": request.method, "path": request.url.path})
    return error_response("Internal server error", 500)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="MarketDash API",
        version="0.1.0",
        description="Stock market dashboard backend - quotes, charts, fundamentals, news and AI insights",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.include_router(router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Browsers reject credentialed responses with a wildcard origin
    allow_all = "*" in settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.allowed_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )

    return app


app = create_app()

if __name__ == "__main__":
    port = get_settings().port
    log(f"Starting MarketDash API at http://localhost:{port} ...")
    uvicorn.run("marketdash.main:app", host="0.0.0.0", port=port, reload=True)
