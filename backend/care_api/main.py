"""FastAPI application factory.

Run with: uvicorn care_api.main:create_app --factory (from backend/)
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from care_api.auth import require_user
from care_api.config import Settings, get_settings
from care_api.container import ServiceContainer
from care_api.exceptions import CareAPIError, TransactionFailure
from care_api.logging_config import get_logger, setup_logging
from care_api.middleware.request_logging import RequestLoggingMiddleware
from care_api.routers import appointments, chronic, exams, patients, pregnancies, reports
from care_api.routers import auth as auth_router

logger = get_logger(__name__)


def _error_body(message: str, details=None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return body


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(CareAPIError)
    async def care_api_error_handler(request: Request, exc: CareAPIError):
        details = exc.details
        # Internal error text stays out of production responses
        if isinstance(exc, TransactionFailure) and settings.is_production:
            details = None
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, details))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = {}
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            details[".".join(loc) or "body"] = err.get("msg", "Invalid value")
        return JSONResponse(status_code=400, content=_error_body("Invalid request", details))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("unhandled_error", path=request.url.path, exc_info=exc)
        details = None if settings.is_production else str(exc)
        return JSONResponse(status_code=500, content=_error_body("Internal server error", details))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    container = ServiceContainer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await container.startup()
        yield
        await container.shutdown()

    app = FastAPI(
        title="Primary Care Records API",
        description="Patient registry, exams, pregnancy and chronic-disease monitoring for primary care",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    _register_exception_handlers(app, settings)

    protected = [Depends(require_user)]
    app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(patients.router, prefix="/api/pacientes", tags=["Patients"], dependencies=protected)
    app.include_router(exams.router, prefix="/api/exames", tags=["Exams"], dependencies=protected)
    app.include_router(pregnancies.router, prefix="/api/gestantes", tags=["Pregnancy"], dependencies=protected)
    app.include_router(chronic.router, prefix="/api/cronicos", tags=["Chronic conditions"], dependencies=protected)
    app.include_router(appointments.router, prefix="/api/consultas", tags=["Appointments"], dependencies=protected)
    app.include_router(reports.router, prefix="/api/relatorios", tags=["Reports"], dependencies=protected)

    @app.get("/")
    async def root():
        return {"status": "ok", "service": "primary-care-records"}

    @app.get("/api/health")
    async def health_check():
        try:
            db_time = await container.database.ping()
        except Exception as e:
            logger.error("health_check_failed", error=str(e))
            return JSONResponse(
                status_code=503,
                content={"status": "unavailable", "error": "Database connection failed"},
            )
        return {
            "status": "operational",
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": {"status": "connected", "timestamp": db_time.isoformat() if db_time else None},
        }

    return app
