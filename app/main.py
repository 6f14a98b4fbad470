# app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.api.dependencies import shutdown_dependencies
from app.api.middleware import (
    ActorContextMiddleware,
    CorrelationIdMiddleware,
    RequestLogMiddleware,
)
from app.api.routers import audit, developers, health, projects, tasks
from app.audit.exceptions import AuditError
from app.config.logging import configure_logging
from app.config.settings import get_settings
from app.domain.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    TaskAssignmentError,
)
from app.infrastructure.database.session import dispose_engines, init_models

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("application_started", extra={"environment": settings.environment})
    try:
        yield
    finally:
        await shutdown_dependencies()
        await dispose_engines()
        logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> ActorContext -> RequestLog.
app.add_middleware(RequestLogMiddleware)
app.add_middleware(ActorContextMiddleware)
app.add_middleware(CorrelationIdMiddleware)

# Most specific first; DomainError is the fallback for the domain hierarchy.
_DOMAIN_STATUS = (
    (EntityNotFoundError, 404),
    (DuplicateEntityError, 409),
    (TaskAssignmentError, 400),
    (BusinessRuleViolationError, 422),
    (DomainValidationError, 422),
)


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    for exc_type, status_code in _DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return JSONResponse(status_code=status_code, content={"detail": exc.message})
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AuditError)
async def audit_error_handler(request, exc: AuditError):
    logger.error("audit_error", extra={"path": request.url.path, "error": exc.message})
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.exception("unhandled_error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /api/projects, /api/developers, /api/tasks, /api/audit
app.include_router(health.router)
app.include_router(projects.router, prefix="/api/projects")
app.include_router(developers.router, prefix="/api/developers")
app.include_router(tasks.router, prefix="/api/tasks")
app.include_router(audit.router, prefix="/api/audit")
