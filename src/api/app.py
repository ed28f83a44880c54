from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str, details=None) -> dict:
    error_dict = {"code": code, "message": message}
    if details:
        error_dict["details"] = details
    return {"error": error_dict}


async def handle_client_error(request: Request, exc: ClientError):
    body = _error_body(exc.base_error.code, exc.base_error.message, exc.base_error.details)
    logger.warning(f"Client error: {body['error']}")
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    if exc.status_code == status.HTTP_502_BAD_GATEWAY:
        message = exc.base_error.message
    else:
        message = "Internal server error"
    return JSONResponse(
        status_code=exc.status_code, content=_error_body(exc.base_error.code, message)
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = {}
    for error in exc.errors():
        location = [
            str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")
        ]
        field = ".".join(location) or "request"
        details.setdefault(field, []).append(error.get("msg", "Invalid value"))
    logger.warning(f"Request validation failed: {details}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("VALIDATION_ERROR", "Validation failed", details),
    )


def create_app(ApplicationConfig) -> FastAPI:
    from src.depends import build_scheduler, engine

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.AUTO_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        scheduler = build_scheduler() if ApplicationConfig.ENABLE_SCHEDULER else None
        if scheduler is not None:
            scheduler.start()
        yield
        if scheduler is not None:
            await scheduler.stop()

    app = FastAPI(title="Cleaning Service API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        admin,
        auth,
        business,
        cleaners,
        clients,
        dashboard,
        health_check,
        invitations,
        invoices,
        jobs,
        payments,
        reports,
        subscriptions,
        upload,
    )

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, prefix=prefix, tags=["Health"])
    app.include_router(auth.router, prefix=prefix)
    app.include_router(business.router, prefix=prefix)
    app.include_router(cleaners.router, prefix=prefix)
    app.include_router(invitations.router, prefix=prefix)
    app.include_router(clients.router, prefix=prefix)
    app.include_router(jobs.router, prefix=prefix)
    app.include_router(invoices.router, prefix=prefix)
    app.include_router(subscriptions.router, prefix=prefix)
    app.include_router(payments.router, prefix=prefix)
    app.include_router(admin.router, prefix=prefix)
    app.include_router(dashboard.router, prefix=prefix)
    app.include_router(reports.router, prefix=prefix)
    app.include_router(upload.router, prefix=prefix)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
