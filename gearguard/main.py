import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from gearguard.config import settings
from gearguard.database import check_db_connection, create_tables
from gearguard.schemas.common import ErrorResponse
from gearguard.utils.exceptions import AppException
from gearguard.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)

from gearguard.api.v1 import auth
from gearguard.api.v1 import teams
from gearguard.api.v1 import technicians
from gearguard.api.v1 import equipment
from gearguard.api.v1 import requests
from gearguard.api.v1 import reports

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=VERSION,
        description="Equipment maintenance request tracker API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = "/api"
    ERRORS = {code: {"model": ErrorResponse} for code in (400, 404, 500)}
    app.include_router(auth.router,        prefix=PREFIX, tags=["Auth"],        responses=ERRORS)
    app.include_router(teams.router,       prefix=PREFIX, tags=["Teams"],       responses=ERRORS)
    app.include_router(technicians.router, prefix=PREFIX, tags=["Technicians"], responses=ERRORS)
    app.include_router(equipment.router,   prefix=PREFIX, tags=["Equipment"],   responses=ERRORS)
    app.include_router(requests.router,    prefix=PREFIX, tags=["Requests"],    responses=ERRORS)
    app.include_router(reports.router,     prefix=PREFIX, tags=["Reports"],     responses=ERRORS)

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        ok = check_db_connection()
        logger.info("DB connected" if ok else "DB connection FAILED")
        if ok and settings.DATABASE_AUTO_CREATE:
            create_tables()

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": VERSION}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("gearguard.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
