# ========================================
# careers_api/main.py
# ========================================

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from careers_api.config import Settings, get_settings
from careers_api.database import close_mongo_connection, connect_to_mongo, ensure_indexes, get_db
from careers_api.errors import CareersError, UpstreamError
from careers_api.services.storage import S3Storage

# ===========================
# IMPORT ALL ROUTERS
# ===========================

from careers_api.routes.auth import router as auth_router
from careers_api.routes.job_roles import router as job_roles_router
from careers_api.routes.applications import router as applications_router

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# ===========================
# ERROR HANDLERS
# ===========================

def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def careers_error_handler(request: Request, exc: CareersError):
    if isinstance(exc, UpstreamError):
        # Already logged with its traceback where it was raised
        return error_response(500, "Internal server error")
    return error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return error_response(400, f"{location}: {message}" if location else message)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


# ===========================
# CREATE FASTAPI APP
# ===========================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: database, indexes and object storage client
        app.state.mongo_client = await connect_to_mongo(settings)
        app.state.db = app.state.mongo_client[settings.database_name]
        await ensure_indexes(app.state.db)
        app.state.storage = S3Storage.from_settings(settings)
        logger.info("Careers API %s started", VERSION)
        yield
        await close_mongo_connection(app.state.mongo_client)
        logger.info("Database connections closed")

    app = FastAPI(
        title="Careers API",
        description="Job roles, authentication and CV applications",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS MIDDLEWARE
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CareersError, careers_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # REGISTER ROUTERS
    app.include_router(auth_router)
    app.include_router(job_roles_router)
    app.include_router(applications_router)

    @app.get("/")
    async def root():
        """API root endpoint with feature summary"""
        return {
            "status": "✅ Careers API Running",
            "version": VERSION,
            "documentation": "/docs",
            "endpoints": {
                "authentication": ["/api/login", "/api/register"],
                "job_roles": ["/job-roles", "/job-roles/{id}", "/capabilities", "/bands", "/statuses"],
                "applications": ["/application", "/applications/me"],
                "admin": [
                    "/job-roles (POST/PUT/DELETE)",
                    "/job-roles/{id}/applications",
                    "/applications/{id}/status/{status}",
                ],
            },
        }

    @app.get("/health")
    async def health_check(db=Depends(get_db)):
        """Health check endpoint"""
        try:
            await db.command("ping")
        except Exception as e:
            logger.warning("Health check: database unreachable: %s", e)
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "database": "unreachable", "version": VERSION},
            )
        return {"status": "healthy", "database": "connected", "version": VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("careers_api.main:app", host="0.0.0.0", port=8000)
