import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import get_settings
from app.database import engine, Base
from app.exceptions import AppError
from app.middleware.logging_middleware import RequestLoggingMiddleware
from app.routers import auth as auth_router
from app.routers import patients
from app.schemas.response import error_response, success_response
from app import models  # noqa: F401  registers tables on Base.metadata

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables
    logger.info("HMS API starting (%s)", settings.environment)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Shutdown
    logger.info("HMS API shutting down")
    await engine.dispose()


app = FastAPI(
    title="Hospital Management System API",
    description="Staff authentication and patient lookup backed by hospital registries",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None if settings.environment == "production" else "/docs",
)

allowed_origins = settings.split_csv(settings.cors_allowed_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.split_csv(settings.cors_allowed_methods),
    allow_headers=settings.split_csv(settings.cors_allowed_headers),
    expose_headers=settings.split_csv(settings.cors_expose_headers),
    max_age=settings.cors_max_age_seconds,
)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content=error_response(exc.status_code, exc.message))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=error_response(400, "validation failed", details))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(status_code=500, content=error_response(500, "internal server error"))


app.include_router(auth_router.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(patients.router, prefix="/api/v1/patients", tags=["Patients"])


@app.get("/api/v1/health")
async def health_check():
    return success_response({"status": "ok"})
