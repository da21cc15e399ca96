"""
Main FastAPI application for the Course Store API.
Serves health, auth, courses (public catalog + owned content), payments, and metrics.
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import configure_logging
from app.api.routes import health, auth, courses, payments
from app.utils.metrics import http_request_duration_seconds, router as metrics_router


logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.db_auto_create:
        from app.db.base import Base, import_models
        from app.db.session import engine

        import_models()
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Course Store API",
    description="Course catalog, Razorpay checkout and purchased content",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
if not origins:
    origins = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    latency = time.time() - start
    http_request_duration_seconds.labels(method=request.method, status_code=str(response.status_code)).observe(latency)
    logger.info(
        "http_request",
        extra={
            "request_id": request.headers.get(settings.request_id_header),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "latency_ms": round(latency * 1000, 1),
        },
    )
    return response


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(
        "database_error",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path, "error": type(exc).__name__},
    )
    return JSONResponse(status_code=500, content={"detail": "Something went wrong"})


# Routers
app.include_router(health.router, tags=["health"])
app.include_router(auth.router)
app.include_router(courses.router)
app.include_router(payments.router)
app.include_router(metrics_router)
