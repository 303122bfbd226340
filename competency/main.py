import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from competency.config import settings
from competency.core.logging import setup_logging

# IMPORT ROUTERS
from competency.routers.errors import validation_exception_handler
from competency.routers.health import router as health_router
from competency.routers.employees import router as employees_router
from competency.routers.rd_evaluations import router as rd_evaluations_router
from competency.routers.training_analysis import router as training_analysis_router

logger = logging.getLogger(__name__)


# SWAGGER UI tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Employees"},
    {"name": "R&D Evaluations"},
    {"name": "Training Analysis"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings)
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION} ({settings.APP_ENV})")
    yield
    logger.info(f"Shutting down {settings.APP_NAME}")


# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
    lifespan=lifespan,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)
app.include_router(employees_router)
app.include_router(rd_evaluations_router)
app.include_router(training_analysis_router)


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "competency.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
