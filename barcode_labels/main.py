"""
Barcode Label Service - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from barcode_labels.config import settings
from barcode_labels.logger import bind_request_context, get_logger, configure_logging
from barcode_labels.models.common import ErrorResponse

# Configure logging
configure_logging()
logger = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Barcode Label Service starting", extra={
        "environment": settings.environment,
        "log_level": settings.log_level
    })

    yield

    # Shutdown
    logger.info("Barcode Label Service shutting down")


# Create FastAPI app
app = FastAPI(
    title="Barcode Label Service",
    description="Barcode label sequences exported as previews, PDFs and SVG archives",
    version=VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development or not settings.service_url else [settings.service_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Skipped-Codes", "X-Request-ID"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Tag every request (and its log events) with a request ID."""
    request_id = request.headers.get("X-Request-ID") or uuid4().hex
    request.state.request_id = request_id
    bind_request_context(request_id, request.url.path)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.error("Unhandled exception", extra={
        "path": request.url.path,
        "method": request.method,
        "error": str(exc)
    }, exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error_code="INTERNAL_ERROR",
            message="An unexpected error occurred",
            details={"error": str(exc)} if settings.is_development else {},
            request_id=getattr(request.state, "request_id", None)
        ).model_dump(mode="json")
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "version": VERSION,
        "environment": settings.environment
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Barcode Label Service",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from barcode_labels.routes.label_generation_routes import router as label_generation_router

app.include_router(label_generation_router, prefix="/api/v1", tags=["label-generation"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "barcode_labels.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level
    )
