from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from medcatalog.config import get_settings
from medcatalog.errors import MedicationError
from medcatalog.routes import router as api_router
from medcatalog.utils.api_clients import create_http_client

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One HTTP client for the whole process, shared by every request
    app.state.http_client = create_http_client(timeout=settings.request_timeout)
    logger.info(f"HTTP client ready for {settings.fda_ndc_url}")
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("HTTP client closed")


# Create FastAPI application
app = FastAPI(
    title="Medications API",
    description="API for looking up medication information from the FDA NDC directory",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(MedicationError)
async def medication_exception_handler(request: Request, exc: MedicationError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "message": "Internal Server Error",
                "code": "internal_error",
                "type": "server_error"
            }
        },
    )


app.include_router(api_router, prefix="/api/v1")
logger.info("Included medication routes with prefix /api/v1")


@app.get("/")
async def root():
    """Root endpoint to confirm the server is running."""
    return {"message": "Medications API is running", "status": "ok"}


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "apis": {
            "fda_ndc": "available" if settings.fda_api_key else "unauthenticated",
        },
    }


if __name__ == "__main__":
    uvicorn.run("medcatalog.main:app", host="0.0.0.0", port=settings.port, reload=True)
