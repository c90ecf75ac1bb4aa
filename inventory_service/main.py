# inventory_service/main.py

"""
FastAPI Inventory Service API.
Manages inventory products (create, list, retrieve, update, delete) and
aggregate stock statistics. Data is stored in PostgreSQL when it is reachable
at startup, otherwise in process memory for the lifetime of the service.
"""
import os
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import router
from .backends import BackendMode, ProductBackend, initialize
from .schemas import HealthResponse

# -----------------------------
# Configure Logging
# -----------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

STATIC_DIR = os.getenv("STATIC_DIR", "public")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Selects the storage backend once, before any request is served.
    A backend passed to create_app() is used as-is.
    """
    if getattr(app.state, "backend", None) is None:
        try:
            app.state.backend = initialize()
        except Exception as e:
            logger.critical(
                f"An unexpected error occurred during database startup: {e}",
                exc_info=True,
            )
            sys.exit(1)
    mode = app.state.backend.mode
    logger.info(
        "Mode: "
        + ("In-Memory (Testing)" if mode == BackendMode.IN_MEMORY else "PostgreSQL (Production)")
    )
    yield


# -----------------------------
# Error responses
# -----------------------------
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )
    logger.warning(f"Rejected request body: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": message}
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)}
    )


def create_app(backend: ProductBackend = None) -> FastAPI:
    """
    Builds the application. Without a backend, one is selected at startup.
    """
    app = FastAPI(
        title="Inventory Service API",
        description="Manages products and stock statistics for the inventory app",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.backend = backend

    # Enable CORS (for frontend dev/testing)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Use specific origins in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --- Health Check Endpoint ---
    @app.get(
        "/health",
        response_model=HealthResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
    )
    async def health_check(request: Request):
        """
        Returns 200 OK while the service is alive, with the active storage mode.
        """
        return {"status": "healthy", "mode": request.app.state.backend.mode.value}

    app.include_router(router)

    # Front-end assets; registered last so API routes take precedence.
    if os.path.isdir(STATIC_DIR):
        app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running on port {PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
