from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from http import HTTPStatus
from typing import Optional
from contextlib import asynccontextmanager
import logging

from string_analyzer import __version__, config
from string_analyzer.api.routes import router
from string_analyzer.store import MemoryStringStore, SQLStringStore, StringStore, StorageError

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


def error_body(status_code: int, message: str) -> dict:
    return {
        "status": status_code,
        "error": HTTPStatus(status_code).phrase,
        "message": message
    }


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    if status_code >= 500:
        logger.error(f"Sending server error response: {status_code} {message}")
    else:
        logger.info(f"Sending client error response: {status_code} {message}")
    return JSONResponse(status_code=status_code, content=error_body(status_code, message), headers=headers)


def build_store() -> StringStore:
    """Build the store selected by STORE_BACKEND."""
    if config.STORE_BACKEND == "memory":
        logger.info("Using in-memory string store")
        return MemoryStringStore()
    if config.STORE_BACKEND == "sql":
        logger.info(f"Using SQL string store at {config.DATABASE_URL}")
        return SQLStringStore(config.DATABASE_URL)
    raise ValueError(f"Unknown STORE_BACKEND: {config.STORE_BACKEND!r}")


# Validation error handler
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
        errors.append(f"{field or 'request'}: {error['msg']}")

    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request: " + "; ".join(errors))


# HTTPException handler
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Detail built by api_error() carries its own message
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        return error_response(exc.status_code, exc.detail.get("message", exc.detail["error"]), exc.headers)
    # Plain detail, e.g. Starlette's own 404 and 405
    return error_response(exc.status_code, str(exc.detail), exc.headers)


async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Generic error handler
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception: {str(exc)}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(store: Optional[StringStore] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is None:
            logger.info("Initializing string store...")
            app.state.store = build_store()
        yield
        app.state.store.close()

    app = FastAPI(
        title="String Analyzer Service",
        description="Analyze, store and query string properties",
        version=__version__,
        lifespan=lifespan
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Root endpoint
    @app.get("/")
    def root():
        return {
            "message": "String Analyzer Service",
            "version": __version__,
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/{string_value}": "Get specific string analysis",
                "GET /strings/list": "List strings with optional filters and pagination",
                "GET /strings/filter-by-natural-language": "Filter using natural language",
                "DELETE /strings/{string_value}": "Delete a string"
            }
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    app.include_router(router, tags=["strings"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host="0.0.0.0", port=config.PORT)
