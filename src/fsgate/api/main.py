"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from fsgate import __version__
from fsgate.api.routers import tools
from fsgate.config import settings
from fsgate.infrastructure.storage import AllowedRoots, FileTools
from fsgate.kernel.tools import ToolExecutor

logger = structlog.get_logger()


def create_app(roots: AllowedRoots, *, allow_write: bool = True) -> FastAPI:
    """Build the HTTP app serving tools confined to `roots`."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logger.info(
            "fsgate_startup",
            roots=roots.as_list(),
            read_only=not allow_write,
        )
        yield
        # Shutdown
        logger.info("fsgate_shutdown")

    app = FastAPI(
        title="fsgate",
        description="Filesystem tools confined to allowed directories",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.executor = ToolExecutor(FileTools(roots), allow_write=allow_write)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Return concise request validation details."""
        return JSONResponse(
            status_code=422,
            content={
                "detail": "Request validation failed",
                "errors": [
                    {
                        "field": " -> ".join(str(part) for part in err.get("loc", [])),
                        "type": err.get("type", "unknown"),
                        "msg": err.get("msg", "validation error"),
                    }
                    for err in exc.errors()
                ],
            },
        )

    # Routers
    app.include_router(tools.router, prefix="/api/v1")

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "roots": len(roots)}

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "fsgate",
            "version": __version__,
            "allowed_directories": roots.as_list(),
        }

    return app
