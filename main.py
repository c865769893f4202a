"""
Space Grid Allocator Service v1.0

Places reservable spaces ("cubicles") on a two-dimensional grid for the
space management and booking screens:
- Places and relocates spaces with at most one space per cell
- Grows the grid on demand when spaces are placed beyond its edge
- Offers the frontier of cells where a new space may go

Architecture:
Admin UI / Booking UI -> Routers -> GridAllocator
                                 -> Activity Log (optional)
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from models import ErrorDetail, ErrorResponse
from routers import grid_router, space_router
from services.grid_allocator import (
    ConflictError,
    InvalidPositionError,
    NotFoundError,
    grid_allocator
)

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    bounds = grid_allocator.bounds
    logger.info("Starting Space Grid Allocator v1.0")
    logger.info(f"  Initial grid: {bounds.rows} rows x {bounds.cols} cols")
    logger.info(f"  Activity log: {settings.ACTIVITY_LOG_URL or 'local only'}")
    yield
    logger.info("Shutting down Space Grid Allocator")


app = FastAPI(
    title="Space Grid Allocator",
    description="Places reservable spaces on a growable grid with at most one space per cell",
    version="1.0.0",
    lifespan=lifespan
)

# CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount all routers
app.include_router(grid_router.router, prefix="/api", tags=["Grid"])
app.include_router(space_router.router, prefix="/api", tags=["Spaces"])


def error_response(status_code: int, error: ErrorDetail) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error).model_dump()
    )


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    logger.warning(f"Conflict on {request.method} {request.url.path}: {exc.message}")
    return error_response(409, ErrorDetail(
        code=exc.code,
        message=exc.message,
        retryable=True,
        suggestion="Fetch the frontier and choose a free cell."
    ))


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning(f"Not found on {request.method} {request.url.path}: {exc.message}")
    return error_response(404, ErrorDetail(
        code=exc.code,
        message=exc.message,
        retryable=True,
        suggestion="Refresh the list of spaces."
    ))


@app.exception_handler(InvalidPositionError)
async def invalid_position_handler(request: Request, exc: InvalidPositionError):
    return error_response(400, ErrorDetail(code=exc.code, message=str(exc)))


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    spaces, bounds = grid_allocator.snapshot()
    return {
        "status": "healthy",
        "service": "space-grid-allocator",
        "version": "1.0.0",
        "grid": bounds.model_dump(),
        "space_count": len(spaces),
        "activity_log": settings.ACTIVITY_LOG_URL
    }


@app.get("/")
async def root():
    """Root endpoint with service info"""
    return {
        "service": "Space Grid Allocator",
        "version": "1.0.0",
        "description": "Places reservable spaces on a growable grid",
        "endpoints": {
            "grid": {
                "get": "GET /api/grid",
                "resize": "PUT /api/grid",
                "ensure_capacity": "POST /api/grid/ensure-capacity",
                "frontier": "GET /api/grid/frontier",
                "layout": "GET /api/grid/layout"
            },
            "spaces": {
                "list": "GET /api/spaces",
                "place": "POST /api/spaces",
                "get": "GET /api/spaces/{space_id}",
                "relocate": "PUT /api/spaces/{space_id}/position",
                "relocate_many": "PUT /api/spaces/positions",
                "status": "PUT /api/spaces/{space_id}/status",
                "summary": "GET /api/spaces/status/summary",
                "remove": "DELETE /api/spaces/{space_id}"
            },
            "health": "GET /health"
        },
        "docs": "/docs"
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True
    )
