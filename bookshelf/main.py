"""
Main application entry point.
"""

import logging

from fastapi import FastAPI

from bookshelf.api.v1.author_endpoints import router as author_router
from bookshelf.api.v1.book_endpoints import router as book_router
from bookshelf.api.v1.dependencies import get_settings
from bookshelf.api.v1.health_endpoints import router as health_router

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(
    title="Bookshelf Catalog API",
    description="Authors and the books they have written, with soft deletion.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Include API routers
app.include_router(author_router, prefix="/api/v1", tags=["authors"])
app.include_router(book_router, prefix="/api/v1", tags=["books"])
app.include_router(health_router, prefix="/api/v1", tags=["health"])


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "message": "Welcome to the Bookshelf Catalog API",
        "docs": "/docs",
        "health": "/api/v1/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bookshelf.main:app", host="0.0.0.0", port=8000, reload=True)
