"""
Health check endpoint.
"""

from fastapi import APIRouter, Depends

from bookshelf.infrastructure.db import SqliteDatabase
from bookshelf.api.v1.dependencies import get_database

router = APIRouter()


@router.get("/health")
def health_check(
    database: SqliteDatabase = Depends(get_database),
) -> dict:
    """
    Check that the catalog database answers queries.
    """
    database_ready = database.ping()

    return {
        "status": "ok" if database_ready else "degraded",
        "components": {
            "database": database_ready,
        },
    }
