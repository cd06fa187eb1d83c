import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import get_database
from app.db.core import Database

router = APIRouter()


@router.get("/health", summary="Basic health check endpoint")
async def health_check(database: Database = Depends(get_database)):
    """
    Reports whether the API is up and the database answers a trivial query.
    """
    try:
        await database.ping()
    except (SQLAlchemyError, OSError) as e:
        logging.error(f"health check failed: {e}", exc_info=True)
        return JSONResponse(status_code=503, content={"status": "degraded", "database": "unavailable"})
    return {"status": "ok", "database": "ok"}
