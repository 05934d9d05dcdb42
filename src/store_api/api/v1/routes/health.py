from fastapi import APIRouter, Depends

from store_api.api.dependencies import get_database
from store_api.api.v1.responses import success_response
from store_api.database.connection import Database

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(database: Database = Depends(get_database)):
    await database.ping()
    return success_response({"database": "ok"}, "Service is healthy")
