from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
import structlog

from ..deps import get_storage
from ..services.gallery import render_gallery
from ..storage.provider import StorageProvider


router = APIRouter(tags=["gallery"])
logger = structlog.get_logger(__name__)


@router.get("/lists", response_class=HTMLResponse)
def lists(storage: StorageProvider = Depends(get_storage)):
    try:
        body = render_gallery(storage)
    except OSError as e:
        logger.error("Listing storage failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to list images")
    return HTMLResponse(content=body)
