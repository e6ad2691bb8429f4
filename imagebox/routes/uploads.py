import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from ..config import Settings
from ..deps import get_settings, get_storage
from ..errors import ImageboxError
from ..services.size_guard import check_content_length
from ..services.uploads import UploadService, summarize
from ..storage.provider import StorageProvider


router = APIRouter(prefix="/api", tags=["uploads"])
logger = structlog.get_logger(__name__)


def enforce_upload_size(request: Request, settings: Settings = Depends(get_settings)) -> int:
    """Reject on the declared length alone, before any of the body is read."""
    try:
        return check_content_length(request.headers.get("content-length"), settings.max_upload_bytes)
    except ImageboxError as e:
        logger.info("Upload rejected", status=e.status_code, reason=e.detail)
        raise HTTPException(status_code=e.status_code, detail=e.detail)


def get_upload_service(
    settings: Settings = Depends(get_settings),
    storage: StorageProvider = Depends(get_storage),
) -> UploadService:
    return UploadService(
        storage,
        preview_width=settings.preview_width,
        max_upload_bytes=settings.max_upload_bytes,
    )


@router.post("/upload")
async def upload(
    request: Request,
    declared_length: int = Depends(enforce_upload_size),
    service: UploadService = Depends(get_upload_service),
):
    """
    Store every image field of a multipart body.
    Answers 200 with an empty body once all fields are stored; the first
    failing field ends the request with its status.
    """
    try:
        assets = await service.process_body(request.headers.get("content-type"), request.stream())
    except ImageboxError as e:
        log = logger.warning if e.status_code < 500 else logger.error
        log("Upload failed", status=e.status_code, reason=e.detail)
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    except Exception as e:
        logger.error("Upload crashed", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process upload")

    count, total_bytes = summarize(assets)
    logger.info("Upload complete", assets=count, total_bytes=total_bytes, declared_length=declared_length)
    return Response(status_code=200)
