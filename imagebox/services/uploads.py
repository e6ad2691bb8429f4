"""
Upload orchestration.

Fields of one multipart request are handled strictly in arrival order. Each
field is validated, named, previewed in memory and then written (original
first, preview second). The first failing field stops the request; fields that
already completed keep their files.
"""
from typing import AsyncIterator, List, Optional, Tuple

import structlog
from starlette.concurrency import run_in_threadpool

from ..schemas.files import ImageAsset
from ..storage.provider import StorageProvider
from .formats import resolve_format
from .identity import allocate_identity
from .multipart import FormPart, MultipartReader
from .previews import PREVIEW_WIDTH, render_preview

logger = structlog.get_logger(__name__)


class UploadService:
    def __init__(
        self,
        storage: StorageProvider,
        preview_width: int = PREVIEW_WIDTH,
        max_upload_bytes: int = 1024 * 1024 * 10,
    ):
        self.storage = storage
        self.preview_width = preview_width
        self.max_upload_bytes = max_upload_bytes

    async def process_body(self, content_type: Optional[str], stream: AsyncIterator[bytes]) -> List[ImageAsset]:
        reader = MultipartReader(content_type, self.max_upload_bytes)
        assets: List[ImageAsset] = []
        async for part in reader.parts(stream):
            assets.append(await self.process_field(part))
        return assets

    async def process_field(self, part: FormPart) -> ImageAsset:
        log = logger.bind(field=part.name)

        fmt = resolve_format(part.content_type)
        data = part.data

        identity = allocate_identity()
        asset_name = f"{identity}.{fmt.extension}"

        # decode before touching the disk so a corrupt payload leaves no files behind
        preview = await run_in_threadpool(render_preview, data, fmt, self.preview_width)
        await run_in_threadpool(self.storage.write_original, asset_name, data)
        await run_in_threadpool(self.storage.write_preview, asset_name, preview.data)

        asset = ImageAsset(
            identity=identity,
            extension=fmt.extension,
            size_bytes=len(data),
            preview_width=preview.width,
            preview_height=preview.height,
        )
        log.info(
            "Image stored",
            filename=asset.filename,
            size_bytes=asset.size_bytes,
            preview=f"{preview.width}x{preview.height}",
        )
        return asset


def summarize(assets: List[ImageAsset]) -> Tuple[int, int]:
    """(count, total bytes) of a batch of stored assets."""
    return len(assets), sum(a.size_bytes for a in assets)
