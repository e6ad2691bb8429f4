import os

from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse, PlainTextResponse
from starlette.exceptions import HTTPException
from starlette.types import Scope


class FallbackStaticFiles(StaticFiles):
    """StaticFiles answering unknown paths with a shared not-found page (status 404)."""

    def __init__(self, *, not_found_page: str, **kwargs):
        super().__init__(**kwargs)
        self.not_found_page = not_found_page

    async def get_response(self, path: str, scope: Scope):
        try:
            return await super().get_response(path, scope)
        except HTTPException as e:
            if e.status_code != 404:
                raise
        if os.path.isfile(self.not_found_page):
            return FileResponse(self.not_found_page, status_code=404, media_type="text/html")
        return PlainTextResponse("Not Found", status_code=404)
