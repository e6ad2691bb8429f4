"""
Local filesystem storage for uploaded images.
Originals live directly under the storage root, previews under ``preview/``
with the same file name.
"""
from typing import List
from pathlib import Path

import structlog

from ..errors import StorageFailure
from .provider import StorageProvider


logger = structlog.get_logger(__name__)

PREVIEW_DIR = "preview"


class LocalStorageProvider(StorageProvider):
    """Filesystem storage rooted at ``base_dir``."""

    def __init__(self, base_dir: str, chunk_size: int = 1024):
        self.base_dir = Path(base_dir)
        self.preview_dir = self.base_dir / PREVIEW_DIR
        self.chunk_size = chunk_size
        self.preview_dir.mkdir(parents=True, exist_ok=True)

    def _get_path(self, name: str) -> Path:
        """Resolve a bare file name under the storage root."""
        # names are generated server side; refuse anything that walks out of the root
        if not name or name != Path(name).name or name in {".", ".."}:
            raise StorageFailure(f"Invalid storage name: {name!r}")
        return self.base_dir / name

    def _get_preview_path(self, name: str) -> Path:
        return self.preview_dir / self._get_path(name).name

    def write_original(self, name: str, data: bytes) -> None:
        """Create the original file and stream ``data`` into it chunk by chunk.

        The file is opened in exclusive mode so an existing asset is never
        overwritten. A write that fails halfway removes the partial file.
        """
        path = self._get_path(name)
        try:
            f = open(path, "xb")
        except FileExistsError:
            raise StorageFailure(f"Refusing to overwrite existing asset {name}")
        except OSError as e:
            logger.error("Original create failed", path=str(path), error=str(e))
            raise StorageFailure(f"Failed to create original {name}")

        view = memoryview(data)
        try:
            with f:
                for offset in range(0, len(view), self.chunk_size):
                    f.write(view[offset:offset + self.chunk_size])
        except OSError as e:
            logger.error("Original write failed", path=str(path), error=str(e))
            path.unlink(missing_ok=True)
            raise StorageFailure(f"Failed to write original {name}")

    def write_preview(self, name: str, data: bytes) -> None:
        path = self._get_preview_path(name)
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error("Preview write failed", path=str(path), error=str(e))
            raise StorageFailure(f"Failed to write preview {name}")

    def preview_exists(self, name: str) -> bool:
        return self._get_preview_path(name).is_file()

    def list_names(self) -> List[str]:
        """Names of every non-directory entry under the root, sorted."""
        return sorted(entry.name for entry in self.base_dir.iterdir() if not entry.is_dir())
