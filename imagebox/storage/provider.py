from typing import List


class StorageProvider:
    def write_original(self, name: str, data: bytes) -> None:
        raise NotImplementedError

    def write_preview(self, name: str, data: bytes) -> None:
        raise NotImplementedError

    def preview_exists(self, name: str) -> bool:
        raise NotImplementedError

    def list_names(self) -> List[str]:
        raise NotImplementedError
