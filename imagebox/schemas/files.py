from pydantic import BaseModel


class ImageAsset(BaseModel):
    identity: str
    extension: str
    size_bytes: int
    preview_width: int
    preview_height: int

    @property
    def filename(self) -> str:
        return f"{self.identity}.{self.extension}"
