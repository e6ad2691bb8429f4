from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Core
    app_name: str = Field(default="imagebox")
    tz_default: str = Field(default="Asia/Bangkok", alias="TZ_DEFAULT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    # Storage
    storage: str = Field(..., alias="STORAGE", description="root directory for originals and previews")
    html_dir: str = Field(default="html", alias="HTML_DIR")
    not_found_page: str = Field(default="404.html", alias="NOT_FOUND_PAGE")

    # Uploads
    max_upload_bytes: int = Field(default=1024 * 1024 * 10, alias="MAX_UPLOAD_BYTES")  # 10 MiB
    write_chunk_size: int = Field(default=1024, alias="WRITE_CHUNK_SIZE")
    preview_width: int = Field(default=240, alias="PREVIEW_WIDTH")

    # Rate limit
    rate_limit: str = Field(default="100/minute", alias="RATE_LIMIT")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        frozen = True
        populate_by_name = True
