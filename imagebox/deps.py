from fastapi import Request

from .config import Settings
from .storage.provider import StorageProvider


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> StorageProvider:
    return request.app.state.storage
