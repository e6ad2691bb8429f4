import io
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from imagebox.config import Settings
from imagebox.main import create_app

ROOT = Path(__file__).resolve().parents[1]
HTML_DIR = ROOT / "html"


def make_image(codec: str = "PNG", size=(800, 600), color=(200, 40, 40)) -> bytes:
    mode = "RGBA" if codec == "PNG" else "RGB"
    fill = color + (255,) if mode == "RGBA" else color
    buf = io.BytesIO()
    Image.new(mode, size, fill).save(buf, format=codec)
    return buf.getvalue()


def originals(root: Path):
    return sorted(p.name for p in root.iterdir() if p.is_file())


def previews(root: Path):
    return sorted(p.name for p in (root / "preview").iterdir() if p.is_file())


@pytest.fixture
def storage_root(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def settings(storage_root):
    return Settings(storage=str(storage_root), html_dir=str(HTML_DIR), _env_file=None)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
