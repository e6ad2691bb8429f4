import pytest
from pydantic import ValidationError

from imagebox import __main__ as entrypoint
from imagebox.config import Settings


def test_storage_is_required(monkeypatch):
    monkeypatch.delenv("STORAGE", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE", str(tmp_path))
    settings = Settings(_env_file=None)
    assert settings.storage == str(tmp_path)
    assert settings.max_upload_bytes == 10 * 1024 * 1024
    assert settings.preview_width == 240
    assert settings.write_chunk_size == 1024
    assert settings.port == 3000


def test_settings_are_immutable(tmp_path):
    settings = Settings(storage=str(tmp_path), _env_file=None)
    with pytest.raises(ValidationError):
        settings.storage = "/elsewhere"


def test_missing_storage_exits_nonzero(monkeypatch, tmp_path):
    monkeypatch.delenv("STORAGE", raising=False)
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc:
        entrypoint.main()
    assert exc.value.code == 1


def test_unknown_time_zone_exits_nonzero(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE", str(tmp_path / "images"))
    monkeypatch.setenv("TZ_DEFAULT", "Mars/Olympus_Mons")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc:
        entrypoint.main()
    assert exc.value.code == 1
