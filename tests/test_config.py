from pathlib import Path

import pytest
from pydantic import ValidationError

from app.core.config import Settings, get_settings
from app.zips.loader import DatasetFormat


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Run from an empty directory so no .env file is picked up."""
    monkeypatch.chdir(tmp_path)
    for name in ("ADDR", "DATA_DIR", "DATASET_FORMAT", "MONGO_URI"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_addr_is_required() -> None:
    with pytest.raises(ValidationError):
        Settings()


def test_defaults_point_at_csv_dataset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADDR", "localhost:8000")

    settings = get_settings()

    assert settings.ADDR == "localhost:8000"
    assert settings.DATASET_FORMAT is DatasetFormat.CSV
    assert settings.dataset_path == Path("data") / "zips.csv"
    assert settings.MONGO_URI == ""


def test_dataset_format_env_selects_extension(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADDR", ":4000")
    monkeypatch.setenv("DATA_DIR", "/srv/zips")
    monkeypatch.setenv("DATASET_FORMAT", "structured-text")

    settings = Settings()

    assert settings.DATASET_FORMAT is DatasetFormat.JSON
    assert settings.dataset_path == Path("/srv/zips/zips.json")


def test_unknown_dataset_format_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADDR", "localhost:8000")
    monkeypatch.setenv("DATASET_FORMAT", "xml")

    with pytest.raises(ValidationError):
        Settings()


def test_settings_read_dotenv_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("ADDR=127.0.0.1:9000\nDATASET_FORMAT=json\n", encoding="utf-8")

    settings = Settings()

    assert settings.ADDR == "127.0.0.1:9000"
    assert settings.dataset_path.name == "zips.json"
