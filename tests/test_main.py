import logging
import shutil
from pathlib import Path

import pytest

import app.main as main_module
from app.core.config import get_settings
from app.main import greet, main, parse_addr

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    for name in ("ADDR", "DATA_DIR", "DATASET_FORMAT", "MONGO_URI", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Replace uvicorn.run and record what it was asked to serve."""
    calls = {}

    def fake_run(app, host, port, **kwargs):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)
    return calls


@pytest.mark.parametrize(
    ("addr", "expected"),
    [
        ("localhost:8000", ("localhost", 8000)),
        (":4000", ("0.0.0.0", 4000)),
        ("[::1]:8080", ("::1", 8080)),
    ],
)
def test_parse_addr(addr: str, expected: tuple) -> None:
    assert parse_addr(addr) == expected


@pytest.mark.parametrize("addr", ["localhost", "localhost:http", ""])
def test_parse_addr_rejects_malformed(addr: str) -> None:
    with pytest.raises(ValueError):
        parse_addr(addr)


def test_greet() -> None:
    assert greet() == "Hello World"
    assert greet("") == "Hello World"
    assert greet("Ada") == "Hello Ada"


def test_main_fails_fast_without_addr(served: dict, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.CRITICAL)

    assert main() == 1
    assert served == {}
    assert any("ADDR" in r.getMessage() for r in caplog.records)


def test_main_fails_fast_on_malformed_addr(monkeypatch: pytest.MonkeyPatch, served: dict) -> None:
    monkeypatch.setenv("ADDR", "nowhere")
    assert main() == 1
    assert served == {}


def test_main_fails_fast_when_dataset_is_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, served: dict
) -> None:
    monkeypatch.setenv("ADDR", "localhost:8000")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "missing"))

    assert main() == 1
    assert served == {}


def test_main_fails_fast_when_dataset_is_malformed(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, served: dict
) -> None:
    (tmp_path / "zips.csv").write_text("header\n98101,Seattle\n", encoding="utf-8")
    monkeypatch.setenv("ADDR", "localhost:8000")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))

    assert main() == 1
    assert served == {}


def test_main_serves_after_loading_dataset(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, served: dict
) -> None:
    shutil.copy(DATA_DIR / "zips.csv", tmp_path / "zips.csv")
    monkeypatch.setenv("ADDR", "localhost:8123")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))

    assert main() == 0

    assert served["host"] == "localhost"
    assert served["port"] == 8123
    assert len(served["app"].state.zip_service.lookup_by_city("seattle")) == 5
