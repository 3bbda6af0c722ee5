import io

import pytest
from PIL import Image

from services.icon_store import IconStore


def _png(width=100, height=100, color=(200, 30, 30, 255)) -> bytes:
    out = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(out, format="PNG")
    return out.getvalue()


@pytest.fixture
def make_png():
    return _png


@pytest.fixture
def png_bytes():
    return _png()


@pytest.fixture
def store(tmp_path):
    return IconStore(tmp_path / "userContent" / "customIcon", tmp_path / "jobs")


@pytest.fixture
def app_env(tmp_path, monkeypatch):
    """Point config and database at a temporary directory."""
    import db
    monkeypatch.setenv("JOBICON_USER_CONTENT", str(tmp_path / "userContent"))
    monkeypatch.setenv("JOBICON_JOBS_ROOT", str(tmp_path / "jobs"))
    monkeypatch.setenv("JOBICON_BASE_URL", "http://ci.example.com/")
    monkeypatch.setattr(db, "DB_PATH", str(tmp_path / "test.db"))
    return tmp_path


@pytest.fixture
def client(app_env):
    from fastapi.testclient import TestClient
    from main import app
    with TestClient(app) as c:
        yield c
