"""Pytest configuration and fixtures"""

import json

import pytest

from app.config import get_settings
from tests.factories import SAMPLE_TALKS


@pytest.fixture
def talks_data() -> list[dict]:
    """Raw talk records as stored on disk"""
    return [dict(talk) for talk in SAMPLE_TALKS]


@pytest.fixture
def talks_file(tmp_path, talks_data):
    """Talk data file in a temp directory"""
    path = tmp_path / "talks.json"
    path.write_text(json.dumps(talks_data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def public_root(tmp_path):
    """Public root with a few assets of different types"""
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<html><body>Schedule</body></html>", encoding="utf-8")
    (root / "style.css").write_text("body { margin: 0; }", encoding="utf-8")
    (root / "script.js").write_text("console.log('hi');", encoding="utf-8")
    (root / "logo.PNG").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    (root / "notes.md").write_text("# notes", encoding="utf-8")
    (root / "nested").mkdir()
    (root / "nested" / "page.html").write_text("<p>nested</p>", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("outside the root", encoding="utf-8")
    return root


@pytest.fixture
def settings_env(monkeypatch, talks_file, public_root):
    """Point settings at the temp talk file and public root"""
    monkeypatch.setenv("TALKS_FILE", str(talks_file))
    monkeypatch.setenv("PUBLIC_DIR", str(public_root))
    get_settings.cache_clear()

    yield get_settings()

    get_settings.cache_clear()


@pytest.fixture
async def client(settings_env):
    """Create async test client"""
    from asgi_lifespan import LifespanManager
    from httpx import ASGITransport, AsyncClient

    from app.main import app

    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as test_client:
            yield test_client
