# tests/conftest.py
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from mathnotes.config import settings
from mathnotes.database import create_db_engine, create_session_factory
from mathnotes.main import app
from mathnotes.models import PagePayload
from mathnotes.services.notebook import NotebookService
from mathnotes.storage import FileSystemBackend, DatabaseBackend, PageBlobStore


class FakeTimer:
    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for the event loop: time only moves on advance()"""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def call_later(self, delay, callback):
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float):
        target = self.now + seconds
        while True:
            due = sorted((t for t in self.pending if t.due <= target), key=lambda t: t.due)
            if not due:
                break
            timer = due[0]
            self.now = timer.due
            timer.fired = True
            timer.callback()
        self.now = target


@pytest.fixture
def temp_storage_dir(tmp_path):
    """Fresh storage directory for every test"""
    storage = tmp_path / "storage"
    for subdir in ["pages", "logs"]:
        Path(storage, subdir).mkdir(parents=True, exist_ok=True)
    return storage


@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir):
    """Override settings for testing"""
    original = {
        "STORAGE_PATH": settings.STORAGE_PATH,
        "PAGES_PATH": settings.PAGES_PATH,
        "STORAGE_BACKEND": settings.STORAGE_BACKEND,
        "SAVE_DEBOUNCE_SECONDS": settings.SAVE_DEBOUNCE_SECONDS,
        "DEFAULT_COLLECTIONS": settings.DEFAULT_COLLECTIONS,
    }

    settings.STORAGE_PATH = temp_storage_dir
    settings.PAGES_PATH = temp_storage_dir / "pages"
    settings.STORAGE_BACKEND = "filesystem"
    settings.DEFAULT_COLLECTIONS = ["Math", "Physics"]

    yield

    for key, value in original.items():
        setattr(settings, key, value)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def fs_backend(temp_storage_dir):
    return FileSystemBackend(temp_storage_dir / "pages")


@pytest.fixture
def db_backend():
    engine = create_db_engine("sqlite:///:memory:")
    yield DatabaseBackend(create_session_factory(engine))
    engine.dispose()


@pytest.fixture(params=["filesystem", "database"])
def backend(request):
    """Runs a test once per blob backend"""
    return request.getfixturevalue("fs_backend" if request.param == "filesystem" else "db_backend")


@pytest.fixture
def store(backend):
    return PageBlobStore(backend)


@pytest.fixture
def notebook(fs_backend, scheduler):
    return NotebookService.open(fs_backend, scheduler, delay=0.5)


@pytest.fixture
def drawn_page():
    return PagePayload(b"\x01stroke:10,20;30,40")


@pytest.fixture
def client():
    """Test client running the full application lifespan against temp storage"""
    with TestClient(app) as test_client:
        yield test_client
