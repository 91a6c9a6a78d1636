import os
import tempfile

# Point the app at a throwaway database and upload dir before settings load
_test_dir = tempfile.mkdtemp(prefix="surveyhub-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_test_dir, "uploads")
os.environ["ENV"] = "dev"

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from surveyhub_core.app.config import settings
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.main import app
from surveyhub_core.db.init_db import init_db
from surveyhub_core.db.session import SessionLocal, engine
from surveyhub_core.tests.utils.utils import create_random_form


# =============================================================================
# Core Fixtures - Database, Client, Storage
# =============================================================================

@pytest.fixture(scope="session")
def db() -> Generator[Session, None, None]:
    """
    Database session on the temporary SQLite file.
    Scope: session - shared across all tests.
    """
    init_db(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    """
    FastAPI test client for making HTTP requests.
    Scope: module - one client per test module.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def storage() -> FileStorage:
    """File storage on the temporary upload dir."""
    return FileStorage(settings.UPLOAD_DIR, max_file_size=settings.MAX_FILE_SIZE)


# =============================================================================
# Shared data
# =============================================================================

@pytest.fixture(scope="module")
def example_form_id(client: TestClient) -> int:
    """A form with one section and two root questions, created through the API."""
    return create_random_form(client)["id"]
