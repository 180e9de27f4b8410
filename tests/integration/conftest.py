import os
import uuid
from collections.abc import Generator
from pathlib import Path

import pytest

from screensort.cache.connection import close_pool, get_connection, init_pool
from screensort.config.settings import Settings


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "screensort_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def clean_cache_table(integration_pool: None) -> Generator[str, None, None]:
    """Yield a key prefix unique to the test and delete its rows afterwards."""
    prefix = f"it-{uuid.uuid4().hex[:12]}"
    yield prefix
    with get_connection() as conn:
        conn.execute("DELETE FROM screensort_cache WHERE key LIKE %s", (f"{prefix}%",))
        conn.commit()


@pytest.fixture
def screenshot_dir(tmp_path: Path) -> Path:
    root = tmp_path / "library"
    root.mkdir()
    return root
